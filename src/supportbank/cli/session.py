"""Line-oriented command session.

A session accepts the commands ``Import File <path>``, ``List All`` and
``List <name>`` and returns the lines to show the user. Only one file can
be imported per session; queries are rejected until an import succeeds.
"""

from typing import Optional

import structlog

from supportbank.domain.errors import (
    ConflictError,
    StructuralError,
    UnsupportedFormatError,
    file_already_processed,
)
from supportbank.domain.ledger_import import ImportResult, LedgerImportService
from supportbank.domain.query import LedgerQueryService
from supportbank.logging_config import DEFAULT_LOG_FILE

logger = structlog.get_logger(__name__)

IMPORT_PREFIX = "Import File "
LIST_PREFIX = "List "
LIST_ALL = "All"

NO_FILE_PROCESSED = "No file processed yet, use 'Import File <path>' first"
INVALID_COMMAND = "That is not a valid command"
ACCOUNT_NOT_FOUND = "No account with that name found"
STRUCTURAL_FAILURE = "There was an error processing the file"


class CommandSession:
    """Dispatches user commands against a single imported ledger."""

    def __init__(
        self,
        import_service: Optional[LedgerImportService] = None,
        log_file: str = DEFAULT_LOG_FILE,
    ):
        """Initialize command session.

        Args:
            import_service: Service used to import ledger files
            log_file: Log file path mentioned when an import has errors
        """
        self.import_service = import_service or LedgerImportService()
        self.log_file = log_file
        self.import_result: Optional[ImportResult] = None
        self.query_service: Optional[LedgerQueryService] = None

    @property
    def file_processed(self) -> bool:
        return self.query_service is not None

    def handle(self, command: str) -> list[str]:
        """Run one command and return the lines to display."""
        command = command.rstrip("\r\n")
        logger.debug("command_received", command=command)

        if command.startswith(LIST_PREFIX):
            return self.list_command(command[len(LIST_PREFIX):])
        if command.startswith(IMPORT_PREFIX):
            return self.import_command(command[len(IMPORT_PREFIX):])

        logger.warning("invalid_command", command=command)
        return [INVALID_COMMAND]

    def import_file(self, path: str) -> ImportResult:
        """Import a ledger file into this session.

        Raises:
            ConflictError: If a file has already been imported
            UnsupportedFormatError: If the extension is not supported
            FileNotFoundError: If the file doesn't exist
            StructuralError: If the file as a whole cannot be read
        """
        if self.file_processed:
            logger.warning("file_already_processed", path=path)
            raise ConflictError(file_already_processed())

        result = self.import_service.import_file(path)
        self.import_result = result
        self.query_service = LedgerQueryService(result.accounts)
        return result

    def import_command(self, path: str) -> list[str]:
        try:
            result = self.import_file(path)
        except ConflictError as e:
            return [str(e)]
        except FileNotFoundError as e:
            return [f"Error opening file: {e}"]
        except UnsupportedFormatError as e:
            logger.warning("unsupported_format", path=path)
            return [str(e)]
        except StructuralError as e:
            logger.error("import_failed", path=path, error=str(e))
            return [STRUCTURAL_FAILURE]

        lines = [
            f"Imported {len(result.entries)} transactions across {len(result.accounts)} accounts"
        ]
        if result.has_errors:
            lines.append(
                "There were one or more errors creating the entries, "
                f"check {self.log_file} for details"
            )
        return lines

    def list_command(self, name: str) -> list[str]:
        if self.query_service is None:
            logger.warning("list_before_import", account=name)
            return [NO_FILE_PROCESSED]

        if name == LIST_ALL:
            return self.query_service.list_all()

        history = self.query_service.list_one(name)
        if history is None:
            return [ACCOUNT_NOT_FOUND]
        return history
