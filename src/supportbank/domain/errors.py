"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class StructuralError(DomainError):
    """The ledger file cannot be read as a whole; the import is voided."""


class UnsupportedFormatError(DomainError):
    """The ledger file extension is not one we know how to read."""


class NotFoundError(DomainError):
    """Requested account does not exist."""


class ConflictError(DomainError):
    """Operation conflicts with session state, such as a second import."""


SUPPORTED_EXTENSIONS = (".csv", ".json", ".xml")


def account_not_found(name: str) -> str:
    """Return message for missing account."""
    return f"No account with the name '{name}' found"


def unsupported_format(path: str) -> str:
    """Return message for a file extension we cannot read."""
    extensions = ", ".join(ext.lstrip(".") for ext in SUPPORTED_EXTENSIONS)
    return f"File format of '{path}' not supported, use {extensions}"


def file_already_processed() -> str:
    """Return message when an import has already completed."""
    return "A file has already been processed"


def missing_root_element(expected: str, found: str) -> str:
    """Return message for an XML ledger with the wrong root element."""
    return f"Expected root element <{expected}> but found <{found}>"
