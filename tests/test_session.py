"""Tests for the line-oriented command session."""

import pytest

from supportbank.cli.session import (
    ACCOUNT_NOT_FOUND,
    INVALID_COMMAND,
    STRUCTURAL_FAILURE,
    CommandSession,
)
from supportbank.domain.errors import ConflictError


@pytest.fixture
def session(log_file):
    """Create a CommandSession."""
    return CommandSession(log_file=log_file)


def test_list_all_before_import(session):
    """Test listing before an import is rejected."""
    output = session.handle("List All")

    assert len(output) == 1
    assert "no file processed" in output[0].lower()
    assert session.file_processed is False


def test_list_name_before_import(session):
    """Test listing one account before an import is rejected."""
    assert "no file processed" in session.handle("List Alice")[0].lower()


def test_import_then_list_all(session, fixtures_dir):
    """Test the full import and list flow."""
    output = session.handle(f"Import File {fixtures_dir / 'transactions.csv'}")

    assert output == ["Imported 3 transactions across 3 accounts"]
    assert session.handle("List All") == ["Alice: -£450.00", "Bob: £400.00", "Carol: £50.00"]


def test_list_one_account(session, fixtures_dir):
    """Test listing a single account's transactions."""
    session.handle(f"Import File {fixtures_dir / 'transactions.csv'}")

    assert session.handle("List Carol") == ["03/01/2020, from Alice to Carol, gift, £50.00"]


def test_list_unknown_account(session, fixtures_dir):
    """Test an unknown account is reported without changing state."""
    session.handle(f"Import File {fixtures_dir / 'transactions.csv'}")
    before = session.handle("List All")

    assert session.handle("List Dave") == [ACCOUNT_NOT_FOUND]
    assert session.handle("List All") == before


def test_second_import_rejected(session, fixtures_dir):
    """Test a second import is rejected and keeps the existing accounts."""
    session.handle(f"Import File {fixtures_dir / 'transactions.csv'}")
    accounts = session.query_service.accounts

    output = session.handle(f"Import File {fixtures_dir / 'transactions.xml'}")

    assert output == ["A file has already been processed"]
    assert session.query_service.accounts is accounts
    assert session.handle("List All") == ["Alice: -£450.00", "Bob: £400.00", "Carol: £50.00"]


def test_import_file_raises_conflict(session, fixtures_dir):
    """Test the programmatic import raises on a second call."""
    session.import_file(str(fixtures_dir / "transactions.csv"))

    with pytest.raises(ConflictError):
        session.import_file(str(fixtures_dir / "transactions.csv"))


def test_import_with_errors_points_to_log(session, log_file, fixtures_dir):
    """Test an import with invalid records completes and mentions the log."""
    output = session.handle(f"Import File {fixtures_dir / 'transactions_errors.csv'}")

    assert output[0] == "Imported 3 transactions across 3 accounts"
    assert log_file in output[1]
    assert session.file_processed is True


def test_missing_file_leaves_session_empty(session, tmp_path, fixtures_dir):
    """Test a missing file fails and another import can still be tried."""
    output = session.handle(f"Import File {tmp_path / 'missing.csv'}")

    assert "Error opening file" in output[0]
    assert session.file_processed is False
    assert session.handle(f"Import File {fixtures_dir / 'transactions.xml'}") == [
        "Imported 2 transactions across 2 accounts"
    ]


def test_unsupported_format(session, fixtures_dir):
    """Test an unsupported extension is rejected."""
    output = session.handle(f"Import File {fixtures_dir / 'transactions.txt'}")

    assert "not supported" in output[0]
    assert session.file_processed is False


def test_structural_error(session, fixtures_dir):
    """Test a structurally broken file leaves no accounts."""
    output = session.handle(f"Import File {fixtures_dir / 'wrong_root.xml'}")

    assert output == [STRUCTURAL_FAILURE]
    assert session.file_processed is False
    assert session.import_result is None


@pytest.mark.parametrize("command", ["", "list All", "List", "Import", "import file x.csv", "Quit"])
def test_invalid_commands(session, command):
    """Test anything else is not a valid command."""
    assert session.handle(command) == [INVALID_COMMAND]


def test_trailing_newline_is_ignored(session, fixtures_dir):
    """Test lines read from a stream keep working."""
    session.handle(f"Import File {fixtures_dir / 'transactions.csv'}\n")

    assert session.handle("List All\n")[0] == "Alice: -£450.00"


def test_unreadable_file_reported(session, monkeypatch, fixtures_dir):
    """Test a file that cannot be opened is reported and nothing is imported."""

    def refuse_open(*args, **kwargs):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr("supportbank.domain.ledger_import.open", refuse_open, raising=False)

    output = session.handle(f"Import File {fixtures_dir / 'transactions.csv'}")

    assert output == [STRUCTURAL_FAILURE]
    assert session.file_processed is False


def test_oversized_csv_field_reported(session, tmp_path):
    """Test a CSV the csv module rejects is reported as a failed import."""
    ledger = tmp_path / "big.csv"
    ledger.write_text(
        "Date,From,To,Narrative,Amount\n"
        f'2020-01-01,Alice,Bob,"{"x" * 200000}",1.00\n',
        encoding="utf-8",
    )

    assert session.handle(f"Import File {ledger}") == [STRUCTURAL_FAILURE]
    assert session.file_processed is False
