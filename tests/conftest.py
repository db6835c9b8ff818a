"""Shared pytest fixtures for supportbank tests."""

from datetime import date
from decimal import Decimal
from pathlib import Path
import pytest

from supportbank.domain.entities import Entry


@pytest.fixture
def make_entry():
    """Return a factory for entries with sensible defaults."""

    def _make_entry(
        from_account="Alice",
        to_account="Bob",
        amount="10.00",
        line=1,
        entry_date=date(2020, 1, 1),
        narrative="test",
    ):
        if not isinstance(amount, Decimal):
            amount = Decimal(amount)
        return Entry(
            date=entry_date,
            from_account=from_account,
            to_account=to_account,
            narrative=narrative,
            amount=amount,
            line=line,
        )

    return _make_entry


@pytest.fixture
def log_file(tmp_path):
    """Return a log file path inside a temporary directory."""
    return str(tmp_path / "logs" / "debug.log")


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
