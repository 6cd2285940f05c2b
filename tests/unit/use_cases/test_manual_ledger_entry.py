"""Unit tests for CreateManualLedgerEntry use case

Tests cover:
- Debit and credit adjustments without payment or rule
- Default remarks
- Validation errors reported together
- Rollback on store failure
"""

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from revenue_ledger.app.use_cases.ledger import CreateManualLedgerEntry, ManualLedgerEntryDTO
from revenue_ledger.domain.ledger_entry import EntryStatus, EntryType, LedgerEntry, Party


@pytest.fixture
def mock_ledger_repo():
    """Mock ledger entry repository"""
    repo = MagicMock()
    repo.create_many = AsyncMock(side_effect=lambda entries: entries)
    return repo


def make_command(**overrides):
    data = {
        "project_id": "proj_042",
        "type": "debit",
        "party": "vendor",
        "amount": Decimal("25.00"),
        "currency": "usd",
    }
    data.update(overrides)
    return ManualLedgerEntryDTO(**data)


@pytest.mark.asyncio
class TestCreateManualLedgerEntrySuccess:

    async def test_creates_pending_debit_without_payment(self, mock_uow, mock_ledger_repo):
        """
        Given: A valid debit adjustment without remarks
        When: CreateManualLedgerEntry is executed
        Then: A pending debit with no payment or rule is committed with default remarks
        """
        # Act
        use_case = CreateManualLedgerEntry(mock_uow, mock_ledger_repo)
        result = await use_case.execute(make_command(), "user_7")

        # Assert
        assert result.is_ok()
        entry_dto = result.value
        assert entry_dto.type == "debit"
        assert entry_dto.party == "vendor"
        assert entry_dto.amount == Decimal("25.00")
        assert entry_dto.signed_amount == Decimal("-25.00")
        assert entry_dto.currency == "USD"
        assert entry_dto.status == "pending"
        assert entry_dto.remarks == "Manual adjustment"

        created = mock_ledger_repo.create_many.call_args[0][0]
        assert len(created) == 1
        entry = created[0]
        assert isinstance(entry, LedgerEntry)
        assert entry.payment_id is None
        assert entry.revenue_rule_id is None
        assert entry.type == EntryType.DEBIT
        assert entry.party == Party.VENDOR
        assert entry.status == EntryStatus.PENDING
        mock_uow.commit.assert_called_once()

    async def test_keeps_given_remarks_and_date(self, mock_uow, mock_ledger_repo):
        command = make_command(
            type="credit",
            party="team",
            amount=Decimal("10.005"),
            date=datetime(2024, 3, 1),
            remarks="Bonus",
        )

        result = await CreateManualLedgerEntry(mock_uow, mock_ledger_repo).execute(command, "user_7")

        assert result.value.remarks == "Bonus"
        assert result.value.date == datetime(2024, 3, 1)
        assert result.value.amount == Decimal("10.01")
        assert result.value.signed_amount == Decimal("10.01")


@pytest.mark.asyncio
class TestCreateManualLedgerEntryErrors:

    async def test_reports_every_problem(self, mock_uow, mock_ledger_repo):
        """
        Given: A command with no project, unknown type and party, zero amount and bad currency
        When: CreateManualLedgerEntry is executed
        Then: INVALID_LEDGER_ENTRY lists every problem and nothing is stored
        """
        # Arrange
        command = make_command(
            project_id=" ",
            type="refund",
            party="boss",
            amount=Decimal("0"),
            currency="US1",
        )

        # Act
        result = await CreateManualLedgerEntry(mock_uow, mock_ledger_repo).execute(command, "user_7")

        # Assert
        assert result.is_err()
        assert result.error.code == "INVALID_LEDGER_ENTRY"
        assert result.error.details == [
            "Project ID is required",
            "Valid entry type (credit/debit) is required",
            "Valid party (admin/team/vendor) is required",
            "Amount must be a positive number",
            "Valid currency code is required",
        ]
        mock_ledger_repo.create_many.assert_not_called()
        mock_uow.commit.assert_not_called()

    @pytest.mark.parametrize("amount", [Decimal("-5"), Decimal("0.004"), None])
    async def test_non_positive_amount(self, mock_uow, mock_ledger_repo, amount):
        result = await CreateManualLedgerEntry(mock_uow, mock_ledger_repo).execute(
            make_command(amount=amount), "user_7"
        )

        assert result.error.details == ["Amount must be a positive number"]

    async def test_store_failure_rolls_back(self, mock_uow, mock_ledger_repo):
        mock_ledger_repo.create_many = AsyncMock(side_effect=Exception("disk full"))

        result = await CreateManualLedgerEntry(mock_uow, mock_ledger_repo).execute(make_command(), "user_7")

        assert result.error.code == "CREATE_ENTRY_FAILED"
        assert result.error.reason == "disk full"
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()
