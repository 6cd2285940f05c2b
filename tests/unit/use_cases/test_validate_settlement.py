"""Unit tests for ValidateSettlement use case"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

from revenue_ledger.app.use_cases.settlement import SettlementCommandDTO, ValidateSettlement
from revenue_ledger.domain.ledger_entry import EntryStatus, EntryType, LedgerEntry, Party

INVALID_ENTRIES = "Some selected entries are invalid, already settled, or belong to different party"


def make_entry(entry_id, party=Party.VENDOR, currency="USD", status=EntryStatus.PENDING):
    return LedgerEntry(
        id=entry_id,
        type=EntryType.CREDIT,
        party=party,
        amount=Decimal("100.00"),
        currency=currency,
        status=status,
    )


@pytest.fixture
def mock_ledger_repo():
    """Mock ledger entry repository resolving entries from a dict"""
    repo = MagicMock()
    repo.entries = {}
    repo.get_by_id = AsyncMock(side_effect=lambda entry_id: repo.entries.get(entry_id))
    return repo


@pytest.mark.asyncio
class TestValidateSettlement:

    async def test_valid_request(self, mock_ledger_repo):
        # Arrange
        mock_ledger_repo.entries = {"e1": make_entry("e1"), "e2": make_entry("e2")}
        command = SettlementCommandDTO(party="vendor", ledger_entry_ids=["e1", "e2"])

        # Act
        result = await ValidateSettlement(mock_ledger_repo).execute(command)

        # Assert
        assert result.value.is_valid is True
        assert result.value.errors == []
        assert result.value.warnings == []

    async def test_unknown_party_and_empty_selection(self, mock_ledger_repo):
        command = SettlementCommandDTO(party="boss", ledger_entry_ids=[])

        result = await ValidateSettlement(mock_ledger_repo).execute(command)

        assert result.value.is_valid is False
        assert result.value.errors == [
            "Valid party is required",
            "At least one ledger entry must be selected",
        ]

    async def test_mixed_currencies(self, mock_ledger_repo):
        mock_ledger_repo.entries = {"e1": make_entry("e1"), "e2": make_entry("e2", currency="EUR")}
        command = SettlementCommandDTO(party="vendor", ledger_entry_ids=["e1", "e2"])

        result = await ValidateSettlement(mock_ledger_repo).execute(command)

        assert result.value.errors == ["All selected entries must have the same currency"]

    async def test_already_settled_entry(self, mock_ledger_repo):
        mock_ledger_repo.entries = {
            "e1": make_entry("e1"),
            "e2": make_entry("e2", status=EntryStatus.CLEARED),
        }
        command = SettlementCommandDTO(party="vendor", ledger_entry_ids=["e1", "e2"])

        result = await ValidateSettlement(mock_ledger_repo).execute(command)

        assert result.value.errors == [INVALID_ENTRIES]

    async def test_entry_of_other_party(self, mock_ledger_repo):
        mock_ledger_repo.entries = {"e1": make_entry("e1", party=Party.TEAM)}
        command = SettlementCommandDTO(party="vendor", ledger_entry_ids=["e1"])

        result = await ValidateSettlement(mock_ledger_repo).execute(command)

        assert result.value.errors == [INVALID_ENTRIES]

    async def test_missing_entry(self, mock_ledger_repo):
        mock_ledger_repo.entries = {"e1": make_entry("e1")}
        command = SettlementCommandDTO(party="vendor", ledger_entry_ids=["e1", "missing"])

        result = await ValidateSettlement(mock_ledger_repo).execute(command)

        assert result.value.errors == [INVALID_ENTRIES]

    async def test_failed_lookup_counts_as_invalid_entry(self, mock_ledger_repo):
        """
        Given: The store fails for one of the entries
        When: Settlement is validated
        Then: That entry is reported as invalid, not as a system error
        """
        # Arrange
        def get_by_id(entry_id):
            if entry_id == "e2":
                raise Exception("timeout")
            return make_entry(entry_id)

        mock_ledger_repo.get_by_id = AsyncMock(side_effect=get_by_id)
        command = SettlementCommandDTO(party="vendor", ledger_entry_ids=["e1", "e2"])

        # Act
        result = await ValidateSettlement(mock_ledger_repo).execute(command)

        # Assert
        assert result.value.errors == [INVALID_ENTRIES]

    async def test_all_errors_are_accumulated(self, mock_ledger_repo):
        mock_ledger_repo.entries = {"e1": make_entry("e1"), "e2": make_entry("e2", currency="EUR")}
        command = SettlementCommandDTO(party="admin", ledger_entry_ids=["e1", "e2"])

        result = await ValidateSettlement(mock_ledger_repo).execute(command)

        assert result.value.errors == [
            INVALID_ENTRIES,
            "All selected entries must have the same currency",
        ]

    async def test_duplicate_ids_warn(self, mock_ledger_repo):
        mock_ledger_repo.entries = {"e1": make_entry("e1")}
        command = SettlementCommandDTO(party="vendor", ledger_entry_ids=["e1", "e1"])

        result = await ValidateSettlement(mock_ledger_repo).execute(command)

        assert result.value.is_valid is True
        assert result.value.warnings == [
            "Duplicate ledger entries were selected and will be settled once"
        ]
        mock_ledger_repo.get_by_id.assert_called_once_with("e1")

    async def test_unexpected_failure_is_reported_not_raised(self, mock_ledger_repo):
        command = SettlementCommandDTO(party="vendor", ledger_entry_ids=["e1"])

        with patch("revenue_ledger.app.use_cases.settlement.validate_settlement.Party") as mock_party:
            mock_party.parse.side_effect = RuntimeError("boom")
            result = await ValidateSettlement(mock_ledger_repo).execute(command)

        assert result.is_ok()
        assert result.value.is_valid is False
        assert result.value.errors == ["Validation failed due to system error"]
        assert result.value.warnings == []
