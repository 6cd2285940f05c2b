"""Unit tests for CreateBulkSettlement and ProcessSettlementWithProof

Tests cover:
- Successful commit with signed total and notification
- Conflict detection (stale entries, fewer updated rows)
- Rollback on failure with the generic message
- Notification failures are swallowed
- Proof URL attachment
"""

import pytest
from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from revenue_ledger.app.use_cases.settlement import (
    CreateBulkSettlement,
    ProcessSettlementWithProof,
    SettlementCommandDTO,
)
from revenue_ledger.domain.ledger_entry import EntryStatus, EntryType, LedgerEntry, Party
from revenue_ledger.domain.settlement import Settlement


def make_entry(entry_id, amount, entry_type=EntryType.CREDIT, status=EntryStatus.PENDING, currency="USD"):
    return LedgerEntry(
        id=entry_id,
        project_id="proj_1",
        type=entry_type,
        party=Party.VENDOR,
        amount=Decimal(amount),
        currency=currency,
        status=status,
    )


@pytest.fixture
def entries():
    return [
        make_entry("e1", "100.00"),
        make_entry("e2", "30.00", entry_type=EntryType.DEBIT),
    ]


@pytest.fixture
def mock_ledger_repo(entries):
    """Mock ledger entry repository"""
    repo = MagicMock()
    repo.get_by_ids = AsyncMock(return_value=entries)
    repo.mark_cleared = AsyncMock(return_value=len(entries))
    return repo


@pytest.fixture
def mock_settlement_repo():
    """Mock settlement repository"""
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda settlement: settlement)

    async def append_proof_urls(settlement_id, proof_urls):
        return Settlement(
            id=settlement_id,
            party=Party.VENDOR,
            ledger_entry_ids=["e1", "e2"],
            total_amount=Decimal("70.00"),
            currency="USD",
            proof_urls=list(proof_urls),
        )

    repo.append_proof_urls = AsyncMock(side_effect=append_proof_urls)
    return repo


@pytest.fixture
def mock_notification_service():
    """Mock notification service"""
    service = MagicMock()
    service.notify_settlement_completed = AsyncMock(return_value=True)
    return service


@pytest.fixture
def settlement_use_case(mock_uow, mock_ledger_repo, mock_settlement_repo, mock_notification_service):
    return CreateBulkSettlement(
        uow=mock_uow,
        ledger_repo=mock_ledger_repo,
        settlement_repo=mock_settlement_repo,
        notification_service=mock_notification_service,
    )


@pytest.fixture
def sample_command():
    return SettlementCommandDTO(
        party="vendor",
        ledger_entry_ids=["e1", "e2"],
        settlement_date=datetime(2024, 2, 1),
        remarks="January payout",
    )


@pytest.mark.asyncio
class TestCreateBulkSettlementSuccess:

    async def test_commits_settlement_with_signed_total(
        self,
        settlement_use_case,
        mock_uow,
        mock_ledger_repo,
        mock_settlement_repo,
        mock_notification_service,
        entries,
        sample_command,
    ):
        """
        Given: A 100.00 credit and a 30.00 debit pending for vendor
        When: The settlement is committed
        Then: Total is 70.00, entries are cleared, commit and notify happen once
        """
        # Act
        result = await settlement_use_case.execute(sample_command, "user_1")

        # Assert
        assert result.is_ok()
        settlement = result.value
        assert settlement.party == "vendor"
        assert settlement.total_amount == Decimal("70.00")
        assert settlement.currency == "USD"
        assert settlement.ledger_entry_ids == ["e1", "e2"]
        assert settlement.created_by == "user_1"
        assert settlement.proof_urls == []

        mock_ledger_repo.get_by_ids.assert_called_once_with(["e1", "e2"], for_update=True)
        mock_ledger_repo.mark_cleared.assert_called_once_with(["e1", "e2"], Party.VENDOR, settlement.id)
        mock_uow.commit.assert_called_once()
        mock_uow.rollback.assert_not_called()

        created = mock_settlement_repo.create.call_args[0][0]
        mock_notification_service.notify_settlement_completed.assert_called_once_with(
            created, entries, "user_1"
        )

    async def test_duplicate_ids_are_settled_once(self, settlement_use_case, mock_ledger_repo):
        command = SettlementCommandDTO(party="vendor", ledger_entry_ids=["e1", "e2", "e1"])

        result = await settlement_use_case.execute(command, "user_1")

        assert result.value.ledger_entry_ids == ["e1", "e2"]
        mock_ledger_repo.get_by_ids.assert_called_once_with(["e1", "e2"], for_update=True)

    async def test_notification_failure_does_not_fail_settlement(
        self, settlement_use_case, mock_uow, mock_notification_service, sample_command
    ):
        mock_notification_service.notify_settlement_completed = AsyncMock(side_effect=Exception("smtp down"))

        result = await settlement_use_case.execute(sample_command, "user_1")

        assert result.is_ok()
        mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
class TestCreateBulkSettlementConflict:

    async def test_fewer_updated_rows_rolls_back(
        self, settlement_use_case, mock_uow, mock_ledger_repo, mock_notification_service, sample_command
    ):
        """
        Given: A concurrent settlement cleared one entry after it was loaded
        When: The conditional update affects 1 of 2 rows
        Then: Transaction is rolled back with SETTLEMENT_CONFLICT
        """
        # Arrange
        mock_ledger_repo.mark_cleared = AsyncMock(return_value=1)

        # Act
        result = await settlement_use_case.execute(sample_command, "user_1")

        # Assert
        assert result.is_err()
        assert result.error.code == "SETTLEMENT_CONFLICT"
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()
        mock_notification_service.notify_settlement_completed.assert_not_called()

    async def test_already_cleared_entry_is_a_conflict(
        self, settlement_use_case, mock_uow, mock_ledger_repo, mock_settlement_repo, sample_command
    ):
        mock_ledger_repo.get_by_ids = AsyncMock(
            return_value=[make_entry("e1", "100.00"), make_entry("e2", "30.00", status=EntryStatus.CLEARED)]
        )

        result = await settlement_use_case.execute(sample_command, "user_1")

        assert result.error.code == "SETTLEMENT_CONFLICT"
        mock_settlement_repo.create.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_missing_entry_is_a_conflict(
        self, settlement_use_case, mock_ledger_repo, mock_settlement_repo, sample_command
    ):
        mock_ledger_repo.get_by_ids = AsyncMock(return_value=[make_entry("e1", "100.00")])

        result = await settlement_use_case.execute(sample_command, "user_1")

        assert result.error.code == "SETTLEMENT_CONFLICT"
        mock_settlement_repo.create.assert_not_called()


@pytest.mark.asyncio
class TestCreateBulkSettlementErrors:

    async def test_store_failure_rolls_back_with_generic_message(
        self, settlement_use_case, mock_uow, mock_settlement_repo, sample_command
    ):
        mock_settlement_repo.create = AsyncMock(side_effect=Exception("disk full"))

        result = await settlement_use_case.execute(sample_command, "user_1")

        assert result.is_err()
        assert result.error.code == "SETTLEMENT_FAILED"
        assert result.error.message == "Settlement failed"
        assert "disk full" in result.error.reason
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()

    async def test_unknown_party(self, settlement_use_case, mock_ledger_repo):
        command = SettlementCommandDTO(party="boss", ledger_entry_ids=["e1"])

        result = await settlement_use_case.execute(command, "user_1")

        assert result.error.code == "INVALID_SETTLEMENT_REQUEST"
        mock_ledger_repo.get_by_ids.assert_not_called()

    async def test_mixed_currencies(self, settlement_use_case, mock_ledger_repo, mock_uow, sample_command):
        mock_ledger_repo.get_by_ids = AsyncMock(
            return_value=[make_entry("e1", "100.00"), make_entry("e2", "30.00", currency="EUR")]
        )

        result = await settlement_use_case.execute(sample_command, "user_1")

        assert result.error.code == "INVALID_SETTLEMENT_REQUEST"
        mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
class TestProcessSettlementWithProof:

    @pytest.fixture
    def proof_use_case(self, mock_uow, mock_ledger_repo, mock_settlement_repo, mock_notification_service):
        return ProcessSettlementWithProof(
            uow=mock_uow,
            ledger_repo=mock_ledger_repo,
            settlement_repo=mock_settlement_repo,
            notification_service=mock_notification_service,
        )

    async def test_without_proofs_no_extra_update(
        self, proof_use_case, mock_uow, mock_settlement_repo, sample_command
    ):
        result = await proof_use_case.execute(sample_command, [], "user_1")

        assert result.is_ok()
        assert result.value.proof_urls == []
        mock_settlement_repo.append_proof_urls.assert_not_called()
        mock_uow.commit.assert_called_once()

    async def test_appends_proof_urls(self, proof_use_case, mock_uow, mock_settlement_repo, sample_command):
        """
        Given: Proofs as a URL string, a mapping and an object with .url
        When: The settlement is processed
        Then: All three URLs are appended in one additional update
        """
        # Arrange
        proofs = [
            "https://files.example.com/a.pdf",
            {"url": "https://files.example.com/b.pdf"},
            SimpleNamespace(url="https://files.example.com/c.pdf", name="c.pdf"),
        ]

        # Act
        result = await proof_use_case.execute(sample_command, proofs, "user_1")

        # Assert
        assert result.is_ok()
        assert result.value.proof_urls == [
            "https://files.example.com/a.pdf",
            "https://files.example.com/b.pdf",
            "https://files.example.com/c.pdf",
        ]
        mock_settlement_repo.append_proof_urls.assert_called_once()
        assert mock_uow.commit.call_count == 2

    async def test_settlement_error_skips_proofs(
        self, proof_use_case, mock_ledger_repo, mock_settlement_repo, sample_command
    ):
        mock_ledger_repo.mark_cleared = AsyncMock(return_value=0)

        result = await proof_use_case.execute(sample_command, ["https://files.example.com/a.pdf"], "user_1")

        assert result.error.code == "SETTLEMENT_CONFLICT"
        mock_settlement_repo.append_proof_urls.assert_not_called()
