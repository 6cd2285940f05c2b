"""Unit tests for SettlementReminderWorker

Tests cover:
- Worker initialization with configuration
- run_once execution and disabled reminders
- Error propagation from the use case
- Shutdown and cleanup
"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

from revenue_ledger.app.use_cases.settlement import SettlementReminderDTO
from revenue_ledger.libs.result import Error, Return
from revenue_ledger.worker.settlement_reminder import SettlementReminderWorker

MODULE = "revenue_ledger.worker.settlement_reminder"


@pytest.fixture
def mock_config():
    """Mock ApplicationConfig"""
    config = MagicMock()
    config.DB_URI = "sqlite+aiosqlite:///:memory:"
    config.SETTLEMENT_REMINDER_THRESHOLD = 1000
    config.SETTLEMENT_REMINDER_ENABLED = True
    config.SETTLEMENT_NOTIFICATION_WEBHOOK = None
    config.DEFAULT_CURRENCY = "USD"
    return config


@pytest.fixture
def mock_session():
    """Mock async session"""
    session = MagicMock()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=False)
    return session


@pytest.fixture
def worker_env(mock_config, mock_session):
    """Patch configuration and database wiring of the worker module"""
    with patch(f"{MODULE}.ApplicationConfig", mock_config), \
            patch(f"{MODULE}.create_async_engine") as mock_engine_factory, \
            patch(f"{MODULE}.sessionmaker") as mock_sessionmaker, \
            patch(f"{MODULE}.SqlAlchemyLedgerEntryRepository") as mock_repo_class, \
            patch(f"{MODULE}.SendSettlementReminders") as mock_use_case_class:
        mock_engine = MagicMock()
        mock_engine.dispose = AsyncMock()
        mock_engine_factory.return_value = mock_engine
        mock_sessionmaker.return_value = MagicMock(return_value=mock_session)
        yield {
            "config": mock_config,
            "engine": mock_engine,
            "engine_factory": mock_engine_factory,
            "repo_class": mock_repo_class,
            "use_case_class": mock_use_case_class,
        }


class TestWorkerInitialization:

    def test_defaults_from_config(self, worker_env):
        worker = SettlementReminderWorker()

        assert worker.db_uri == "sqlite+aiosqlite:///:memory:"
        assert worker.threshold == Decimal("1000")
        worker_env["engine_factory"].assert_called_once_with(
            "sqlite+aiosqlite:///:memory:", echo=False, future=True
        )

    def test_explicit_threshold(self, worker_env):
        worker = SettlementReminderWorker(threshold=Decimal("250.50"))

        assert worker.threshold == Decimal("250.50")


@pytest.mark.asyncio
class TestWorkerRunOnce:

    async def test_run_once_returns_reminders(self, worker_env):
        # Arrange
        reminders = [SettlementReminderDTO(party="admin", amount=Decimal("1500.00"), currency="USD")]
        use_case = MagicMock()
        use_case.execute = AsyncMock(return_value=Return.ok(reminders))
        worker_env["use_case_class"].return_value = use_case
        notification_service = MagicMock()

        # Act
        worker = SettlementReminderWorker(notification_service=notification_service)
        result = await worker.run_once()

        # Assert
        assert result == reminders
        use_case.execute.assert_called_once_with(Decimal("1000"))
        kwargs = worker_env["use_case_class"].call_args.kwargs
        assert kwargs["notification_service"] is notification_service
        assert kwargs["default_currency"] == "USD"

    async def test_run_once_disabled(self, worker_env):
        worker_env["config"].SETTLEMENT_REMINDER_ENABLED = False

        worker = SettlementReminderWorker()
        result = await worker.run_once()

        assert result == []
        worker_env["use_case_class"].assert_not_called()

    async def test_run_once_raises_on_error(self, worker_env):
        use_case = MagicMock()
        use_case.execute = AsyncMock(
            return_value=Return.err(Error(code="BOOM", message="reminders broke"))
        )
        worker_env["use_case_class"].return_value = use_case

        worker = SettlementReminderWorker()

        with pytest.raises(RuntimeError, match="reminders broke"):
            await worker.run_once()

    async def test_shutdown_disposes_engine(self, worker_env):
        worker = SettlementReminderWorker()

        await worker.shutdown()

        worker_env["engine"].dispose.assert_called_once()
