"""Unit tests for notification service implementations"""

import httpx
import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

from revenue_ledger.adapter.services.notification_service import (
    CompositeNotificationService,
    LoggingNotificationService,
    WebhookNotificationService,
    create_notification_service,
)
from revenue_ledger.domain.ledger_entry import Party
from revenue_ledger.domain.party_balance import PartyBalance
from revenue_ledger.domain.settlement import Settlement

CLIENT_PATH = "revenue_ledger.adapter.services.notification_service.httpx.AsyncClient"


@pytest.fixture
def settlement():
    return Settlement(
        id="set_1",
        party=Party.VENDOR,
        ledger_entry_ids=["e1", "e2"],
        total_amount=Decimal("70.00"),
        currency="USD",
        settlement_date=datetime(2024, 2, 1),
    )


@pytest.fixture
def balance():
    return PartyBalance(party=Party.ADMIN, total_pending=Decimal("1500.00"), currency="USD")


def mock_async_client(post):
    """AsyncClient replacement whose context manager yields a client with ``post``"""
    client = MagicMock()
    client.post = post
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return MagicMock(return_value=client)


@pytest.mark.asyncio
class TestWebhookNotificationService:

    async def test_posts_settlement_payload(self, settlement):
        # Arrange
        response = MagicMock()
        response.raise_for_status = MagicMock()
        post = AsyncMock(return_value=response)
        service = WebhookNotificationService("https://hooks.example.com/ledger")

        # Act
        with patch(CLIENT_PATH, mock_async_client(post)):
            sent = await service.notify_settlement_completed(settlement, [], "user_1")

        # Assert
        assert sent is True
        args, kwargs = post.call_args
        assert args[0] == "https://hooks.example.com/ledger"
        payload = kwargs["json"]
        assert payload["type"] == "settlement_completed"
        assert payload["settlement_id"] == "set_1"
        assert payload["party"] == "vendor"
        assert payload["total_amount"] == "70.00"
        assert payload["created_by"] == "user_1"

    async def test_posts_reminder_payload(self, balance):
        response = MagicMock()
        post = AsyncMock(return_value=response)
        service = WebhookNotificationService("https://hooks.example.com/ledger")

        with patch(CLIENT_PATH, mock_async_client(post)):
            sent = await service.notify_settlement_reminder(Party.ADMIN, balance)

        assert sent is True
        payload = post.call_args.kwargs["json"]
        assert payload == {
            "type": "settlement_reminder",
            "party": "admin",
            "total_pending": "1500.00",
            "currency": "USD",
            "last_updated": balance.last_updated.isoformat(),
        }

    async def test_http_error_returns_false(self, settlement):
        post = AsyncMock(side_effect=httpx.ConnectError("connection refused"))
        service = WebhookNotificationService("https://hooks.example.com/ledger")

        with patch(CLIENT_PATH, mock_async_client(post)):
            sent = await service.notify_settlement_completed(settlement, [], "user_1")

        assert sent is False


@pytest.mark.asyncio
class TestCompositeNotificationService:

    async def test_succeeds_if_any_channel_succeeds(self, balance):
        failing = MagicMock()
        failing.notify_settlement_reminder = AsyncMock(side_effect=Exception("down"))
        working = MagicMock()
        working.notify_settlement_reminder = AsyncMock(return_value=True)

        service = CompositeNotificationService([failing, working])

        assert await service.notify_settlement_reminder(Party.ADMIN, balance) is True
        working.notify_settlement_reminder.assert_called_once_with(Party.ADMIN, balance)

    async def test_fails_if_every_channel_fails(self, settlement):
        failing = MagicMock()
        failing.notify_settlement_completed = AsyncMock(return_value=False)

        service = CompositeNotificationService([failing, failing])

        assert await service.notify_settlement_completed(settlement, [], "user_1") is False

    async def test_logging_service_always_succeeds(self, settlement, balance):
        service = LoggingNotificationService()

        assert await service.notify_settlement_completed(settlement, [], "user_1") is True
        assert await service.notify_settlement_reminder(Party.ADMIN, balance) is True


class TestCreateNotificationService:

    def test_logging_only_without_webhook(self):
        assert isinstance(create_notification_service(None), LoggingNotificationService)

    def test_composite_with_webhook(self):
        service = create_notification_service("https://hooks.example.com/ledger")

        assert isinstance(service, CompositeNotificationService)
        assert isinstance(service.services[0], LoggingNotificationService)
        assert isinstance(service.services[1], WebhookNotificationService)
        assert service.services[1].webhook_url == "https://hooks.example.com/ledger"
