"""Notification Service Implementations

Concrete sinks for settlement notifications.
"""

import logging
from typing import List, Optional
import httpx
from revenue_ledger.app.services.notification_service import NotificationService
from revenue_ledger.domain.ledger_entry import LedgerEntry, Party
from revenue_ledger.domain.party_balance import PartyBalance
from revenue_ledger.domain.settlement import Settlement

logger = logging.getLogger(__name__)


class LoggingNotificationService(NotificationService):
    """
    Notification service that logs settlement events

    Default sink for development, and the fallback channel in production.
    """

    async def notify_settlement_completed(
        self,
        settlement: Settlement,
        entries: List[LedgerEntry],
        user_id: str,
    ) -> bool:
        logger.info(
            f"[SETTLEMENT] {settlement.id}: party={settlement.party.value}, "
            f"entries={len(entries)}, total={settlement.total_amount} {settlement.currency}, "
            f"by={user_id}"
        )
        return True

    async def notify_settlement_reminder(self, party: Party, balance: PartyBalance) -> bool:
        logger.warning(
            f"[SETTLEMENT REMINDER] Party: {party.value}, "
            f"Pending: {balance.total_pending} {balance.currency}"
        )
        return True


class WebhookNotificationService(NotificationService):
    """
    Notification service that posts settlement events to an HTTP webhook

    Sends JSON payload to configured webhook URL.
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        """
        Initialize webhook notification service

        Args:
            webhook_url: URL to POST events to
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def notify_settlement_completed(
        self,
        settlement: Settlement,
        entries: List[LedgerEntry],
        user_id: str,
    ) -> bool:
        payload = {
            "type": "settlement_completed",
            "settlement_id": settlement.id,
            "party": settlement.party.value,
            "ledger_entry_ids": list(settlement.ledger_entry_ids),
            "entry_count": len(entries),
            "total_amount": str(settlement.total_amount),
            "currency": settlement.currency,
            "settlement_date": settlement.settlement_date.isoformat(),
            "remarks": settlement.remarks,
            "created_by": user_id,
        }
        return await self._post(payload, f"settlement {settlement.id}")

    async def notify_settlement_reminder(self, party: Party, balance: PartyBalance) -> bool:
        payload = {
            "type": "settlement_reminder",
            "party": party.value,
            "total_pending": str(balance.total_pending),
            "currency": balance.currency,
            "last_updated": balance.last_updated.isoformat(),
        }
        return await self._post(payload, f"reminder for {party.value}")

    async def _post(self, payload: dict, subject: str) -> bool:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.webhook_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                logger.info(f"Webhook notification sent for {subject} to {self.webhook_url}")
                return True
        except httpx.HTTPError as e:
            logger.error(f"Failed to send webhook notification for {subject}: {e}")
            return False
        except Exception as e:
            logger.error(f"Unexpected error sending webhook notification for {subject}: {e}")
            return False


class CompositeNotificationService(NotificationService):
    """
    Notification service that delegates to multiple services

    Succeeds if at least one channel succeeds.
    """

    def __init__(self, services: List[NotificationService]):
        self.services = services

    async def notify_settlement_completed(
        self,
        settlement: Settlement,
        entries: List[LedgerEntry],
        user_id: str,
    ) -> bool:
        success = False
        for service in self.services:
            try:
                if await service.notify_settlement_completed(settlement, entries, user_id):
                    success = True
            except Exception as e:
                logger.error(f"Notification service {type(service).__name__} failed: {e}")
        return success

    async def notify_settlement_reminder(self, party: Party, balance: PartyBalance) -> bool:
        success = False
        for service in self.services:
            try:
                if await service.notify_settlement_reminder(party, balance):
                    success = True
            except Exception as e:
                logger.error(f"Notification service {type(service).__name__} failed: {e}")
        return success


def create_notification_service(webhook_url: Optional[str] = None) -> NotificationService:
    """
    Factory function to create appropriate notification service

    Args:
        webhook_url: Optional webhook URL. If provided, creates composite
                     service with logging + webhook. Otherwise, just logging.

    Returns:
        Configured NotificationService
    """
    services: List[NotificationService] = [LoggingNotificationService()]

    if webhook_url:
        services.append(WebhookNotificationService(webhook_url))

    if len(services) == 1:
        return services[0]

    return CompositeNotificationService(services)
