"""SendSettlementReminders Use Case

Reminds parties whose pending balance has grown past a threshold.
"""

import logging
from decimal import Decimal
from typing import List
from revenue_ledger.libs.result import Result, Return
from revenue_ledger.app.services.notification_service import NotificationService
from revenue_ledger.app.repositories.ledger_entry_repository import LedgerEntryRepository
from revenue_ledger.app.use_cases.ledger.get_party_balance import GetPartyBalance
from revenue_ledger.domain.ledger_entry import Party
from revenue_ledger.domain.money import to_decimal
from .dtos import SettlementReminderDTO

logger = logging.getLogger(__name__)

DEFAULT_REMINDER_THRESHOLD = Decimal("1000")


class SendSettlementReminders:
    """
    Use Case: Send settlement reminders

    Business Rules:
    1. Every party is checked independently
    2. A reminder is sent when total_pending >= threshold
    3. A failed balance or notification for one party does not stop the others
    4. Every party at or above the threshold is reported, with whether the
       notification was delivered
    """

    def __init__(
        self,
        ledger_repo: LedgerEntryRepository,
        notification_service: NotificationService,
        default_currency: str = "USD",
    ):
        self.notification_service = notification_service
        self.get_balance = GetPartyBalance(ledger_repo, default_currency)

    async def execute(self, threshold_amount=DEFAULT_REMINDER_THRESHOLD) -> Result[List[SettlementReminderDTO]]:
        threshold = to_decimal(threshold_amount)
        reminders = []

        for party in Party:
            balance_result = await self.get_balance.execute(party)
            if balance_result.is_err():
                logger.error(
                    f"Skipping reminder for {party.value}: {balance_result.error.message}"
                )
                continue

            balance = balance_result.value
            if balance.total_pending < threshold:
                continue

            try:
                delivered = bool(await self.notification_service.notify_settlement_reminder(party, balance))
            except Exception as e:
                logger.error(f"Settlement reminder for {party.value} failed: {e}")
                delivered = False

            if not delivered:
                logger.warning(f"Settlement reminder for {party.value} was not delivered")

            reminders.append(
                SettlementReminderDTO(
                    party=party.value,
                    amount=balance.total_pending,
                    currency=balance.currency,
                    delivered=delivered,
                )
            )

        delivered_count = sum(1 for reminder in reminders if reminder.delivered)
        logger.info(
            f"Settlement reminders due for {len(reminders)} party(ies), "
            f"delivered={delivered_count}, threshold={threshold}"
        )
        return Return.ok(reminders)
