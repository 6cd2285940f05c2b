"""Notification Service Interface

Defines the contract for settlement notifications. Delivery is
fire-and-forget from the ledger's point of view: callers log and swallow
failures.
"""

from abc import ABC, abstractmethod
from typing import List
from revenue_ledger.domain.ledger_entry import LedgerEntry, Party
from revenue_ledger.domain.party_balance import PartyBalance
from revenue_ledger.domain.settlement import Settlement


class NotificationService(ABC):
    """
    Abstract notification service for settlement events

    Implementations can send notifications via:
    - Logging
    - Webhook (HTTP POST)
    - Several channels at once (composite)
    """

    @abstractmethod
    async def notify_settlement_completed(
        self,
        settlement: Settlement,
        entries: List[LedgerEntry],
        user_id: str,
    ) -> bool:
        """
        Announce a committed settlement

        Args:
            settlement: The created Settlement
            entries: Ledger entries cleared by the settlement
            user_id: User who committed the settlement

        Returns:
            True if notification sent successfully, False otherwise
        """
        pass

    @abstractmethod
    async def notify_settlement_reminder(self, party: Party, balance: PartyBalance) -> bool:
        """
        Remind a party that pending settlements crossed the threshold

        Args:
            party: Party with a large pending balance
            balance: The party's current balance

        Returns:
            True if notification sent successfully, False otherwise
        """
        pass
