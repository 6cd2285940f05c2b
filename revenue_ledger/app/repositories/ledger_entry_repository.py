"""Ledger Entry Repository Interface

Defines the contract for ledger entry persistence operations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence
from revenue_ledger.domain.ledger_entry import LedgerEntry, Party, EntryType, EntryStatus


@dataclass
class LedgerEntryFilter:
    """Optional equality filters plus an inclusive date range"""
    party: Optional[Party] = None
    status: Optional[EntryStatus] = None
    type: Optional[EntryType] = None
    project_id: Optional[str] = None
    payment_id: Optional[str] = None
    currency: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class LedgerEntryRepository(ABC):
    """
    Repository interface for LedgerEntry persistence

    Entries are read-only for everyone except the settlement commit, which
    transitions status through mark_cleared.
    """

    @abstractmethod
    async def get_by_id(self, entry_id: str, for_update: bool = False) -> Optional[LedgerEntry]:
        """
        Retrieve a ledger entry by ID

        Args:
            entry_id: Ledger entry ID
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            LedgerEntry if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_ids(self, entry_ids: Sequence[str], for_update: bool = False) -> List[LedgerEntry]:
        """
        Retrieve several ledger entries, preserving the order of entry_ids

        Missing IDs are skipped; callers compare lengths to detect them.
        """
        pass

    @abstractmethod
    async def create_many(self, entries: List[LedgerEntry]) -> List[LedgerEntry]:
        """
        Persist new ledger entries

        Args:
            entries: LedgerEntry entities to persist

        Returns:
            Created entries
        """
        pass

    @abstractmethod
    async def list(self, filters: LedgerEntryFilter, limit: Optional[int] = None) -> List[LedgerEntry]:
        """
        Query ledger entries ordered by date (newest first)

        Args:
            filters: Equality filters and date range
            limit: Maximum number of entries to return

        Returns:
            Matching entries
        """
        pass

    @abstractmethod
    async def count(self, filters: LedgerEntryFilter) -> int:
        """Number of entries matching the filters"""
        pass

    @abstractmethod
    async def get_by_payment_id(self, payment_id: str) -> List[LedgerEntry]:
        """Retrieve all entries split from a payment"""
        pass

    @abstractmethod
    async def sum_signed_amounts(
        self,
        party: Party,
        status: EntryStatus,
        currency: Optional[str] = None,
    ) -> Decimal:
        """
        Aggregate signed amounts (credit +, debit -) for a party and status

        Returns:
            Sum rounded to 2 places (0.00 when no entries match)
        """
        pass

    @abstractmethod
    async def mark_cleared(self, entry_ids: Sequence[str], party: Party, settlement_id: str) -> int:
        """
        Transition pending entries of ``party`` to cleared

        Only rows that are still pending and belong to the party are updated.

        Returns:
            Number of rows updated; less than len(entry_ids) signals a conflict
        """
        pass
