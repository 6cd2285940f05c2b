"""Settlement Repository Interface

Defines the contract for settlement persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence
from revenue_ledger.domain.ledger_entry import Party
from revenue_ledger.domain.settlement import Settlement


class SettlementRepository(ABC):
    """
    Repository interface for Settlement persistence

    Settlements are immutable once created, except for a single additive
    proof_urls update.
    """

    @abstractmethod
    async def create(self, settlement: Settlement) -> Settlement:
        """
        Create a new settlement

        Args:
            settlement: Settlement entity to persist

        Returns:
            Created Settlement
        """
        pass

    @abstractmethod
    async def get_by_id(self, settlement_id: str) -> Optional[Settlement]:
        """Retrieve settlement by ID, None if absent"""
        pass

    @abstractmethod
    async def list(
        self,
        party: Optional[Party] = None,
        currency: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[Settlement]:
        """
        Query settlements ordered by settlement_date (newest first)

        Args:
            party: Only settlements for this party
            currency: Only settlements in this currency
            start_date: Inclusive lower bound on settlement_date
            end_date: Inclusive upper bound on settlement_date
            limit: Maximum number of settlements

        Returns:
            Matching settlements
        """
        pass

    @abstractmethod
    async def append_proof_urls(self, settlement_id: str, proof_urls: Sequence[str]) -> Optional[Settlement]:
        """
        Append proof URLs to an existing settlement

        Returns:
            Updated Settlement, None if absent
        """
        pass
