"""SQLAlchemy implementation of SettlementRepository"""

from datetime import datetime
from typing import List, Optional, Sequence
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from revenue_ledger.app.repositories.settlement_repository import SettlementRepository
from revenue_ledger.domain.ledger_entry import Party
from revenue_ledger.domain.settlement import Settlement


class SqlAlchemySettlementRepository(SettlementRepository):
    """
    SQLAlchemy implementation of SettlementRepository

    Settlement rows are insert-only apart from append_proof_urls.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, settlement: Settlement) -> Settlement:
        self.session.add(settlement)
        await self.session.flush()
        await self.session.refresh(settlement)
        return settlement

    async def get_by_id(self, settlement_id: str) -> Optional[Settlement]:
        stmt = select(Settlement).where(Settlement.id == settlement_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list(
        self,
        party: Optional[Party] = None,
        currency: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[Settlement]:
        stmt = select(Settlement)

        if party is not None:
            stmt = stmt.where(Settlement.party == party)
        if currency is not None:
            stmt = stmt.where(Settlement.currency == currency)
        if start_date is not None:
            stmt = stmt.where(Settlement.settlement_date >= start_date)
        if end_date is not None:
            stmt = stmt.where(Settlement.settlement_date <= end_date)

        stmt = stmt.order_by(Settlement.settlement_date.desc())
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def append_proof_urls(self, settlement_id: str, proof_urls: Sequence[str]) -> Optional[Settlement]:
        """
        Append proof URLs to a settlement

        Note:
            Assigns a new list so the JSON column is flagged as modified
        """
        settlement = await self.get_by_id(settlement_id)
        if not settlement:
            return None

        settlement.proof_urls = [*(settlement.proof_urls or []), *proof_urls]
        self.session.add(settlement)
        await self.session.flush()
        await self.session.refresh(settlement)
        return settlement
