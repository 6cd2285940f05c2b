"""SQLAlchemy implementation of LedgerEntryRepository

Provides persistence for LedgerEntry entities. The settlement commit relies on
mark_cleared being a single conditional UPDATE: two commits racing for the
same entries cannot both see them pending.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence
from sqlalchemy import case, func, select, update
from sqlmodel.ext.asyncio.session import AsyncSession
from revenue_ledger.app.repositories.ledger_entry_repository import (
    LedgerEntryFilter,
    LedgerEntryRepository,
)
from revenue_ledger.domain.ledger_entry import EntryStatus, EntryType, LedgerEntry, Party
from revenue_ledger.domain.money import round_money


class SqlAlchemyLedgerEntryRepository(LedgerEntryRepository):
    """
    SQLAlchemy implementation of LedgerEntryRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE
    - Balance aggregation in SQL
    - Compare-and-set status transition for settlements
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, entry_id: str, for_update: bool = False) -> Optional[LedgerEntry]:
        stmt = select(LedgerEntry).where(LedgerEntry.id == entry_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_ids(self, entry_ids: Sequence[str], for_update: bool = False) -> List[LedgerEntry]:
        if not entry_ids:
            return []

        stmt = select(LedgerEntry).where(LedgerEntry.id.in_(list(entry_ids)))

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        by_id = {entry.id: entry for entry in result.scalars().all()}
        return [by_id[entry_id] for entry_id in entry_ids if entry_id in by_id]

    async def create_many(self, entries: List[LedgerEntry]) -> List[LedgerEntry]:
        self.session.add_all(entries)
        await self.session.flush()
        for entry in entries:
            await self.session.refresh(entry)
        return entries

    async def list(self, filters: LedgerEntryFilter, limit: Optional[int] = None) -> List[LedgerEntry]:
        stmt = self._apply_filters(select(LedgerEntry), filters)

        stmt = stmt.order_by(LedgerEntry.date.desc(), LedgerEntry.created_at.desc())
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, filters: LedgerEntryFilter) -> int:
        stmt = self._apply_filters(select(func.count(LedgerEntry.id)), filters)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    @staticmethod
    def _apply_filters(stmt, filters: LedgerEntryFilter):
        if filters.party is not None:
            stmt = stmt.where(LedgerEntry.party == filters.party)
        if filters.status is not None:
            stmt = stmt.where(LedgerEntry.status == filters.status)
        if filters.type is not None:
            stmt = stmt.where(LedgerEntry.type == filters.type)
        if filters.project_id is not None:
            stmt = stmt.where(LedgerEntry.project_id == filters.project_id)
        if filters.payment_id is not None:
            stmt = stmt.where(LedgerEntry.payment_id == filters.payment_id)
        if filters.currency is not None:
            stmt = stmt.where(LedgerEntry.currency == filters.currency)
        if filters.start_date is not None:
            stmt = stmt.where(LedgerEntry.date >= filters.start_date)
        if filters.end_date is not None:
            stmt = stmt.where(LedgerEntry.date <= filters.end_date)
        return stmt

    async def get_by_payment_id(self, payment_id: str) -> List[LedgerEntry]:
        return await self.list(LedgerEntryFilter(payment_id=payment_id))

    async def sum_signed_amounts(
        self,
        party: Party,
        status: EntryStatus,
        currency: Optional[str] = None,
    ) -> Decimal:
        signed_amount = case(
            (LedgerEntry.type == EntryType.CREDIT, LedgerEntry.amount),
            else_=-LedgerEntry.amount,
        )
        stmt = select(func.coalesce(func.sum(signed_amount), 0)).where(
            LedgerEntry.party == party,
            LedgerEntry.status == status,
        )
        if currency is not None:
            stmt = stmt.where(LedgerEntry.currency == currency)

        result = await self.session.execute(stmt)
        return round_money(result.scalar_one())

    async def mark_cleared(self, entry_ids: Sequence[str], party: Party, settlement_id: str) -> int:
        """
        Clear pending entries of ``party`` in one conditional UPDATE

        Note:
            Must run in the same transaction as the settlement insert.
            Entries already loaded in the session are refreshed afterwards.
        """
        stmt = (
            update(LedgerEntry)
            .where(
                LedgerEntry.id.in_(list(entry_ids)),
                LedgerEntry.status == EntryStatus.PENDING,
                LedgerEntry.party == party,
            )
            .values(
                status=EntryStatus.CLEARED,
                settlement_id=settlement_id,
                updated_at=datetime.utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)

        wanted = set(entry_ids)
        loaded = [
            obj for obj in list(self.session.identity_map.values())
            if isinstance(obj, LedgerEntry) and obj.id in wanted
        ]
        for entry in loaded:
            await self.session.refresh(entry)

        return result.rowcount
