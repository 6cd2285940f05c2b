"""SQLAlchemy implementation of RevenueRuleRepository"""

from datetime import datetime
from typing import List, Optional
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from revenue_ledger.app.repositories.revenue_rule_repository import RevenueRuleRepository
from revenue_ledger.domain.revenue_rule import RevenueRule


class SqlAlchemyRevenueRuleRepository(RevenueRuleRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, rule: RevenueRule) -> RevenueRule:
        self.session.add(rule)
        await self.session.flush()
        await self.session.refresh(rule)
        return rule

    async def get_by_id(self, rule_id: str) -> Optional[RevenueRule]:
        stmt = select(RevenueRule).where(RevenueRule.id == rule_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_default(self) -> Optional[RevenueRule]:
        stmt = (
            select(RevenueRule)
            .where(RevenueRule.is_default == True)  # noqa: E712
            .where(RevenueRule.is_active == True)  # noqa: E712
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_active(self) -> List[RevenueRule]:
        stmt = (
            select(RevenueRule)
            .where(RevenueRule.is_active == True)  # noqa: E712
            .order_by(RevenueRule.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_rules(self, active_only: bool = False) -> List[RevenueRule]:
        stmt = select(RevenueRule).order_by(RevenueRule.created_at.desc())
        if active_only:
            stmt = stmt.where(RevenueRule.is_active == True)  # noqa: E712
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def unset_default(self, exclude_rule_id: Optional[str] = None) -> None:
        stmt = (
            update(RevenueRule)
            .where(RevenueRule.is_default == True)  # noqa: E712
            .values(is_default=False, updated_at=datetime.utcnow())
            .execution_options(synchronize_session="fetch")
        )
        if exclude_rule_id is not None:
            stmt = stmt.where(RevenueRule.id != exclude_rule_id)
        await self.session.execute(stmt)

    async def deactivate(self, rule_id: str) -> Optional[RevenueRule]:
        rule = await self.get_by_id(rule_id)
        if not rule:
            return None

        rule.is_active = False
        rule.updated_at = datetime.utcnow()
        self.session.add(rule)
        await self.session.flush()
        return rule
