"""Revenue Rule Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional
from revenue_ledger.domain.revenue_rule import RevenueRule


class RevenueRuleRepository(ABC):

    @abstractmethod
    async def create(self, rule: RevenueRule) -> RevenueRule:
        """Persist a new revenue rule"""
        pass

    @abstractmethod
    async def get_by_id(self, rule_id: str) -> Optional[RevenueRule]:
        """Retrieve rule by ID, None if absent"""
        pass

    @abstractmethod
    async def get_default(self) -> Optional[RevenueRule]:
        """Retrieve the active default rule, None if there is none"""
        pass

    @abstractmethod
    async def list_active(self) -> List[RevenueRule]:
        """Active rules, oldest first"""
        pass

    @abstractmethod
    async def list_rules(self, active_only: bool = False) -> List[RevenueRule]:
        """All rules (or only active ones), newest first"""
        pass

    @abstractmethod
    async def unset_default(self, exclude_rule_id: Optional[str] = None) -> None:
        """Clear is_default on every rule except exclude_rule_id"""
        pass

    @abstractmethod
    async def deactivate(self, rule_id: str) -> Optional[RevenueRule]:
        """Soft delete: set is_active=False. Returns the updated rule or None"""
        pass
