"""ListRevenueRules Use Case"""

from typing import List
from revenue_ledger.libs.result import Result, Return, Error
from revenue_ledger.app.repositories.revenue_rule_repository import RevenueRuleRepository
from .dtos import RevenueRuleResponseDTO
from .mappers import to_rule_dto


class ListRevenueRules:
    """Revenue rules, newest first; deactivated rules are included unless active_only"""

    def __init__(self, rule_repo: RevenueRuleRepository):
        self.rule_repo = rule_repo

    async def execute(self, active_only: bool = False) -> Result[List[RevenueRuleResponseDTO]]:
        try:
            rules = await self.rule_repo.list_rules(active_only=active_only)
        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_RULES_FAILED",
                    message="Failed to load revenue rules",
                    reason=str(e),
                )
            )

        return Return.ok([to_rule_dto(rule) for rule in rules])
