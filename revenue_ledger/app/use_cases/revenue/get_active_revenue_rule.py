"""GetActiveRevenueRule Use Case

Resolves the rule applied to payments that do not name one.
"""

from typing import Optional
from revenue_ledger.libs.result import Result, Return, Error
from revenue_ledger.app.repositories.revenue_rule_repository import RevenueRuleRepository
from revenue_ledger.domain.revenue_rule import RevenueRule


class GetActiveRevenueRule:
    """
    Use Case: Resolve the active revenue rule

    Resolution order:
    1. The rule with the given ID, if one is requested (must be active)
    2. The active default rule
    3. The oldest active rule
    """

    def __init__(self, rule_repo: RevenueRuleRepository):
        self.rule_repo = rule_repo

    async def execute(self, rule_id: Optional[str] = None) -> Result[RevenueRule]:
        try:
            if rule_id:
                rule = await self.rule_repo.get_by_id(rule_id)
                if not rule or not rule.is_active:
                    return Return.err(
                        Error(
                            code="RULE_NOT_FOUND",
                            message=f"Active revenue rule {rule_id} not found",
                        )
                    )
                return Return.ok(rule)

            rule = await self.rule_repo.get_default()
            if rule:
                return Return.ok(rule)

            active_rules = await self.rule_repo.list_active()
            if active_rules:
                return Return.ok(active_rules[0])

            return Return.err(
                Error(
                    code="RULE_NOT_FOUND",
                    message="No active revenue rule found",
                    reason="Create a revenue rule before recording payments",
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_RULE_FAILED",
                    message="Failed to load revenue rule",
                    reason=str(e),
                )
            )
