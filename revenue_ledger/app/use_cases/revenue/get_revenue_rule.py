"""GetRevenueRule Use Case"""

from revenue_ledger.libs.result import Result, Return, Error
from revenue_ledger.app.repositories.revenue_rule_repository import RevenueRuleRepository
from .dtos import RevenueRuleResponseDTO
from .mappers import to_rule_dto


class GetRevenueRule:
    """
    Look up a revenue rule by ID

    Unlike GetActiveRevenueRule, a deactivated rule is still returned.
    """

    def __init__(self, rule_repo: RevenueRuleRepository):
        self.rule_repo = rule_repo

    async def execute(self, rule_id: str) -> Result[RevenueRuleResponseDTO]:
        try:
            rule = await self.rule_repo.get_by_id(rule_id)
        except Exception as e:
            return Return.err(
                Error(
                    code="GET_RULE_FAILED",
                    message="Failed to load revenue rule",
                    reason=str(e),
                )
            )

        if not rule:
            return Return.err(
                Error(
                    code="RULE_NOT_FOUND",
                    message=f"Revenue rule {rule_id} not found",
                )
            )

        return Return.ok(to_rule_dto(rule))
