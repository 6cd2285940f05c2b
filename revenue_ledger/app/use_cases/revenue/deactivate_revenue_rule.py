"""DeactivateRevenueRule Use Case

Soft-deletes a revenue rule. Rules stay in the store because ledger entries
reference them.
"""

import logging
from revenue_ledger.libs.result import Result, Return, Error
from revenue_ledger.app.services.unit_of_work import UnitOfWork
from revenue_ledger.app.repositories.revenue_rule_repository import RevenueRuleRepository
from .dtos import RevenueRuleResponseDTO
from .mappers import to_rule_dto

logger = logging.getLogger(__name__)


class DeactivateRevenueRule:

    def __init__(self, uow: UnitOfWork, rule_repo: RevenueRuleRepository):
        self.uow = uow
        self.rule_repo = rule_repo

    async def execute(self, rule_id: str) -> Result[RevenueRuleResponseDTO]:
        try:
            rule = await self.rule_repo.get_by_id(rule_id)
            if not rule:
                return Return.err(
                    Error(
                        code="RULE_NOT_FOUND",
                        message=f"Revenue rule {rule_id} not found",
                    )
                )

            if rule.is_default:
                return Return.err(
                    Error(
                        code="DEFAULT_RULE_LOCKED",
                        message="The default revenue rule cannot be deactivated",
                        reason="Make another rule the default first",
                    )
                )

            updated = await self.rule_repo.deactivate(rule_id)
            response = to_rule_dto(updated)
            await self.uow.commit()

            logger.info(f"Revenue rule {rule_id} deactivated")
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DEACTIVATE_RULE_FAILED",
                    message="Failed to deactivate revenue rule",
                    reason=str(e),
                )
            )
