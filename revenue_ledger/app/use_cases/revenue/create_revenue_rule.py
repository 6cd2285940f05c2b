"""CreateRevenueRule Use Case

Validates and persists a revenue rule. Creating a default rule demotes the
previous default in the same transaction.
"""

import logging
from decimal import Decimal
from revenue_ledger.libs.result import Result, Return, Error
from revenue_ledger.app.services.unit_of_work import UnitOfWork
from revenue_ledger.app.repositories.revenue_rule_repository import RevenueRuleRepository
from revenue_ledger.domain.revenue_rule import RevenueRule
from revenue_ledger.domain.revenue_split import validate_revenue_rule
from .dtos import RevenueRuleCommandDTO, RevenueRuleResponseDTO
from .mappers import to_rule_dto

logger = logging.getLogger(__name__)


class CreateRevenueRule:
    """
    Use Case: Create a revenue rule

    Business Rules:
    1. Rule must pass validation (name, percent ranges, sum == 100)
    2. At most one default rule: a new default unsets all others
    3. Rule and default flag changes are committed together

    Flow:
    1. Validate rule
    2. Unset previous default (if is_default)
    3. Create rule
    4. Commit
    """

    def __init__(self, uow: UnitOfWork, rule_repo: RevenueRuleRepository):
        self.uow = uow
        self.rule_repo = rule_repo

    async def execute(
        self,
        command: RevenueRuleCommandDTO,
        user_id: str,
    ) -> Result[RevenueRuleResponseDTO]:
        # Step 1: Validate, reporting every error together
        validation = validate_revenue_rule(command)
        if not validation.is_valid:
            return Return.err(
                Error(
                    code="INVALID_RULE",
                    message="Revenue rule is invalid",
                    reason="; ".join(validation.errors),
                    details=validation.errors,
                )
            )

        try:
            # Step 2: Only one default rule at a time
            if command.is_default:
                await self.rule_repo.unset_default()

            # Step 3: Create rule
            rule = RevenueRule(
                rule_name=command.rule_name.strip(),
                admin_percent=command.admin_percent,
                team_percent=command.team_percent,
                vendor_percent=command.vendor_percent if command.vendor_percent is not None else Decimal("0"),
                is_default=command.is_default,
                is_active=command.is_active,
                created_by=user_id,
            )
            created = await self.rule_repo.create(rule)
            response = to_rule_dto(created)

            # Step 4: Commit
            await self.uow.commit()

            logger.info(f"Revenue rule {created.id} ({created.rule_name}) created by {user_id}")
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to create revenue rule: {e}")
            return Return.err(
                Error(
                    code="CREATE_RULE_FAILED",
                    message="Failed to create revenue rule",
                    reason=str(e),
                )
            )
