"""PreviewRevenueSplit Use Case

Shows how an amount would be split without creating ledger entries.
"""

from decimal import Decimal
from typing import Optional
from revenue_ledger.libs.result import Result, Return, Error
from revenue_ledger.app.repositories.revenue_rule_repository import RevenueRuleRepository
from revenue_ledger.domain.errors import ValidationError as LedgerValidationError
from revenue_ledger.domain.money import round_money
from revenue_ledger.domain.revenue_split import calculate_split
from .dtos import SplitPreviewResponseDTO
from .get_active_revenue_rule import GetActiveRevenueRule


class PreviewRevenueSplit:

    def __init__(self, rule_repo: RevenueRuleRepository):
        self.rule_repo = rule_repo

    async def execute(
        self,
        amount: Decimal,
        currency: str,
        rule_id: Optional[str] = None,
    ) -> Result[SplitPreviewResponseDTO]:
        rule_result = await GetActiveRevenueRule(self.rule_repo).execute(rule_id)
        if rule_result.is_err():
            return Return.err(rule_result.error)
        rule = rule_result.value

        try:
            split = calculate_split(amount, currency, rule)
        except LedgerValidationError as e:
            return Return.err(
                Error(
                    code=e.code,
                    message=e.message,
                    details=e.errors or None,
                )
            )

        return Return.ok(
            SplitPreviewResponseDTO(
                amount=round_money(amount),
                currency=currency,
                revenue_rule_id=rule.id,
                rule_name=rule.rule_name,
                shares={party.value: money.amount for party, money in split.items()},
            )
        )
