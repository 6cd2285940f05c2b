from revenue_ledger.domain.revenue_rule import RevenueRule
from .dtos import RevenueRuleResponseDTO


def to_rule_dto(rule: RevenueRule) -> RevenueRuleResponseDTO:
    return RevenueRuleResponseDTO(
        id=rule.id,
        rule_name=rule.rule_name,
        admin_percent=rule.admin_percent,
        team_percent=rule.team_percent,
        vendor_percent=rule.vendor_percent,
        is_default=rule.is_default,
        is_active=rule.is_active,
        created_by=rule.created_by,
        created_at=rule.created_at,
        updated_at=rule.updated_at,
    )
