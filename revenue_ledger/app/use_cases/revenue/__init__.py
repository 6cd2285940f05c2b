"""Revenue rule use cases"""
from .create_revenue_rule import CreateRevenueRule
from .get_active_revenue_rule import GetActiveRevenueRule
from .get_revenue_rule import GetRevenueRule
from .list_revenue_rules import ListRevenueRules
from .deactivate_revenue_rule import DeactivateRevenueRule
from .preview_revenue_split import PreviewRevenueSplit
from .dtos import (
    RevenueRuleCommandDTO,
    RevenueRuleResponseDTO,
    RuleValidationResponseDTO,
    SplitPreviewResponseDTO,
)

__all__ = [
    "CreateRevenueRule",
    "GetActiveRevenueRule",
    "GetRevenueRule",
    "ListRevenueRules",
    "DeactivateRevenueRule",
    "PreviewRevenueSplit",
    "RevenueRuleCommandDTO",
    "RevenueRuleResponseDTO",
    "RuleValidationResponseDTO",
    "SplitPreviewResponseDTO",
]
