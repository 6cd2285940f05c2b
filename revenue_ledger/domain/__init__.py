from .base import BaseModel, generate_uuid
from .errors import (
    LedgerError,
    ValidationError,
    InvalidAmountError,
    InvalidRuleError,
    InvalidPercentageError,
    NotFoundError,
    ConflictError,
    LedgerSystemError,
)
from .money import Percentage, round_money
from .ledger_entry import LedgerEntry, Party, EntryType, EntryStatus
from .revenue_rule import RevenueRule
from .settlement import Settlement
from .party_balance import PartyBalance
from .revenue_split import Money, RuleValidationResult, calculate_split, validate_revenue_rule

__all__ = [
    "BaseModel",
    "generate_uuid",
    "LedgerError",
    "ValidationError",
    "InvalidAmountError",
    "InvalidRuleError",
    "InvalidPercentageError",
    "NotFoundError",
    "ConflictError",
    "LedgerSystemError",
    "Percentage",
    "round_money",
    "LedgerEntry",
    "Party",
    "EntryType",
    "EntryStatus",
    "RevenueRule",
    "Settlement",
    "PartyBalance",
    "Money",
    "RuleValidationResult",
    "calculate_split",
    "validate_revenue_rule",
]
