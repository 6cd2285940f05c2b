from .ledger_entry_repository import LedgerEntryRepository, LedgerEntryFilter
from .settlement_repository import SettlementRepository
from .revenue_rule_repository import RevenueRuleRepository

__all__ = [
    "LedgerEntryRepository",
    "LedgerEntryFilter",
    "SettlementRepository",
    "RevenueRuleRepository",
]
