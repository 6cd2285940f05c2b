from .ledger_entry_repository import SqlAlchemyLedgerEntryRepository
from .settlement_repository import SqlAlchemySettlementRepository
from .revenue_rule_repository import SqlAlchemyRevenueRuleRepository

__all__ = [
    "SqlAlchemyLedgerEntryRepository",
    "SqlAlchemySettlementRepository",
    "SqlAlchemyRevenueRuleRepository",
]
