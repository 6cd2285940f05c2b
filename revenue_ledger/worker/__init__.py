"""Background workers for the revenue ledger"""
from .settlement_reminder import SettlementReminderWorker

__all__ = ["SettlementReminderWorker"]
