"""Ledger use cases"""
from .create_entries_for_payment import CreateEntriesForPayment
from .create_manual_ledger_entry import CreateManualLedgerEntry
from .get_party_balance import GetPartyBalance, GetPartyBalances
from .get_pending_entries import GetPendingEntries
from .get_ledger_entry import GetLedgerEntry
from .list_ledger_entries import ListLedgerEntries
from .get_project_ledger_summary import GetProjectLedgerSummary
from .get_ledger_stats import GetLedgerStats
from .dtos import (
    PaymentDTO,
    ManualLedgerEntryDTO,
    LedgerEntryDTO,
    CreateEntriesResponseDTO,
    ListLedgerEntriesResponseDTO,
    PartyBalancesResponseDTO,
    ProjectPartySummaryDTO,
    ProjectLedgerSummaryDTO,
    LedgerStatsDTO,
)

__all__ = [
    "CreateEntriesForPayment",
    "CreateManualLedgerEntry",
    "GetPartyBalance",
    "GetPartyBalances",
    "GetPendingEntries",
    "GetLedgerEntry",
    "ListLedgerEntries",
    "GetProjectLedgerSummary",
    "GetLedgerStats",
    "PaymentDTO",
    "ManualLedgerEntryDTO",
    "LedgerEntryDTO",
    "CreateEntriesResponseDTO",
    "ListLedgerEntriesResponseDTO",
    "PartyBalancesResponseDTO",
    "ProjectPartySummaryDTO",
    "ProjectLedgerSummaryDTO",
    "LedgerStatsDTO",
]
