"""Get Ledger Stats Use Case"""

import logging
from typing import Optional
from revenue_ledger.libs.result import Result, Return, Error
from revenue_ledger.app.repositories.ledger_entry_repository import (
    LedgerEntryFilter,
    LedgerEntryRepository,
)
from revenue_ledger.domain.ledger_entry import EntryStatus, EntryType
from .dtos import LedgerStatsDTO
from .get_party_balance import GetPartyBalances

logger = logging.getLogger(__name__)


class GetLedgerStats:
    """
    Entry counts by status and type, plus the balance of every party

    A party whose balance fails carries an error in ``party_balances``; a
    failed count fails the whole call.
    """

    def __init__(self, ledger_repo: LedgerEntryRepository, default_currency: str = "USD"):
        self.ledger_repo = ledger_repo
        self.default_currency = default_currency

    async def execute(self, currency: Optional[str] = None) -> Result[LedgerStatsDTO]:
        try:
            total = await self.ledger_repo.count(LedgerEntryFilter())
            pending = await self.ledger_repo.count(LedgerEntryFilter(status=EntryStatus.PENDING))
            cleared = await self.ledger_repo.count(LedgerEntryFilter(status=EntryStatus.CLEARED))
            credits = await self.ledger_repo.count(LedgerEntryFilter(type=EntryType.CREDIT))
            debits = await self.ledger_repo.count(LedgerEntryFilter(type=EntryType.DEBIT))
        except Exception as e:
            logger.error(f"Failed to count ledger entries: {e}")
            return Return.err(
                Error(
                    code="STATS_FAILED",
                    message="Failed to compute ledger statistics",
                    reason=str(e),
                )
            )

        balances = await GetPartyBalances(self.ledger_repo, self.default_currency).execute(currency)

        return Return.ok(
            LedgerStatsDTO(
                total_entries=total,
                pending_entries=pending,
                cleared_entries=cleared,
                credit_entries=credits,
                debit_entries=debits,
                party_balances=balances.value.balances,
                currency=balances.value.currency,
            )
        )
