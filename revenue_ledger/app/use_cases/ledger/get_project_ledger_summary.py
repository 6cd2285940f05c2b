"""Get Project Ledger Summary Use Case"""

import logging
from typing import Dict, Tuple
from revenue_ledger.libs.result import Result, Return, Error
from revenue_ledger.app.repositories.ledger_entry_repository import (
    LedgerEntryFilter,
    LedgerEntryRepository,
)
from revenue_ledger.domain.ledger_entry import EntryStatus, EntryType, Party
from revenue_ledger.domain.money import round_money
from .dtos import ProjectLedgerSummaryDTO, ProjectPartySummaryDTO

logger = logging.getLogger(__name__)

_PARTY_ORDER = {party: index for index, party in enumerate(Party)}


class GetProjectLedgerSummary:
    """
    Per-party, per-currency totals of a project's ledger entries

    Credits and debits are split by status; each balance is credits minus
    debits. Currencies are never mixed within one summary row.
    """

    def __init__(self, ledger_repo: LedgerEntryRepository):
        self.ledger_repo = ledger_repo

    async def execute(self, project_id: str) -> Result[ProjectLedgerSummaryDTO]:
        try:
            entries = await self.ledger_repo.list(LedgerEntryFilter(project_id=project_id))
        except Exception as e:
            logger.error(f"Failed to load ledger entries of project {project_id}: {e}")
            return Return.err(
                Error(
                    code="LIST_ENTRIES_FAILED",
                    message=f"Failed to load ledger entries of project {project_id}",
                    reason=str(e),
                )
            )

        groups: Dict[Tuple[Party, str], ProjectPartySummaryDTO] = {}
        for entry in entries:
            key = (entry.party, entry.currency)
            summary = groups.get(key)
            if summary is None:
                summary = groups[key] = ProjectPartySummaryDTO(party=entry.party.value, currency=entry.currency)

            summary.entry_count += 1
            if entry.type == EntryType.CREDIT:
                summary.total_credits += entry.amount
                if entry.status == EntryStatus.PENDING:
                    summary.pending_credits += entry.amount
                else:
                    summary.cleared_credits += entry.amount
            else:
                summary.total_debits += entry.amount
                if entry.status == EntryStatus.PENDING:
                    summary.pending_debits += entry.amount
                else:
                    summary.cleared_debits += entry.amount

        for summary in groups.values():
            summary.net_balance = round_money(summary.total_credits - summary.total_debits)
            summary.pending_balance = round_money(summary.pending_credits - summary.pending_debits)
            summary.cleared_balance = round_money(summary.cleared_credits - summary.cleared_debits)

        ordered = [groups[key] for key in sorted(groups, key=lambda k: (_PARTY_ORDER[k[0]], k[1]))]
        return Return.ok(
            ProjectLedgerSummaryDTO(
                project_id=project_id,
                summaries=ordered,
                total_entries=len(entries),
            )
        )
