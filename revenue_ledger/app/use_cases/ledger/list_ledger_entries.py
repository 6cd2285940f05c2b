"""ListLedgerEntries Use Case

Filtered ledger query backing the ledger table view.
"""

from typing import Optional
from revenue_ledger.libs.result import Result, Return, Error
from revenue_ledger.app.repositories.ledger_entry_repository import (
    LedgerEntryFilter,
    LedgerEntryRepository,
)
from .dtos import ListLedgerEntriesResponseDTO
from .mappers import to_entry_dto


class ListLedgerEntries:
    """
    List Ledger Entries Use Case

    Business Rules:
    1. All filters are optional and combined with AND
    2. Date range is inclusive on both ends
    3. Results are ordered by date descending
    4. start_date must not be after end_date
    """

    def __init__(self, ledger_repo: LedgerEntryRepository):
        self.ledger_repo = ledger_repo

    async def execute(
        self,
        filters: Optional[LedgerEntryFilter] = None,
        limit: Optional[int] = None,
    ) -> Result[ListLedgerEntriesResponseDTO]:
        filters = filters or LedgerEntryFilter()

        if filters.start_date and filters.end_date and filters.start_date > filters.end_date:
            return Return.err(
                Error(
                    code="INVALID_DATE_RANGE",
                    message="start_date must be before end_date",
                )
            )

        try:
            entries = await self.ledger_repo.list(filters, limit=limit)
        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_ENTRIES_FAILED",
                    message="Failed to list ledger entries",
                    reason=str(e),
                )
            )

        return Return.ok(
            ListLedgerEntriesResponseDTO(
                entries=[to_entry_dto(entry) for entry in entries],
                total_count=len(entries),
            )
        )
