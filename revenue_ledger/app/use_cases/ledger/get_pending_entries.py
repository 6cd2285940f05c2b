"""Get Pending Entries Use Case"""

from typing import Optional, Union
from revenue_ledger.libs.result import Result, Return, Error
from revenue_ledger.app.repositories.ledger_entry_repository import (
    LedgerEntryFilter,
    LedgerEntryRepository,
)
from revenue_ledger.domain.ledger_entry import EntryStatus, Party
from .dtos import ListLedgerEntriesResponseDTO
from .mappers import to_entry_dto


class GetPendingEntries:
    """
    Pending entries of a party, newest first

    These are the candidates offered for settlement.
    """

    def __init__(self, ledger_repo: LedgerEntryRepository):
        self.ledger_repo = ledger_repo

    async def execute(
        self,
        party: Union[Party, str],
        currency: Optional[str] = None,
    ) -> Result[ListLedgerEntriesResponseDTO]:
        parsed = Party.parse(party)
        if parsed is None:
            return Return.err(
                Error(
                    code="INVALID_PARTY",
                    message=f"Unknown party: {party}",
                )
            )

        try:
            entries = await self.ledger_repo.list(
                LedgerEntryFilter(party=parsed, status=EntryStatus.PENDING, currency=currency)
            )
        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_ENTRIES_FAILED",
                    message="Failed to load pending entries",
                    reason=str(e),
                )
            )

        return Return.ok(
            ListLedgerEntriesResponseDTO(
                entries=[to_entry_dto(entry) for entry in entries],
                total_count=len(entries),
            )
        )
