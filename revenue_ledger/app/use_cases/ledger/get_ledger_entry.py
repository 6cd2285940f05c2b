"""Get Ledger Entry Use Case"""

from revenue_ledger.libs.result import Result, Return, Error
from revenue_ledger.app.repositories.ledger_entry_repository import LedgerEntryRepository
from .dtos import LedgerEntryDTO
from .mappers import to_entry_dto


class GetLedgerEntry:

    def __init__(self, ledger_repo: LedgerEntryRepository):
        self.ledger_repo = ledger_repo

    async def execute(self, entry_id: str) -> Result[LedgerEntryDTO]:
        entry = await self.ledger_repo.get_by_id(entry_id)

        if not entry:
            return Return.err(
                Error(
                    code="LEDGER_ENTRY_NOT_FOUND",
                    message=f"Ledger entry {entry_id} not found",
                )
            )

        return Return.ok(to_entry_dto(entry))
