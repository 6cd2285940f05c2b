"""Settlement query use cases"""

from datetime import datetime
from typing import Optional, Union
from revenue_ledger.libs.result import Result, Return, Error
from revenue_ledger.app.repositories.ledger_entry_repository import LedgerEntryRepository
from revenue_ledger.app.repositories.settlement_repository import SettlementRepository
from revenue_ledger.app.use_cases.ledger.mappers import to_entry_dto
from revenue_ledger.domain.ledger_entry import Party
from .dtos import ListSettlementsResponseDTO, SettlementDetailDTO
from .mappers import to_settlement_dto


class ListSettlements:
    """
    List Settlements Use Case

    Filtering by party alone gives the party's settlement history.
    Results are ordered by settlement date, newest first.
    """

    def __init__(self, settlement_repo: SettlementRepository):
        self.settlement_repo = settlement_repo

    async def execute(
        self,
        party: Optional[Union[Party, str]] = None,
        currency: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> Result[ListSettlementsResponseDTO]:
        parsed = None
        if party is not None:
            parsed = Party.parse(party)
            if parsed is None:
                return Return.err(
                    Error(
                        code="INVALID_PARTY",
                        message=f"Unknown party: {party}",
                    )
                )

        if start_date and end_date and start_date > end_date:
            return Return.err(
                Error(
                    code="INVALID_DATE_RANGE",
                    message="start_date must be before end_date",
                )
            )

        try:
            settlements = await self.settlement_repo.list(
                party=parsed,
                currency=currency,
                start_date=start_date,
                end_date=end_date,
                limit=limit,
            )
        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_SETTLEMENTS_FAILED",
                    message="Failed to list settlements",
                    reason=str(e),
                )
            )

        return Return.ok(
            ListSettlementsResponseDTO(
                settlements=[to_settlement_dto(s) for s in settlements],
                total_count=len(settlements),
            )
        )


class GetSettlement:
    """A settlement with the ledger entries it cleared, in settlement order"""

    def __init__(self, settlement_repo: SettlementRepository, ledger_repo: LedgerEntryRepository):
        self.settlement_repo = settlement_repo
        self.ledger_repo = ledger_repo

    async def execute(self, settlement_id: str) -> Result[SettlementDetailDTO]:
        settlement = await self.settlement_repo.get_by_id(settlement_id)
        if not settlement:
            return Return.err(
                Error(
                    code="SETTLEMENT_NOT_FOUND",
                    message=f"Settlement {settlement_id} not found",
                )
            )

        entries = await self.ledger_repo.get_by_ids(settlement.ledger_entry_ids)

        return Return.ok(
            SettlementDetailDTO(
                settlement=to_settlement_dto(settlement),
                entries=[to_entry_dto(entry) for entry in entries],
            )
        )
