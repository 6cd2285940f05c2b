"""GetSettlementStats Use Case"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Union
from revenue_ledger.libs.result import Result, Return, Error
from revenue_ledger.app.repositories.settlement_repository import SettlementRepository
from revenue_ledger.domain.ledger_entry import Party
from revenue_ledger.domain.money import round_money
from revenue_ledger.domain.settlement import Settlement
from .dtos import SettlementStatsDTO


def compute_settlement_stats(settlements: List[Settlement], now: datetime) -> SettlementStatsDTO:
    month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

    total = sum((s.total_amount for s in settlements), Decimal("0"))
    this_month = [s for s in settlements if s.settlement_date >= month_start]
    count = len(settlements)

    return SettlementStatsDTO(
        total_settlements=count,
        total_amount=round_money(total),
        average_amount=round_money(total / count) if count else Decimal("0.00"),
        settlements_this_month=len(this_month),
        amount_this_month=round_money(sum((s.total_amount for s in this_month), Decimal("0"))),
    )


class GetSettlementStats:

    def __init__(self, settlement_repo: SettlementRepository):
        self.settlement_repo = settlement_repo

    async def execute(
        self,
        party: Optional[Union[Party, str]] = None,
        now: Optional[datetime] = None,
    ) -> Result[SettlementStatsDTO]:
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

        try:
            settlements = await self.settlement_repo.list(party=parsed)
        except Exception as e:
            return Return.err(
                Error(
                    code="SETTLEMENT_STATS_FAILED",
                    message="Failed to compute settlement statistics",
                    reason=str(e),
                )
            )

        return Return.ok(compute_settlement_stats(settlements, now or datetime.utcnow()))
