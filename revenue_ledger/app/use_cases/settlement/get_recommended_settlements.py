"""GetRecommendedSettlements Use Case

Groups a party's pending entries into settlement candidates.
"""

from decimal import Decimal
from typing import Dict, Optional, Tuple, Union
from revenue_ledger.libs.result import Result, Return, Error
from revenue_ledger.app.repositories.ledger_entry_repository import (
    LedgerEntryFilter,
    LedgerEntryRepository,
)
from revenue_ledger.domain.ledger_entry import EntryStatus, Party
from revenue_ledger.domain.money import round_money
from .dtos import RecommendedSettlementDTO, RecommendedSettlementsResponseDTO


class GetRecommendedSettlements:
    """
    Recommended settlements for a party

    One candidate per (currency, project_id) group of pending entries, with
    the group's signed net total. Largest totals first.
    """

    def __init__(self, ledger_repo: LedgerEntryRepository):
        self.ledger_repo = ledger_repo

    async def execute(self, party: Union[Party, str]) -> Result[RecommendedSettlementsResponseDTO]:
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
                LedgerEntryFilter(party=parsed, status=EntryStatus.PENDING)
            )
        except Exception as e:
            return Return.err(
                Error(
                    code="RECOMMENDATIONS_FAILED",
                    message="Failed to load pending entries",
                    reason=str(e),
                )
            )

        groups: Dict[Tuple[str, Optional[str]], dict] = {}
        for entry in entries:
            group = groups.setdefault(
                (entry.currency, entry.project_id),
                {"total": Decimal("0"), "ids": []},
            )
            group["total"] += entry.signed_amount
            group["ids"].append(entry.id)

        recommendations = [
            RecommendedSettlementDTO(
                party=parsed.value,
                currency=currency,
                project_id=project_id,
                total_amount=round_money(group["total"]),
                entry_count=len(group["ids"]),
                ledger_entry_ids=group["ids"],
            )
            for (currency, project_id), group in groups.items()
        ]
        recommendations.sort(key=lambda r: r.total_amount, reverse=True)

        return Return.ok(
            RecommendedSettlementsResponseDTO(party=parsed.value, recommendations=recommendations)
        )
