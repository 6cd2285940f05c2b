"""Party Balance Use Cases

Derive a party's balance from its ledger entries at read time.
"""

import logging
from datetime import datetime
from typing import Optional, Union
from revenue_ledger.libs.result import Result, Return, Error
from revenue_ledger.app.repositories.ledger_entry_repository import LedgerEntryRepository
from revenue_ledger.domain.ledger_entry import EntryStatus, Party
from revenue_ledger.domain.party_balance import PartyBalance
from .dtos import PartyBalancesResponseDTO

logger = logging.getLogger(__name__)


class GetPartyBalance:
    """
    Get Party Balance Use Case

    Read-only. total_pending sums signed amounts of pending entries only,
    total_cleared those of cleared entries; net_balance is their sum.

    Without a currency, entries of every currency are summed and the balance
    is labelled with the default currency.
    """

    def __init__(self, ledger_repo: LedgerEntryRepository, default_currency: str = "USD"):
        self.ledger_repo = ledger_repo
        self.default_currency = default_currency

    async def execute(
        self,
        party: Union[Party, str],
        currency: Optional[str] = None,
    ) -> Result[PartyBalance]:
        """
        Errors:
            INVALID_PARTY: party is not admin, team or vendor
            BALANCE_FAILED: the store could not aggregate the entries
        """
        parsed = Party.parse(party)
        if parsed is None:
            return Return.err(
                Error(
                    code="INVALID_PARTY",
                    message=f"Unknown party: {party}",
                )
            )

        try:
            total_pending = await self.ledger_repo.sum_signed_amounts(parsed, EntryStatus.PENDING, currency)
            total_cleared = await self.ledger_repo.sum_signed_amounts(parsed, EntryStatus.CLEARED, currency)
        except Exception as e:
            logger.error(f"Failed to compute balance for {parsed.value}: {e}")
            return Return.err(
                Error(
                    code="BALANCE_FAILED",
                    message=f"Failed to compute balance for {parsed.value}",
                    reason=str(e),
                )
            )

        return Return.ok(
            PartyBalance(
                party=parsed,
                total_pending=total_pending,
                total_cleared=total_cleared,
                net_balance=total_pending + total_cleared,
                currency=currency or self.default_currency,
                last_updated=datetime.utcnow(),
            )
        )


class GetPartyBalances:
    """
    Get Party Balances Use Case

    Aggregates every party. A party whose balance fails is reported with
    total_pending 0 and an error message; the others are unaffected.
    """

    def __init__(self, ledger_repo: LedgerEntryRepository, default_currency: str = "USD"):
        self.ledger_repo = ledger_repo
        self.default_currency = default_currency

    async def execute(self, currency: Optional[str] = None) -> Result[PartyBalancesResponseDTO]:
        get_balance = GetPartyBalance(self.ledger_repo, self.default_currency)
        label = currency or self.default_currency

        balances = []
        for party in Party:
            result = await get_balance.execute(party, currency)
            if result.is_ok():
                balances.append(result.value)
            else:
                balances.append(
                    PartyBalance(
                        party=party,
                        currency=label,
                        error=result.error.message,
                    )
                )

        return Return.ok(PartyBalancesResponseDTO(balances=balances, currency=label))
