"""CreateBulkSettlement Use Case

Atomically clears a batch of pending ledger entries and records the
settlement, with pessimistic locking and a conditional status update so that
two commits for the same entries cannot both succeed.
"""

import logging
from datetime import datetime
from revenue_ledger.libs.result import Result, Return, Error
from revenue_ledger.app.services.unit_of_work import UnitOfWork
from revenue_ledger.app.services.notification_service import NotificationService
from revenue_ledger.app.repositories.ledger_entry_repository import LedgerEntryRepository
from revenue_ledger.app.repositories.settlement_repository import SettlementRepository
from revenue_ledger.domain.ledger_entry import Party
from revenue_ledger.domain.money import round_money
from revenue_ledger.domain.settlement import Settlement
from .dtos import SettlementCommandDTO, SettlementDTO
from .mappers import to_settlement_dto

logger = logging.getLogger(__name__)


class CreateBulkSettlement:
    """
    Use Case: Commit a settlement

    Business Rules:
    1. Atomic: settlement insert and entry status change share one transaction
    2. Pessimistic locking: entries are loaded with SELECT FOR UPDATE
    3. Compare-and-set: only entries still pending for the party are cleared;
       fewer updated rows than requested means a concurrent settlement won
    4. total_amount is the rounded sum of signed entry amounts
    5. Notification happens after commit and never fails the settlement

    Flow:
    1. Normalize request (party, de-duplicated entry ids)
    2. Lock and load entries
    3. Compute signed total
    4. Create settlement
    5. Mark entries cleared (conditional UPDATE)
    6. Commit transaction
    7. Notify
    """

    def __init__(
        self,
        uow: UnitOfWork,
        ledger_repo: LedgerEntryRepository,
        settlement_repo: SettlementRepository,
        notification_service: NotificationService,
    ):
        self.uow = uow
        self.ledger_repo = ledger_repo
        self.settlement_repo = settlement_repo
        self.notification_service = notification_service

    async def execute(self, command: SettlementCommandDTO, user_id: str) -> Result[SettlementDTO]:
        """
        Execute settlement commit

        Args:
            command: SettlementCommandDTO with party and ledger_entry_ids
            user_id: User committing the settlement

        Returns:
            Result[SettlementDTO]: Created settlement or error

        Errors:
            INVALID_SETTLEMENT_REQUEST: unknown party, no entries or mixed currencies
            SETTLEMENT_CONFLICT: entries missing or no longer pending for the party
            SETTLEMENT_FAILED: any other failure (transaction rolled back)
        """
        # Step 1: Normalize request
        party = Party.parse(command.party)
        entry_ids = list(dict.fromkeys(command.ledger_entry_ids or []))
        if party is None or not entry_ids:
            return Return.err(
                Error(
                    code="INVALID_SETTLEMENT_REQUEST",
                    message="A valid party and at least one ledger entry are required",
                    reason=f"party={command.party}, entries={len(entry_ids)}",
                )
            )

        try:
            # Step 2: Lock and load entries (SELECT FOR UPDATE)
            entries = await self.ledger_repo.get_by_ids(entry_ids, for_update=True)

            stale = [entry.id for entry in entries if not entry.is_pending or entry.party != party]
            if len(entries) != len(entry_ids) or stale:
                await self.uow.rollback()
                return self._conflict(entry_ids, len(entry_ids) - len(entries) + len(stale))

            currencies = {entry.currency for entry in entries}
            if len(currencies) > 1 or (command.currency and currencies != {command.currency}):
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="INVALID_SETTLEMENT_REQUEST",
                        message="All selected entries must have the same currency",
                        reason=f"currencies={sorted(currencies)}",
                    )
                )

            # Step 3: Signed total
            total_amount = round_money(sum((entry.signed_amount for entry in entries), 0))

            # Step 4: Create settlement
            settlement = Settlement(
                party=party,
                ledger_entry_ids=entry_ids,
                total_amount=total_amount,
                currency=currencies.pop(),
                settlement_date=command.settlement_date or datetime.utcnow(),
                remarks=command.remarks,
                created_by=user_id,
            )
            created = await self.settlement_repo.create(settlement)

            # Step 5: Conditional status transition
            updated = await self.ledger_repo.mark_cleared(entry_ids, party, created.id)
            if updated != len(entry_ids):
                await self.uow.rollback()
                return self._conflict(entry_ids, len(entry_ids) - updated)

            response = to_settlement_dto(created)

            # Step 6: Commit transaction
            await self.uow.commit()

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Settlement of {len(entry_ids)} entries for {command.party} failed: {e}")
            return Return.err(
                Error(
                    code="SETTLEMENT_FAILED",
                    message="Settlement failed",
                    reason=str(e),
                )
            )

        logger.info(
            f"Settlement {response.id} committed: party={party.value}, "
            f"entries={len(entry_ids)}, total={response.total_amount} {response.currency}"
        )

        # Step 7: Notify (failures are logged, never propagated)
        try:
            await self.notification_service.notify_settlement_completed(created, entries, user_id)
        except Exception as e:
            logger.error(f"Settlement notification for {response.id} failed: {e}")

        return Return.ok(response)

    def _conflict(self, entry_ids, unavailable: int) -> Result:
        logger.warning(
            f"Settlement conflict: {unavailable} of {len(entry_ids)} entries no longer pending"
        )
        return Return.err(
            Error(
                code="SETTLEMENT_CONFLICT",
                message="Some ledger entries were settled concurrently or are no longer pending",
                reason=f"unavailable={unavailable}, requested={len(entry_ids)}",
            )
        )
