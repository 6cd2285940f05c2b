"""CreateManualLedgerEntry Use Case

Records an adjustment that does not come from a payment, such as a debit
correcting an over-credited party.
"""

import logging
from datetime import datetime
from typing import List, Optional
from revenue_ledger.libs.result import Result, Return, Error
from revenue_ledger.app.services.unit_of_work import UnitOfWork
from revenue_ledger.app.repositories.ledger_entry_repository import LedgerEntryRepository
from revenue_ledger.domain.ledger_entry import EntryStatus, EntryType, LedgerEntry, Party
from revenue_ledger.domain.money import round_money
from .dtos import LedgerEntryDTO, ManualLedgerEntryDTO
from .mappers import to_entry_dto

logger = logging.getLogger(__name__)

DEFAULT_REMARKS = "Manual adjustment"


def _parse_type(value) -> Optional[EntryType]:
    try:
        return EntryType(value)
    except ValueError:
        return None


class CreateManualLedgerEntry:
    """
    Use Case: Create a manual ledger entry

    Business Rules:
    1. project, type, party, amount and currency are required
    2. Amount must round to more than 0.00; the type carries the sign
    3. The entry has no payment and no revenue rule
    4. The entry starts pending and can be settled like any other

    Flow:
    1. Validate the command, collecting every error
    2. Create the entry
    3. Commit
    """

    def __init__(self, uow: UnitOfWork, ledger_repo: LedgerEntryRepository):
        self.uow = uow
        self.ledger_repo = ledger_repo

    def _validate(self, command: ManualLedgerEntryDTO) -> List[str]:
        errors = []
        if not command.project_id or not command.project_id.strip():
            errors.append("Project ID is required")
        if _parse_type(command.type) is None:
            errors.append("Valid entry type (credit/debit) is required")
        if Party.parse(command.party) is None:
            errors.append("Valid party (admin/team/vendor) is required")
        if (
            command.amount is None
            or not command.amount.is_finite()
            or round_money(command.amount) <= 0
        ):
            errors.append("Amount must be a positive number")
        if not command.currency or len(command.currency) != 3 or not command.currency.isalpha():
            errors.append("Valid currency code is required")
        return errors

    async def execute(self, command: ManualLedgerEntryDTO, user_id: str) -> Result[LedgerEntryDTO]:
        # Step 1: Validate
        errors = self._validate(command)
        if errors:
            return Return.err(
                Error(
                    code="INVALID_LEDGER_ENTRY",
                    message="Ledger entry is invalid",
                    reason="; ".join(errors),
                    details=errors,
                )
            )

        try:
            # Step 2: Create the entry outside any payment split
            entry = LedgerEntry(
                payment_id=None,
                project_id=command.project_id.strip(),
                revenue_rule_id=None,
                type=_parse_type(command.type),
                party=Party.parse(command.party),
                amount=round_money(command.amount),
                currency=command.currency.upper(),
                date=command.date or datetime.utcnow(),
                status=EntryStatus.PENDING,
                remarks=command.remarks or DEFAULT_REMARKS,
            )
            created = await self.ledger_repo.create_many([entry])
            response = to_entry_dto(created[0])

            # Step 3: Commit
            await self.uow.commit()

            logger.info(
                f"Manual ledger entry {response.id} created by {user_id}: "
                f"{response.type} {response.amount} {response.currency} for {response.party}"
            )
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to create manual ledger entry: {e}")
            return Return.err(
                Error(
                    code="CREATE_ENTRY_FAILED",
                    message="Failed to create ledger entry",
                    reason=str(e),
                )
            )
