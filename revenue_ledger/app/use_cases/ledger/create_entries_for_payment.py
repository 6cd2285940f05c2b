"""CreateEntriesForPayment Use Case

Splits a payment across parties with a revenue rule and records one pending
credit entry per party.
"""

import logging
from datetime import datetime
from typing import Optional
from revenue_ledger.libs.result import Result, Return, Error
from revenue_ledger.app.services.unit_of_work import UnitOfWork
from revenue_ledger.app.repositories.ledger_entry_repository import LedgerEntryRepository
from revenue_ledger.app.repositories.revenue_rule_repository import RevenueRuleRepository
from revenue_ledger.app.use_cases.revenue.get_active_revenue_rule import GetActiveRevenueRule
from revenue_ledger.domain.errors import ValidationError as LedgerValidationError
from revenue_ledger.domain.ledger_entry import EntryType, EntryStatus, LedgerEntry
from revenue_ledger.domain.revenue_rule import RevenueRule
from revenue_ledger.domain.revenue_split import calculate_split
from .dtos import PaymentDTO, CreateEntriesResponseDTO
from .mappers import to_entry_dto

logger = logging.getLogger(__name__)


class CreateEntriesForPayment:
    """
    Use Case: Create ledger entries for a payment

    Business Rules:
    1. Idempotency: a payment is split once; replays return the existing entries
    2. Split shares sum exactly to the payment amount
    3. Parties with 0 percent get no entry; shares rounding to 0.00 are skipped
    4. All entries are persisted in a single transaction

    Flow:
    1. Check idempotency (return existing entries if found)
    2. Resolve revenue rule (explicit, payment.revenue_rule_id, or active rule)
    3. Calculate split
    4. Create pending credit entries
    5. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        ledger_repo: LedgerEntryRepository,
        rule_repo: Optional[RevenueRuleRepository] = None,
    ):
        self.uow = uow
        self.ledger_repo = ledger_repo
        self.rule_repo = rule_repo

    async def execute(
        self,
        payment: PaymentDTO,
        rule: Optional[RevenueRule] = None,
    ) -> Result[CreateEntriesResponseDTO]:
        """
        Execute entry creation

        Args:
            payment: PaymentDTO with payment_id, project_id, amount, currency
            rule: Revenue rule to apply; resolved from the store when omitted

        Returns:
            Result[CreateEntriesResponseDTO]: Created (or existing) entries or error
        """
        try:
            # Step 1: Check idempotency - if entries exist, return them
            existing = await self.ledger_repo.get_by_payment_id(payment.payment_id)
            if existing:
                logger.info(f"Entries for payment {payment.payment_id} already exist, returning them")
                return Return.ok(
                    CreateEntriesResponseDTO(
                        payment_id=payment.payment_id,
                        revenue_rule_id=existing[0].revenue_rule_id,
                        entries=[to_entry_dto(entry) for entry in existing],
                        created=False,
                    )
                )

            # Step 2: Resolve revenue rule
            if rule is None:
                if self.rule_repo is None:
                    return Return.err(
                        Error(
                            code="INVALID_RULE",
                            message="Revenue rule is required",
                        )
                    )
                rule_result = await GetActiveRevenueRule(self.rule_repo).execute(payment.revenue_rule_id)
                if rule_result.is_err():
                    return Return.err(rule_result.error)
                rule = rule_result.value

            # Step 3: Calculate split
            try:
                split = calculate_split(payment.amount, payment.currency, rule)
            except LedgerValidationError as e:
                return Return.err(
                    Error(
                        code=e.code,
                        message=e.message,
                        details=e.errors or None,
                    )
                )

            # Step 4: Create one pending credit entry per party
            entry_date = payment.date or datetime.utcnow()
            entries = []
            for party, share in split.items():
                if share.amount <= 0:
                    logger.warning(
                        f"Skipping {party.value} share of payment {payment.payment_id}: "
                        f"rounds to {share.amount} {share.currency}"
                    )
                    continue
                entries.append(
                    LedgerEntry(
                        payment_id=payment.payment_id,
                        project_id=payment.project_id,
                        revenue_rule_id=rule.id,
                        type=EntryType.CREDIT,
                        party=party,
                        amount=share.amount,
                        currency=share.currency,
                        date=entry_date,
                        status=EntryStatus.PENDING,
                        remarks=payment.remarks,
                    )
                )

            if not entries:
                return Return.err(
                    Error(
                        code="INVALID_AMOUNT",
                        message="Amount is too small to split",
                        reason=f"amount={payment.amount}",
                    )
                )

            created = await self.ledger_repo.create_many(entries)
            response = CreateEntriesResponseDTO(
                payment_id=payment.payment_id,
                revenue_rule_id=rule.id,
                entries=[to_entry_dto(entry) for entry in created],
                created=True,
            )

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(f"Created {len(created)} ledger entries for payment {payment.payment_id}")
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to create entries for payment {payment.payment_id}: {e}")
            return Return.err(
                Error(
                    code="CREATE_ENTRIES_FAILED",
                    message="Failed to create ledger entries",
                    reason=str(e),
                )
            )
