"""ProcessSettlementWithProof Use Case

Commits a settlement and attaches already-uploaded payment proofs.
"""

import logging
from typing import Any, List, Optional, Sequence
from revenue_ledger.libs.result import Result, Return, Error
from revenue_ledger.app.services.unit_of_work import UnitOfWork
from revenue_ledger.app.services.notification_service import NotificationService
from revenue_ledger.app.repositories.ledger_entry_repository import LedgerEntryRepository
from revenue_ledger.app.repositories.settlement_repository import SettlementRepository
from .create_bulk_settlement import CreateBulkSettlement
from .dtos import SettlementCommandDTO, SettlementDTO
from .mappers import to_settlement_dto

logger = logging.getLogger(__name__)


def proof_urls_from(proof_files: Optional[Sequence[Any]]) -> List[str]:
    """Extract URLs from strings, mappings with "url" or objects with .url"""
    urls = []
    for proof in proof_files or []:
        if isinstance(proof, str):
            url = proof
        elif isinstance(proof, dict):
            url = proof.get("url")
        else:
            url = getattr(proof, "url", None)
        if url:
            urls.append(url)
    return urls


class ProcessSettlementWithProof:
    """
    Use Case: Commit a settlement with payment proofs

    Flow:
    1. Commit settlement (CreateBulkSettlement)
    2. If proofs were given, append their URLs in one additional update
    """

    def __init__(
        self,
        uow: UnitOfWork,
        ledger_repo: LedgerEntryRepository,
        settlement_repo: SettlementRepository,
        notification_service: NotificationService,
    ):
        self.uow = uow
        self.settlement_repo = settlement_repo
        self.create_settlement = CreateBulkSettlement(
            uow, ledger_repo, settlement_repo, notification_service
        )

    async def execute(
        self,
        command: SettlementCommandDTO,
        proof_files: Optional[Sequence[Any]],
        user_id: str,
    ) -> Result[SettlementDTO]:
        # Step 1: Commit settlement
        result = await self.create_settlement.execute(command, user_id)
        if result.is_err():
            return result

        settlement = result.value
        urls = proof_urls_from(proof_files)
        if not urls:
            return result

        # Step 2: Attach proofs
        try:
            updated = await self.settlement_repo.append_proof_urls(settlement.id, urls)
            if updated is None:
                raise LookupError(f"settlement {settlement.id} disappeared")
            response = to_settlement_dto(updated)
            await self.uow.commit()

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Attaching proofs to settlement {settlement.id} failed: {e}")
            return Return.err(
                Error(
                    code="PROOF_ATTACH_FAILED",
                    message=f"Settlement {settlement.id} was committed but its proofs could not be attached",
                    reason=str(e),
                )
            )

        logger.info(f"Attached {len(urls)} proof(s) to settlement {settlement.id}")
        return Return.ok(response)
