"""Settlement API Routes

Validation, commit and reporting for settlements.
"""

import base64
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from fastapi import APIRouter, Depends, Header, Query, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from revenue_ledger.api.schemas.settlement_request import SettlementRequestSchema
from revenue_ledger.app.services.notification_service import NotificationService
from revenue_ledger.app.services.pdf_service import PdfService
from revenue_ledger.app.use_cases.settlement.dtos import (
    ListSettlementsResponseDTO,
    RecommendedSettlementsResponseDTO,
    SettlementCommandDTO,
    SettlementDetailDTO,
    SettlementDTO,
    SettlementReminderDTO,
    SettlementStatsDTO,
    SettlementValidationDTO,
)
from revenue_ledger.app.use_cases.settlement.generate_settlement_statement import GenerateSettlementStatement
from revenue_ledger.app.use_cases.settlement.get_recommended_settlements import GetRecommendedSettlements
from revenue_ledger.app.use_cases.settlement.get_settlement_stats import GetSettlementStats
from revenue_ledger.app.use_cases.settlement.list_settlements import GetSettlement, ListSettlements
from revenue_ledger.app.use_cases.settlement.process_settlement_with_proof import ProcessSettlementWithProof
from revenue_ledger.app.use_cases.settlement.send_settlement_reminders import SendSettlementReminders
from revenue_ledger.app.use_cases.settlement.validate_settlement import ValidateSettlement
from revenue_ledger.adapter.repositories.ledger_entry_repository import SqlAlchemyLedgerEntryRepository
from revenue_ledger.adapter.repositories.settlement_repository import SqlAlchemySettlementRepository
from revenue_ledger.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from revenue_ledger.libs.result import Error
from revenue_ledger.depends import get_notification_service, get_pdf_service, get_session
from revenue_ledger.api.error import ClientError

router = APIRouter(prefix="/settlements", tags=["Settlements"])

STATUS_BY_CODE = {
    "SETTLEMENT_REJECTED": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "SETTLEMENT_CONFLICT": status.HTTP_409_CONFLICT,
    "SETTLEMENT_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "PROOF_ATTACH_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "SETTLEMENT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "LIST_SETTLEMENTS_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "SETTLEMENT_STATS_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "RECOMMENDATIONS_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "GENERATE_STATEMENT_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _command(request: SettlementRequestSchema) -> SettlementCommandDTO:
    return SettlementCommandDTO(
        party=request.party,
        ledger_entry_ids=request.ledger_entry_ids,
        currency=request.currency,
        settlement_date=request.settlement_date,
        remarks=request.remarks,
    )


@router.post("/validate", response_model=SettlementValidationDTO)
async def validate_settlement(
    request: SettlementRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """Check a settlement request without committing it"""
    result = await ValidateSettlement(SqlAlchemyLedgerEntryRepository(session)).execute(_command(request))
    return result.value


@router.post(
    "",
    response_model=SettlementDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {
            "description": "Entries were settled concurrently",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "SETTLEMENT_CONFLICT",
                            "message": "Some ledger entries were settled concurrently or are no longer pending"
                        }
                    }
                }
            }
        },
        422: {
            "description": "Settlement request rejected by validation",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "SETTLEMENT_REJECTED",
                            "message": "Settlement request is invalid",
                            "details": ["At least one ledger entry must be selected"]
                        }
                    }
                }
            }
        },
    }
)
async def commit_settlement(
    request: SettlementRequestSchema,
    user_id: str = Header(..., alias="X-User-Id"),
    session: AsyncSession = Depends(get_session),
    notification_service: NotificationService = Depends(get_notification_service),
):
    """
    Validate and commit a settlement.

    Clears the selected pending entries and records the settlement in one
    transaction, then attaches any proof URLs.

    **Returns:**
    - 201: Settlement committed
    - 409: Entries were settled concurrently
    - 422: Request rejected by validation (all problems in `error.details`)
    - 500: Settlement failed and was rolled back
    """
    ledger_repo = SqlAlchemyLedgerEntryRepository(session)
    command = _command(request)

    # Step 1: Business validation
    validation = (await ValidateSettlement(ledger_repo).execute(command)).value
    if not validation.is_valid:
        raise ClientError(
            Error(
                code="SETTLEMENT_REJECTED",
                message="Settlement request is invalid",
                details=validation.errors,
            ),
            status_code=STATUS_BY_CODE["SETTLEMENT_REJECTED"],
        )

    # Step 2: Commit with proofs
    use_case = ProcessSettlementWithProof(
        SqlAlchemyUnitOfWork(session),
        ledger_repo,
        SqlAlchemySettlementRepository(session),
        notification_service,
    )
    result = await use_case.execute(command, request.proof_files, user_id)

    if result.is_err():
        raise ClientError(result.error, status_code=STATUS_BY_CODE.get(result.error.code, 400))

    return result.value


@router.get("", response_model=ListSettlementsResponseDTO)
async def list_settlements(
    party: Optional[str] = Query(default=None),
    currency: Optional[str] = Query(default=None),
    start_date: Optional[datetime] = Query(default=None),
    end_date: Optional[datetime] = Query(default=None),
    limit: Optional[int] = Query(default=None, ge=1, le=1000),
    session: AsyncSession = Depends(get_session),
):
    """Settlements, newest first. Filter by party for a party's history"""
    result = await ListSettlements(SqlAlchemySettlementRepository(session)).execute(
        party=party,
        currency=currency,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
    )

    if result.is_err():
        raise ClientError(result.error, status_code=STATUS_BY_CODE.get(result.error.code, 400))

    return result.value


@router.get("/stats", response_model=SettlementStatsDTO)
async def get_stats(
    party: Optional[str] = Query(default=None),
    session: AsyncSession = Depends(get_session),
):
    result = await GetSettlementStats(SqlAlchemySettlementRepository(session)).execute(party)

    if result.is_err():
        raise ClientError(result.error, status_code=STATUS_BY_CODE.get(result.error.code, 400))

    return result.value


@router.get("/recommendations/{party}", response_model=RecommendedSettlementsResponseDTO)
async def get_recommendations(party: str, session: AsyncSession = Depends(get_session)):
    """Pending entries grouped by currency and project, largest totals first"""
    result = await GetRecommendedSettlements(SqlAlchemyLedgerEntryRepository(session)).execute(party)

    if result.is_err():
        raise ClientError(result.error, status_code=STATUS_BY_CODE.get(result.error.code, 400))

    return result.value


@router.post("/reminders", response_model=List[SettlementReminderDTO])
async def send_reminders(
    threshold: Decimal = Query(default=Decimal(str(ApplicationConfig.SETTLEMENT_REMINDER_THRESHOLD)), ge=0),
    session: AsyncSession = Depends(get_session),
    notification_service: NotificationService = Depends(get_notification_service),
):
    """Remind parties whose pending balance reached the threshold"""
    use_case = SendSettlementReminders(
        SqlAlchemyLedgerEntryRepository(session),
        notification_service,
        ApplicationConfig.DEFAULT_CURRENCY,
    )
    result = await use_case.execute(threshold)
    return result.value


@router.get("/{settlement_id}", response_model=SettlementDetailDTO)
async def get_settlement(settlement_id: str, session: AsyncSession = Depends(get_session)):
    """A settlement with the ledger entries it cleared"""
    use_case = GetSettlement(SqlAlchemySettlementRepository(session), SqlAlchemyLedgerEntryRepository(session))
    result = await use_case.execute(settlement_id)

    if result.is_err():
        raise ClientError(result.error, status_code=STATUS_BY_CODE.get(result.error.code, 400))

    return result.value


@router.get("/{settlement_id}/statement", response_class=Response)
async def download_statement(
    settlement_id: str,
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service),
):
    """Settlement statement as a PDF download"""
    use_case = GenerateSettlementStatement(
        SqlAlchemySettlementRepository(session),
        SqlAlchemyLedgerEntryRepository(session),
        pdf_service,
        company_name=ApplicationConfig.STATEMENT_COMPANY_NAME,
        company_address=ApplicationConfig.STATEMENT_COMPANY_ADDRESS,
    )
    result = await use_case.execute(settlement_id)

    if result.is_err():
        raise ClientError(result.error, status_code=STATUS_BY_CODE.get(result.error.code, 400))

    statement = result.value
    return Response(
        content=base64.b64decode(statement.pdf_base64),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{statement.filename}"'},
    )
