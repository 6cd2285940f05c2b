"""Ledger API Routes

Payment intake, ledger queries and party balances.
"""

from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Header, Query, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from revenue_ledger.api.schemas.ledger_request import ManualLedgerEntryRequestSchema, PaymentRequestSchema
from revenue_ledger.app.repositories.ledger_entry_repository import LedgerEntryFilter
from revenue_ledger.app.use_cases.ledger.dtos import (
    CreateEntriesResponseDTO,
    LedgerEntryDTO,
    LedgerStatsDTO,
    ListLedgerEntriesResponseDTO,
    ManualLedgerEntryDTO,
    PartyBalancesResponseDTO,
    PaymentDTO,
    ProjectLedgerSummaryDTO,
)
from revenue_ledger.app.use_cases.ledger.create_entries_for_payment import CreateEntriesForPayment
from revenue_ledger.app.use_cases.ledger.create_manual_ledger_entry import CreateManualLedgerEntry
from revenue_ledger.app.use_cases.ledger.get_ledger_entry import GetLedgerEntry
from revenue_ledger.app.use_cases.ledger.get_ledger_stats import GetLedgerStats
from revenue_ledger.app.use_cases.ledger.get_party_balance import GetPartyBalance, GetPartyBalances
from revenue_ledger.app.use_cases.ledger.get_pending_entries import GetPendingEntries
from revenue_ledger.app.use_cases.ledger.get_project_ledger_summary import GetProjectLedgerSummary
from revenue_ledger.app.use_cases.ledger.list_ledger_entries import ListLedgerEntries
from revenue_ledger.adapter.repositories.ledger_entry_repository import SqlAlchemyLedgerEntryRepository
from revenue_ledger.adapter.repositories.revenue_rule_repository import SqlAlchemyRevenueRuleRepository
from revenue_ledger.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from revenue_ledger.domain.ledger_entry import EntryStatus, EntryType, Party
from revenue_ledger.domain.party_balance import PartyBalance
from revenue_ledger.depends import get_session
from revenue_ledger.api.error import ClientError

router = APIRouter(prefix="/ledger", tags=["Ledger"])

STATUS_BY_CODE = {
    "RULE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "LEDGER_ENTRY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CREATE_ENTRIES_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "CREATE_ENTRY_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "STATS_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "GET_RULE_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "BALANCE_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "LIST_ENTRIES_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@router.post(
    "/payments",
    response_model=CreateEntriesResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def record_payment(
    request: PaymentRequestSchema,
    response: Response,
    session: AsyncSession = Depends(get_session),
):
    """
    Split a payment into pending ledger entries.

    Idempotent per `payment_id`: a replay returns the existing entries with
    status 200.

    **Returns:**
    - 201: Entries created
    - 200: Entries already existed for the payment
    - 400: Invalid amount or rule
    - 404: Revenue rule not found
    """
    use_case = CreateEntriesForPayment(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyLedgerEntryRepository(session),
        SqlAlchemyRevenueRuleRepository(session),
    )
    result = await use_case.execute(PaymentDTO(**request.model_dump()))

    if result.is_err():
        raise ClientError(result.error, status_code=STATUS_BY_CODE.get(result.error.code, 400))

    if not result.value.created:
        response.status_code = status.HTTP_200_OK
    return result.value


@router.get("/entries", response_model=ListLedgerEntriesResponseDTO)
async def list_entries(
    party: Optional[Party] = Query(default=None),
    status_filter: Optional[EntryStatus] = Query(default=None, alias="status"),
    type_filter: Optional[EntryType] = Query(default=None, alias="type"),
    project_id: Optional[str] = Query(default=None),
    payment_id: Optional[str] = Query(default=None),
    currency: Optional[str] = Query(default=None),
    start_date: Optional[datetime] = Query(default=None),
    end_date: Optional[datetime] = Query(default=None),
    limit: Optional[int] = Query(default=None, ge=1, le=1000),
    session: AsyncSession = Depends(get_session),
):
    """List ledger entries, newest first"""
    filters = LedgerEntryFilter(
        party=party,
        status=status_filter,
        type=type_filter,
        project_id=project_id,
        payment_id=payment_id,
        currency=currency,
        start_date=start_date,
        end_date=end_date,
    )
    result = await ListLedgerEntries(SqlAlchemyLedgerEntryRepository(session)).execute(filters, limit=limit)

    if result.is_err():
        raise ClientError(result.error, status_code=STATUS_BY_CODE.get(result.error.code, 400))

    return result.value


@router.post("/entries", response_model=LedgerEntryDTO, status_code=status.HTTP_201_CREATED)
async def create_manual_entry(
    request: ManualLedgerEntryRequestSchema,
    user_id: str = Header(..., alias="X-User-Id"),
    session: AsyncSession = Depends(get_session),
):
    """
    Record a manual adjustment, not tied to any payment.

    **Returns:**
    - 201: Entry created (pending)
    - 400: Entry invalid (all problems listed in `error.details`)
    """
    use_case = CreateManualLedgerEntry(SqlAlchemyUnitOfWork(session), SqlAlchemyLedgerEntryRepository(session))
    result = await use_case.execute(ManualLedgerEntryDTO(**request.model_dump()), user_id)

    if result.is_err():
        raise ClientError(result.error, status_code=STATUS_BY_CODE.get(result.error.code, 400))

    return result.value


@router.get("/stats", response_model=LedgerStatsDTO)
async def get_stats(
    currency: Optional[str] = Query(default=None),
    session: AsyncSession = Depends(get_session),
):
    """Entry counts by status and type, with every party's balance"""
    use_case = GetLedgerStats(SqlAlchemyLedgerEntryRepository(session), ApplicationConfig.DEFAULT_CURRENCY)
    result = await use_case.execute(currency)

    if result.is_err():
        raise ClientError(result.error, status_code=STATUS_BY_CODE.get(result.error.code, 400))

    return result.value


@router.get("/projects/{project_id}/summary", response_model=ProjectLedgerSummaryDTO)
async def get_project_summary(project_id: str, session: AsyncSession = Depends(get_session)):
    """Credit, debit and balance totals of a project per party and currency"""
    result = await GetProjectLedgerSummary(SqlAlchemyLedgerEntryRepository(session)).execute(project_id)

    if result.is_err():
        raise ClientError(result.error, status_code=STATUS_BY_CODE.get(result.error.code, 400))

    return result.value


@router.get("/entries/{entry_id}", response_model=LedgerEntryDTO)
async def get_entry(entry_id: str, session: AsyncSession = Depends(get_session)):
    result = await GetLedgerEntry(SqlAlchemyLedgerEntryRepository(session)).execute(entry_id)

    if result.is_err():
        raise ClientError(result.error, status_code=STATUS_BY_CODE.get(result.error.code, 400))

    return result.value


@router.get("/balances", response_model=PartyBalancesResponseDTO)
async def get_balances(
    currency: Optional[str] = Query(default=None),
    session: AsyncSession = Depends(get_session),
):
    """Balances of every party; a party that fails carries an `error` field"""
    use_case = GetPartyBalances(SqlAlchemyLedgerEntryRepository(session), ApplicationConfig.DEFAULT_CURRENCY)
    result = await use_case.execute(currency)
    return result.value


@router.get("/balances/{party}", response_model=PartyBalance)
async def get_balance(
    party: str,
    currency: Optional[str] = Query(default=None),
    session: AsyncSession = Depends(get_session),
):
    use_case = GetPartyBalance(SqlAlchemyLedgerEntryRepository(session), ApplicationConfig.DEFAULT_CURRENCY)
    result = await use_case.execute(party, currency)

    if result.is_err():
        raise ClientError(result.error, status_code=STATUS_BY_CODE.get(result.error.code, 400))

    return result.value


@router.get("/pending/{party}", response_model=ListLedgerEntriesResponseDTO)
async def get_pending_entries(
    party: str,
    currency: Optional[str] = Query(default=None),
    session: AsyncSession = Depends(get_session),
):
    """Pending entries of a party, the candidates for settlement"""
    result = await GetPendingEntries(SqlAlchemyLedgerEntryRepository(session)).execute(party, currency)

    if result.is_err():
        raise ClientError(result.error, status_code=STATUS_BY_CODE.get(result.error.code, 400))

    return result.value
