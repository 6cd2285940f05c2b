"""Revenue Rule API Routes"""

from typing import Any, Dict, List
from fastapi import APIRouter, Depends, Header, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from revenue_ledger.api.schemas.revenue_request import RevenueRuleRequestSchema, SplitPreviewRequestSchema
from revenue_ledger.app.use_cases.revenue.dtos import (
    RevenueRuleCommandDTO,
    RevenueRuleResponseDTO,
    RuleValidationResponseDTO,
    SplitPreviewResponseDTO,
)
from revenue_ledger.app.use_cases.revenue.create_revenue_rule import CreateRevenueRule
from revenue_ledger.app.use_cases.revenue.deactivate_revenue_rule import DeactivateRevenueRule
from revenue_ledger.app.use_cases.revenue.get_active_revenue_rule import GetActiveRevenueRule
from revenue_ledger.app.use_cases.revenue.get_revenue_rule import GetRevenueRule
from revenue_ledger.app.use_cases.revenue.list_revenue_rules import ListRevenueRules
from revenue_ledger.app.use_cases.revenue.mappers import to_rule_dto
from revenue_ledger.app.use_cases.revenue.preview_revenue_split import PreviewRevenueSplit
from revenue_ledger.adapter.repositories.revenue_rule_repository import SqlAlchemyRevenueRuleRepository
from revenue_ledger.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from revenue_ledger.domain.revenue_split import validate_revenue_rule
from revenue_ledger.depends import get_session
from revenue_ledger.api.error import ClientError

router = APIRouter(prefix="/revenue-rules", tags=["Revenue Rules"])

STATUS_BY_CODE = {
    "RULE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CREATE_RULE_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "DEACTIVATE_RULE_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "GET_RULE_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "LIST_RULES_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@router.post("", response_model=RevenueRuleResponseDTO, status_code=status.HTTP_201_CREATED)
async def create_revenue_rule(
    request: RevenueRuleRequestSchema,
    user_id: str = Header(..., alias="X-User-Id"),
    session: AsyncSession = Depends(get_session),
):
    """
    Create a revenue rule.

    A rule marked `is_default` replaces the current default rule.

    **Returns:**
    - 201: Rule created
    - 400: Rule invalid (all problems listed in `error.details`)
    """
    use_case = CreateRevenueRule(SqlAlchemyUnitOfWork(session), SqlAlchemyRevenueRuleRepository(session))
    result = await use_case.execute(RevenueRuleCommandDTO(**request.model_dump()), user_id)

    if result.is_err():
        raise ClientError(result.error, status_code=STATUS_BY_CODE.get(result.error.code, 400))

    return result.value


@router.get("", response_model=List[RevenueRuleResponseDTO])
async def list_revenue_rules(
    active_only: bool = Query(default=False),
    session: AsyncSession = Depends(get_session),
):
    """Revenue rules, newest first"""
    result = await ListRevenueRules(SqlAlchemyRevenueRuleRepository(session)).execute(active_only)

    if result.is_err():
        raise ClientError(result.error, status_code=STATUS_BY_CODE.get(result.error.code, 400))

    return result.value


@router.post("/validate", response_model=RuleValidationResponseDTO)
async def validate_rule(rule_data: Dict[str, Any]):
    """Validate a rule definition without saving it"""
    validation = validate_revenue_rule(rule_data)
    return RuleValidationResponseDTO(is_valid=validation.is_valid, errors=validation.errors)


@router.post("/split-preview", response_model=SplitPreviewResponseDTO)
async def preview_split(
    request: SplitPreviewRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """Show how an amount would be split, without recording anything"""
    use_case = PreviewRevenueSplit(SqlAlchemyRevenueRuleRepository(session))
    result = await use_case.execute(request.amount, request.currency.upper(), request.revenue_rule_id)

    if result.is_err():
        raise ClientError(result.error, status_code=STATUS_BY_CODE.get(result.error.code, 400))

    return result.value


@router.get("/active", response_model=RevenueRuleResponseDTO)
async def get_active_rule(session: AsyncSession = Depends(get_session)):
    """Rule applied to payments that do not name one"""
    result = await GetActiveRevenueRule(SqlAlchemyRevenueRuleRepository(session)).execute()

    if result.is_err():
        raise ClientError(result.error, status_code=STATUS_BY_CODE.get(result.error.code, 400))

    return to_rule_dto(result.value)


@router.get("/{rule_id}", response_model=RevenueRuleResponseDTO)
async def get_revenue_rule(rule_id: str, session: AsyncSession = Depends(get_session)):
    """A revenue rule by ID, active or not"""
    result = await GetRevenueRule(SqlAlchemyRevenueRuleRepository(session)).execute(rule_id)

    if result.is_err():
        raise ClientError(result.error, status_code=STATUS_BY_CODE.get(result.error.code, 400))

    return result.value


@router.post("/{rule_id}/deactivate", response_model=RevenueRuleResponseDTO)
async def deactivate_rule(rule_id: str, session: AsyncSession = Depends(get_session)):
    """
    Deactivate (soft delete) a revenue rule.

    **Returns:**
    - 200: Rule deactivated
    - 400: Rule is the default rule
    - 404: Rule not found
    """
    use_case = DeactivateRevenueRule(SqlAlchemyUnitOfWork(session), SqlAlchemyRevenueRuleRepository(session))
    result = await use_case.execute(rule_id)

    if result.is_err():
        raise ClientError(result.error, status_code=STATUS_BY_CODE.get(result.error.code, 400))

    return result.value
