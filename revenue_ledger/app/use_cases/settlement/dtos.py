"""Data Transfer Objects for Settlement Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from revenue_ledger.app.use_cases.ledger.dtos import LedgerEntryDTO


class SettlementCommandDTO(BaseModel):
    """
    Command DTO for validating and committing a settlement

    ``party`` is a plain string so that an unknown party is reported by the
    settlement validator instead of failing request parsing.
    """

    party: str = Field(
        ...,
        description="Party being paid out (admin, team, vendor)"
    )

    ledger_entry_ids: List[str] = Field(
        default_factory=list,
        description="Pending ledger entries to clear"
    )

    currency: Optional[str] = Field(
        default=None,
        description="Expected currency (defaults to the entries' currency)"
    )

    settlement_date: Optional[datetime] = Field(
        default=None,
        description="Business date of the settlement (defaults to now)"
    )

    remarks: Optional[str] = Field(
        default=None,
        description="Free-form remarks"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "party": "vendor",
                "ledger_entry_ids": ["entry_1", "entry_2"],
                "currency": "USD",
                "remarks": "January payout",
            }
        }


class SettlementValidationDTO(BaseModel):
    is_valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class SettlementDTO(BaseModel):
    id: str
    party: str
    ledger_entry_ids: List[str]
    total_amount: Decimal
    currency: str
    settlement_date: datetime
    remarks: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime
    proof_urls: List[str] = Field(default_factory=list)


class SettlementDetailDTO(BaseModel):
    """A settlement together with the entries it cleared"""

    settlement: SettlementDTO
    entries: List[LedgerEntryDTO]


class ListSettlementsResponseDTO(BaseModel):
    settlements: List[SettlementDTO]
    total_count: int


class SettlementStatsDTO(BaseModel):
    """
    Settlement statistics

    Monthly figures count settlements dated on or after the first day of the
    current month (UTC).
    """

    total_settlements: int = 0
    total_amount: Decimal = Decimal("0.00")
    average_amount: Decimal = Decimal("0.00")
    settlements_this_month: int = 0
    amount_this_month: Decimal = Decimal("0.00")


class RecommendedSettlementDTO(BaseModel):
    party: str
    currency: str
    project_id: Optional[str] = None
    total_amount: Decimal
    entry_count: int
    ledger_entry_ids: List[str]


class RecommendedSettlementsResponseDTO(BaseModel):
    party: str
    recommendations: List[RecommendedSettlementDTO]


class SettlementReminderDTO(BaseModel):
    party: str
    amount: Decimal
    currency: str
    delivered: bool = True


class SettlementStatementResponseDTO(BaseModel):
    settlement_id: str
    filename: str
    pdf_base64: str
    generated_at: datetime
