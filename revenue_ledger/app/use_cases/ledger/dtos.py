"""Data Transfer Objects for Ledger Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from revenue_ledger.domain.party_balance import PartyBalance


class PaymentDTO(BaseModel):
    """
    Command DTO for splitting a payment into ledger entries

    Used as input to CreateEntriesForPayment. The amount is checked by the
    split calculator so that a non-positive amount surfaces as INVALID_AMOUNT.
    """

    payment_id: str = Field(
        ...,
        description="Payment identifier (entries are created once per payment)"
    )

    project_id: str = Field(
        ...,
        description="Project the payment belongs to"
    )

    amount: Decimal = Field(
        ...,
        description="Payment amount (must be > 0)"
    )

    currency: str = Field(
        ...,
        min_length=3,
        max_length=3,
        description="Currency code (ISO 4217)"
    )

    date: Optional[datetime] = Field(
        default=None,
        description="Business date of the payment (defaults to now)"
    )

    remarks: Optional[str] = Field(
        default=None,
        description="Remarks copied onto every entry"
    )

    revenue_rule_id: Optional[str] = Field(
        default=None,
        description="Rule to apply (defaults to the active rule)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "payment_id": "pay_001",
                "project_id": "proj_042",
                "amount": "1000.00",
                "currency": "USD",
                "date": "2024-01-15T00:00:00Z",
                "remarks": "Milestone 1",
            }
        }


class LedgerEntryDTO(BaseModel):
    id: str
    payment_id: Optional[str] = None
    project_id: Optional[str] = None
    revenue_rule_id: Optional[str] = None
    type: str
    party: str
    amount: Decimal
    signed_amount: Decimal
    currency: str
    date: datetime
    status: str
    remarks: Optional[str] = None
    settlement_id: Optional[str] = None
    created_at: datetime


class CreateEntriesResponseDTO(BaseModel):
    """
    Response DTO for CreateEntriesForPayment

    ``created`` is False when the payment had already been split and the
    existing entries are returned unchanged.
    """

    payment_id: str
    revenue_rule_id: Optional[str] = None
    entries: List[LedgerEntryDTO]
    created: bool = True


class ListLedgerEntriesResponseDTO(BaseModel):
    entries: List[LedgerEntryDTO]
    total_count: int


class PartyBalancesResponseDTO(BaseModel):
    """Balances of every party; a failed party carries ``error`` instead of aborting"""

    balances: List[PartyBalance]
    currency: str


class ManualLedgerEntryDTO(BaseModel):
    """
    Command DTO for a manual ledger adjustment

    Used as input to CreateManualLedgerEntry. Fields are kept loose so that
    every problem is reported by the use case at once.
    """

    project_id: Optional[str] = Field(
        default=None,
        description="Project the adjustment belongs to"
    )

    type: Optional[str] = Field(
        default=None,
        description="credit or debit"
    )

    party: Optional[str] = Field(
        default=None,
        description="admin, team or vendor"
    )

    amount: Optional[Decimal] = Field(
        default=None,
        description="Positive amount; the type gives the sign"
    )

    currency: Optional[str] = Field(
        default=None,
        description="Currency code (ISO 4217)"
    )

    date: Optional[datetime] = Field(
        default=None,
        description="Business date of the entry (defaults to now)"
    )

    remarks: Optional[str] = Field(
        default=None,
        description="Reason for the adjustment"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "project_id": "proj_042",
                "type": "debit",
                "party": "vendor",
                "amount": "25.00",
                "currency": "USD",
                "remarks": "Refund correction",
            }
        }


class ProjectPartySummaryDTO(BaseModel):
    """Totals of one party in one currency within a project"""

    party: str
    currency: str
    entry_count: int = 0
    total_credits: Decimal = Decimal("0.00")
    total_debits: Decimal = Decimal("0.00")
    pending_credits: Decimal = Decimal("0.00")
    pending_debits: Decimal = Decimal("0.00")
    cleared_credits: Decimal = Decimal("0.00")
    cleared_debits: Decimal = Decimal("0.00")
    net_balance: Decimal = Decimal("0.00")
    pending_balance: Decimal = Decimal("0.00")
    cleared_balance: Decimal = Decimal("0.00")


class ProjectLedgerSummaryDTO(BaseModel):
    project_id: str
    summaries: List[ProjectPartySummaryDTO]
    total_entries: int


class LedgerStatsDTO(BaseModel):
    """Entry counts across the whole ledger plus every party's balance"""

    total_entries: int
    pending_entries: int
    cleared_entries: int
    credit_entries: int
    debit_entries: int
    party_balances: List[PartyBalance]
    currency: str
