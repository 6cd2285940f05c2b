"""Request schemas for Ledger API"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class PaymentRequestSchema(BaseModel):
    """
    Request schema for recording a payment

    Used for POST /ledger/payments.
    """

    payment_id: str = Field(
        ...,
        min_length=1,
        description="Payment identifier (required, non-empty)"
    )

    project_id: str = Field(
        ...,
        min_length=1,
        description="Project identifier (required, non-empty)"
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
        description="Business date of the payment"
    )

    remarks: Optional[str] = Field(
        default=None,
        max_length=500,
        description="Remarks copied onto every entry"
    )

    revenue_rule_id: Optional[str] = Field(
        default=None,
        description="Revenue rule to apply (defaults to the active rule)"
    )

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, v):
        return v.upper()

    class Config:
        json_schema_extra = {
            "example": {
                "payment_id": "pay_001",
                "project_id": "proj_042",
                "amount": "1000.00",
                "currency": "USD",
                "remarks": "Milestone 1",
            }
        }


class ManualLedgerEntryRequestSchema(BaseModel):
    """
    Request schema for a manual ledger adjustment

    Used for POST /ledger/entries. Type, party and amount are checked by the
    use case so that all problems are reported together.
    """

    project_id: str = Field(
        ...,
        min_length=1,
        description="Project identifier (required, non-empty)"
    )

    type: str = Field(
        ...,
        description="credit or debit"
    )

    party: str = Field(
        ...,
        description="admin, team or vendor"
    )

    amount: Decimal = Field(
        ...,
        description="Positive amount (must be > 0)"
    )

    currency: str = Field(
        ...,
        min_length=3,
        max_length=3,
        description="Currency code (ISO 4217)"
    )

    date: Optional[datetime] = Field(
        default=None,
        description="Business date of the entry"
    )

    remarks: Optional[str] = Field(
        default=None,
        max_length=500,
        description="Reason for the adjustment (defaults to 'Manual adjustment')"
    )

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, v):
        return v.upper()

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
