"""Settlement Domain Entity

Immutable record of an atomic batch clearing of same-party, same-currency
pending ledger entries.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import JSON, Numeric, String
from revenue_ledger.domain.base import BaseModel, generate_uuid
from revenue_ledger.domain.ledger_entry import Party


class Settlement(BaseModel, table=True):
    """
    Settlement - Audit record of a settlement commit

    Domain Rules:
    - ledger_entry_ids is non-empty, ordered and duplicate-free
    - total_amount == round(sum of signed entry amounts, 2) at creation
    - Created once per commit, together with the entry status transition
    - Only proof_urls may change afterwards (single additive update)
    """

    __tablename__ = "settlements"
    __table_args__ = (
        Index("ix_settlements_party_date", "party", "settlement_date"),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique settlement identifier"
    )

    party: Party = Field(
        description="Party being paid out"
    )

    ledger_entry_ids: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Cleared ledger entry IDs in selection order"
    )

    total_amount: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Signed net total (credits positive, debits negative)"
    )

    currency: str = Field(
        sa_column=Column(String(3), nullable=False),
        description="Currency code (ISO 4217)"
    )

    settlement_date: datetime = Field(
        default_factory=datetime.utcnow,
        description="Business date of the settlement"
    )

    remarks: Optional[str] = Field(
        default=None,
        description="Free-form remarks"
    )

    created_by: Optional[str] = Field(
        default=None,
        description="User who committed the settlement"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Settlement creation timestamp (immutable)"
    )

    proof_urls: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="URLs of already-uploaded payment proofs"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "3f1d2c9a-0d8e-4c55-b3a5-91d1f0a7e6c2",
                "party": "vendor",
                "ledger_entry_ids": ["entry_1", "entry_2"],
                "total_amount": "650.00",
                "currency": "USD",
                "settlement_date": "2024-02-01T00:00:00Z",
                "remarks": "January payout",
                "created_by": "user_1",
                "proof_urls": [],
            }
        }
