"""Ledger Entry Domain Entity

One signed monetary obligation owed to a party for a project/payment.
Entries are created pending and become cleared only through a settlement.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, Numeric, String
from revenue_ledger.domain.base import BaseModel, generate_uuid


class Party(str, Enum):
    """Fixed beneficiaries tracked independently in the ledger"""
    ADMIN = "admin"
    TEAM = "team"
    VENDOR = "vendor"

    @classmethod
    def parse(cls, value) -> Optional["Party"]:
        """Return the Party for ``value`` or None if it is not recognized"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class EntryType(str, Enum):
    CREDIT = "credit"
    DEBIT = "debit"


class EntryStatus(str, Enum):
    PENDING = "pending"
    CLEARED = "cleared"


class LedgerEntry(BaseModel, table=True):
    """
    Ledger Entry - Per-party pending/cleared monetary entry

    Domain Rules:
    - amount is always positive; direction is carried by type
    - status moves pending -> cleared only, via settlement commit
    - settlement_id is set when the entry is cleared
    - Entries created from a payment reference the revenue rule used
    """

    __tablename__ = "ledger_entries"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ledger_entry_amount_positive"),
        Index("ix_ledger_entries_party_status", "party", "status"),
        Index("ix_ledger_entries_date", "date"),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique ledger entry identifier"
    )

    payment_id: Optional[str] = Field(
        default=None,
        index=True,
        description="Payment this entry was split from (None for manual entries)"
    )

    project_id: Optional[str] = Field(
        default=None,
        index=True,
        description="Project the payment belongs to"
    )

    revenue_rule_id: Optional[str] = Field(
        default=None,
        description="Revenue rule used to split the payment"
    )

    type: EntryType = Field(
        description="Entry direction (credit, debit)"
    )

    party: Party = Field(
        description="Beneficiary party (admin, team, vendor)"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Positive amount (precision: 18,2)"
    )

    currency: str = Field(
        sa_column=Column(String(3), nullable=False),
        description="Currency code (ISO 4217)"
    )

    date: datetime = Field(
        default_factory=datetime.utcnow,
        description="Business date of the entry"
    )

    status: EntryStatus = Field(
        default=EntryStatus.PENDING,
        description="Entry status (pending, cleared)"
    )

    remarks: Optional[str] = Field(
        default=None,
        description="Free-form remarks"
    )

    settlement_id: Optional[str] = Field(
        default=None,
        index=True,
        description="Settlement that cleared this entry"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Entry creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    @property
    def signed_amount(self) -> Decimal:
        """Credits count positive, debits negative"""
        return self.amount if self.type == EntryType.CREDIT else -self.amount

    @property
    def is_pending(self) -> bool:
        return self.status == EntryStatus.PENDING

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "9b2f4c1e-6a53-4d0b-9a51-2f0c3f1e8a10",
                "payment_id": "pay_001",
                "project_id": "proj_042",
                "revenue_rule_id": "rule_default",
                "type": "credit",
                "party": "team",
                "amount": "400.00",
                "currency": "USD",
                "date": "2024-01-15T00:00:00Z",
                "status": "pending",
                "remarks": None,
                "settlement_id": None,
            }
        }
