"""Revenue Rule Domain Entity

Named percentage split distributing a payment across admin/team/vendor.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Numeric, String
from revenue_ledger.domain.base import BaseModel, generate_uuid
from revenue_ledger.domain.ledger_entry import Party


class RevenueRule(BaseModel, table=True):
    """
    Revenue Rule - Percentage split definition

    Domain Rules:
    - admin_percent + team_percent + vendor_percent == 100 (+/- 0.01)
    - At most one rule is default at a time
    - Deactivation is a soft delete; the default rule cannot be deactivated
    - Never edited once referenced by ledger entries
    """

    __tablename__ = "revenue_rules"

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique revenue rule identifier"
    )

    rule_name: str = Field(
        sa_column=Column(String(120), nullable=False),
        description="Human readable rule name (at least 3 characters)"
    )

    admin_percent: Decimal = Field(
        sa_column=Column(Numeric(7, 4), nullable=False),
        description="Admin share in percent"
    )

    team_percent: Decimal = Field(
        sa_column=Column(Numeric(7, 4), nullable=False),
        description="Team share in percent"
    )

    vendor_percent: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(7, 4), nullable=False, default=0),
        description="Vendor share in percent (0 = no vendor entry)"
    )

    is_default: bool = Field(
        default=False,
        index=True,
        description="Default rule applied when a payment names none"
    )

    is_active: bool = Field(
        default=True,
        description="Inactive rules are kept for history only"
    )

    created_by: Optional[str] = Field(
        default=None,
        description="User who created the rule"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Rule creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    def percent_for(self, party: Party) -> Decimal:
        return {
            Party.ADMIN: self.admin_percent,
            Party.TEAM: self.team_percent,
            Party.VENDOR: self.vendor_percent,
        }[party]

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "rule_default",
                "rule_name": "Standard split",
                "admin_percent": "20.0000",
                "team_percent": "60.0000",
                "vendor_percent": "20.0000",
                "is_default": True,
                "is_active": True,
                "created_by": "user_1",
            }
        }
