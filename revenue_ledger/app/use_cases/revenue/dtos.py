"""Data Transfer Objects for Revenue Rule Use Cases"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class RevenueRuleCommandDTO(BaseModel):
    """
    Command DTO for creating a revenue rule

    Percentages are not range-checked here: the rule validator reports every
    problem at once.
    """

    rule_name: Optional[str] = Field(
        default=None,
        description="Human readable rule name (at least 3 characters)"
    )

    admin_percent: Optional[Decimal] = Field(
        default=None,
        description="Admin share in percent"
    )

    team_percent: Optional[Decimal] = Field(
        default=None,
        description="Team share in percent"
    )

    vendor_percent: Optional[Decimal] = Field(
        default=None,
        description="Vendor share in percent (missing = 0)"
    )

    is_default: bool = Field(
        default=False,
        description="Make this the default rule"
    )

    is_active: bool = Field(
        default=True,
        description="Whether the rule can be applied to payments"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "rule_name": "Standard split",
                "admin_percent": "20",
                "team_percent": "60",
                "vendor_percent": "20",
                "is_default": True,
                "is_active": True,
            }
        }


class RevenueRuleResponseDTO(BaseModel):
    id: str
    rule_name: str
    admin_percent: Decimal
    team_percent: Decimal
    vendor_percent: Decimal
    is_default: bool
    is_active: bool
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class RuleValidationResponseDTO(BaseModel):
    is_valid: bool
    errors: List[str] = Field(default_factory=list)


class SplitPreviewResponseDTO(BaseModel):
    """
    Split of an amount under a revenue rule, without touching the ledger

    Parties with a 0 percent share are absent from ``shares``.
    """

    amount: Decimal
    currency: str
    revenue_rule_id: str
    rule_name: str
    shares: Dict[str, Decimal]
