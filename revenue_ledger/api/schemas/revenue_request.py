"""Request schemas for Revenue Rule API"""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field


class RevenueRuleRequestSchema(BaseModel):
    """
    Request schema for creating a revenue rule

    Used for POST /revenue-rules. Ranges and the 100% total are checked by
    the rule validator so that every problem is reported at once.
    """

    rule_name: Optional[str] = Field(
        default=None,
        description="Rule name (at least 3 characters)"
    )

    admin_percent: Optional[Decimal] = Field(
        default=None,
        description="Admin share in percent (0-100)"
    )

    team_percent: Optional[Decimal] = Field(
        default=None,
        description="Team share in percent (0-100)"
    )

    vendor_percent: Optional[Decimal] = Field(
        default=None,
        description="Vendor share in percent (0-100, missing = 0)"
    )

    is_default: bool = Field(
        default=False,
        description="Make this the default rule"
    )

    is_active: bool = Field(
        default=True,
        description="Whether payments may use the rule"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "rule_name": "Standard split",
                "admin_percent": "20",
                "team_percent": "60",
                "vendor_percent": "20",
                "is_default": True,
            }
        }


class SplitPreviewRequestSchema(BaseModel):
    amount: Decimal = Field(..., description="Amount to split")
    currency: str = Field(..., min_length=3, max_length=3, description="Currency code (ISO 4217)")
    revenue_rule_id: Optional[str] = Field(
        default=None,
        description="Rule to apply (defaults to the active rule)"
    )
