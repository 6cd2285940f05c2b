"""Request schemas for Settlement API"""

from datetime import datetime
from typing import List, Optional, Union
from pydantic import BaseModel, Field


class ProofFileSchema(BaseModel):
    """An already-uploaded payment proof"""

    url: str = Field(..., min_length=1, description="Where the proof file is stored")
    name: Optional[str] = Field(default=None, description="Original file name")


class SettlementRequestSchema(BaseModel):
    """
    Request schema for validating or committing a settlement

    Used for POST /settlements/validate and POST /settlements.
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
        description="Expected currency"
    )

    settlement_date: Optional[datetime] = Field(
        default=None,
        description="Business date of the settlement (defaults to now)"
    )

    remarks: Optional[str] = Field(
        default=None,
        max_length=500,
        description="Free-form remarks"
    )

    proof_files: List[Union[str, ProofFileSchema]] = Field(
        default_factory=list,
        description="Payment proofs (URLs or {url, name})"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "party": "vendor",
                "ledger_entry_ids": ["entry_1", "entry_2"],
                "remarks": "January payout",
                "proof_files": [{"url": "https://files.example.com/proof-1.pdf", "name": "proof-1.pdf"}],
            }
        }
