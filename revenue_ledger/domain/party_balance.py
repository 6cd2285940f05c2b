"""Party Balance value object

Read-time aggregate over a party's ledger entries. Not persisted.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, SQLModel
from revenue_ledger.domain.ledger_entry import Party


class PartyBalance(SQLModel):
    party: Party
    total_pending: Decimal = Field(default=Decimal("0.00"))
    total_cleared: Decimal = Field(default=Decimal("0.00"))
    net_balance: Decimal = Field(default=Decimal("0.00"))
    currency: str
    last_updated: datetime = Field(default_factory=datetime.utcnow)
    # Set only when this party's balance could not be computed
    error: Optional[str] = None
