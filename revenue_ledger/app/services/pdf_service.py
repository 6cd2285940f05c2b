"""PDF Generation Service Interface

Defines the contract for settlement statement documents.
"""

from abc import ABC, abstractmethod
from typing import List
from revenue_ledger.domain.ledger_entry import LedgerEntry
from revenue_ledger.domain.settlement import Settlement


class PdfService(ABC):
    """
    Service interface for PDF generation

    Provides PDF generation capabilities for settlement statements.
    """

    @abstractmethod
    def generate_settlement_statement(
        self,
        settlement: Settlement,
        entries: List[LedgerEntry],
        company_name: str = "Project Tracker",
        company_address: str = "",
    ) -> bytes:
        """
        Generate a settlement statement PDF

        Args:
            settlement: Settlement to document
            entries: Ledger entries cleared by the settlement
            company_name: Company name to display in the header
            company_address: Company address to display in the header

        Returns:
            PDF document as bytes
        """
        pass
