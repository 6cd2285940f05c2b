"""GenerateSettlementStatement Use Case

Renders a settlement statement PDF for a committed settlement.
"""

import base64
from datetime import datetime
from revenue_ledger.libs.result import Result, Return, Error
from revenue_ledger.app.repositories.ledger_entry_repository import LedgerEntryRepository
from revenue_ledger.app.repositories.settlement_repository import SettlementRepository
from revenue_ledger.app.services.pdf_service import PdfService
from .dtos import SettlementStatementResponseDTO


class GenerateSettlementStatement:
    """
    Use Case: Generate settlement statement PDF

    Flow:
    1. Retrieve settlement by ID
    2. Retrieve the entries it cleared
    3. Generate PDF using PDF service
    4. Return response with PDF as base64
    """

    def __init__(
        self,
        settlement_repo: SettlementRepository,
        ledger_repo: LedgerEntryRepository,
        pdf_service: PdfService,
        company_name: str = "Project Tracker",
        company_address: str = "",
    ):
        self.settlement_repo = settlement_repo
        self.ledger_repo = ledger_repo
        self.pdf_service = pdf_service
        self.company_name = company_name
        self.company_address = company_address

    async def execute(self, settlement_id: str) -> Result[SettlementStatementResponseDTO]:
        try:
            # Step 1: Retrieve settlement
            settlement = await self.settlement_repo.get_by_id(settlement_id)
            if not settlement:
                return Return.err(
                    Error(
                        code="SETTLEMENT_NOT_FOUND",
                        message=f"Settlement {settlement_id} not found",
                    )
                )

            # Step 2: Retrieve cleared entries
            entries = await self.ledger_repo.get_by_ids(settlement.ledger_entry_ids)

            # Step 3: Generate PDF
            pdf_bytes = self.pdf_service.generate_settlement_statement(
                settlement=settlement,
                entries=entries,
                company_name=self.company_name,
                company_address=self.company_address,
            )

            # Step 4: Build response
            return Return.ok(
                SettlementStatementResponseDTO(
                    settlement_id=settlement.id,
                    filename=f"settlement-{settlement.id}.pdf",
                    pdf_base64=base64.b64encode(pdf_bytes).decode("utf-8"),
                    generated_at=datetime.utcnow(),
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="GENERATE_STATEMENT_FAILED",
                    message="Failed to generate settlement statement",
                    reason=str(e),
                )
            )
