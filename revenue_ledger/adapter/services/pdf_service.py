"""ReportLab PDF Generation Service Implementation

Renders settlement statements with ReportLab.
"""

from io import BytesIO
from xml.sax.saxutils import escape
from typing import List

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from revenue_ledger.app.services.pdf_service import PdfService
from revenue_ledger.domain.ledger_entry import LedgerEntry
from revenue_ledger.domain.settlement import Settlement

HEADER_COLOR = colors.HexColor("#1F3A5F")
MUTED_COLOR = colors.HexColor("#6B7B8C")
GRID_COLOR = colors.HexColor("#C8D1DA")


def _money(amount, currency: str) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency} {abs(amount):,.2f}"


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    One A4 page per settlement: company header, settlement details,
    cleared entries and the signed total.
    """

    def generate_settlement_statement(
        self,
        settlement: Settlement,
        entries: List[LedgerEntry],
        company_name: str = "Project Tracker",
        company_address: str = "",
    ) -> bytes:
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=18 * mm,
            leftMargin=18 * mm,
            topMargin=18 * mm,
            bottomMargin=18 * mm,
            title=f"Settlement {settlement.id}",
        )

        styles = getSampleStyleSheet()
        company_style = ParagraphStyle(
            "CompanyStyle",
            parent=styles["Heading1"],
            fontSize=20,
            spaceAfter=6,
            textColor=HEADER_COLOR,
        )
        subtitle_style = ParagraphStyle(
            "SubtitleStyle",
            parent=styles["Heading2"],
            fontSize=13,
            spaceBefore=8,
            spaceAfter=12,
        )
        muted_style = ParagraphStyle(
            "MutedStyle",
            parent=styles["Normal"],
            fontSize=9,
            textColor=MUTED_COLOR,
        )

        elements = [Paragraph(escape(company_name), company_style)]
        if company_address:
            elements.append(Paragraph(escape(company_address), muted_style))
        elements.append(Paragraph("SETTLEMENT STATEMENT", subtitle_style))

        # Settlement details
        details = [
            ["Settlement ID:", settlement.id],
            ["Party:", settlement.party.value.capitalize()],
            ["Settlement Date:", settlement.settlement_date.strftime("%Y-%m-%d")],
            ["Currency:", settlement.currency],
            ["Entries:", str(len(settlement.ledger_entry_ids))],
        ]
        if settlement.created_by:
            details.append(["Settled By:", settlement.created_by])
        if settlement.remarks:
            details.append(["Remarks:", settlement.remarks])

        details_table = Table(details, colWidths=[38 * mm, 120 * mm])
        details_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), MUTED_COLOR),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
                ]
            )
        )
        elements.append(details_table)
        elements.append(Spacer(1, 8 * mm))

        # Cleared entries
        rows = [["Date", "Project", "Payment", "Type", "Amount"]]
        for entry in entries:
            rows.append(
                [
                    entry.date.strftime("%Y-%m-%d"),
                    entry.project_id or "-",
                    entry.payment_id or "-",
                    entry.type.value.capitalize(),
                    _money(entry.signed_amount, entry.currency),
                ]
            )
        rows.append(["", "", "", "Total", _money(settlement.total_amount, settlement.currency)])

        entries_table = Table(rows, colWidths=[26 * mm, 40 * mm, 40 * mm, 20 * mm, 32 * mm])
        entries_table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 9),
                    ("ALIGN", (-1, 0), (-1, -1), "RIGHT"),
                    ("GRID", (0, 0), (-1, -2), 0.5, GRID_COLOR),
                    ("ROWBACKGROUNDS", (0, 1), (-1, -2), [colors.white, colors.HexColor("#F4F6F8")]),
                    # Total row
                    ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                    ("LINEABOVE", (3, -1), (-1, -1), 1.2, HEADER_COLOR),
                    ("TOPPADDING", (0, 0), (-1, -1), 5),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
                ]
            )
        )
        elements.append(entries_table)

        if settlement.proof_urls:
            elements.append(Spacer(1, 8 * mm))
            elements.append(Paragraph("Payment proofs", styles["Heading4"]))
            for url in settlement.proof_urls:
                elements.append(Paragraph(escape(url), muted_style))

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
