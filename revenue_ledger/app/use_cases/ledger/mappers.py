from revenue_ledger.domain.ledger_entry import LedgerEntry
from .dtos import LedgerEntryDTO


def to_entry_dto(entry: LedgerEntry) -> LedgerEntryDTO:
    return LedgerEntryDTO(
        id=entry.id,
        payment_id=entry.payment_id,
        project_id=entry.project_id,
        revenue_rule_id=entry.revenue_rule_id,
        type=entry.type.value,
        party=entry.party.value,
        amount=entry.amount,
        signed_amount=entry.signed_amount,
        currency=entry.currency,
        date=entry.date,
        status=entry.status.value,
        remarks=entry.remarks,
        settlement_id=entry.settlement_id,
        created_at=entry.created_at,
    )
