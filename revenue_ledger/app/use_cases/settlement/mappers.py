from revenue_ledger.domain.settlement import Settlement
from .dtos import SettlementDTO


def to_settlement_dto(settlement: Settlement) -> SettlementDTO:
    return SettlementDTO(
        id=settlement.id,
        party=settlement.party.value,
        ledger_entry_ids=list(settlement.ledger_entry_ids),
        total_amount=settlement.total_amount,
        currency=settlement.currency,
        settlement_date=settlement.settlement_date,
        remarks=settlement.remarks,
        created_by=settlement.created_by,
        created_at=settlement.created_at,
        proof_urls=list(settlement.proof_urls or []),
    )
