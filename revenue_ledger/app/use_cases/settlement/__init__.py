"""Settlement use cases"""
from .validate_settlement import ValidateSettlement
from .create_bulk_settlement import CreateBulkSettlement
from .process_settlement_with_proof import ProcessSettlementWithProof
from .get_settlement_stats import GetSettlementStats
from .get_recommended_settlements import GetRecommendedSettlements
from .send_settlement_reminders import SendSettlementReminders
from .list_settlements import ListSettlements, GetSettlement
from .generate_settlement_statement import GenerateSettlementStatement
from .dtos import (
    SettlementCommandDTO,
    SettlementValidationDTO,
    SettlementDTO,
    SettlementDetailDTO,
    ListSettlementsResponseDTO,
    SettlementStatsDTO,
    RecommendedSettlementDTO,
    RecommendedSettlementsResponseDTO,
    SettlementReminderDTO,
    SettlementStatementResponseDTO,
)

__all__ = [
    "ValidateSettlement",
    "CreateBulkSettlement",
    "ProcessSettlementWithProof",
    "GetSettlementStats",
    "GetRecommendedSettlements",
    "SendSettlementReminders",
    "ListSettlements",
    "GetSettlement",
    "GenerateSettlementStatement",
    "SettlementCommandDTO",
    "SettlementValidationDTO",
    "SettlementDTO",
    "SettlementDetailDTO",
    "ListSettlementsResponseDTO",
    "SettlementStatsDTO",
    "RecommendedSettlementDTO",
    "RecommendedSettlementsResponseDTO",
    "SettlementReminderDTO",
    "SettlementStatementResponseDTO",
]
