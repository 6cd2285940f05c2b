"""ValidateSettlement Use Case

Business validation of a settlement request before it is committed.
"""

import logging
from revenue_ledger.libs.result import Result, Return
from revenue_ledger.app.repositories.ledger_entry_repository import LedgerEntryRepository
from revenue_ledger.domain.ledger_entry import Party
from .dtos import SettlementCommandDTO, SettlementValidationDTO

logger = logging.getLogger(__name__)

INVALID_PARTY = "Valid party is required"
NO_ENTRIES = "At least one ledger entry must be selected"
INVALID_ENTRIES = "Some selected entries are invalid, already settled, or belong to different party"
MIXED_CURRENCIES = "All selected entries must have the same currency"
DUPLICATE_ENTRIES = "Duplicate ledger entries were selected and will be settled once"
SYSTEM_ERROR = "Validation failed due to system error"


class ValidateSettlement:
    """
    Use Case: Validate a settlement request

    Business Rules:
    1. Party must be admin, team or vendor
    2. At least one ledger entry must be selected
    3. Every entry must exist, be pending and belong to the party
    4. All resolvable entries must share one currency

    Every applicable error is reported. Validation never raises: an unexpected
    failure yields a single system error.
    """

    def __init__(self, ledger_repo: LedgerEntryRepository):
        self.ledger_repo = ledger_repo

    async def execute(self, command: SettlementCommandDTO) -> Result[SettlementValidationDTO]:
        try:
            errors = []
            warnings = []

            # Step 1: Party
            party = Party.parse(command.party)
            if party is None:
                errors.append(INVALID_PARTY)

            # Step 2: Entry selection
            entry_ids = list(command.ledger_entry_ids or [])
            if not entry_ids:
                errors.append(NO_ENTRIES)

            unique_ids = list(dict.fromkeys(entry_ids))
            if len(unique_ids) != len(entry_ids):
                warnings.append(DUPLICATE_ENTRIES)

            # Step 3: Resolve every entry; a failed lookup counts as invalid
            has_invalid = False
            currencies = set()
            for entry_id in unique_ids:
                try:
                    entry = await self.ledger_repo.get_by_id(entry_id)
                except Exception as e:
                    logger.warning(f"Lookup of ledger entry {entry_id} failed: {e}")
                    has_invalid = True
                    continue

                if entry is None:
                    has_invalid = True
                    continue

                currencies.add(entry.currency)
                if not entry.is_pending or entry.party != party:
                    has_invalid = True

            if has_invalid:
                errors.append(INVALID_ENTRIES)

            # Step 4: Single currency
            if len(currencies) > 1:
                errors.append(MIXED_CURRENCIES)

            return Return.ok(
                SettlementValidationDTO(is_valid=not errors, errors=errors, warnings=warnings)
            )

        except Exception as e:
            logger.error(f"Settlement validation failed: {e}")
            return Return.ok(
                SettlementValidationDTO(is_valid=False, errors=[SYSTEM_ERROR], warnings=[])
            )
