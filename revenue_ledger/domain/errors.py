"""Domain Errors

Error taxonomy for the ledger engine. Use cases translate these into
Result errors; they never cross the HTTP boundary as exceptions.
"""

from typing import List, Optional


class LedgerError(Exception):
    """Base class for all ledger engine errors"""

    code = "LEDGER_ERROR"

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class ValidationError(LedgerError):
    """User-correctable input (bad rule, bad settlement request)"""

    code = "VALIDATION_ERROR"


class InvalidAmountError(ValidationError):
    code = "INVALID_AMOUNT"


class InvalidRuleError(ValidationError):
    code = "INVALID_RULE"


class InvalidPercentageError(ValidationError):
    code = "INVALID_PERCENTAGE"


class NotFoundError(LedgerError):
    """Referenced entry, rule or settlement does not exist"""

    code = "NOT_FOUND"


class ConflictError(LedgerError):
    """A concurrent mutation invalidated an assumption (e.g. entry no longer pending)"""

    code = "CONFLICT"


class LedgerSystemError(LedgerError):
    """Storage or notification transport failure"""

    code = "SYSTEM_ERROR"
