"""Revenue rule validation and split calculation

Pure functions, no I/O. ``validate_revenue_rule`` reports every problem with a
rule at once; ``calculate_split`` distributes an amount across parties so that
the shares add up exactly to the amount.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Mapping, Optional

from .errors import InvalidAmountError, InvalidPercentageError, InvalidRuleError
from .ledger_entry import Party
from .money import (
    HUNDRED,
    PERCENT_SUM_TOLERANCE,
    TWO_PLACES,
    Percentage,
    round_money,
    to_decimal,
)

logger = logging.getLogger(__name__)

# Order matters: the last non-zero party absorbs the rounding residual
SPLIT_ORDER = (Party.ADMIN, Party.TEAM, Party.VENDOR)

_PERCENT_FIELDS = {
    Party.ADMIN: "admin_percent",
    Party.TEAM: "team_percent",
    Party.VENDOR: "vendor_percent",
}

_MISSING = object()


@dataclass
class RuleValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Money:
    amount: Decimal
    currency: str


def _as_mapping(rule: Any) -> Mapping[str, Any]:
    if isinstance(rule, Mapping):
        return rule
    if hasattr(rule, "model_dump"):
        return rule.model_dump()
    return vars(rule)


def _percentage_error(party: Party) -> str:
    return f"{party.value.capitalize()} percentage must be a number between 0 and 100"


def validate_revenue_rule(rule: Any) -> RuleValidationResult:
    """
    Validate a revenue rule definition

    Args:
        rule: Mapping or model with rule_name, admin/team/vendor_percent,
              is_default and is_active

    Returns:
        RuleValidationResult with every applicable error message
    """
    data = _as_mapping(rule)
    errors: List[str] = []

    rule_name = data.get("rule_name")
    if not isinstance(rule_name, str) or not rule_name.strip():
        errors.append("Rule name is required")
    if isinstance(rule_name, str) and len(rule_name.strip()) < 3:
        errors.append("Rule name must be at least 3 characters long")

    percentages: Dict[Party, Percentage] = {}
    for party, field_name in _PERCENT_FIELDS.items():
        raw = data.get(field_name, _MISSING)
        if party == Party.VENDOR and (raw is _MISSING or raw is None):
            raw = 0
        try:
            percentage = Percentage(raw)
        except InvalidPercentageError:
            errors.append(_percentage_error(party))
            continue
        if not percentage.in_range:
            errors.append(_percentage_error(party))
        percentages[party] = percentage

    if len(percentages) == len(_PERCENT_FIELDS):
        total = sum((p.value for p in percentages.values()), Decimal("0"))
        if abs(total - HUNDRED) > PERCENT_SUM_TOLERANCE:
            errors.append("Total percentages must equal 100%")

    for flag, label in (("is_default", "isDefault"), ("is_active", "isActive")):
        value = data.get(flag)
        if value is not None and not isinstance(value, bool):
            errors.append(f"{label} must be a boolean value")

    return RuleValidationResult(is_valid=not errors, errors=errors)


def calculate_split(amount: Any, currency: str, rule: Optional[Any]) -> Dict[Party, Money]:
    """
    Split ``amount`` across parties according to ``rule``

    Shares of all non-zero parties but the last are rounded half-up to 2
    places; the last non-zero party receives the remainder, so the shares sum
    exactly to the (2-place) amount. When the rounded shares overshoot the
    amount, the shortfall is taken back from the largest shares first and the
    last party receives 0.00, so no share is ever negative. Parties with an
    explicit 0 percent are omitted from the result.

    Raises:
        InvalidAmountError: amount is missing, not a number, or <= 0
        InvalidRuleError: rule is missing or invalid
    """
    try:
        value = to_decimal(amount) if amount is not None and not isinstance(amount, bool) else None
    except (ArithmeticError, ValueError, TypeError):
        value = None
    if value is None or not value.is_finite() or value <= 0:
        raise InvalidAmountError("Amount must be positive")

    if rule is None:
        raise InvalidRuleError("Revenue rule is required")

    validation = validate_revenue_rule(rule)
    if not validation.is_valid:
        raise InvalidRuleError(
            f"Invalid revenue rule: {', '.join(validation.errors)}",
            errors=validation.errors,
        )

    data = _as_mapping(rule)
    total = round_money(value)
    parties = [
        party for party in SPLIT_ORDER
        if not Percentage(data.get(_PERCENT_FIELDS[party]) or 0).is_zero
    ]

    shares: Dict[Party, Decimal] = {}
    for party in parties[:-1]:
        share = Percentage(data.get(_PERCENT_FIELDS[party])).share_of(total)
        shares[party] = share.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    remainder = total - sum(shares.values(), Decimal("0.00"))

    # Percentages summing just above 100 can round past the total
    if remainder < 0:
        shortfall = -remainder
        for party in sorted(shares, key=lambda p: shares[p], reverse=True):
            taken = min(shares[party], shortfall)
            shares[party] -= taken
            shortfall -= taken
            if shortfall == 0:
                break
        remainder = Decimal("0.00")
    shares[parties[-1]] = remainder

    split: Dict[Party, Money] = {
        party: Money(amount=shares[party], currency=currency) for party in parties
    }

    logger.info(
        f"Revenue split calculated: amount={total} {currency}, rule={data.get('id')}, "
        + ", ".join(f"{p.value}={m.amount}" for p, m in split.items())
    )
    return split
