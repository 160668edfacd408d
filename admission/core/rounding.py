"""
Rounding helpers shared by all rules.

A rounding policy is a (type, decimals) pair:
    none   -> value is returned unchanged
    normal -> round half up
    up     -> towards +infinity
    down   -> towards -infinity
Rounding happens in Decimal on the shortest repr of the float, so 2.675
rounds to 2.68 and not to 2.67.
"""
from decimal import Decimal, ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP
from typing import Callable, Optional

from admission.core.errors import ConfigurationError, DivisionBoundaryError

Rounder = Callable[[float], float]

ROUNDING_TYPES = {
    "normal": ROUND_HALF_UP,
    "up": ROUND_CEILING,
    "down": ROUND_FLOOR,
}
NO_ROUNDING = "none"


def _identity(value: float) -> float:
    return value


def rounding_method(rounding_type: str, decimals: int = 0) -> Rounder:
    """Return the rounding function for a policy, or raise ConfigurationError."""
    rtype = (rounding_type or "").lower()
    if rtype == NO_ROUNDING:
        return _identity
    if rtype not in ROUNDING_TYPES:
        raise ConfigurationError(
            f"Unknown rounding type: {rounding_type!r}",
            {"allowed": sorted([NO_ROUNDING, *ROUNDING_TYPES])},
        )
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise ConfigurationError(
            f"Rounding decimals must be a non-negative integer, got {decimals!r}"
        )

    mode = ROUNDING_TYPES[rtype]
    quantum = Decimal(1).scaleb(-decimals)

    def _round(value: float) -> float:
        return float(Decimal(repr(float(value))).quantize(quantum, rounding=mode))

    return _round


def _dec(value: float) -> Decimal:
    return Decimal(repr(float(value)))


def count_from_percent(total_count: int, percent_fraction: float) -> float:
    # Unrounded, the caller applies its own rounding policy.
    return float(total_count * _dec(percent_fraction))


def percent_of(achieved: Optional[float], required: Optional[float]) -> float:
    """achieved / required * 100. A zero or missing reference raises DivisionBoundaryError."""
    if required is None or required == 0:
        raise DivisionBoundaryError(
            f"Cannot compute percent of {achieved!r} relative to {required!r}",
            {"achieved": achieved, "required": required},
        )
    # Decimal keeps exact ratios exact: 57 of 100 is 57.0, not 56.99999999999999.
    return float(_dec(achieved or 0) * 100 / _dec(required))
