"""
Core utilities for currency identifiers and instrument names.
"""
from typing import Tuple

# Fixed node capacity of both path engines (currency ids 0..1999)
MAX_NODES: int = 2000


class InvalidCurrencyError(ValueError):
    """Raised when a currency id falls outside the engine's node range."""


def validate_currency_id(currency_id: int, capacity: int = MAX_NODES) -> int:
    """
    Check that currency_id is an integer in [0, capacity).
    
    Args:
        currency_id: Caller-supplied currency identifier
        capacity: Node capacity of the engine
    
    Returns:
        The id as a plain int
    
    Raises:
        InvalidCurrencyError: If id is not an integer or out of range
    """
    # bool is an int subclass but never a meaningful id
    if isinstance(currency_id, bool) or not hasattr(currency_id, "__index__"):
        raise InvalidCurrencyError(f"Currency id must be an integer, got {currency_id!r}")
    
    value = currency_id.__index__()
    if value < 0 or value >= capacity:
        raise InvalidCurrencyError(
            f"Currency id {value} outside valid range [0, {capacity})"
        )
    return value


def parse_instrument(instrument: str) -> Tuple[str, str]:
    """
    Parse OANDA-style instrument into (base, quote) codes.
    
    Handles common naming variations: "EUR_USD", "eur/usd", "EUR-USD".
    
    Raises:
        ValueError: If instrument is not two 3-letter codes
    """
    norm_instr = instrument.strip().upper().replace("/", "_").replace("-", "_")
    parts = norm_instr.split('_')
    if len(parts) != 2 or not all(len(p) == 3 and p.isalpha() for p in parts):
        raise ValueError(f"Invalid instrument format: {instrument}")
    return parts[0], parts[1]
