"""
Conversion edges, hop direction encoding and the append-only rate registry.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, NamedTuple, Optional
import logging

logger = logging.getLogger(__name__)

# Snapshot of a live quote; 0.0 means "rate currently unavailable"
RateFn = Callable[[], Optional[float]]


@dataclass(frozen=True)
class ConvertRate:
    """
    Directly quoted rate: 1 unit of from_id = rate_fn() units of to_id.

    Example:
      EUR (id 0) → USD (id 1) quoted at 1.0800:
        ConvertRate(0, 1, lambda: 1.08)
    """
    from_id: int
    to_id: int
    rate_fn: RateFn


class Direction(Enum):
    NONE = 0
    FORWARD = 1   # apply rate as quoted (multiply)
    INVERSE = -1  # apply 1 / rate (divide)


class Hop(NamedTuple):
    """
    Tagged rate reference for a single hop.

    The dense engine stores hops packed into one signed int per cell:
      +id → Hop(FORWARD, id)
      -id → Hop(INVERSE, id)
       0  → NO_HOP
    """
    direction: Direction
    rate_id: int

    @classmethod
    def from_signed(cls, packed: int) -> 'Hop':
        packed = int(packed)
        if packed > 0:
            return cls(Direction.FORWARD, packed)
        if packed < 0:
            return cls(Direction.INVERSE, -packed)
        return NO_HOP

    def to_signed(self) -> int:
        return self.direction.value * self.rate_id


NO_HOP = Hop(Direction.NONE, 0)


def _unavailable() -> float:
    return 0.0


class RateRegistry:
    """
    Append-only list of rate sources indexed by positive rate id.

    Index 0 is a reserved dummy returning 0.0 so that id 0 can mean "unset".
    Sources are held by reference for the registry's lifetime; the registry
    never owns whatever feed backs them.
    """

    def __init__(self):
        self._sources: List[RateFn] = [_unavailable]

    def __len__(self) -> int:
        """Number of registered sources (dummy excluded)"""
        return len(self._sources) - 1

    def register(self, rate_fn: RateFn) -> int:
        """Append a source and return its fresh id (1, 2, 3, ...)"""
        if not callable(rate_fn):
            raise TypeError(f"Rate source must be callable, got {type(rate_fn).__name__}")
        self._sources.append(rate_fn)
        return len(self._sources) - 1

    def quote(self, rate_id: int) -> float:
        """Current snapshot of a source; None is treated as unavailable (0.0)"""
        value = self._sources[rate_id]()
        return 0.0 if value is None else float(value)

    def apply(self, hop: Hop, composite: float) -> float:
        """
        Apply one hop to the running composite rate.

        FORWARD: composite * rate
        INVERSE: composite / rate, or 0.0 when rate is 0.0 (leg unavailable)
        NONE:    dummy rate → 0.0
        """
        rate = self.quote(hop.rate_id)
        if hop.direction is Direction.INVERSE:
            if rate == 0.0:
                logger.debug(f"Rate {hop.rate_id} unavailable (zero divisor), composite forced to 0.0")
                return 0.0
            return composite / rate

        if rate == 0.0:
            logger.debug(f"Rate {hop.rate_id} unavailable, composite forced to 0.0")
        return composite * rate

    def clear(self):
        """Drop every registered source, keeping only the dummy"""
        self._sources = [_unavailable]
