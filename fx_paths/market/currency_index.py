"""
Mapping between ISO 4217 currency codes and the integer ids used by the path engines.
"""
from typing import Dict, List
import logging
from fx_paths.core.utils import MAX_NODES, InvalidCurrencyError

logger = logging.getLogger(__name__)


class CurrencyIndex:
    """
    Assigns sequential ids (0, 1, 2, ...) to currency codes in first-seen order.

    Example:
      index = CurrencyIndex()
      index.add("EUR")  → 0
      index.add("USD")  → 1
      index.add("EUR")  → 0 (already known)
    """

    def __init__(self, capacity: int = MAX_NODES):
        self.capacity = capacity
        self._ids: Dict[str, int] = {}
        self._codes: List[str] = []

    def __len__(self) -> int:
        return len(self._codes)

    def __contains__(self, code: str) -> bool:
        return self._normalize(code) in self._ids

    @property
    def codes(self) -> List[str]:
        return list(self._codes)

    def add(self, code: str) -> int:
        """Return id of code, assigning the next free id if new"""
        norm = self._normalize(code)
        if norm in self._ids:
            return self._ids[norm]

        if len(self._codes) >= self.capacity:
            raise InvalidCurrencyError(
                f"Cannot add {norm}: index full ({self.capacity} currencies)"
            )

        new_id = len(self._codes)
        self._ids[norm] = new_id
        self._codes.append(norm)
        logger.debug(f"Registered currency {norm} as id {new_id}")
        return new_id

    def id_of(self, code: str) -> int:
        norm = self._normalize(code)
        if norm not in self._ids:
            raise ValueError(f"Unknown currency: {code}. Known: {self._codes}")
        return self._ids[norm]

    def code_of(self, currency_id: int) -> str:
        if not 0 <= currency_id < len(self._codes):
            raise InvalidCurrencyError(f"No currency registered with id {currency_id}")
        return self._codes[currency_id]

    @staticmethod
    def _normalize(code: str) -> str:
        """Validate base currency format (ISO 4217)"""
        norm = str(code).strip().upper()
        if len(norm) != 3 or not norm.isalpha():
            raise ValueError(f"Invalid currency code: {code}")
        return norm
