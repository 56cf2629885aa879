# graph/base.py
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence
import logging
import time
from fx_paths.core.utils import MAX_NODES, validate_currency_id
from fx_paths.graph.evaluator import evaluate_path, walk_path
from fx_paths.graph.rates import ConvertRate, Hop, RateRegistry


logger = logging.getLogger(__name__)

class PathConverter(ABC):
    """
    Precomputes fewest-hop conversion paths between every currency pair and
    evaluates composite rates along them on demand.

    Lifecycle:
      - init(rates) builds the path tables and rate registry once
      - convert() only reads the tables and re-queries live rate sources
      - init() again fully replaces the previous state

    No internal locking: init() must not race with convert() or another
    init() on the same instance.
    """

    def __init__(self, capacity: int = MAX_NODES):
        if capacity <= 0:
            raise ValueError(f"Capacity must be positive, got {capacity}")
        self.capacity = capacity
        self.name = self.__class__.__name__
        self.registry = RateRegistry()
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def rate_count(self) -> int:
        return len(self.registry)

    def init(self, rates: Iterable[ConvertRate]):
        """Validate every edge, then rebuild all path tables from scratch"""
        edges = self._validate_rates(rates)

        if self._initialized:
            logger.warning(f"[{self.name}] Re-initializing, previous path tables discarded")

        started = time.perf_counter()
        self.registry.clear()
        self._build(edges)
        self._initialized = True

        logger.info(
            f"[{self.name}] Built paths for {len(edges)} rate(s) over {self.capacity} nodes "
            f"in {time.perf_counter() - started:.3f}s"
        )

    def convert(self, amount: float, from_id: int, to_id: int) -> float:
        """
        Convert amount of from_id into to_id along the stored fewest-hop path.

        Returns:
            amount unchanged when from_id == to_id,
            0.0 when no path exists or any leg is currently unavailable
        """
        from_id = validate_currency_id(from_id, self.capacity)
        to_id = validate_currency_id(to_id, self.capacity)

        if from_id == to_id:
            return amount
        if not self._has_path(from_id, to_id):
            return 0.0

        return evaluate_path(
            amount, from_id, to_id,
            next_hop=self._next_hop,
            hop_between=self._hop_between,
            registry=self.registry,
            max_hops=self.capacity
        )

    def has_path(self, from_id: int, to_id: int) -> bool:
        from_id = validate_currency_id(from_id, self.capacity)
        to_id = validate_currency_id(to_id, self.capacity)
        return from_id == to_id or self._has_path(from_id, to_id)

    def path(self, from_id: int, to_id: int) -> List[int]:
        """Node sequence from_id ... to_id; [] when unreachable"""
        if not self.has_path(from_id, to_id):
            return []
        nodes = [int(from_id)]
        if from_id != to_id:
            nodes.extend(nxt for _, nxt in walk_path(int(from_id), int(to_id), self._next_hop, self.capacity))
        return nodes

    def hop_count(self, from_id: int, to_id: int) -> Optional[int]:
        """Number of conversions on the stored path; None when unreachable"""
        nodes = self.path(from_id, to_id)
        return len(nodes) - 1 if nodes else None

    def _validate_rates(self, rates: Iterable[ConvertRate]) -> Sequence[ConvertRate]:
        edges = list(rates)
        for edge in edges:
            validate_currency_id(edge.from_id, self.capacity)
            validate_currency_id(edge.to_id, self.capacity)
            if not callable(edge.rate_fn):
                raise TypeError(f"Rate source for {edge.from_id} → {edge.to_id} is not callable")
        return edges

    @abstractmethod
    def _build(self, edges: Sequence[ConvertRate]):
        """Register rates and build path tables (state already reset)"""
        pass

    @abstractmethod
    def _has_path(self, from_id: int, to_id: int) -> bool:
        """True if a stored path exists for from_id != to_id"""
        pass

    @abstractmethod
    def _next_hop(self, prev: int, target: int) -> int:
        pass

    @abstractmethod
    def _hop_between(self, prev: int, nxt: int) -> Hop:
        pass
