"""
Dense path engine: incremental all-pairs shortest paths over N×N numpy tables.
"""
from typing import Optional, Sequence
import logging
import numpy as np
from fx_paths.core.utils import MAX_NODES
from fx_paths.graph.base import PathConverter
from fx_paths.graph.rates import ConvertRate, Direction, Hop

logger = logging.getLogger(__name__)

UNREACHABLE = np.iinfo(np.int32).max


class DenseConverter(PathConverter):
    """
    Builds N×N next-hop / rate tables one edge insertion at a time.

    Tables (N = capacity):
      _distance[i, j]  fewest hops i → j, UNREACHABLE if none
      _next[i, j]      first node after i on that path, N if none
      _rate_ids[i, j]  packed Hop for the direct edge i → j (+id / -id / 0)

    Each inserted edge (f, t) triggers one relaxation pass testing every pair
    (i, j) for a shorter route i … f → t … j. Only pairs inside the components
    of f and t can change, so the pass is restricted to them:
      - f, t disconnected: every cross pair is newly reachable (join)
      - f, t connected:    strict improvements only (relax)

    Memory and table reset cost are O(N²) regardless of edge count;
    lookups are O(1).
    """

    def __init__(self, capacity: int = MAX_NODES):
        super().__init__(capacity)
        self._distance: Optional[np.ndarray] = None
        self._next: Optional[np.ndarray] = None
        self._rate_ids: Optional[np.ndarray] = None

    def _build(self, edges: Sequence[ConvertRate]):
        n = self.capacity
        self._distance = np.full((n, n), UNREACHABLE, dtype=np.int32)
        np.fill_diagonal(self._distance, 0)
        self._next = np.full((n, n), n, dtype=np.int32)
        self._rate_ids = np.zeros((n, n), dtype=np.int32)

        for edge in edges:
            self._insert(int(edge.from_id), int(edge.to_id), edge)

    def _insert(self, f: int, t: int, edge: ConvertRate):
        rate_id = self.registry.register(edge.rate_fn)
        # Direct edge is usable immediately; a later quote for the same pair wins
        self._rate_ids[f, t] = Hop(Direction.FORWARD, rate_id).to_signed()
        self._rate_ids[t, f] = Hop(Direction.INVERSE, rate_id).to_signed()

        current = self._distance[f, t]
        if current <= 1:
            # Self-quote or duplicate pair: no route can get shorter
            return

        comp_f = np.flatnonzero(self._distance[f] != UNREACHABLE)
        if current == UNREACHABLE:
            comp_t = np.flatnonzero(self._distance[t] != UNREACHABLE)
            self._join(f, t, comp_f, comp_t)
        else:
            self._relax(f, t, comp_f)

    def _join(self, f: int, t: int, comp_f: np.ndarray, comp_t: np.ndarray):
        """Connect two disjoint components through the new edge f → t"""
        d_f = self._distance[f, comp_f].astype(np.int64)
        d_t = self._distance[t, comp_t].astype(np.int64)

        # i in comp_f, j in comp_t: i … f → t … j
        block = d_f[:, None] + d_t[None, :] + 1
        self._distance[np.ix_(comp_f, comp_t)] = block
        self._distance[np.ix_(comp_t, comp_f)] = block.T

        hop_f = self._first_hops(comp_f, f, t)
        hop_t = self._first_hops(comp_t, t, f)
        self._next[np.ix_(comp_f, comp_t)] = hop_f[:, None]
        self._next[np.ix_(comp_t, comp_f)] = hop_t[:, None]

        logger.debug(f"Joined components of {f} ({len(comp_f)} nodes) and {t} ({len(comp_t)} nodes)")

    def _relax(self, f: int, t: int, comp: np.ndarray):
        """Shortcut edge inside one component: keep strictly shorter routes only"""
        d_f = self._distance[f, comp].astype(np.int64)
        d_t = self._distance[t, comp].astype(np.int64)

        via_ft = d_f[:, None] + d_t[None, :] + 1  # i … f → t … j
        via_tf = via_ft.T                         # i … t → f … j
        best = np.minimum(via_ft, via_tf)
        improved = best < self._distance[np.ix_(comp, comp)]
        if not improved.any():
            return

        # Equal-length orientations: a row-major sweep settles (i, j) with i < j
        # through f → t first, and its mirror (j, i) through t → f
        upper = np.triu(np.ones(improved.shape, dtype=bool), k=1)
        use_ft = (via_ft < via_tf) | ((via_ft == via_tf) & upper)

        hop_f = self._first_hops(comp, f, t)
        hop_t = self._first_hops(comp, t, f)
        new_next = np.where(use_ft, hop_f[:, None], hop_t[:, None])

        rows, cols = np.nonzero(improved)
        self._distance[comp[rows], comp[cols]] = best[rows, cols]
        self._next[comp[rows], comp[cols]] = new_next[rows, cols]

        logger.debug(f"Edge {f} → {t} shortened {len(rows)} path(s)")

    def _first_hops(self, nodes: np.ndarray, via: int, across: int) -> np.ndarray:
        """First hop from each node toward `via`; `via` itself steps to `across`"""
        hops = self._next[nodes, via].copy()
        hops[nodes == via] = across
        return hops

    def _has_path(self, from_id: int, to_id: int) -> bool:
        return self._next is not None and bool(self._next[from_id, to_id] != self.capacity)

    def _next_hop(self, prev: int, target: int) -> int:
        return int(self._next[prev, target])

    def _hop_between(self, prev: int, nxt: int) -> Hop:
        return Hop.from_signed(self._rate_ids[prev, nxt])
