"""
Sparse path engine: one breadth-first search per currency over quoted edges only.
"""
from collections import deque
from typing import Dict, List, Sequence
import logging
from fx_paths.core.utils import MAX_NODES
from fx_paths.graph.base import PathConverter
from fx_paths.graph.rates import ConvertRate, Direction, Hop

logger = logging.getLogger(__name__)


class SparseConverter(PathConverter):
    """
    Per-node mappings built by BFS, faster than the dense tables on sparse graphs.

    State:
      _links[u]  {neighbor: Hop} for every direct quote touching u
      _paths[s]  {destination: first hop from s}, present iff reachable

    Indirect entries carry only the first hop; the rate for that hop is the
    direct link _links[s][first_hop]. Memory is O(N + R) for the links plus
    one entry per reachable pair; build time is O(N·(N + R)).
    """

    def __init__(self, capacity: int = MAX_NODES):
        super().__init__(capacity)
        self._links: List[Dict[int, Hop]] = []
        self._paths: List[Dict[int, int]] = []

    def _build(self, edges: Sequence[ConvertRate]):
        self._links = [{} for _ in range(self.capacity)]
        self._paths = [{} for _ in range(self.capacity)]

        # Direct quotes: O(R)
        for edge in edges:
            rate_id = self.registry.register(edge.rate_fn)
            f, t = int(edge.from_id), int(edge.to_id)
            self._links[f][t] = Hop(Direction.FORWARD, rate_id)
            self._links[t][f] = Hop(Direction.INVERSE, rate_id)

        # BFS from every node: O(N·(N + R))
        visited_by = [self.capacity] * self.capacity
        reachable_pairs = 0
        for source in range(self.capacity):
            if self._links[source]:
                reachable_pairs += self._search_from(source, visited_by)

        logger.debug(f"BFS recorded {reachable_pairs} reachable pair(s)")

    def _search_from(self, source: int, visited_by: List[int]) -> int:
        """Fill _paths[source]; visited_by[v] == source marks v as seen this sweep"""
        paths = self._paths[source]
        visited_by[source] = source

        # (node to visit, first hop from source that led there)
        frontier = deque()
        for neighbor in self._links[source]:
            if neighbor == source:
                continue
            paths[neighbor] = neighbor
            visited_by[neighbor] = source
            frontier.append((neighbor, neighbor))

        while frontier:
            visiting, first_hop = frontier.popleft()
            for neighbor in self._links[visiting]:
                if visited_by[neighbor] != source:
                    visited_by[neighbor] = source
                    paths[neighbor] = first_hop
                    frontier.append((neighbor, first_hop))

        return len(paths)

    def _has_path(self, from_id: int, to_id: int) -> bool:
        return bool(self._paths) and to_id in self._paths[from_id]

    def _next_hop(self, prev: int, target: int) -> int:
        return self._paths[prev][target]

    def _hop_between(self, prev: int, nxt: int) -> Hop:
        return self._links[prev][nxt]
