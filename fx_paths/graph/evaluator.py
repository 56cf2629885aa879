"""
Path walking and composite-rate evaluation shared by both path engines.
"""
from typing import Callable, Iterator, Tuple
import logging
from fx_paths.graph.rates import Hop, RateRegistry

logger = logging.getLogger(__name__)

# next_hop(prev, target) -> first node after prev on the stored path to target
NextHopFn = Callable[[int, int], int]
# hop_between(prev, nxt) -> rate to apply for the single edge prev → nxt
HopFn = Callable[[int, int], Hop]


def walk_path(source: int, target: int, next_hop: NextHopFn, max_hops: int) -> Iterator[Tuple[int, int]]:
    """
    Yield (prev, next) pairs from source until target is reached.

    Caller guarantees source != target and that a path exists.
    max_hops bounds the walk so a corrupted table cannot loop forever.
    """
    prev = source
    for _ in range(max_hops):
        nxt = next_hop(prev, target)
        yield prev, nxt
        if nxt == target:
            return
        prev = nxt
    raise RuntimeError(
        f"Path {source} → {target} did not terminate within {max_hops} hops"
    )


def evaluate_path(
    amount: float,
    source: int,
    target: int,
    next_hop: NextHopFn,
    hop_between: HopFn,
    registry: RateRegistry,
    max_hops: int
) -> float:
    """
    Convert amount along the stored path, re-reading every live rate.

    Example (0→1 @ 2.0, 1→2 @ 3.0, 2→3 @ 4.0):
      evaluate_path(10, 0, 3, ...) = 10 * 2.0 * 3.0 * 4.0 = 240.0
      evaluate_path(240, 3, 0, ...) = 240 / 4.0 / 3.0 / 2.0 = 10.0

    Once an unavailable leg zeroes the composite it stays zero for the rest
    of the walk; the remaining sources are still queried.
    """
    composite = 1.0
    for prev, nxt in walk_path(source, target, next_hop, max_hops):
        hop = hop_between(prev, nxt)
        if composite == 0.0:
            registry.quote(hop.rate_id)
            continue
        composite = registry.apply(hop, composite)

    if composite == 0.0:
        return 0.0

    result = float(amount) * composite
    logger.debug(f"convert {amount} {source} → {target}: composite {composite:.10g} → {result:.10g}")
    return result
