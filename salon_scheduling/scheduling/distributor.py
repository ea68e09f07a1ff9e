"""
Distribution of requested services into concurrent appointment lanes.

A group booking asks for a multiset of services (two guests may both
want a manicure). They are packed into lanes, one per simultaneous
appointment, so that no lane holds the same service twice and lane
durations are as even as possible. The lane count is raised to the
highest multiplicity of any single service, which makes every packing
feasible; the search only affects balance.

Small requests are solved exactly by backtracking; larger ones fall
back to a greedy longest-first placement.
"""

from collections import Counter
from typing import NamedTuple, Optional, Sequence

from salon_scheduling.config import settings
from salon_scheduling.logging_context import get_request_logger
from salon_scheduling.schemas.catalog_schema import Lane, Service, ServiceId
from salon_scheduling.scheduling.errors import SchedulingInputError

logger = get_request_logger(__name__)


class _LaneState(NamedTuple):
    """Immutable snapshot of one lane during the search."""

    items: tuple[Service, ...] = ()
    total: int = 0
    ids: frozenset[ServiceId] = frozenset()

    def accepts(self, item: Service) -> bool:
        return item.id not in self.ids

    def add(self, item: Service) -> "_LaneState":
        return _LaneState(self.items + (item,), self.total + item.time, self.ids | {item.id})


def _spread(lanes: Sequence[_LaneState]) -> int:
    totals = [lane.total for lane in lanes]
    return max(totals) - min(totals)


def _replace(lanes: tuple[_LaneState, ...], index: int, lane: _LaneState) -> tuple[_LaneState, ...]:
    return lanes[:index] + (lane,) + lanes[index + 1:]


def max_duplicate_count(items: Sequence[Service]) -> int:
    """Highest number of times any one service id appears."""
    counts = Counter(item.id for item in items)
    return max(counts.values(), default=0)


def _longest_first(items: Sequence[Service]) -> list[Service]:
    return sorted(items, key=lambda item: item.time, reverse=True)


def greedy_distribute(items: Sequence[Service], lane_count: int) -> list[Lane]:
    """Place each item, longest first, in the lightest lane that lacks its id."""
    lanes = tuple(_LaneState() for _ in range(lane_count))
    for item in _longest_first(items):
        target: Optional[int] = None
        for index, lane in enumerate(lanes):
            if lane.accepts(item) and (target is None or lane.total < lanes[target].total):
                target = index
        if target is None:
            # Unreachable when lane_count covers the highest multiplicity.
            raise SchedulingInputError(f"No lane can take service {item.id!r}")
        lanes = _replace(lanes, target, lanes[target].add(item))
    return [Lane(services=list(lane.items)) for lane in lanes]


def backtracking_distribute(items: Sequence[Service], lane_count: int) -> list[Lane]:
    """Exhaustively search for the placement with the smallest max-min spread."""
    ordered = _longest_first(items)
    best: Optional[tuple[_LaneState, ...]] = None
    best_spread = float("inf")

    # Explicit stack of (next item index, lane snapshot); each frame owns its state.
    stack: list[tuple[int, tuple[_LaneState, ...]]] = [
        (0, tuple(_LaneState() for _ in range(lane_count)))
    ]
    while stack:
        index, lanes = stack.pop()
        if _spread(lanes) > best_spread:
            continue
        if index == len(ordered):
            spread = _spread(lanes)
            if spread < best_spread:
                best, best_spread = lanes, spread
            continue

        item = ordered[index]
        children = []
        tried_empty = False
        for lane_index, lane in enumerate(lanes):
            if not lane.accepts(item):
                continue
            # Empty lanes are interchangeable; trying one is enough.
            if not lane.items:
                if tried_empty:
                    continue
                tried_empty = True
            children.append((index + 1, _replace(lanes, lane_index, lane.add(item))))
        # Reverse so the first lane is explored first, as in recursive order.
        stack.extend(reversed(children))

    if best is None:
        raise SchedulingInputError("Services cannot be split across the requested lanes")
    return [Lane(services=list(lane.items)) for lane in best]


def distribute(items: Sequence[Service], requested_lane_count: int) -> list[Lane]:
    """
    Pack services into lanes for a group booking.

    Args:
        items: requested service instances; duplicates allowed.
        requested_lane_count: number of guests / concurrent appointments.

    Returns:
        Exactly ``max(requested_lane_count, max_duplicate_count(items))``
        lanes. Every item lands in exactly one lane; some lanes may be
        empty when there are fewer items than lanes.
    """
    if not isinstance(requested_lane_count, int) or isinstance(requested_lane_count, bool):
        raise SchedulingInputError(
            f"Lane count must be an integer, got {requested_lane_count!r}"
        )
    if requested_lane_count < 0:
        raise SchedulingInputError(f"Lane count must be >= 0, got {requested_lane_count}")

    lane_count = max(requested_lane_count, max_duplicate_count(items))
    if lane_count != requested_lane_count:
        logger.info(
            "Raised lane count from %d to %d to separate duplicate services",
            requested_lane_count, lane_count,
        )
    if lane_count == 0:
        return []

    cfg = settings.scheduling
    if len(items) <= cfg.backtracking_max_items and lane_count <= cfg.backtracking_max_lanes:
        lanes = backtracking_distribute(items, lane_count)
        strategy = "backtracking"
    else:
        lanes = greedy_distribute(items, lane_count)
        strategy = "greedy"

    logger.debug(
        "Distributed %d service(s) into %d lane(s) via %s: %s",
        len(items), lane_count, strategy, [lane.total_minutes for lane in lanes],
    )
    return lanes
