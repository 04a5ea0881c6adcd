"""Token budget selection.

Greedy knapsack over whole units: highest weight first, cheapest first among
equals, original order last. A unit is taken only if it still fits; a unit
that doesn't fit is skipped and the scan continues, since a later, smaller
unit may still fit.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic import BaseModel, Field

from contextify.context.models import SourceUnit, TokenEstimator

logger = logging.getLogger("contextify.budget")


class Selection(BaseModel):
    """Units chosen under a token ceiling, in priority order."""

    units: list[SourceUnit] = Field(default_factory=list)
    ceiling: int
    total_size: int = 0
    total_cost: int = 0
    truncated: bool = False


def priority_order(units: Sequence[SourceUnit]) -> list[tuple[int, SourceUnit]]:
    """Sort units by (weight desc, cost asc, original index asc).

    Returns (cost, unit) pairs.
    """
    keyed = [
        (-unit.weight, TokenEstimator.unit_cost(unit), index, unit)
        for index, unit in enumerate(units)
    ]
    keyed.sort(key=lambda k: k[:3])
    return [(cost, unit) for _, cost, _, unit in keyed]


def select_within_budget(units: Sequence[SourceUnit], ceiling: int) -> Selection:
    """Greedily select units whose combined cost stays within `ceiling`.

    Args:
        units: Candidate units with their final weights.
        ceiling: Maximum total cost in tokens. Must be positive; callers
            disable budgeting by not calling this at all.

    Returns:
        A Selection with the accepted units, their recomputed totals, and
        `truncated` set when anything was left out.
    """
    if ceiling <= 0:
        raise ValueError(f"ceiling must be positive, got {ceiling}")

    selection = Selection(ceiling=ceiling)
    for cost, unit in priority_order(units):
        if selection.total_cost + cost > ceiling:
            logger.debug("Budget: skipping %s (~%d tokens)", unit.path, cost)
            continue
        selection.units.append(unit)
        selection.total_cost += cost
        selection.total_size += unit.size

    selection.truncated = len(selection.units) < len(units)
    logger.debug(
        "Budget: kept %d/%d units, ~%d of %d tokens",
        len(selection.units), len(units), selection.total_cost, ceiling,
    )
    return selection
