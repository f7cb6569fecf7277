"""Progress calculation for checklist instances.

Counters are derived from the items every time an item changes:

    - total_items: every item, required or not
    - completed_items: items passing ``is_item_complete``
    - required_items / required_items_completed: the same, restricted to
      required items
    - progress_percentage: completed / total * 100, two decimals (half-even),
      0 when the checklist has no items
"""
import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal

from cobra.checklist.items import is_item_complete

logger = logging.getLogger(__name__)

_TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class ChecklistProgress:
    """Aggregate progress counters for one checklist."""
    total_items: int = 0
    completed_items: int = 0
    progress_percentage: float = 0.0
    required_items: int = 0
    required_items_completed: int = 0


def percentage(completed: int, total: int) -> float:
    """``completed / total * 100`` rounded half-even to two decimals."""
    if total <= 0:
        return 0.0
    value = (Decimal(completed) * 100 / Decimal(total)).quantize(
        _TWO_PLACES, rounding=ROUND_HALF_EVEN
    )
    return float(value)


def calculate_progress(items) -> ChecklistProgress:
    """Compute progress counters over a sequence of items.

    Pure: the items are not modified. Integrity errors raised while deciding
    whether an item is complete propagate unchanged.
    """
    total = required = completed = required_completed = 0

    for item in items:
        done = is_item_complete(item)
        total += 1
        if done:
            completed += 1
        if item.is_required:
            required += 1
            if done:
                required_completed += 1

    return ChecklistProgress(
        total_items=total,
        completed_items=completed,
        progress_percentage=percentage(completed, total),
        required_items=required,
        required_items_completed=required_completed,
    )


def recalculate(checklist) -> ChecklistProgress:
    """Recompute progress for a checklist and stamp it on the instance.

    Does not commit; the caller persists the instance in the same
    transaction as the item change that triggered the recalculation.
    """
    progress = calculate_progress(checklist.items)

    checklist.total_items = progress.total_items
    checklist.completed_items = progress.completed_items
    checklist.progress_percentage = progress.progress_percentage
    checklist.required_items = progress.required_items
    checklist.required_items_completed = progress.required_items_completed

    logger.debug(
        f"Progress for checklist {getattr(checklist, 'id', None)}: "
        f"{progress.progress_percentage}% "
        f"({progress.completed_items}/{progress.total_items})"
    )
    return progress
