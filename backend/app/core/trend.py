from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from enum import Enum
from typing import Optional

from app.core.constants import (
    DEFAULT_INITIAL_WEIGHT,
    REFERENCE_SLOT_INDEX,
    TARGET_SLOT_INDEX,
    TREND_SLOT_COUNT,
)


class SlotState(str, Enum):
    empty = "empty"
    target = "target"
    active = "active"
    # target slot that also carries the day's marker
    target_hit = "target_hit"


@dataclass(frozen=True)
class TrendSlots:
    slots: tuple[SlotState, ...]
    active_index: Optional[int] = None
    # True when the raw index fell outside the strip and was pulled to an edge
    clamped: bool = False


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps float input like 150.1 from turning into 150.0999...
    return Decimal(str(value))


def round_half_away(value: Decimal) -> int:
    """
    Round to the nearest integer, halves away from zero.
    Example: 0.5 -> 1, -0.5 -> -1, 2.4 -> 2
    """
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def trend_index(initial_weight, weight) -> Optional[tuple[int, bool]]:
    """Slot for `weight` relative to `initial_weight`, and whether it was clamped.

    Returns None when the difference is not a number (e.g. inf - inf).
    """
    with localcontext() as ctx:
        ctx.traps[InvalidOperation] = False
        diff = _to_decimal(weight) - _to_decimal(initial_weight)
    if diff.is_nan():
        return None

    # bound before rounding; quantize fails on huge or infinite values
    limit = Decimal(TREND_SLOT_COUNT)
    bounded = min(max(diff, -limit), limit)

    raw = round_half_away(bounded) + REFERENCE_SLOT_INDEX
    index = min(max(raw, 0), TREND_SLOT_COUNT - 1)
    return index, index != raw


def compute_trend_slots(initial_weight, record) -> TrendSlots:
    """Map a day's weight onto the 9-slot trend strip.

    Slot 4 always carries the target marker. When the day has a weight,
    the slot at round(weight - initial_weight) + 5 is marked active,
    clamped to the strip. Days without a weight only show the target.
    """
    if initial_weight is None:
        initial_weight = DEFAULT_INITIAL_WEIGHT

    slots = [SlotState.empty] * TREND_SLOT_COUNT
    slots[TARGET_SLOT_INDEX] = SlotState.target

    weight = getattr(record, "weight", None)
    if weight is None:
        return TrendSlots(slots=tuple(slots))

    found = trend_index(initial_weight, weight)
    if found is None:
        return TrendSlots(slots=tuple(slots))

    index, clamped = found
    if index == TARGET_SLOT_INDEX:
        slots[index] = SlotState.target_hit
    else:
        slots[index] = SlotState.active
    return TrendSlots(slots=tuple(slots), active_index=index, clamped=clamped)
