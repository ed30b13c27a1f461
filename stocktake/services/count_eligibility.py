"""
Count round eligibility.

Round 1 may always be recorded (subject to the warehouse and uniqueness
checks done by the store). Round N > 1 is gated on round N-1 of the same
product, warehouse and cutoff date: it must exist and an administrator must
have requested a recount on it.
"""
from typing import Optional, Protocol

from stocktake.core.exceptions import ValidationError
from stocktake.models.inventory_count import CountStatus, MAX_COUNT_NUMBER


class CountLike(Protocol):
    status: str


def check_count_eligibility(count_number: int, previous_count: Optional[CountLike]) -> None:
    """
    Raise ValidationError unless a count for `count_number` may be recorded.

    Args:
        count_number: Requested round (1..3)
        previous_count: The round count_number-1 record, or None if absent.
            Ignored for round 1.
    """
    if count_number < 1 or count_number > MAX_COUNT_NUMBER:
        raise ValidationError(
            f"Count number must be between 1 and {MAX_COUNT_NUMBER}"
        )

    if count_number == 1:
        return

    previous_number = count_number - 1

    if previous_count is None:
        raise ValidationError(
            f"Cannot record count {count_number}: previous round missing "
            f"(count {previous_number} must be recorded first)"
        )

    if previous_count.status != CountStatus.RECOUNT_REQUESTED:
        raise ValidationError(
            f"Cannot record count {count_number}: previous round not released for recount "
            f"(count {previous_number} is {_status_value(previous_count.status)})"
        )


def _status_value(status) -> str:
    return getattr(status, "value", status)
