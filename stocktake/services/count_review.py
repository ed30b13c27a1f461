"""
Inventory Count Review State Machine

All review status changes of a count go through this module.

    PENDING ──approve──────────► APPROVED
            ──reject───────────► REJECTED
            ──request_recount──► RECOUNT_REQUESTED

Every target state is terminal: a count is reviewed exactly once and never
returns to PENDING. RECOUNT_REQUESTED is the only state that opens the next
count round.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict
from uuid import UUID

from stocktake.core.exceptions import ValidationError
from stocktake.models.inventory_count import CountStatus, InventoryCount, MAX_COUNT_NUMBER


logger = logging.getLogger(__name__)


# =============================================================================
# TRANSITION RULES
# =============================================================================

REVIEW_TRANSITIONS: Dict[str, List[str]] = {
    CountStatus.PENDING: [
        CountStatus.APPROVED,
        CountStatus.REJECTED,
        CountStatus.RECOUNT_REQUESTED,
    ],
    CountStatus.APPROVED: [],           # Terminal
    CountStatus.REJECTED: [],           # Terminal
    CountStatus.RECOUNT_REQUESTED: [],  # Terminal
}

TRANSITION_ACTIONS: Dict[tuple, str] = {
    (CountStatus.PENDING, CountStatus.APPROVED): "Approve",
    (CountStatus.PENDING, CountStatus.REJECTED): "Reject",
    (CountStatus.PENDING, CountStatus.RECOUNT_REQUESTED): "Request Recount",
}


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def can_transition(current_status: str, new_status: str) -> bool:
    """Check if a transition is allowed."""
    return new_status in REVIEW_TRANSITIONS.get(current_status, [])


def get_allowed_transitions(current_status: str) -> List[str]:
    """Get list of statuses reachable from the current status."""
    return REVIEW_TRANSITIONS.get(current_status, [])


def is_reviewable(status: str) -> bool:
    """Can a review action be taken on a count in this status?"""
    return status == CountStatus.PENDING


def is_terminal(status: str) -> bool:
    return not REVIEW_TRANSITIONS.get(status)


def validate_transition(current_status: str, new_status: str) -> None:
    """Raise ValidationError unless current_status -> new_status is legal."""
    if can_transition(current_status, new_status):
        return

    current = getattr(current_status, "value", current_status)
    if is_terminal(current_status):
        raise ValidationError(
            f"Count is not in reviewable state (current status: {current})"
        )

    allowed = [getattr(s, "value", s) for s in get_allowed_transitions(current_status)]
    raise ValidationError(
        f"Cannot change count from {current} to {getattr(new_status, 'value', new_status)}. "
        f"Allowed transitions: {', '.join(allowed)}"
    )


def _apply(
    count: InventoryCount,
    new_status: CountStatus,
    reviewer_id: UUID,
    notes: Optional[str],
    now: Optional[datetime],
) -> InventoryCount:
    validate_transition(count.status, new_status)

    previous = count.status
    count.status = new_status
    count.reviewed_by = reviewer_id
    count.reviewed_at = now or datetime.now(timezone.utc)
    count.review_notes = notes

    logger.info(
        f"Count {count.id} {TRANSITION_ACTIONS[(previous, new_status)].lower()}: "
        f"{getattr(previous, 'value', previous)} -> {new_status.value} by {reviewer_id}"
    )
    return count


# =============================================================================
# REVIEW ACTIONS
# =============================================================================

def approve(
    count: InventoryCount,
    reviewer_id: UUID,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> InventoryCount:
    """Accept a pending count as final."""
    return _apply(count, CountStatus.APPROVED, reviewer_id, notes, now)


def reject(
    count: InventoryCount,
    reviewer_id: UUID,
    notes: str,
    now: Optional[datetime] = None,
) -> InventoryCount:
    """Reject a pending count. A reason is mandatory."""
    if not is_reviewable(count.status):
        validate_transition(count.status, CountStatus.REJECTED)
    if notes is None or not notes.strip():
        raise ValidationError("Notes are required to reject a count")
    return _apply(count, CountStatus.REJECTED, reviewer_id, notes.strip(), now)


def request_recount(
    count: InventoryCount,
    reviewer_id: UUID,
    next_round_exists: bool,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> InventoryCount:
    """
    Release the next round for counting.

    Args:
        count: The pending count being reviewed
        reviewer_id: Administrator taking the action
        next_round_exists: Whether round count_number+1 is already recorded
            for the same product, warehouse and cutoff date
        notes: Optional instructions for the recount
    """
    if not is_reviewable(count.status):
        validate_transition(count.status, CountStatus.RECOUNT_REQUESTED)

    if next_round_exists:
        raise ValidationError(
            f"Cannot request recount: later round already recorded "
            f"(count {count.count_number + 1} exists)"
        )

    if count.count_number >= MAX_COUNT_NUMBER:
        raise ValidationError(
            f"Cannot request recount: count {count.count_number} is the "
            f"final round, no further recount possible"
        )

    return _apply(count, CountStatus.RECOUNT_REQUESTED, reviewer_id, notes, now)
