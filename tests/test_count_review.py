"""Tests for the count review state machine."""
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from stocktake.core.exceptions import ValidationError
from stocktake.models.inventory_count import CountStatus
from stocktake.services import count_review


REVIEWER = uuid.uuid4()
NOW = datetime(2025, 2, 1, 9, 30, tzinfo=timezone.utc)


def _count(status=CountStatus.PENDING, count_number=1):
    return SimpleNamespace(
        id=uuid.uuid4(),
        count_number=count_number,
        status=status,
        reviewed_by=None,
        reviewed_at=None,
        review_notes=None,
    )


class TestTransitionTable:

    def test_pending_reaches_every_review_outcome(self):
        assert set(count_review.get_allowed_transitions(CountStatus.PENDING)) == {
            CountStatus.APPROVED, CountStatus.REJECTED, CountStatus.RECOUNT_REQUESTED,
        }

    @pytest.mark.parametrize("status", [
        CountStatus.APPROVED, CountStatus.REJECTED, CountStatus.RECOUNT_REQUESTED,
    ])
    def test_reviewed_states_are_terminal(self, status):
        assert count_review.is_terminal(status)
        assert not count_review.is_reviewable(status)
        assert not count_review.can_transition(status, CountStatus.PENDING)

    def test_nothing_returns_to_pending(self):
        assert not count_review.can_transition(CountStatus.PENDING, CountStatus.PENDING)

    def test_illegal_move_from_pending_lists_allowed_transitions(self):
        with pytest.raises(ValidationError) as exc_info:
            count_review.validate_transition(CountStatus.PENDING, CountStatus.PENDING)
        message = exc_info.value.message
        assert "Allowed transitions" in message
        for status in ("APPROVED", "REJECTED", "RECOUNT_REQUESTED"):
            assert status in message

    def test_move_from_terminal_state(self):
        with pytest.raises(ValidationError) as exc_info:
            count_review.validate_transition(CountStatus.APPROVED, CountStatus.REJECTED)
        assert exc_info.value.message == (
            "Count is not in reviewable state (current status: APPROVED)"
        )


class TestApprove:

    def test_records_reviewer_and_time(self):
        count = count_review.approve(_count(), REVIEWER, "Looks right", now=NOW)
        assert count.status == CountStatus.APPROVED
        assert count.reviewed_by == REVIEWER
        assert count.reviewed_at == NOW
        assert count.review_notes == "Looks right"

    def test_notes_optional(self):
        count = count_review.approve(_count(), REVIEWER)
        assert count.review_notes is None
        assert count.reviewed_at is not None

    @pytest.mark.parametrize("status", [
        CountStatus.APPROVED, CountStatus.REJECTED, CountStatus.RECOUNT_REQUESTED,
    ])
    def test_already_reviewed(self, status):
        count = _count(status)
        with pytest.raises(ValidationError) as exc_info:
            count_review.approve(count, REVIEWER)
        assert f"current status: {status.value}" in exc_info.value.message
        assert count.status == status
        assert count.reviewed_by is None


class TestReject:

    def test_reject_with_notes(self):
        count = count_review.reject(_count(), REVIEWER, "  Shelf not counted  ", now=NOW)
        assert count.status == CountStatus.REJECTED
        assert count.review_notes == "Shelf not counted"

    @pytest.mark.parametrize("notes", [None, "", "   "])
    def test_notes_required(self, notes):
        count = _count()
        with pytest.raises(ValidationError) as exc_info:
            count_review.reject(count, REVIEWER, notes)
        assert exc_info.value.message == "Notes are required to reject a count"
        assert count.status == CountStatus.PENDING

    def test_state_checked_before_notes(self):
        with pytest.raises(ValidationError) as exc_info:
            count_review.reject(_count(CountStatus.APPROVED), REVIEWER, "")
        assert "not in reviewable state" in exc_info.value.message


class TestRequestRecount:

    @pytest.mark.parametrize("count_number", [1, 2])
    def test_releases_next_round(self, count_number):
        count = count_review.request_recount(
            _count(count_number=count_number), REVIEWER,
            next_round_exists=False, notes="Recount aisle 4", now=NOW,
        )
        assert count.status == CountStatus.RECOUNT_REQUESTED
        assert count.reviewed_by == REVIEWER
        assert count.review_notes == "Recount aisle 4"

    def test_final_round(self):
        count = _count(count_number=3)
        with pytest.raises(ValidationError) as exc_info:
            count_review.request_recount(count, REVIEWER, next_round_exists=False)
        assert "final round" in exc_info.value.message
        assert count.status == CountStatus.PENDING

    def test_later_round_already_recorded(self):
        with pytest.raises(ValidationError) as exc_info:
            count_review.request_recount(_count(), REVIEWER, next_round_exists=True)
        assert "later round already recorded" in exc_info.value.message

    def test_not_pending(self):
        with pytest.raises(ValidationError) as exc_info:
            count_review.request_recount(
                _count(CountStatus.REJECTED), REVIEWER, next_round_exists=False
            )
        assert "not in reviewable state" in exc_info.value.message

    def test_plain_string_status_from_database(self):
        count = count_review.request_recount(
            _count(status="PENDING"), REVIEWER, next_round_exists=False
        )
        assert count.status == CountStatus.RECOUNT_REQUESTED
