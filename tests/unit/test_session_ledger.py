"""Tests for the SessionLedger: append-only, outcome-tagged, running total."""

from __future__ import annotations

from datetime import timedelta

import pytest
from pydantic import ValidationError

from focusloop.core.ledger import InvalidOutcomeError, SessionLedger
from focusloop.models.intervals import IntervalKind, IntervalOutcome


class TestAddInterval:
    def test_indices_are_sequential(self, ledger: SessionLedger):
        assert ledger.add_interval(1500, IntervalKind.WORK) == 0
        assert ledger.add_interval(300, IntervalKind.BREAK) == 1
        assert len(ledger) == 2

    def test_new_interval_is_pending(self, ledger: SessionLedger):
        idx = ledger.add_interval(1500, IntervalKind.WORK)
        interval = ledger.get(idx)
        assert interval is not None
        assert interval.outcome == IntervalOutcome.PENDING
        assert interval.kind == IntervalKind.WORK

    def test_end_time_is_start_plus_duration(self, ledger: SessionLedger):
        idx = ledger.add_interval(1500, IntervalKind.WORK)
        interval = ledger.get(idx)
        assert interval.end_time - interval.start_time == timedelta(seconds=1500)
        assert interval.start_time.strftime("%H:%M") == "14:00"

    def test_adding_does_not_change_total(self, ledger: SessionLedger):
        ledger.add_interval(1500, IntervalKind.WORK)
        assert ledger.total_completed_seconds == 0

    def test_zero_duration_rejected(self, ledger: SessionLedger):
        with pytest.raises(ValidationError):
            ledger.add_interval(0, IntervalKind.WORK)


class TestOutcomes:
    def test_mark_completed_adds_duration(self, ledger: SessionLedger):
        idx = ledger.add_interval(1500, IntervalKind.WORK)
        ledger.mark_completed(idx)
        assert ledger.get(idx).completed
        assert ledger.total_completed_seconds == 1500

    def test_mark_completed_twice_counts_once(self, ledger: SessionLedger):
        idx = ledger.add_interval(120, IntervalKind.WORK)
        ledger.mark_completed(idx)
        ledger.mark_completed(idx)
        assert ledger.total_completed_seconds == 120
        assert ledger.completed_count == 1

    def test_mark_cancelled_leaves_total(self, ledger: SessionLedger):
        idx = ledger.add_interval(1500, IntervalKind.WORK)
        ledger.mark_cancelled(idx)
        assert ledger.get(idx).cancelled
        assert ledger.total_completed_seconds == 0
        assert ledger.cancelled_count == 1

    def test_out_of_range_is_a_noop(self, ledger: SessionLedger):
        ledger.add_interval(60, IntervalKind.WORK)
        ledger.mark_completed(5)
        ledger.mark_cancelled(-1)
        assert ledger.total_completed_seconds == 0
        assert ledger.get(0).outcome == IntervalOutcome.PENDING

    def test_completed_cannot_become_cancelled(self, ledger: SessionLedger):
        idx = ledger.add_interval(60, IntervalKind.WORK)
        ledger.mark_completed(idx)
        with pytest.raises(InvalidOutcomeError):
            ledger.mark_cancelled(idx)
        assert ledger.total_completed_seconds == 60

    def test_cancelled_cannot_become_completed(self, ledger: SessionLedger):
        idx = ledger.add_interval(60, IntervalKind.WORK)
        ledger.mark_cancelled(idx)
        with pytest.raises(InvalidOutcomeError):
            ledger.mark_completed(idx)
        assert ledger.total_completed_seconds == 0

    def test_total_matches_sum_of_completed(self, ledger: SessionLedger):
        for seconds in (1500, 300, 1500, 300):
            ledger.add_interval(seconds, IntervalKind.WORK)
        ledger.mark_completed(0)
        ledger.mark_completed(1)
        ledger.mark_cancelled(2)
        expected = sum(iv.duration_seconds for iv in ledger.intervals if iv.completed)
        assert ledger.total_completed_seconds == expected == 1800


class TestSnapshot:
    def test_snapshot_reflects_ledger(self, ledger: SessionLedger):
        ledger.add_interval(120, IntervalKind.WORK)
        ledger.add_interval(60, IntervalKind.BREAK)
        ledger.mark_completed(0)
        snap = ledger.snapshot()
        assert len(snap.intervals) == 2
        assert snap.total_completed_seconds == 120
        assert snap.completed_count == 1
        assert snap.cancelled_count == 0

    def test_snapshot_is_frozen(self, ledger: SessionLedger):
        ledger.add_interval(120, IntervalKind.WORK)
        snap = ledger.snapshot()
        with pytest.raises(ValidationError):
            snap.total_completed_seconds = 999

    def test_snapshot_unaffected_by_later_updates(self, ledger: SessionLedger):
        ledger.add_interval(120, IntervalKind.WORK)
        snap = ledger.snapshot()
        ledger.mark_completed(0)
        assert snap.intervals[0].outcome == IntervalOutcome.PENDING
        assert snap.total_completed_seconds == 0

    def test_intervals_are_in_insertion_order(self, ledger: SessionLedger):
        ledger.add_interval(10, IntervalKind.WORK)
        ledger.add_interval(20, IntervalKind.BREAK)
        ledger.add_interval(30, IntervalKind.WORK)
        assert [iv.duration_seconds for iv in ledger.intervals] == [10, 20, 30]
        assert [iv.index for iv in ledger.intervals] == [0, 1, 2]

    def test_default_clock_is_timezone_aware(self):
        ledger = SessionLedger()
        ledger.add_interval(60, IntervalKind.WORK)
        assert ledger.get(0).start_time.tzinfo is not None
