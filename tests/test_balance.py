"""Tests for balance derivation and usage aggregation (pure, no DB)."""

from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace

from vacation_tracker.common.constants import RequestStatus
from vacation_tracker.vacation.balance import (
    compute_balance,
    count_by_status,
    round_half_up,
    summarize_usage,
)


def _employee(total: int = 25) -> SimpleNamespace:
    return SimpleNamespace(total_days_per_year=total)


def _req(status: RequestStatus, days: int) -> SimpleNamespace:
    return SimpleNamespace(status=status, days_requested=days)


class TestComputeBalance:

    def test_reference_figures(self):
        balance = compute_balance(
            _employee(25),
            [_req(RequestStatus.approved, 5), _req(RequestStatus.pending, 3)],
        )
        assert balance.total_days == 25
        assert balance.used_days == 5
        assert balance.pending_days == 3
        assert balance.remaining_days == 17
        assert balance.usage_percent == 20
        assert balance.is_over_allocated is False

    def test_denied_and_cancelled_are_ignored(self):
        balance = compute_balance(
            _employee(25),
            [
                _req(RequestStatus.denied, 4),
                _req(RequestStatus.cancelled, 2),
                _req(RequestStatus.approved, 1),
            ],
        )
        assert balance.used_days == 1
        assert balance.pending_days == 0
        assert balance.remaining_days == 24

    def test_denying_pending_releases_only_pending_days(self):
        before = compute_balance(
            _employee(), [_req(RequestStatus.approved, 5), _req(RequestStatus.pending, 3)],
        )
        after = compute_balance(
            _employee(), [_req(RequestStatus.approved, 5), _req(RequestStatus.denied, 3)],
        )
        assert after.used_days == before.used_days
        assert after.pending_days == before.pending_days - 3
        assert after.remaining_days == before.remaining_days + 3

    def test_remaining_is_not_clamped(self):
        balance = compute_balance(
            _employee(10),
            [_req(RequestStatus.approved, 8), _req(RequestStatus.pending, 5)],
        )
        assert balance.remaining_days == -3
        assert balance.is_over_allocated is True
        assert balance.model_dump()["is_over_allocated"] is True

    def test_zero_allocation_has_zero_usage(self):
        balance = compute_balance(_employee(0), [_req(RequestStatus.approved, 2)])
        assert balance.usage_percent == 0

    def test_usage_rounds_half_up(self):
        # 1/8 = 12.5%
        balance = compute_balance(_employee(8), [_req(RequestStatus.approved, 1)])
        assert balance.usage_percent == 13

    def test_idempotent(self):
        requests = [_req(RequestStatus.approved, 5), _req(RequestStatus.pending, 3)]
        assert compute_balance(_employee(), requests) == compute_balance(_employee(), requests)

    def test_accepts_status_strings(self):
        balance = compute_balance(_employee(), [_req("approved", 2)])
        assert balance.used_days == 2


def test_round_half_up():
    assert round_half_up(Decimal("2.5")) == 3
    assert round_half_up(Decimal("2.49")) == 2


def test_count_by_status():
    counts = count_by_status(
        [
            _req(RequestStatus.pending, 1),
            _req(RequestStatus.pending, 2),
            _req(RequestStatus.approved, 1),
            _req(RequestStatus.cancelled, 1),
        ]
    )
    assert counts.all == 4
    assert counts.pending == 2
    assert counts.approved == 1
    assert counts.denied == 0
    assert counts.cancelled == 1


class TestSummarizeUsage:

    def test_empty(self):
        summary = summarize_usage([])
        assert summary.total_employees == 0
        assert summary.total_vacation_days == 0
        assert summary.average_usage_percent == 0

    def test_mean_of_ratios(self):
        balances = [
            compute_balance(_employee(20), [_req(RequestStatus.approved, 5)]),   # 25%
            compute_balance(_employee(10), [_req(RequestStatus.approved, 5)]),   # 50%
            compute_balance(_employee(0), []),                                   # 0%
        ]
        summary = summarize_usage(balances)
        assert summary.total_employees == 3
        assert summary.total_vacation_days == 10
        assert summary.average_usage_percent == 25
