"""Balance calculator — used / pending / remaining days derived from requests.

Balances are never stored. They are recomputed from the current request set
on every call, so denying or cancelling a pending request releases its days
simply by no longer being counted.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Protocol

from vacation_tracker.common.constants import RequestStatus
from vacation_tracker.vacation.schemas import BalanceOut, StatusCounts, UsageSummary


class HasAllocation(Protocol):
    total_days_per_year: int


class HasDays(Protocol):
    status: Any
    days_requested: int


def round_half_up(value: Decimal) -> int:
    """Round .5 away from zero, as the dashboard always has."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _percent(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return round_half_up(Decimal(part) * 100 / Decimal(whole))


def _sum_days(requests: Iterable[HasDays], status: RequestStatus) -> int:
    return sum(r.days_requested for r in requests if RequestStatus(r.status) == status)


def compute_balance(employee: HasAllocation, requests: Iterable[HasDays]) -> BalanceOut:
    """Derive an employee's balance from their requests.

    Pending days are reserved against the allocation. The remainder is not
    clamped: a negative value means the employee is over-allocated.
    """
    requests = list(requests)
    total = employee.total_days_per_year
    used = _sum_days(requests, RequestStatus.approved)
    pending = _sum_days(requests, RequestStatus.pending)
    return BalanceOut(
        total_days=total,
        used_days=used,
        pending_days=pending,
        remaining_days=total - used - pending,
        usage_percent=_percent(used, total),
    )


def count_by_status(requests: Iterable[HasDays]) -> StatusCounts:
    counts = {status.value: 0 for status in RequestStatus}
    total = 0
    for r in requests:
        counts[RequestStatus(r.status).value] += 1
        total += 1
    return StatusCounts(all=total, **counts)


def summarize_usage(balances: Iterable[BalanceOut]) -> UsageSummary:
    """Aggregate usage over several employees' balances.

    The average is the mean of per-employee usage ratios, so a small
    allocation weighs as much as a large one. Employees with no allocation
    contribute zero usage.
    """
    balances = list(balances)
    if not balances:
        return UsageSummary()

    ratio_sum = sum(
        (Decimal(b.used_days) / Decimal(b.total_days) if b.total_days > 0 else Decimal(0))
        for b in balances
    )
    return UsageSummary(
        total_employees=len(balances),
        total_vacation_days=sum(b.used_days for b in balances),
        average_usage_percent=round_half_up(ratio_sum / len(balances) * 100),
    )
