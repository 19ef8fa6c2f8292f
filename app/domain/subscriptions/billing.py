"""
Billing-cycle arithmetic for subscription statistics.

Converts each cycle into a monthly-equivalent cost and aggregates
an owner's subscriptions into a summary. Pure functions, no IO.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from app.domain.subscriptions.entities import BillingCycle, Currency, Subscription

WEEKS_PER_YEAR = 52
MONTHS_PER_YEAR = 12
UNCATEGORIZED = "uncategorized"
UPCOMING_LIMIT = 5


@dataclass(frozen=True)
class UpcomingBilling:
    """A subscription due for its next charge."""

    id: str
    name: str
    price: float
    next_billing_at: datetime


@dataclass(frozen=True)
class SubscriptionStats:
    """Spending summary for one owner in one currency."""

    currency: Currency
    total_monthly: float
    total_yearly: float
    active_count: int
    paused_count: int
    by_category: dict[str, float] = field(default_factory=dict)
    next_billings: list[UpcomingBilling] = field(default_factory=list)


def monthly_cost(price: float, cycle: BillingCycle, interval_count: int) -> float:
    """Return what one renewal costs per month.

    ``custom`` cycles are counted as every ``interval_count`` months.
    """
    if cycle is BillingCycle.WEEKLY:
        per_month = price * WEEKS_PER_YEAR / MONTHS_PER_YEAR
    elif cycle is BillingCycle.YEARLY:
        per_month = price / MONTHS_PER_YEAR
    else:
        per_month = price
    return per_month / interval_count


def summarize(
    subscriptions: Iterable[Subscription],
    currency: Currency,
    now: datetime,
    upcoming_limit: int = UPCOMING_LIMIT,
) -> SubscriptionStats:
    """Aggregate subscriptions into monthly/yearly totals and upcoming charges.

    Totals and the per-category breakdown cover active subscriptions in
    ``currency`` only. Counts and upcoming charges span all currencies.

    Args:
        subscriptions: All subscriptions of a single owner.
        currency: Currency the totals are expressed in.
        now: Reference time for upcoming charges (timezone-aware).
        upcoming_limit: Maximum number of upcoming charges returned.
    """
    active_count = 0
    paused_count = 0
    total = 0.0
    by_category: dict[str, float] = defaultdict(float)
    upcoming: list[Subscription] = []

    for sub in subscriptions:
        if sub.is_paused:
            paused_count += 1
            continue
        active_count += 1
        if sub.next_billing_at >= now:
            upcoming.append(sub)
        if sub.currency is not currency:
            continue
        cost = monthly_cost(sub.price, sub.billing_cycle, sub.interval_count)
        total += cost
        by_category[sub.category or UNCATEGORIZED] += cost

    upcoming.sort(key=lambda s: s.next_billing_at)
    total_monthly = round(total, 2)
    return SubscriptionStats(
        currency=currency,
        total_monthly=total_monthly,
        total_yearly=round(total * MONTHS_PER_YEAR, 2),
        active_count=active_count,
        paused_count=paused_count,
        by_category={name: round(value, 2) for name, value in by_category.items()},
        next_billings=[
            UpcomingBilling(
                id=s.id,
                name=s.name,
                price=s.price,
                next_billing_at=s.next_billing_at,
            )
            for s in upcoming[:upcoming_limit]
        ],
    )
