"""
Filter/query builder for listing subscriptions.

Turns a SubscriptionFilter into SQLAlchemy statements. Every value
reaches the database as a bound parameter; no SQL text is assembled
from input.
"""

from sqlalchemy import ColumnElement, Select, func, select

from app.domain.subscriptions.entities import SortOrder, SubscriptionFilter, as_utc
from app.infrastructure.subscriptions.models import SubscriptionModel


def build_conditions(criteria: SubscriptionFilter) -> list[ColumnElement[bool]]:
    """Return the AND-ed predicate terms for a filter.

    The owner restriction is always first. ``from_date`` after
    ``to_date`` simply matches nothing.
    """
    conditions: list[ColumnElement[bool]] = [
        SubscriptionModel.user_id == criteria.owner_id
    ]

    if criteria.from_date is not None:
        conditions.append(SubscriptionModel.next_billing_at >= as_utc(criteria.from_date))
    if criteria.to_date is not None:
        conditions.append(SubscriptionModel.next_billing_at <= as_utc(criteria.to_date))
    if criteria.category is not None:
        conditions.append(SubscriptionModel.category == criteria.category)
    if criteria.payment_method is not None:
        conditions.append(SubscriptionModel.payment_method == criteria.payment_method)
    if criteria.is_paused is not None:
        conditions.append(SubscriptionModel.is_paused == criteria.is_paused)

    return conditions


def build_page_query(criteria: SubscriptionFilter) -> Select:
    """Return the ordered, windowed SELECT for one page."""
    if criteria.order is SortOrder.DESC:
        ordering = (SubscriptionModel.next_billing_at.desc(), SubscriptionModel.id.desc())
    else:
        ordering = (SubscriptionModel.next_billing_at.asc(), SubscriptionModel.id.asc())

    return (
        select(SubscriptionModel)
        .where(*build_conditions(criteria))
        .order_by(*ordering)
        .limit(criteria.limit)
        .offset(criteria.offset)
    )


def build_count_query(criteria: SubscriptionFilter) -> Select:
    """Return a COUNT over the same predicate, without the window."""
    return (
        select(func.count())
        .select_from(SubscriptionModel)
        .where(*build_conditions(criteria))
    )
