"""
Data Transfer Objects for the subscriptions application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.domain.subscriptions.entities import (
    Currency,
    PaymentMethod,
    SortOrder,
    Subscription,
)


@dataclass(frozen=True)
class ListSubscriptionsQuery:
    """Input DTO for listing an owner's subscriptions.

    Attributes:
        owner_id: Caller identity; results never leave this scope.
        from_date: Inclusive lower bound on the next billing date.
        to_date: Inclusive upper bound on the next billing date.
        category: Exact category match.
        payment_method: Exact payment method match.
        is_paused: Exact pause-state match. None includes both states.
        order: Direction for the next-billing-date ordering.
        limit: Page size (1-100).
        offset: Rows skipped before the page starts.
    """

    owner_id: str
    from_date: datetime | None = None
    to_date: datetime | None = None
    category: str | None = None
    payment_method: PaymentMethod | None = None
    is_paused: bool | None = None
    order: SortOrder = SortOrder.ASC
    limit: int = 20
    offset: int = 0


@dataclass(frozen=True)
class Pagination:
    """Pagination window echoed back with a page of results."""

    limit: int
    offset: int
    has_more: bool


@dataclass(frozen=True)
class SubscriptionPage:
    """Output DTO for a list request."""

    items: list[Subscription]
    total: int
    pagination: Pagination


@dataclass(frozen=True)
class CreateSubscriptionCommand:
    """Input DTO for creating a subscription.

    Attributes:
        owner_id: Identity the new record is assigned to.
        attributes: Validated fields, defaults applied. Fields the caller
            left out are absent from the mapping rather than None.
    """

    owner_id: str
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class GetSubscriptionQuery:
    """Input DTO for fetching one subscription."""

    subscription_id: str
    owner_id: str


@dataclass(frozen=True)
class UpdateSubscriptionCommand:
    """Input DTO for a partial update.

    Attributes:
        subscription_id: Target record.
        owner_id: Caller identity; only the owner's record can match.
        changes: Only the fields present in the request payload.
    """

    subscription_id: str
    owner_id: str
    changes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DeleteSubscriptionCommand:
    """Input DTO for deleting one subscription."""

    subscription_id: str
    owner_id: str


@dataclass(frozen=True)
class GetSubscriptionStatsQuery:
    """Input DTO for the spending summary."""

    owner_id: str
    currency: Currency = Currency.KRW
