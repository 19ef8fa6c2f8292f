"""
Domain entities for the subscriptions bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class BillingCycle(str, Enum):
    """How often a subscription renews."""

    MONTHLY = "monthly"
    WEEKLY = "weekly"
    YEARLY = "yearly"
    CUSTOM = "custom"


class Currency(str, Enum):
    """Supported billing currencies."""

    KRW = "KRW"
    USD = "USD"
    EUR = "EUR"
    JPY = "JPY"
    GBP = "GBP"


class PaymentMethod(str, Enum):
    """Known payment methods. ``OTHER`` covers anything else."""

    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    BANK_TRANSFER = "bank_transfer"
    PAYPAL = "paypal"
    MOBILE_PAYMENT = "mobile_payment"
    OTHER = "other"


class SortOrder(str, Enum):
    """Ordering direction for ``next_billing_at``."""

    ASC = "asc"
    DESC = "desc"


DEFAULT_CURRENCY = Currency.KRW
DEFAULT_INTERVAL_COUNT = 1
MIN_INTERVAL_COUNT = 1
MAX_INTERVAL_COUNT = 12


@dataclass(frozen=True)
class Subscription:
    """A recurring payment owned by a single user.

    ``id``, ``user_id`` and ``created_at`` are assigned at creation
    and never change afterwards.
    """

    id: str
    user_id: str
    name: str
    price: float
    currency: Currency
    billing_cycle: BillingCycle
    interval_count: int
    next_billing_at: datetime
    is_paused: bool
    created_at: datetime
    payment_method: Optional[PaymentMethod] = None
    category: Optional[str] = None
    memo: Optional[str] = None

    def is_owned_by(self, owner_id: str) -> bool:
        """Return True when ``owner_id`` owns this subscription."""
        return self.user_id == owner_id


@dataclass(frozen=True)
class NewSubscription:
    """Validated data for a subscription that does not exist yet.

    Defaults mirror the create contract: KRW, interval of one, active.
    """

    user_id: str
    name: str
    price: float
    billing_cycle: BillingCycle
    next_billing_at: datetime
    currency: Currency = DEFAULT_CURRENCY
    interval_count: int = DEFAULT_INTERVAL_COUNT
    is_paused: bool = False
    payment_method: Optional[PaymentMethod] = None
    category: Optional[str] = None
    memo: Optional[str] = None


# Attributes a partial update may touch. Identity and ownership are absent on purpose.
MUTABLE_FIELDS = frozenset(
    {
        "name",
        "price",
        "currency",
        "billing_cycle",
        "interval_count",
        "next_billing_at",
        "payment_method",
        "category",
        "memo",
        "is_paused",
    }
)


@dataclass(frozen=True)
class SubscriptionChanges:
    """A partial update holding only the attributes the caller supplied.

    An attribute missing from ``values`` is left untouched; there is no
    sentinel for "unset".
    """

    values: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        unknown = set(self.values) - MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Not updatable: {', '.join(sorted(unknown))}")

    def is_empty(self) -> bool:
        return not self.values


@dataclass(frozen=True)
class SubscriptionFilter:
    """Owner-scoped list criteria plus the pagination window.

    Every optional criterion is ignored when None.
    """

    owner_id: str
    from_date: Optional[datetime] = None
    to_date: Optional[datetime] = None
    category: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    is_paused: Optional[bool] = None
    order: SortOrder = SortOrder.ASC
    limit: int = 20
    offset: int = 0


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
