"""
Pydantic schemas for subscription API request/response validation.

These schemas enforce input validation and define the API contract.
JSON uses camelCase; Python attributes stay snake_case.
Optional fields may be omitted but never sent as null.
No business logic belongs here.
"""

from datetime import datetime
from typing import Annotated, Any, Optional, TypeVar

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from app.domain.subscriptions.entities import (
    DEFAULT_CURRENCY,
    DEFAULT_INTERVAL_COUNT,
    MAX_INTERVAL_COUNT,
    MIN_INTERVAL_COUNT,
    BillingCycle,
    Currency,
    PaymentMethod,
    SortOrder,
    Subscription,
    as_utc,
)

DEFAULT_PAGE_LIMIT = 20
MAX_PAGE_LIMIT = 100
MAX_OFFSET = 2**31 - 1
MAX_PRICE = 10**10


def _at_most_two_decimals(value: float) -> float:
    if round(value, 2) != value:
        raise PydanticCustomError(
            "decimal_places", "Price must have at most 2 decimal places"
        )
    return value


def _reject_null(value: Any) -> Any:
    if value is None:
        raise PydanticCustomError("not_null", "Field may be omitted but not null")
    return value


T = TypeVar("T")

# Absent means "not given"; an explicit null is a validation error.
Omittable = Annotated[Optional[T], AfterValidator(_reject_null)]

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
Category = Annotated[str, StringConstraints(strip_whitespace=True, max_length=50)]
Memo = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]
Price = Annotated[
    float,
    Field(strict=True, gt=0, lt=MAX_PRICE, allow_inf_nan=False),
    AfterValidator(_at_most_two_decimals),
]
IntervalCount = Annotated[int, Field(ge=MIN_INTERVAL_COUNT, le=MAX_INTERVAL_COUNT)]
BillingDate = Annotated[datetime, AfterValidator(as_utc)]
# JSON bodies take real booleans only; query strings are coerced separately.
StrictFlag = Annotated[bool, Field(strict=True)]


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class SubscriptionCreateRequest(CamelModel):
    """Request schema for creating a subscription.

    Attributes:
        name: Display name (1-100 chars after trimming).
        price: Positive amount with at most 2 decimal places.
        currency: Billing currency, KRW when omitted.
        billing_cycle: monthly, weekly, yearly or custom.
        interval_count: Cycle multiplier (1-12), 1 when omitted.
        next_billing_at: ISO-8601 date or datetime, stored in UTC.
        payment_method: Optional known payment method.
        category: Optional free text (max 50 chars).
        memo: Optional free text (max 500 chars).
        is_paused: Pause state, false when omitted.
    """

    name: Name
    price: Price
    currency: Currency = DEFAULT_CURRENCY
    billing_cycle: BillingCycle
    interval_count: IntervalCount = DEFAULT_INTERVAL_COUNT
    next_billing_at: BillingDate
    payment_method: Omittable[PaymentMethod] = None
    category: Omittable[Category] = None
    memo: Omittable[Memo] = None
    is_paused: StrictFlag = False

    def to_attributes(self) -> dict[str, Any]:
        """Return validated fields with defaults, dropping omitted optionals."""
        return self.model_dump(exclude_none=True)


class SubscriptionUpdateRequest(CamelModel):
    """Request schema for a partial update. Every field is optional."""

    name: Omittable[Name] = None
    price: Omittable[Price] = None
    currency: Omittable[Currency] = None
    billing_cycle: Omittable[BillingCycle] = None
    interval_count: Omittable[IntervalCount] = None
    next_billing_at: Omittable[BillingDate] = None
    payment_method: Omittable[PaymentMethod] = None
    category: Omittable[Category] = None
    memo: Omittable[Memo] = None
    is_paused: Omittable[StrictFlag] = None

    def to_changes(self) -> dict[str, Any]:
        """Return only the fields present in the payload."""
        return self.model_dump(exclude_unset=True)


class SubscriptionListParams(CamelModel):
    """Query-string parameters for listing subscriptions.

    Values arrive as strings and are coerced: numbers, booleans
    (true/false/1/0/yes/no/on/off) and ISO-8601 dates.
    """

    from_: Optional[BillingDate] = Field(default=None, alias="from")
    to: Optional[BillingDate] = None
    category: Optional[str] = None
    method: Optional[PaymentMethod] = None
    is_paused: Optional[bool] = None
    limit: int = Field(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT)
    offset: int = Field(default=0, ge=0, le=MAX_OFFSET)
    order: SortOrder = SortOrder.ASC


class SubscriptionResponse(CamelModel):
    """A stored subscription as returned by the API."""

    id: str
    user_id: str
    name: str
    price: float
    currency: Currency
    billing_cycle: BillingCycle
    interval_count: int
    next_billing_at: datetime
    payment_method: Optional[PaymentMethod] = None
    category: Optional[str] = None
    memo: Optional[str] = None
    is_paused: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, subscription: Subscription) -> "SubscriptionResponse":
        return cls.model_validate(subscription, from_attributes=True)


class PaginationSchema(CamelModel):
    """Pagination window echoed back with a page."""

    limit: int
    offset: int
    has_more: bool


class SubscriptionPageResponse(CamelModel):
    """Response schema for the list endpoint."""

    items: list[SubscriptionResponse]
    total: int
    pagination: PaginationSchema


class UpcomingBillingItem(CamelModel):
    """A subscription due for its next charge."""

    id: str
    name: str
    price: float
    next_billing_at: datetime


class SubscriptionStatsResponse(CamelModel):
    """Response schema for the stats endpoint."""

    total_monthly: float
    total_yearly: float
    currency: Currency
    active_count: int
    paused_count: int
    by_category: dict[str, float]
    next_billings: list[UpcomingBillingItem]


class ErrorDetail(BaseModel):
    """One invalid input field."""

    path: str
    message: str


class ErrorBody(BaseModel):
    message: str
    details: Optional[list[ErrorDetail]] = None
    field: Optional[str] = None


class ErrorResponse(BaseModel):
    """Standard error response returned by all error handlers."""

    error: ErrorBody
