"""
FastAPI router for the subscriptions bounded context.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

from fastapi import APIRouter, Depends, Query, Response, status

from app.application.subscriptions.create_subscription import CreateSubscriptionUseCase
from app.application.subscriptions.delete_subscription import DeleteSubscriptionUseCase
from app.application.subscriptions.dtos import (
    CreateSubscriptionCommand,
    DeleteSubscriptionCommand,
    GetSubscriptionQuery,
    GetSubscriptionStatsQuery,
    ListSubscriptionsQuery,
    UpdateSubscriptionCommand,
)
from app.application.subscriptions.get_subscription import GetSubscriptionUseCase
from app.application.subscriptions.get_subscription_stats import (
    GetSubscriptionStatsUseCase,
)
from app.application.subscriptions.list_subscriptions import ListSubscriptionsUseCase
from app.application.subscriptions.update_subscription import UpdateSubscriptionUseCase
from app.domain.subscriptions.entities import Currency
from app.interfaces.subscriptions.dependencies import (
    get_create_subscription_use_case,
    get_current_owner_id,
    get_delete_subscription_use_case,
    get_get_subscription_use_case,
    get_list_params,
    get_list_subscriptions_use_case,
    get_subscription_stats_use_case,
    get_update_subscription_use_case,
)
from app.interfaces.subscriptions.schemas import (
    ErrorResponse,
    PaginationSchema,
    SubscriptionCreateRequest,
    SubscriptionListParams,
    SubscriptionPageResponse,
    SubscriptionResponse,
    SubscriptionStatsResponse,
    SubscriptionUpdateRequest,
    UpcomingBillingItem,
)

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.get(
    "",
    response_model=SubscriptionPageResponse,
    responses={400: {"model": ErrorResponse}},
    summary="List subscriptions",
    description=(
        "Filter by next billing date range, category, payment method and pause "
        "state. Ordered by next billing date, paginated with limit/offset."
    ),
)
async def list_subscriptions(
    params: SubscriptionListParams = Depends(get_list_params),
    owner_id: str = Depends(get_current_owner_id),
    use_case: ListSubscriptionsUseCase = Depends(get_list_subscriptions_use_case),
) -> SubscriptionPageResponse:
    """List the caller's subscriptions."""
    page = await use_case.execute(
        ListSubscriptionsQuery(
            owner_id=owner_id,
            from_date=params.from_,
            to_date=params.to,
            category=params.category,
            payment_method=params.method,
            is_paused=params.is_paused,
            order=params.order,
            limit=params.limit,
            offset=params.offset,
        )
    )
    return SubscriptionPageResponse(
        items=[SubscriptionResponse.from_entity(item) for item in page.items],
        total=page.total,
        pagination=PaginationSchema(
            limit=page.pagination.limit,
            offset=page.pagination.offset,
            has_more=page.pagination.has_more,
        ),
    )


@router.post(
    "",
    response_model=SubscriptionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Create a subscription",
)
async def create_subscription(
    request: SubscriptionCreateRequest,
    owner_id: str = Depends(get_current_owner_id),
    use_case: CreateSubscriptionUseCase = Depends(get_create_subscription_use_case),
) -> SubscriptionResponse:
    """Create a subscription owned by the caller."""
    created = await use_case.execute(
        CreateSubscriptionCommand(owner_id=owner_id, attributes=request.to_attributes())
    )
    return SubscriptionResponse.from_entity(created)


@router.get(
    "/stats",
    response_model=SubscriptionStatsResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Summarize recurring spending",
    description=(
        "Monthly and yearly totals of active subscriptions in one currency, "
        "per-category breakdown, counts and the next upcoming charges."
    ),
)
async def get_subscription_stats(
    currency: Currency = Query(default=Currency.KRW),
    owner_id: str = Depends(get_current_owner_id),
    use_case: GetSubscriptionStatsUseCase = Depends(get_subscription_stats_use_case),
) -> SubscriptionStatsResponse:
    """Summarize the caller's subscriptions."""
    stats = await use_case.execute(
        GetSubscriptionStatsQuery(owner_id=owner_id, currency=currency)
    )
    return SubscriptionStatsResponse(
        total_monthly=stats.total_monthly,
        total_yearly=stats.total_yearly,
        currency=stats.currency,
        active_count=stats.active_count,
        paused_count=stats.paused_count,
        by_category=stats.by_category,
        next_billings=[
            UpcomingBillingItem(
                id=b.id,
                name=b.name,
                price=b.price,
                next_billing_at=b.next_billing_at,
            )
            for b in stats.next_billings
        ],
    )


@router.get(
    "/{subscription_id}",
    response_model=SubscriptionResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Get a subscription",
)
async def get_subscription(
    subscription_id: str,
    owner_id: str = Depends(get_current_owner_id),
    use_case: GetSubscriptionUseCase = Depends(get_get_subscription_use_case),
) -> SubscriptionResponse:
    """Return one subscription. Unknown ids give 404, other owners' ids 403."""
    subscription = await use_case.execute(
        GetSubscriptionQuery(subscription_id=subscription_id, owner_id=owner_id)
    )
    return SubscriptionResponse.from_entity(subscription)


@router.patch(
    "/{subscription_id}",
    response_model=SubscriptionResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Update a subscription",
)
async def update_subscription(
    subscription_id: str,
    request: SubscriptionUpdateRequest,
    owner_id: str = Depends(get_current_owner_id),
    use_case: UpdateSubscriptionUseCase = Depends(get_update_subscription_use_case),
) -> SubscriptionResponse:
    """Change only the fields present in the body."""
    updated = await use_case.execute(
        UpdateSubscriptionCommand(
            subscription_id=subscription_id,
            owner_id=owner_id,
            changes=request.to_changes(),
        )
    )
    return SubscriptionResponse.from_entity(updated)


@router.delete(
    "/{subscription_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
    summary="Delete a subscription",
)
async def delete_subscription(
    subscription_id: str,
    owner_id: str = Depends(get_current_owner_id),
    use_case: DeleteSubscriptionUseCase = Depends(get_delete_subscription_use_case),
) -> Response:
    """Delete one subscription."""
    await use_case.execute(
        DeleteSubscriptionCommand(subscription_id=subscription_id, owner_id=owner_id)
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
