"""
Use case: List an owner's subscriptions with filters and pagination.

Input: ListSubscriptionsQuery
Output: SubscriptionPage (items, total, pagination window with has_more)
Side effects: None (read-only query).
Failure cases: None beyond persistence failures.
"""

import asyncio
import logging

from app.application.subscriptions.dtos import (
    ListSubscriptionsQuery,
    Pagination,
    SubscriptionPage,
)
from app.domain.subscriptions.entities import SubscriptionFilter
from app.domain.subscriptions.ports import SubscriptionRepository

logger = logging.getLogger(__name__)


class ListSubscriptionsUseCase:
    """Orchestrates a filtered, paginated read.

    The page read and the total count are independent queries and
    run concurrently; the envelope is built once both complete.
    """

    def __init__(self, subscription_repo: SubscriptionRepository) -> None:
        self._subscription_repo = subscription_repo

    async def execute(self, query: ListSubscriptionsQuery) -> SubscriptionPage:
        """Run the list use case.

        Args:
            query: Validated list parameters.

        Returns:
            One page of subscriptions with the total match count.
        """
        criteria = SubscriptionFilter(
            owner_id=query.owner_id,
            from_date=query.from_date,
            to_date=query.to_date,
            category=query.category,
            payment_method=query.payment_method,
            is_paused=query.is_paused,
            order=query.order,
            limit=query.limit,
            offset=query.offset,
        )
        logger.debug(
            "Listing subscriptions: owner=%s limit=%d offset=%d order=%s",
            criteria.owner_id,
            criteria.limit,
            criteria.offset,
            criteria.order.value,
        )

        items, total = await asyncio.gather(
            self._subscription_repo.list_page(criteria),
            self._subscription_repo.count(criteria),
        )

        return SubscriptionPage(
            items=items,
            total=total,
            pagination=Pagination(
                limit=criteria.limit,
                offset=criteria.offset,
                has_more=criteria.offset + len(items) < total,
            ),
        )
