"""
Use case: Summarize an owner's recurring spending.

Input: GetSubscriptionStatsQuery (owner_id, currency)
Output: SubscriptionStats
Side effects: None (read-only query).
Failure cases: None beyond persistence failures.
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from app.application.subscriptions.dtos import GetSubscriptionStatsQuery
from app.domain.subscriptions.billing import SubscriptionStats, summarize
from app.domain.subscriptions.ports import SubscriptionRepository

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GetSubscriptionStatsUseCase:
    """Loads the owner's subscriptions and aggregates them."""

    def __init__(
        self,
        subscription_repo: SubscriptionRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the use case.

        Args:
            subscription_repo: Repository for reading subscriptions.
            clock: Returns the current timezone-aware time.
        """
        self._subscription_repo = subscription_repo
        self._clock = clock

    async def execute(self, query: GetSubscriptionStatsQuery) -> SubscriptionStats:
        """Run the stats use case."""
        subscriptions = await self._subscription_repo.list_for_owner(query.owner_id)
        logger.debug(
            "Summarizing %d subscriptions for owner=%s in %s",
            len(subscriptions),
            query.owner_id,
            query.currency.value,
        )
        return summarize(subscriptions, query.currency, self._clock())
