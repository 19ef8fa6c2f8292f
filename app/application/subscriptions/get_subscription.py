"""
Use case: Fetch one subscription by id.

Input: GetSubscriptionQuery (subscription_id, owner_id)
Output: Subscription
Side effects: None.
Failure cases: NotFoundError when the id is unknown,
    ForbiddenError when the record belongs to someone else.
"""

import logging

from app.application.subscriptions.dtos import GetSubscriptionQuery
from app.domain.subscriptions.entities import Subscription
from app.domain.subscriptions.errors import ForbiddenError, NotFoundError
from app.domain.subscriptions.ports import SubscriptionRepository

logger = logging.getLogger(__name__)


class GetSubscriptionUseCase:
    """Looks a subscription up by id, then checks ownership.

    Existence is checked before ownership, so a caller can tell an
    unknown id (404) from someone else's id (403). The record body is
    never returned in the second case.
    """

    def __init__(self, subscription_repo: SubscriptionRepository) -> None:
        self._subscription_repo = subscription_repo

    async def execute(self, query: GetSubscriptionQuery) -> Subscription:
        """Run the get use case.

        Raises:
            NotFoundError: If no subscription has this id.
            ForbiddenError: If the subscription is not owned by the caller.
        """
        subscription = await self._subscription_repo.get(query.subscription_id)
        if subscription is None:
            raise NotFoundError(query.subscription_id)

        if not subscription.is_owned_by(query.owner_id):
            logger.warning(
                "Owner %s denied access to subscription %s",
                query.owner_id,
                query.subscription_id,
            )
            raise ForbiddenError(query.subscription_id)

        return subscription
