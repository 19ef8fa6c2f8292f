"""
Use case: Create a subscription for the calling owner.

Input: CreateSubscriptionCommand (owner id + validated attributes)
Output: Subscription with server-assigned id and created_at
Side effects: Inserts one row.
Failure cases: ConflictError, ConstraintError (classified at the boundary).
"""

import logging

from app.application.subscriptions.dtos import CreateSubscriptionCommand
from app.domain.subscriptions.entities import NewSubscription, Subscription
from app.domain.subscriptions.ports import SubscriptionRepository

logger = logging.getLogger(__name__)


class CreateSubscriptionUseCase:
    """Injects the owner id into validated input and persists it."""

    def __init__(self, subscription_repo: SubscriptionRepository) -> None:
        self._subscription_repo = subscription_repo

    async def execute(self, command: CreateSubscriptionCommand) -> Subscription:
        """Run the create use case.

        Args:
            command: Owner id and the caller's validated attributes.

        Returns:
            The persisted subscription.
        """
        new = NewSubscription(user_id=command.owner_id, **command.attributes)
        created = await self._subscription_repo.create(new)
        logger.info("Created subscription id=%s owner=%s", created.id, created.user_id)
        return created
