"""
Use case: Partially update one of the owner's subscriptions.

Input: UpdateSubscriptionCommand (id, owner, present fields only)
Output: The updated Subscription
Side effects: Updates at most one row.
Failure cases: NotFoundError when no owned row matches,
    ConflictError on a duplicate name (classified at the boundary).
"""

import logging

from app.application.subscriptions.dtos import UpdateSubscriptionCommand
from app.domain.subscriptions.entities import Subscription, SubscriptionChanges
from app.domain.subscriptions.errors import NotFoundError
from app.domain.subscriptions.ports import SubscriptionRepository

logger = logging.getLogger(__name__)


class UpdateSubscriptionUseCase:
    """Applies only the fields the caller supplied."""

    def __init__(self, subscription_repo: SubscriptionRepository) -> None:
        self._subscription_repo = subscription_repo

    async def execute(self, command: UpdateSubscriptionCommand) -> Subscription:
        """Run the update use case.

        Raises:
            NotFoundError: If the owner has no subscription with this id.
        """
        changes = SubscriptionChanges(values=dict(command.changes))
        updated = await self._subscription_repo.update(
            command.subscription_id, command.owner_id, changes
        )
        if updated is None:
            raise NotFoundError(command.subscription_id)

        logger.info(
            "Updated subscription id=%s fields=%s",
            updated.id,
            ",".join(sorted(changes.values)) or "-",
        )
        return updated
