"""
Use case: Delete one of the owner's subscriptions.

Input: DeleteSubscriptionCommand (subscription_id, owner_id)
Output: None
Side effects: Deletes at most one row.
Failure cases: NotFoundError when no owned row matches, including
    a repeated delete of the same id.
"""

import logging

from app.application.subscriptions.dtos import DeleteSubscriptionCommand
from app.domain.subscriptions.errors import NotFoundError
from app.domain.subscriptions.ports import SubscriptionRepository

logger = logging.getLogger(__name__)


class DeleteSubscriptionUseCase:
    """Removes a subscription scoped by id and owner."""

    def __init__(self, subscription_repo: SubscriptionRepository) -> None:
        self._subscription_repo = subscription_repo

    async def execute(self, command: DeleteSubscriptionCommand) -> None:
        """Run the delete use case.

        Raises:
            NotFoundError: If no owned subscription has this id.
        """
        deleted = await self._subscription_repo.delete(
            command.subscription_id, command.owner_id
        )
        if not deleted:
            raise NotFoundError(command.subscription_id)
        logger.info("Deleted subscription id=%s", command.subscription_id)
