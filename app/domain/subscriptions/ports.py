"""
Port interfaces (ABCs) for the subscriptions bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from app.domain.subscriptions.entities import (
    NewSubscription,
    Subscription,
    SubscriptionChanges,
    SubscriptionFilter,
)


class SubscriptionRepository(ABC):
    """Port for persisting and retrieving subscriptions.

    Each method is atomic per call. Constraint violations raised by the
    store propagate unchanged; they are classified by the caller's
    error boundary.
    """

    @abstractmethod
    async def create(self, subscription: NewSubscription) -> Subscription:
        """Persist a new subscription and return it with server-assigned fields."""
        raise NotImplementedError

    @abstractmethod
    async def get(self, subscription_id: str) -> Optional[Subscription]:
        """Return a subscription by id regardless of owner, or None."""
        raise NotImplementedError

    @abstractmethod
    async def list_page(self, criteria: SubscriptionFilter) -> list[Subscription]:
        """Return one page of subscriptions matching the filter.

        Args:
            criteria: Owner scope, optional filters, ordering and window.

        Returns:
            At most ``criteria.limit`` subscriptions, ordered by next billing date.
        """
        raise NotImplementedError

    @abstractmethod
    async def count(self, criteria: SubscriptionFilter) -> int:
        """Return how many subscriptions match the filter, ignoring the window."""
        raise NotImplementedError

    @abstractmethod
    async def list_for_owner(self, owner_id: str) -> list[Subscription]:
        """Return every subscription the owner holds."""
        raise NotImplementedError

    @abstractmethod
    async def update(
        self, subscription_id: str, owner_id: str, changes: SubscriptionChanges
    ) -> Optional[Subscription]:
        """Apply a partial update to the owner's subscription.

        Returns:
            The updated subscription, or None when no row matched.
        """
        raise NotImplementedError

    @abstractmethod
    async def delete(self, subscription_id: str, owner_id: str) -> bool:
        """Delete the owner's subscription. Returns False when no row matched."""
        raise NotImplementedError
