"""
Adapter: Subscription repository.

Implements SubscriptionRepository port on top of SQLAlchemy's async ORM.
Each method opens its own session, so independent calls may run
concurrently. IntegrityError is left to propagate to the error
classifier.
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.domain.subscriptions.entities import (
    NewSubscription,
    Subscription,
    SubscriptionChanges,
    SubscriptionFilter,
    as_utc,
)
from app.domain.subscriptions.ports import SubscriptionRepository
from app.infrastructure.subscriptions.models import SubscriptionModel
from app.infrastructure.subscriptions.query_builder import (
    build_count_query,
    build_page_query,
)

logger = logging.getLogger(__name__)


def _to_entity(row: SubscriptionModel) -> Subscription:
    """Map an ORM row to the domain entity, normalizing datetimes to UTC."""
    return Subscription(
        id=row.id,
        user_id=row.user_id,
        name=row.name,
        price=float(row.price),
        currency=row.currency,
        billing_cycle=row.billing_cycle,
        interval_count=row.interval_count,
        next_billing_at=as_utc(row.next_billing_at),
        payment_method=row.payment_method,
        category=row.category,
        memo=row.memo,
        is_paused=row.is_paused,
        created_at=as_utc(row.created_at),
    )


class SqlAlchemySubscriptionRepository(SubscriptionRepository):
    """SQLAlchemy implementation of the subscription repository."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create(self, subscription: NewSubscription) -> Subscription:
        """Insert a subscription with a fresh UUID and creation time."""
        row = SubscriptionModel(
            id=str(uuid4()),
            user_id=subscription.user_id,
            name=subscription.name,
            price=subscription.price,
            currency=subscription.currency,
            billing_cycle=subscription.billing_cycle,
            interval_count=subscription.interval_count,
            next_billing_at=as_utc(subscription.next_billing_at),
            payment_method=subscription.payment_method,
            category=subscription.category,
            memo=subscription.memo,
            is_paused=subscription.is_paused,
            created_at=datetime.now(timezone.utc),
        )
        async with self._session_factory() as session:
            async with session.begin():
                session.add(row)
        return _to_entity(row)

    async def get(self, subscription_id: str) -> Optional[Subscription]:
        async with self._session_factory() as session:
            row = await session.get(SubscriptionModel, subscription_id)
        return _to_entity(row) if row is not None else None

    async def list_page(self, criteria: SubscriptionFilter) -> list[Subscription]:
        async with self._session_factory() as session:
            rows = (await session.scalars(build_page_query(criteria))).all()
        return [_to_entity(row) for row in rows]

    async def count(self, criteria: SubscriptionFilter) -> int:
        async with self._session_factory() as session:
            total = await session.scalar(build_count_query(criteria))
        return int(total or 0)

    async def list_for_owner(self, owner_id: str) -> list[Subscription]:
        query = (
            select(SubscriptionModel)
            .where(SubscriptionModel.user_id == owner_id)
            .order_by(SubscriptionModel.next_billing_at.asc())
        )
        async with self._session_factory() as session:
            rows = (await session.scalars(query)).all()
        return [_to_entity(row) for row in rows]

    async def update(
        self, subscription_id: str, owner_id: str, changes: SubscriptionChanges
    ) -> Optional[Subscription]:
        """Apply the present fields to the owner's row.

        Returns:
            The updated subscription, or None when no owned row has this id.
        """
        query = select(SubscriptionModel).where(
            SubscriptionModel.id == subscription_id,
            SubscriptionModel.user_id == owner_id,
        )
        async with self._session_factory() as session:
            async with session.begin():
                row = await session.scalar(query)
                if row is None:
                    return None
                for attribute, value in changes.values.items():
                    if attribute == "next_billing_at":
                        value = as_utc(value)
                    setattr(row, attribute, value)
        return _to_entity(row)

    async def delete(self, subscription_id: str, owner_id: str) -> bool:
        statement = delete(SubscriptionModel).where(
            SubscriptionModel.id == subscription_id,
            SubscriptionModel.user_id == owner_id,
        )
        async with self._session_factory() as session:
            async with session.begin():
                result = await session.execute(statement)
        logger.debug("Delete %s matched %d row(s)", subscription_id, result.rowcount)
        return result.rowcount > 0
