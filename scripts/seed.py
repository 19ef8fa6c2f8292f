"""
Seed the database with the demo owner and sample subscriptions.

Creates the owner configured by DEMO_USER_ID and ten subscriptions.
Subscriptions whose name already exists for the owner are skipped,
so the script can be re-run safely.

Usage:
    DATABASE_URL=sqlite+aiosqlite:///./subtrack.db python scripts/seed.py
"""

import asyncio
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.core.config import settings  # noqa: E402
from app.domain.subscriptions.entities import (  # noqa: E402
    BillingCycle,
    Currency,
    NewSubscription,
    PaymentMethod,
)
from app.infrastructure.database import Database  # noqa: E402
from app.infrastructure.subscriptions.subscription_repository import (  # noqa: E402
    SqlAlchemySubscriptionRepository,
)
from app.shared.logging import configure_logging  # noqa: E402

logger = logging.getLogger("seed")


def _day(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Sample data: (name, price, currency, cycle, next billing, method, category, memo, paused)
# ---------------------------------------------------------------------------
SAMPLES = [
    ("Netflix", 13500, Currency.KRW, BillingCycle.MONTHLY, _day(2025, 12, 16),
     PaymentMethod.CREDIT_CARD, "Entertainment", "Standard plan", False),
    ("Spotify Premium", 10900, Currency.KRW, BillingCycle.MONTHLY, _day(2025, 12, 1),
     PaymentMethod.CREDIT_CARD, "Entertainment", "Individual plan", False),
    ("GitHub Pro", 4, Currency.USD, BillingCycle.MONTHLY, _day(2025, 12, 20),
     PaymentMethod.CREDIT_CARD, "Development", "Pro plan for private repos", False),
    ("ChatGPT Plus", 20, Currency.USD, BillingCycle.MONTHLY, _day(2025, 12, 5),
     PaymentMethod.CREDIT_CARD, "AI", "GPT-4 access", False),
    ("Adobe Creative Cloud", 65000, Currency.KRW, BillingCycle.MONTHLY, _day(2025, 12, 10),
     PaymentMethod.CREDIT_CARD, "Design", "Photography plan", False),
    ("New York Times Digital", 4, Currency.USD, BillingCycle.MONTHLY, _day(2025, 12, 25),
     PaymentMethod.CREDIT_CARD, "News", "Digital subscription", False),
    ("iCloud Storage", 1300, Currency.KRW, BillingCycle.MONTHLY, _day(2025, 12, 15),
     PaymentMethod.CREDIT_CARD, "Storage", "50GB plan", False),
    ("Notion Personal Pro (Paused)", 10, Currency.USD, BillingCycle.YEARLY, _day(2026, 1, 15),
     PaymentMethod.CREDIT_CARD, "Productivity", "Currently paused", True),
    ("Gym Membership", 89000, Currency.KRW, BillingCycle.MONTHLY, _day(2025, 12, 1),
     PaymentMethod.BANK_TRANSFER, "Health", "24/7 access", False),
    ("AWS", 50, Currency.USD, BillingCycle.MONTHLY, _day(2025, 12, 28),
     PaymentMethod.CREDIT_CARD, "Infrastructure", "Estimated monthly cost", False),
]


async def seed(database: Database, owner_id: str, owner_email: str) -> int:
    """Insert the owner and any missing sample subscriptions.

    Returns:
        Number of subscriptions created.
    """
    await database.create_schema()
    await database.ensure_owner(owner_id, owner_email)

    repo = SqlAlchemySubscriptionRepository(database.session_factory)
    existing = {s.name for s in await repo.list_for_owner(owner_id)}

    created = 0
    for name, price, currency, cycle, next_at, method, category, memo, paused in SAMPLES:
        if name in existing:
            logger.info("Skipping existing subscription: %s", name)
            continue
        subscription = await repo.create(
            NewSubscription(
                user_id=owner_id,
                name=name,
                price=price,
                currency=currency,
                billing_cycle=cycle,
                next_billing_at=next_at,
                payment_method=method,
                category=category,
                memo=memo,
                is_paused=paused,
            )
        )
        logger.info("Created %s - %s %s", subscription.name, subscription.currency.value, subscription.price)
        created += 1
    return created


async def main() -> None:
    configure_logging(level=settings.log_level)
    database = Database(settings.get_database_url(), echo=settings.database_echo)
    database.connect()
    try:
        created = await seed(database, settings.demo_user_id, settings.demo_user_email)
        logger.info("Seeding completed: %d subscription(s) created", created)
    finally:
        await database.dispose()


if __name__ == "__main__":
    asyncio.run(main())
