"""
SQLAlchemy ORM tables for subscriptions and their owners.

Column names are snake_case; the API exposes them in camelCase.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from app.domain.subscriptions.entities import BillingCycle, Currency, PaymentMethod


class Base(DeclarativeBase):
    pass


def _enum_column(enum_cls: type) -> Enum:
    """Store enum values ('monthly'), not member names ('MONTHLY')."""
    return Enum(
        enum_cls,
        native_enum=False,
        length=32,
        values_callable=lambda members: [m.value for m in members],
    )


class UserModel(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))


class SubscriptionModel(Base):
    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_subscriptions_user_name"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(String(100))
    price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False))
    currency: Mapped[Currency] = mapped_column(_enum_column(Currency))
    billing_cycle: Mapped[BillingCycle] = mapped_column(_enum_column(BillingCycle))
    interval_count: Mapped[int] = mapped_column(Integer, default=1)
    next_billing_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    payment_method: Mapped[Optional[PaymentMethod]] = mapped_column(
        _enum_column(PaymentMethod), nullable=True
    )
    category: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    memo: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    is_paused: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
