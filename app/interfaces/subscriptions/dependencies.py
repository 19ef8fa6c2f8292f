"""
Dependency injection for the subscriptions bounded context.

Provides FastAPI dependency functions that wire the shared database
handle into the repository adapter and the adapter into use cases
via constructor injection. These are the composition root for the
subscriptions context.
"""

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError

from app.application.subscriptions.create_subscription import CreateSubscriptionUseCase
from app.application.subscriptions.delete_subscription import DeleteSubscriptionUseCase
from app.application.subscriptions.get_subscription import GetSubscriptionUseCase
from app.application.subscriptions.get_subscription_stats import (
    GetSubscriptionStatsUseCase,
)
from app.application.subscriptions.list_subscriptions import ListSubscriptionsUseCase
from app.application.subscriptions.update_subscription import UpdateSubscriptionUseCase
from app.domain.subscriptions.ports import SubscriptionRepository
from app.infrastructure.database import Database
from app.infrastructure.subscriptions.subscription_repository import (
    SqlAlchemySubscriptionRepository,
)
from app.interfaces.subscriptions.schemas import SubscriptionListParams


def get_database(request: Request) -> Database:
    """Return the process-wide database handle created at startup."""
    return request.app.state.database


def get_current_owner_id(request: Request) -> str:
    """Return the identity every request acts as.

    There is a single fixed owner; authentication is not part of this API.
    """
    return request.app.state.settings.demo_user_id


def get_list_params(request: Request) -> SubscriptionListParams:
    """Validate the raw query string.

    Raises:
        RequestValidationError: With each failure located under ``query``.
    """
    try:
        return SubscriptionListParams.model_validate(dict(request.query_params))
    except PydanticValidationError as exc:
        raise RequestValidationError(
            [{**error, "loc": ("query", *error["loc"])} for error in exc.errors()]
        ) from exc


def get_subscription_repository(
    database: Database = Depends(get_database),
) -> SubscriptionRepository:
    """Build the SQLAlchemy repository on the shared session factory."""
    return SqlAlchemySubscriptionRepository(database.session_factory)


def get_list_subscriptions_use_case(
    repo: SubscriptionRepository = Depends(get_subscription_repository),
) -> ListSubscriptionsUseCase:
    return ListSubscriptionsUseCase(subscription_repo=repo)


def get_create_subscription_use_case(
    repo: SubscriptionRepository = Depends(get_subscription_repository),
) -> CreateSubscriptionUseCase:
    return CreateSubscriptionUseCase(subscription_repo=repo)


def get_get_subscription_use_case(
    repo: SubscriptionRepository = Depends(get_subscription_repository),
) -> GetSubscriptionUseCase:
    return GetSubscriptionUseCase(subscription_repo=repo)


def get_update_subscription_use_case(
    repo: SubscriptionRepository = Depends(get_subscription_repository),
) -> UpdateSubscriptionUseCase:
    return UpdateSubscriptionUseCase(subscription_repo=repo)


def get_delete_subscription_use_case(
    repo: SubscriptionRepository = Depends(get_subscription_repository),
) -> DeleteSubscriptionUseCase:
    return DeleteSubscriptionUseCase(subscription_repo=repo)


def get_subscription_stats_use_case(
    repo: SubscriptionRepository = Depends(get_subscription_repository),
) -> GetSubscriptionStatsUseCase:
    return GetSubscriptionStatsUseCase(subscription_repo=repo)
