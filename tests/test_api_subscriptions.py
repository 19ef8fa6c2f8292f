"""
Tests for the subscriptions API endpoints.

Drives the real application (lifespan, middleware, error handlers,
SQLite database) through the TestClient.
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from app.domain.subscriptions.entities import BillingCycle, NewSubscription
from app.infrastructure.subscriptions.subscription_repository import (
    SqlAlchemySubscriptionRepository,
)
from app.interfaces.subscriptions.dependencies import (
    get_current_owner_id,
    get_get_subscription_use_case,
    get_list_subscriptions_use_case,
)
from app.main import create_app
from conftest import OTHER_OWNER_ID, OWNER_ID, make_settings

BASE = "/api/v1/subscriptions"


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _create(client: TestClient, **fields) -> dict:
    payload = {
        "name": "Netflix",
        "price": 13500,
        "billingCycle": "monthly",
        "nextBillingAt": "2025-12-16",
    }
    payload.update(fields)
    response = client.post(BASE, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def _insert_foreign(client: TestClient, name: str = "Someone's Netflix") -> str:
    """Store a subscription owned by another user, bypassing the API."""
    database = client.app.state.database

    async def insert() -> str:
        await database.ensure_owner(OTHER_OWNER_ID, "other@example.com")
        repo = SqlAlchemySubscriptionRepository(database.session_factory)
        created = await repo.create(
            NewSubscription(
                user_id=OTHER_OWNER_ID,
                name=name,
                price=9.99,
                billing_cycle=BillingCycle.MONTHLY,
                next_billing_at=datetime(2025, 12, 16, tzinfo=timezone.utc),
            )
        )
        return created.id

    return client.portal.call(insert)


# =====================================================================
# Create / get
# =====================================================================

class TestCreateAndGet:
    """Tests for POST and GET by id."""

    def test_create_round_trip(self, client) -> None:
        created = _create(client)
        body = client.get(f"{BASE}/{created['id']}").json()

        assert body == created
        assert body["name"] == "Netflix"
        assert body["price"] == 13500
        assert body["currency"] == "KRW"
        assert body["billingCycle"] == "monthly"
        assert body["intervalCount"] == 1
        assert body["isPaused"] is False
        assert body["userId"] == OWNER_ID
        assert _parse(body["nextBillingAt"]) == datetime(2025, 12, 16, tzinfo=timezone.utc)
        assert "createdAt" in body

    def test_owner_cannot_be_chosen_by_caller(self, client) -> None:
        created = _create(client, userId="intruder", id="chosen-id")
        assert created["userId"] == OWNER_ID
        assert created["id"] != "chosen-id"

    def test_price_with_two_decimals(self, client) -> None:
        assert _create(client, price=9.99)["price"] == 9.99

    def test_price_with_three_decimals_rejected(self, client) -> None:
        response = client.post(
            BASE,
            json={"name": "X", "price": 9.999, "billingCycle": "monthly", "nextBillingAt": "2025-12-16"},
        )
        assert response.status_code == 400
        assert response.json()["error"]["details"] == [
            {"path": "price", "message": "Price must have at most 2 decimal places"}
        ]

    def test_all_violations_in_one_response(self, client) -> None:
        response = client.post(
            BASE, json={"price": -5, "billingCycle": "monthly", "nextBillingAt": "2025-12-16"}
        )
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["message"] == "Validation failed"
        assert {d["path"] for d in error["details"]} == {"name", "price"}

    @pytest.mark.parametrize("field,value", [("price", "13500"), ("isPaused", "yes")])
    def test_body_types_not_coerced(self, client, field, value) -> None:
        payload = {"name": "X", "price": 1, "billingCycle": "monthly", "nextBillingAt": "2025-12-16"}
        response = client.post(BASE, json={**payload, field: value})
        assert response.status_code == 400
        assert [d["path"] for d in response.json()["error"]["details"]] == [field]
        assert client.get(BASE).json()["total"] == 0

    def test_null_optional_rejected(self, client) -> None:
        response = client.post(
            BASE,
            json={
                "name": "X",
                "price": 1,
                "billingCycle": "monthly",
                "nextBillingAt": "2025-12-16",
                "category": None,
            },
        )
        assert response.status_code == 400
        assert response.json()["error"]["details"][0]["path"] == "category"

    def test_malformed_json_rejected(self, client) -> None:
        response = client.post(
            BASE, content=b"{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Validation failed"

    def test_duplicate_name_conflicts(self, client) -> None:
        _create(client)
        response = client.post(
            BASE,
            json={"name": "Netflix", "price": 1, "billingCycle": "monthly", "nextBillingAt": "2025-12-16"},
        )
        assert response.status_code == 409
        assert response.json() == {
            "error": {"message": "Unique constraint violation", "field": "userId,name"}
        }

    def test_unknown_owner_is_constraint_error(self, client) -> None:
        client.app.dependency_overrides[get_current_owner_id] = lambda: "ghost"
        response = client.post(
            BASE,
            json={"name": "X", "price": 1, "billingCycle": "monthly", "nextBillingAt": "2025-12-16"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": {"message": "Related record does not exist"}}

    def test_unknown_id_not_found(self, client) -> None:
        response = client.get(f"{BASE}/{uuid4()}")
        assert response.status_code == 404
        assert response.json() == {"error": {"message": "Subscription not found"}}

    def test_foreign_id_forbidden(self, client) -> None:
        foreign_id = _insert_foreign(client)
        response = client.get(f"{BASE}/{foreign_id}")
        assert response.status_code == 403
        assert response.json() == {"error": {"message": "Forbidden"}}


# =====================================================================
# Update / delete
# =====================================================================

class TestUpdate:
    """Tests for PATCH."""

    def test_partial_update_touches_one_field(self, client) -> None:
        before = _create(client, category="Video", memo="Standard plan", paymentMethod="credit_card")

        response = client.patch(f"{BASE}/{before['id']}", json={"isPaused": True})

        assert response.status_code == 200
        after = response.json()
        assert after["isPaused"] is True
        assert {k: v for k, v in after.items() if k != "isPaused"} == {
            k: v for k, v in before.items() if k != "isPaused"
        }

    def test_empty_body_changes_nothing(self, client) -> None:
        before = _create(client)
        after = client.patch(f"{BASE}/{before['id']}", json={}).json()
        assert after == before

    def test_invalid_update_rejected(self, client) -> None:
        created = _create(client)
        response = client.patch(f"{BASE}/{created['id']}", json={"price": 0})
        assert response.status_code == 400
        assert client.get(f"{BASE}/{created['id']}").json()["price"] == 13500

    def test_rename_to_existing_conflicts(self, client) -> None:
        _create(client, name="Spotify")
        netflix = _create(client)
        response = client.patch(f"{BASE}/{netflix['id']}", json={"name": "Spotify"})
        assert response.status_code == 409

    def test_foreign_id_not_found(self, client) -> None:
        foreign_id = _insert_foreign(client)
        response = client.patch(f"{BASE}/{foreign_id}", json={"name": "Mine now"})
        assert response.status_code == 404

    def test_unknown_id_not_found(self, client) -> None:
        assert client.patch(f"{BASE}/{uuid4()}", json={"isPaused": True}).status_code == 404


class TestDelete:
    """Tests for DELETE."""

    def test_delete_then_gone(self, client) -> None:
        created = _create(client)

        response = client.delete(f"{BASE}/{created['id']}")
        assert response.status_code == 204
        assert response.content == b""

        assert client.get(f"{BASE}/{created['id']}").status_code == 404
        assert client.delete(f"{BASE}/{created['id']}").status_code == 404

    def test_unknown_id_twice(self, client) -> None:
        missing = uuid4()
        assert client.delete(f"{BASE}/{missing}").status_code == 404
        assert client.delete(f"{BASE}/{missing}").status_code == 404

    def test_foreign_id_untouched(self, client) -> None:
        foreign_id = _insert_foreign(client)
        assert client.delete(f"{BASE}/{foreign_id}").status_code == 404
        assert client.get(f"{BASE}/{foreign_id}").status_code == 403


# =====================================================================
# List
# =====================================================================

class TestList:
    """Tests for GET list."""

    def test_empty(self, client) -> None:
        assert client.get(BASE).json() == {
            "items": [],
            "total": 0,
            "pagination": {"limit": 20, "offset": 0, "hasMore": False},
        }

    def test_date_window(self, client) -> None:
        _create(client, name="Early", nextBillingAt="2025-12-01")
        middle = _create(client, name="Middle", nextBillingAt="2025-12-15")
        _create(client, name="Late", nextBillingAt="2025-12-28")

        body = client.get(BASE, params={"from": "2025-12-10", "to": "2025-12-20"}).json()

        assert [item["id"] for item in body["items"]] == [middle["id"]]
        assert body["total"] == 1

    def test_filters(self, client) -> None:
        _create(client, name="Video", category="Video", paymentMethod="paypal")
        _create(client, name="Paused", isPaused=True)
        _create(client, name="Plain")

        def names(params: dict) -> list[str]:
            return [i["name"] for i in client.get(BASE, params=params).json()["items"]]

        assert names({"category": "Video"}) == ["Video"]
        assert names({"method": "paypal"}) == ["Video"]
        assert names({"isPaused": "true"}) == ["Paused"]
        assert sorted(names({"isPaused": "false"})) == ["Plain", "Video"]

    def test_only_own_records(self, client) -> None:
        _insert_foreign(client)
        _create(client)
        body = client.get(BASE).json()
        assert body["total"] == 1
        assert body["items"][0]["userId"] == OWNER_ID

    @pytest.mark.parametrize(
        "offset,count,has_more",
        [(0, 2, True), (2, 2, True), (4, 1, False), (10, 0, False)],
    )
    def test_pagination(self, client, offset, count, has_more) -> None:
        for day in range(1, 6):
            _create(client, name=f"Day {day}", nextBillingAt=f"2025-12-0{day}")

        body = client.get(BASE, params={"limit": 2, "offset": offset}).json()

        assert len(body["items"]) == count
        assert body["total"] == 5
        assert body["pagination"] == {"limit": 2, "offset": offset, "hasMore": has_more}

    def test_ordering(self, client) -> None:
        for day in (3, 1, 2):
            _create(client, name=f"Day {day}", nextBillingAt=f"2025-12-0{day}")

        asc = [i["name"] for i in client.get(BASE).json()["items"]]
        desc = [i["name"] for i in client.get(BASE, params={"order": "desc"}).json()["items"]]
        assert asc == ["Day 1", "Day 2", "Day 3"]
        assert desc == ["Day 3", "Day 2", "Day 1"]

    @pytest.mark.parametrize(
        "params,path",
        [
            ({"limit": 0}, "limit"),
            ({"limit": 101}, "limit"),
            ({"offset": -1}, "offset"),
            ({"offset": 2**31}, "offset"),
            ({"offset": str(10**20)}, "offset"),
            ({"order": "random"}, "order"),
            ({"from": "yesterday"}, "from"),
        ],
    )
    def test_invalid_params(self, client, params, path) -> None:
        response = client.get(BASE, params=params)
        assert response.status_code == 400
        assert [d["path"] for d in response.json()["error"]["details"]] == [path]


# =====================================================================
# Stats
# =====================================================================

class TestStats:
    """Tests for GET /stats."""

    def test_summary(self, client) -> None:
        _create(client, name="A", price=12000, category="Video", nextBillingAt="2099-01-03")
        _create(client, name="B", price=120000, billingCycle="yearly", category="Video", nextBillingAt="2099-01-01")
        _create(client, name="C", price=20, currency="USD", category="AI", nextBillingAt="2099-01-02")
        _create(client, name="D", price=5000, isPaused=True, nextBillingAt="2099-01-04")

        body = client.get(f"{BASE}/stats").json()

        assert body["currency"] == "KRW"
        assert body["totalMonthly"] == 22000
        assert body["totalYearly"] == 264000
        assert body["activeCount"] == 3
        assert body["pausedCount"] == 1
        assert body["byCategory"] == {"Video": 22000}
        assert [b["name"] for b in body["nextBillings"]] == ["B", "C", "A"]

    def test_other_currency(self, client) -> None:
        _create(client, name="C", price=20, currency="USD", category="AI")
        body = client.get(f"{BASE}/stats", params={"currency": "USD"}).json()
        assert body["totalMonthly"] == 20
        assert body["byCategory"] == {"AI": 20}

    def test_unknown_currency_rejected(self, client) -> None:
        response = client.get(f"{BASE}/stats", params={"currency": "BTC"})
        assert response.status_code == 400
        assert response.json()["error"]["details"][0]["path"] == "currency"


# =====================================================================
# Routing, middleware and unexpected errors
# =====================================================================

class TestRoutingAndMiddleware:
    """Tests for cross-cutting behavior."""

    def test_unknown_route(self, client) -> None:
        response = client.get("/api/v1/nothing-here")
        assert response.status_code == 404
        assert response.json() == {"error": {"message": "Not Found"}}

    def test_method_not_allowed(self, client) -> None:
        response = client.delete(BASE)
        assert response.status_code == 405
        assert response.json() == {"error": {"message": "Method Not Allowed"}}
        assert "GET" in response.headers["allow"]

    def test_security_headers_present(self, client) -> None:
        """Every response carries the security headers."""
        response = client.get(BASE)
        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["x-frame-options"] == "SAMEORIGIN"
        assert "strict-transport-security" in response.headers

    def test_unexpected_error_hides_details(self, test_settings) -> None:
        class Exploding:
            async def execute(self, query):
                raise RuntimeError("password=hunter2")

        app = create_app(test_settings)
        app.dependency_overrides[get_list_subscriptions_use_case] = lambda: Exploding()
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get(BASE)

        assert response.status_code == 500
        assert response.json() == {"error": {"message": "Internal server error"}}
        assert "hunter2" not in response.text

    def test_invalid_server_data_is_internal_error(self, test_settings) -> None:
        """A response model failing on stored data is a 500, never a 400."""

        class BrokenRecord:
            async def execute(self, query):
                return SimpleNamespace(id=query.subscription_id)

        app = create_app(test_settings)
        app.dependency_overrides[get_get_subscription_use_case] = lambda: BrokenRecord()
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get(f"{BASE}/{uuid4()}")

        assert response.status_code == 500
        assert response.json() == {"error": {"message": "Internal server error"}}

    def test_rate_limit_returns_429(self, tmp_path) -> None:
        """Exceeding the default limit returns HTTP 429 in the error envelope."""
        settings = make_settings(tmp_path, rate_limit_enabled=True, rate_limit_default="2/minute")
        with TestClient(create_app(settings)) as client:
            assert client.get(BASE).status_code == 200
            assert client.get(BASE).status_code == 200
            response = client.get(BASE)

        assert response.status_code == 429
        assert response.json()["error"]["message"].startswith("Rate limit exceeded")
