from __future__ import annotations

import copy
from contextlib import asynccontextmanager
from datetime import date, datetime, timedelta, timezone

import jwt
import pytest
from fastapi.testclient import TestClient

from auth import security
from core import db, resolver
from entities import repository as entities_repository
from main import app
from payees import repository as payees_repository
from services import repository as services_repository
from subscriptions import repository as subscriptions_repository
from users import repository as users_repository

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"

TABLES = ("users", "entities", "services", "payees", "subscriptions")


class FakeStore:
    """
    In-memory stand-in for the Postgres tables.

    Exposes the same coroutine signatures as the repository modules so the
    services run unchanged on top of it. `transaction()` restores a snapshot
    when the block raises, like a rolled-back Postgres transaction.
    """

    def __init__(self) -> None:
        self.tables: dict[str, dict[int, dict]] = {name: {} for name in TABLES}

    # -- helpers -----------------------------------------------------------

    def add(self, table: str, **row) -> dict:
        row_id = row.pop("id", None) or max(self.tables[table], default=0) + 1
        self.tables[table][row_id] = {"id": row_id, **row}
        return self.tables[table][row_id]

    def rows(self, table: str, **match) -> list[dict]:
        return [
            r
            for r in sorted(self.tables[table].values(), key=lambda r: r["id"])
            if all(r.get(k) == v for k, v in match.items())
        ]

    def _owned(self, table: str, row_id: int, user_id: int) -> dict | None:
        row = self.tables[table].get(row_id)
        if row is None or row["user_id"] != user_id:
            return None
        return dict(row)

    def _column(self, table: str, row_id: int | None, column: str):
        row = self.tables[table].get(row_id)
        return row[column] if row is not None else None

    def _listing(self, table: str, user_id: int) -> list[dict]:
        user = self.tables["users"].get(user_id)
        if user is None:
            return []
        return [{**row, "username": user["username"]} for row in self.rows(table, user_id=user_id)]

    def _update(self, table: str, row_id: int, user_id: int, fields: dict) -> None:
        row = self.tables[table].get(row_id)
        if row is not None and row["user_id"] == user_id:
            row.update(fields)

    def _drop(self, table: str, predicate) -> None:
        self.tables[table] = {k: r for k, r in self.tables[table].items() if not predicate(r)}

    @asynccontextmanager
    async def transaction(self):
        snapshot = copy.deepcopy(self.tables)
        try:
            yield self
        except BaseException:
            self.tables = snapshot
            raise

    # -- core.resolver -----------------------------------------------------

    async def lookup_id(self, table, column, value, *, user_id, conn=None):
        matches = [r["id"] for r in self.rows(table, user_id=user_id) if r[column] == value]
        return matches[0] if matches else None

    # -- entities ------------------------------------------------------------

    async def list_entities(self, *, user_id):
        return self._listing("entities", user_id)

    async def get_entity(self, entity_id, *, user_id, conn=None):
        return self._owned("entities", entity_id, user_id)

    async def insert_entity(self, *, conn=None, **fields):
        return dict(self.add("entities", **fields))

    async def update_entity(self, entity_id, *, user_id, conn=None, **fields):
        self._update("entities", entity_id, user_id, fields)

    async def delete_entity(self, entity_id, *, user_id, conn):
        service_ids = {s["id"] for s in self.rows("services", entity_id=entity_id)}
        payee_ids = {
            p["id"]
            for p in self.tables["payees"].values()
            if p["entity_id"] == entity_id or p["service_id"] in service_ids
        }
        self._drop(
            "subscriptions",
            lambda s: s["entity_id"] == entity_id
            or s["service_id"] in service_ids
            or s["payee_id"] in payee_ids,
        )
        self._drop("payees", lambda p: p["id"] in payee_ids)
        self._drop("services", lambda s: s["id"] in service_ids)
        self._drop("entities", lambda e: e["id"] == entity_id and e["user_id"] == user_id)

    # -- services ------------------------------------------------------------

    async def list_services(self, *, user_id):
        return [
            {**row, "entity_name": self._column("entities", row["entity_id"], "entity_name")}
            for row in self._listing("services", user_id)
        ]

    async def get_service(self, service_id, *, user_id, conn=None):
        return self._owned("services", service_id, user_id)

    async def insert_service(self, *, conn=None, **fields):
        return dict(self.add("services", **fields))

    async def update_service(self, service_id, *, user_id, conn=None, **fields):
        self._update("services", service_id, user_id, fields)

    async def delete_service(self, service_id, *, user_id, conn):
        payee_ids = {p["id"] for p in self.rows("payees", service_id=service_id)}
        self._drop(
            "subscriptions",
            lambda s: s["service_id"] == service_id or s["payee_id"] in payee_ids,
        )
        self._drop("payees", lambda p: p["id"] in payee_ids)
        self._drop("services", lambda s: s["id"] == service_id and s["user_id"] == user_id)

    # -- payees --------------------------------------------------------------

    async def list_payees(self, *, user_id):
        return [
            {
                **row,
                "entity_name": self._column("entities", row["entity_id"], "entity_name"),
                "service_name": self._column("services", row["service_id"], "service_name"),
            }
            for row in self._listing("payees", user_id)
        ]

    async def get_payee(self, payee_id, *, user_id, conn=None):
        return self._owned("payees", payee_id, user_id)

    async def insert_payee(self, *, conn=None, **fields):
        return dict(self.add("payees", **fields))

    async def update_payee(self, payee_id, *, user_id, conn=None, **fields):
        self._update("payees", payee_id, user_id, fields)

    async def delete_payee(self, payee_id, *, user_id, conn):
        self._drop("subscriptions", lambda s: s["payee_id"] == payee_id)
        self._drop("payees", lambda p: p["id"] == payee_id and p["user_id"] == user_id)

    # -- subscriptions -------------------------------------------------------

    async def list_subscriptions(self, *, user_id):
        return [
            {
                **row,
                "entity_name": self._column("entities", row["entity_id"], "entity_name"),
                "service_name": self._column("services", row["service_id"], "service_name"),
                "service_duration": self._column("services", row["service_id"], "min_duration"),
                "payee_name": self._column("payees", row["payee_id"], "payee_name"),
                "payee_email": self._column("payees", row["payee_id"], "email"),
                "payee_phone": self._column("payees", row["payee_id"], "phone"),
            }
            for row in self._listing("subscriptions", user_id)
        ]

    async def get_subscription(self, subscription_id, *, user_id, conn=None):
        return self._owned("subscriptions", subscription_id, user_id)

    async def insert_subscription(self, *, conn=None, **fields):
        return dict(self.add("subscriptions", **fields))

    async def update_subscription(self, subscription_id, *, user_id, conn=None, **fields):
        self._update("subscriptions", subscription_id, user_id, fields)

    async def delete_subscription(self, subscription_id, *, user_id, conn=None):
        self._drop(
            "subscriptions",
            lambda s: s["id"] == subscription_id and s["user_id"] == user_id,
        )

    # -- users ---------------------------------------------------------------

    async def get_user_by_id(self, user_id, *, conn=None):
        row = self.tables["users"].get(user_id)
        return dict(row) if row is not None else None

    async def username_taken(self, username, *, exclude_user_id, conn=None):
        return any(u["username"] == username and u["id"] != exclude_user_id for u in self.tables["users"].values())

    async def update_user(self, user_id, *, conn=None, **fields):
        row = self.tables["users"].get(user_id)
        if row is None:
            return False
        row.update(fields)
        return True

    async def delete_user(self, user_id, *, conn):
        entity_ids = {e["id"] for e in self.rows("entities", user_id=user_id)}
        service_ids = {
            s["id"]
            for s in self.tables["services"].values()
            if s["user_id"] == user_id or s["entity_id"] in entity_ids
        }
        payee_ids = {
            p["id"]
            for p in self.tables["payees"].values()
            if p["user_id"] == user_id or p["entity_id"] in entity_ids or p["service_id"] in service_ids
        }
        self._drop(
            "subscriptions",
            lambda s: s["user_id"] == user_id
            or s["entity_id"] in entity_ids
            or s["service_id"] in service_ids
            or s["payee_id"] in payee_ids,
        )
        self._drop("payees", lambda p: p["id"] in payee_ids)
        self._drop("services", lambda s: s["id"] in service_ids)
        self._drop("entities", lambda e: e["id"] in entity_ids)
        if user_id not in self.tables["users"]:
            return False
        del self.tables["users"][user_id]
        return True


PATCHES = {
    entities_repository: ("list_entities", "get_entity", "insert_entity", "update_entity", "delete_entity"),
    services_repository: ("list_services", "get_service", "insert_service", "update_service", "delete_service"),
    payees_repository: ("list_payees", "get_payee", "insert_payee", "update_payee", "delete_payee"),
    subscriptions_repository: (
        "list_subscriptions",
        "get_subscription",
        "insert_subscription",
        "update_subscription",
        "delete_subscription",
    ),
    users_repository: ("get_user_by_id", "username_taken", "update_user", "delete_user"),
}


@pytest.fixture(autouse=True)
def jwt_env(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", TEST_SECRET)
    monkeypatch.setenv("JWT_ALG", "HS256")


@pytest.fixture
def store(monkeypatch) -> FakeStore:
    fake = FakeStore()
    monkeypatch.setattr(db, "transaction", fake.transaction)
    monkeypatch.setattr(resolver, "lookup_id", fake.lookup_id)
    for module, names in PATCHES.items():
        for name in names:
            monkeypatch.setattr(module, name, getattr(fake, name))

    fake.add("users", id=7, username="alice", name="Alice", email="alice@example.com", phone="111", password_hash="x")
    fake.add("users", id=8, username="bob", name="Bob", email="bob@example.com", phone="222", password_hash="y")
    return fake


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def make_token():
    def _make(user_id=7, *, expires_in=timedelta(minutes=15), secret=None, claims=None) -> str:
        payload = {"exp": datetime.now(timezone.utc) + expires_in}
        if user_id is not None:
            payload["user_id"] = user_id
        payload.update(claims or {})
        return jwt.encode(payload, secret or TEST_SECRET, algorithm=security.jwt_algorithm())

    return _make


@pytest.fixture
def auth_headers(make_token):
    def _headers(user_id=7, **kwargs) -> dict:
        return {"Authorization": f"Bearer {make_token(user_id, **kwargs)}"}

    return _headers


@pytest.fixture
def acme(store) -> dict:
    """
    User 7 owns entity Acme -> service Hosting -> payee Ann -> one subscription.
    """
    entity = store.add(
        "entities",
        user_id=7,
        entity_name="Acme",
        entity_desc="employer",
        entity_short_desc="acme",
        category="income",
    )
    service = store.add(
        "services",
        user_id=7,
        entity_id=entity["id"],
        service_name="Hosting",
        service_desc="web hosting",
        min_duration=12,
        amount=10,
        category="expense",
    )
    payee = store.add(
        "payees",
        user_id=7,
        entity_id=entity["id"],
        service_id=service["id"],
        payee_name="Ann",
        phone="555",
        email="ann@example.com",
        amount=10,
        category="expense",
    )
    subscription = store.add(
        "subscriptions",
        user_id=7,
        entity_id=entity["id"],
        service_id=service["id"],
        payee_id=payee["id"],
        start_date=date(2026, 1, 1),
        end_date=date(2026, 12, 31),
        amount=10,
        payment_date=date(2026, 2, 1),
        category="expense",
    )
    return {"entity": entity, "service": service, "payee": payee, "subscription": subscription}
