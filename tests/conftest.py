"""
Shared fixtures: SQLite in-memory database, FastAPI client with get_db
overridden, a small marketplace (buyer, two sellers, outsider, items).
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["PUSH_WEBHOOK_URL"] = ""
os.environ["STRICT_ORDER_TRANSITIONS"] = "false"
os.environ["SEED_DEMO_DATA"] = "false"

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from campusmart.data.database import Base, get_db
from campusmart.data.models import CartLineModel, ItemModel, UserModel
from campusmart.main import app


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


class RecordingNotifier:
    """Stub for NotificationService that only records calls."""

    def __init__(self):
        self.sent = []

    def notify(self, sender_id, receiver_id, text, order_id=None):
        self.sent.append(
            {"sender_id": sender_id, "receiver_id": receiver_id, "text": text, "order_id": order_id}
        )
        return SimpleNamespace(id=len(self.sent), **self.sent[-1])


class FailingNotifier:
    def __init__(self):
        self.calls = 0

    def notify(self, sender_id, receiver_id, text, order_id=None):
        self.calls += 1
        raise RuntimeError("message store unavailable")


@pytest.fixture
def db_session():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def market(db_session):
    """
    alice buys; bob (S1) and carol (S2) sell; dave is not involved.
    """
    users = {
        name: UserModel(username=name, first_name=first, last_name=last)
        for name, first, last in [
            ("alice", "Alice", "Buyer"),
            ("bob", "Bob", "Seller"),
            ("carol", "", ""),
            ("dave", "Dave", "Outsider"),
        ]
    }
    db_session.add_all(users.values())
    db_session.flush()

    items = {
        "calculator": ItemModel(seller_id=users["bob"].id, name="Calculator", price=Decimal("50.00"), category="school supplies"),
        "notebook": ItemModel(seller_id=users["bob"].id, name="Notebook", price=Decimal("25.00"), category="school supplies"),
        "labcoat": ItemModel(seller_id=users["carol"].id, name="Lab coat", price=Decimal("100.00"), category="uniforms"),
        "sold": ItemModel(seller_id=users["carol"].id, name="Old bike", price=Decimal("900.00"), category="transport", is_available=False),
    }
    db_session.add_all(items.values())
    db_session.commit()

    return SimpleNamespace(
        alice=users["alice"].id,
        bob=users["bob"].id,
        carol=users["carol"].id,
        dave=users["dave"].id,
        items={key: item.id for key, item in items.items()},
    )


@pytest.fixture
def add_to_cart(db_session):
    counter = {"n": 0}

    def _add(user_id, item_id, quantity=1):
        # added_at increasing, newest line is the last one added
        counter["n"] += 1
        line = CartLineModel(
            user_id=user_id,
            item_id=item_id,
            quantity=quantity,
            added_at=datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=counter["n"]),
        )
        db_session.add(line)
        db_session.commit()
        return line.id

    return _add
