import os

# Settings are read at import time, so the environment has to be ready
# before anything under app/ is imported.
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ALLOWED_ORIGINS"] = "http://localhost:3000"
os.environ.pop("ANALYTICS_TIMEZONE", None)

from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.database import Base, SessionLocal, engine, get_db
from app.main import app
from app.models import (
    ActivityLog,
    Media,
    SubscriptionPlan,
    Transaction,
    User,
    UserRole,
    UserSubscription,
    WatchHistory,
)
from app.utils.security import create_access_token

# Fixed "now" used by service-level tests: mid-March 2025
NOW = datetime(2025, 3, 15, 12, 0, 0)
IN_MONTH = datetime(2025, 3, 10, 9, 30, 0)
LAST_MONTH = datetime(2025, 2, 20, 18, 0, 0)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


# ==================== Factories ====================

def make_user(db, name="User", role=UserRole.CLIENT, **kwargs) -> User:
    user = User(
        name=name,
        email=kwargs.pop("email", f"{name.lower().replace(' ', '.')}@example.com"),
        role=role,
        is_active=kwargs.pop("is_active", True),
        **kwargs,
    )
    db.add(user)
    db.commit()
    return user


def make_media(db, provider=None, title="Untitled", duration=None) -> Media:
    media = Media(
        title=title,
        duration=duration,
        provider_id=provider.id if provider is not None else None,
    )
    db.add(media)
    db.commit()
    return media


def add_watch(db, user, media, progress, watched_at=IN_MONTH, completed=False) -> WatchHistory:
    row = WatchHistory(
        user_id=user.id,
        media_id=media.id,
        progress=progress,
        completed=completed,
        watched_at=watched_at,
    )
    db.add(row)
    db.commit()
    return row


def add_transaction(db, amount, created_at=IN_MONTH, user=None) -> Transaction:
    tx = Transaction(
        user_id=user.id if user is not None else None,
        amount=Decimal(str(amount)),
        currency="TZS",
        created_at=created_at,
    )
    db.add(tx)
    db.commit()
    return tx


def add_log(db, user, action, details=None, created_at=IN_MONTH) -> ActivityLog:
    log = ActivityLog(
        user_id=user.id,
        action=action,
        details=details,
        created_at=created_at,
    )
    db.add(log)
    db.commit()
    return log


def add_subscription(db, user, plan, is_active=True) -> UserSubscription:
    sub = UserSubscription(user_id=user.id, subscription_id=plan.id, is_active=is_active)
    db.add(sub)
    db.commit()
    return sub


def make_plan(db, type="premium", price=10000.0) -> SubscriptionPlan:
    plan = SubscriptionPlan(type=type, price=price, duration_days=30)
    db.add(plan)
    db.commit()
    return plan


def auth_headers(user) -> dict:
    token = create_access_token(subject=user.id, role=user.role.value)
    return {"Authorization": f"Bearer {token}"}


# ==================== Common fixtures ====================

@pytest.fixture
def admin(db):
    return make_user(db, name="Admin", role=UserRole.ADMIN)


@pytest.fixture
def provider(db):
    return make_user(db, name="Provider One", role=UserRole.CONTENT_CREATOR)


@pytest.fixture
def viewer(db):
    return make_user(db, name="Viewer")
