import os

# must be set before storefront.* is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"

import pytest
import requests
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.api.deps import get_identity_client, get_image_store, get_notification_service
from storefront.data.database import Base, get_db
from storefront.main import create_app

USER_TOKEN = "user-token"
OTHER_TOKEN = "other-token"
ADMIN_TOKEN = "admin-token"


class FakeIdentityClient:
    def __init__(self):
        self.tokens = {USER_TOKEN: "user-1", OTHER_TOKEN: "user-2", ADMIN_TOKEN: "admin-1"}
        self.admins = {"admin-1"}
        self.verify_calls = 0
        self.admin_error = None

    def verify_token(self, token):
        self.verify_calls += 1
        return self.tokens.get(token)

    def is_admin(self, user_id):
        if self.admin_error:
            raise self.admin_error
        return user_id in self.admins


class FakeImageStore:
    def __init__(self):
        self.deleted = []
        self.fail = False

    def delete_objects(self, paths):
        if self.fail:
            raise requests.ConnectionError("storage unreachable")
        self.deleted.append(list(paths))


class FakeNotifications:
    def __init__(self):
        self.sent = []

    def send_order_notification(self, user_id, order_id, total_amount):
        self.sent.append((user_id, order_id, total_amount))


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def identity():
    return FakeIdentityClient()


@pytest.fixture
def image_store():
    return FakeImageStore()


@pytest.fixture
def notifications():
    return FakeNotifications()


@pytest.fixture
def app(session_factory, identity, image_store, notifications):
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_client] = lambda: identity
    app.dependency_overrides[get_image_store] = lambda: image_store
    app.dependency_overrides[get_notification_service] = lambda: notifications
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def user_headers():
    return {"Authorization": f"Bearer {USER_TOKEN}"}


@pytest.fixture
def other_headers():
    return {"Authorization": f"Bearer {OTHER_TOKEN}"}


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}
