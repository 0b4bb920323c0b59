from dataclasses import replace

import pytest
from flask_jwt_extended import create_access_token

from funnel import create_app
from funnel.extensions import db
from funnel.models.user import User
from funnel.application.session import SessionContext
from funnel.application.profiles.create_profile import create_profile
from funnel.application.profiles.review_profile import approve_profile
from funnel.domain.exceptions import PersistenceError
from funnel.domain.ordering.collection import Entry


class FakeStore:
    """
    In-memory ordered store. ``fail_on`` names operations that raise
    PersistenceError; ``fail_update_number`` fails only that order_index
    update attempt (1-based), letting later ones through.
    """

    def __init__(self, entries=()):
        self.rows = {entry.id: entry for entry in entries}
        self.fail_on = set()
        self.fail_update_number = None
        self.update_attempts = 0
        self.calls = []

    def load(self, owner_id):
        return list(self.rows.values())

    def indices(self):
        return {item_id: entry.order_index for item_id, entry in self.rows.items()}

    def _maybe_fail(self, operation):
        if operation in self.fail_on:
            raise PersistenceError(f"{operation} failed")

    def insert(self, owner_id, entry):
        self._maybe_fail("insert")
        self.calls.append(("insert", entry.id))
        self.rows[entry.id] = entry

    def update_order_index(self, owner_id, item_id, order_index):
        self.update_attempts += 1
        if self.update_attempts == self.fail_update_number:
            raise PersistenceError("update failed")
        self._maybe_fail("update_order_index")
        self.calls.append(("update_order_index", item_id, order_index))
        self.rows[item_id] = replace(self.rows[item_id], order_index=order_index)

    def update_fields(self, owner_id, item_id, changes):
        self._maybe_fail("update_fields")
        self.calls.append(("update_fields", item_id))
        entry = self.rows[item_id]
        if isinstance(entry.payload, dict):
            payload = {**entry.payload, **changes}
        else:
            normalized = {k: tuple(v) if k == "options" else v for k, v in changes.items()}
            payload = replace(entry.payload, **normalized)
        self.rows[item_id] = replace(entry, payload=payload)

    def delete(self, owner_id, item_id):
        self._maybe_fail("delete")
        self.calls.append(("delete", item_id))
        self.rows.pop(item_id, None)


def make_entries(*pairs):
    return [Entry(id=item_id, order_index=index, payload={"name": item_id}) for item_id, index in pairs]


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def app():
    app = create_app("testing")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make_user(email, password="password123", is_platform_admin=False):
        user = User()
        user.email = email
        user.set_password(password)
        user.is_platform_admin = is_platform_admin
        db.session.add(user)
        db.session.commit()
        return user

    return _make_user


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(identity=user.id)}"}


@pytest.fixture
def owner(make_user):
    return make_user("owner@example.com")


@pytest.fixture
def admin(make_user):
    return make_user("admin@example.com", is_platform_admin=True)


@pytest.fixture
def owner_headers(owner):
    return auth_headers(owner)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def owner_session(owner):
    return SessionContext(user_id=owner.id)


@pytest.fixture
def admin_session(admin):
    return SessionContext(user_id=admin.id, is_platform_admin=True)


@pytest.fixture
def pending_profile(owner_session):
    return create_profile(
        session=owner_session,
        data={
            "slug": "studio-one",
            "display_name": "Studio One",
            "whatsapp_number": "+1 (555) 010-2030",
            "notification_emails": "owner@example.com, bookings@example.com",
        },
    )


@pytest.fixture
def active_profile(pending_profile, admin_session):
    return approve_profile(session=admin_session, profile_id=pending_profile.id)
