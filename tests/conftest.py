"""
Shared fixtures.

Settings are read when the application modules are imported, so the test
environment is put in place before anything from the project is imported.
"""
import os

os.environ["APP_ENV"] = "test"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DB_AUTO_CREATE"] = "false"

import pytest
from fastapi.testclient import TestClient

from database import Database
from main import create_app
from models import Property, Role, Task, User
from services import AuthService, create_access_token


@pytest.fixture
def database():
    """A fresh in-memory database per test."""
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.close()


@pytest.fixture
def loose_database():
    """In-memory database without foreign key enforcement, to stage inconsistent data."""
    db = Database("sqlite://", sqlite_foreign_keys=False)
    db.create_all()
    yield db
    db.close()


@pytest.fixture
def db(database):
    session = database.new_session()
    yield session
    session.close()


@pytest.fixture
def client(database):
    # No context manager: the lifespan would dispose the in-memory database
    return TestClient(create_app(database))


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(role=Role.AGENT, email=None, password="password123", name=None):
        counter["n"] += 1
        email = email or f"user{counter['n']}@inmobiliaria.com"
        user = AuthService.create_by_admin(db, name or f"User {counter['n']}", email, password, role)
        db.commit()
        return user

    return _make_user


@pytest.fixture
def make_property(db):
    def _make_property(owner: User, **overrides):
        values = {
            "title": "Casa de campo",
            "description": "Casa con jardín",
            "price": 250000.0,
            "location": "Cali",
            "bedrooms": 3,
            "bathrooms": 2,
            "area": 150.0,
            "image_urls": [],
        }
        values.update(overrides)
        prop = Property(owner_id=owner.id, **values)
        db.add(prop)
        db.commit()
        return prop

    return _make_property


@pytest.fixture
def make_task(db):
    def _make_task(prop: Property, title="Fix the roof", **overrides):
        task = Task(
            title=title,
            description=overrides.pop("description", "Leaking in the kitchen"),
            property_id=prop.id,
            assigned_to_id=overrides.pop("assigned_to_id", prop.owner_id),
            **overrides,
        )
        db.add(task)
        db.commit()
        return task

    return _make_task


@pytest.fixture
def agent(make_user):
    return make_user(Role.AGENT, email="agent.a@inmobiliaria.com")


@pytest.fixture
def other_agent(make_user):
    return make_user(Role.AGENT, email="agent.b@inmobiliaria.com")


@pytest.fixture
def admin(make_user):
    return make_user(Role.SUPERADMIN, email="admin@inmobiliaria.com")


@pytest.fixture
def auth():
    """Build the Authorization header for a user."""
    def _auth(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user)}"}

    return _auth
