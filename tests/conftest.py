"""
Test configuration and fixtures.

The app runs against an in-memory mongomock client; the TestClient is used as
a context manager so the lifespan (indexes, optional seeding) runs.
"""
from datetime import datetime, timedelta, timezone

import mongomock
import pytest
from faker import Faker
from fastapi.testclient import TestClient

from config import Settings
from main import create_app

fake = Faker()

TEST_SECRET = "test-secret-key-for-testing-only"


def make_settings(**overrides) -> Settings:
    values = {
        "database_name": "college-test",
        "secret_key": TEST_SECRET,
        "seed_defaults": False,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def mongo():
    return mongomock.MongoClient()


@pytest.fixture
def db(mongo, settings):
    return mongo[settings.database_name]


@pytest.fixture
def client(settings, mongo):
    with TestClient(create_app(settings, client=mongo)) as test_client:
        yield test_client


@pytest.fixture
def secured_settings() -> Settings:
    return make_settings(auth_required=True)


@pytest.fixture
def secured_client(secured_settings, mongo):
    with TestClient(create_app(secured_settings, client=mongo)) as test_client:
        yield test_client


@pytest.fixture
def user_data():
    password = fake.password(length=12)
    return {
        "email": fake.unique.email(),
        "password": password,
        "confirmPassword": password,
        "fullName": fake.name(),
        "role": "student",
        "studentId": "STU-1001",
    }


@pytest.fixture
def add_lecturer(db):
    """Insert a lecturer document directly and return it."""

    def _add(name, overall_rating=0.0, total_ratings=0, courses=None, department="IT"):
        doc = {
            "name": name,
            "department": department,
            "email": fake.unique.email(),
            "courses": list(courses or []),
            "overallRating": overall_rating,
            "totalRatings": total_ratings,
            "contact": fake.phone_number(),
            "office": "IT Building",
        }
        doc["_id"] = db["lecturer"].insert_one(doc).inserted_id
        return doc

    return _add


@pytest.fixture
def timestamps():
    """Distinct, increasing timestamps for ordering checks."""
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return [base + timedelta(hours=i) for i in range(20)]
