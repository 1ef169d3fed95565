from datetime import datetime, timedelta

import mongomock
import pytest

from jobboard.app import create_app

VALID_TOKEN = "valid-token"


class FakeVerifier:
    def verify(self, token):
        if token == VALID_TOKEN:
            return {"id": "user-1", "email": "admin@example.com"}
        return None


class StepClock:
    """Strictly increasing naive-UTC timestamps, one minute apart."""

    def __init__(self, start=datetime(2024, 1, 1)):
        self.current = start

    def __call__(self):
        self.current += timedelta(minutes=1)
        return self.current


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def db(mongo_client):
    return mongo_client["jobboard_test"]


@pytest.fixture
def app(mongo_client):
    return create_app({
        "TESTING": True,
        "MONGO_CLIENT": mongo_client,
        "MONGODB_DB": "jobboard_test",
        "CREATE_INDEXES": False,
        "TOKEN_VERIFIER": FakeVerifier(),
        "JOB_VALIDATION_DETAILS": False,
    })


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {VALID_TOKEN}"}


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def job_payload():
    """Factory for a valid create payload; keyword overrides win."""

    def make(**overrides):
        payload = {
            "jobTitle": "Backend Engineer",
            "companyName": "Acme",
            "companyOverview": "Builds things.",
            "location": "Berlin, Germany",
            "employmentType": "Full-time",
            "jobDescription": "Write services.",
            "responsibilities": ["Ship code"],
            "requirements": {"required": ["Python"], "preferred": []},
            "applicationLink": "https://acme.example.com/jobs/1",
            "experienceLevel": "Mid-level",
            "category": "tech",
        }
        payload.update(overrides)
        return payload

    return make
