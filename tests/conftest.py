import os
from datetime import datetime, timedelta, timezone

import jwt
import mongomock
import pytest

os.environ["DB_NAME"] = "quizhub_test"
os.environ["JWT_SECRET"] = "quizhub-test-secret-key-0123456789abcdef"
os.environ["JWT_ALGORITHM"] = "HS256"

from quizhub.dependencies import cleanup_resources
from quizhub.helpers.Database import MongoDB


@pytest.fixture(autouse=True)
def mongo():
    MongoDB.client = mongomock.MongoClient()
    cleanup_resources()
    yield MongoDB.client
    cleanup_resources()
    MongoDB.client = None


@pytest.fixture
def now():
    return datetime.now(timezone.utc)


@pytest.fixture
def make_draft(now):
    def _make_draft(subject="tsa", start=None, questions=None, title="Weekly TSA Quiz"):
        start = start or now - timedelta(minutes=10)
        return {
            "subject": subject,
            "title": title,
            "questions": questions if questions is not None else [
                {"question": "What is the capital of France?", "options": ["Paris", "Lyon"], "correctAnswer": "Paris"},
                {"question": "What is 2 + 2?", "options": ["3", "4", "5"], "correctAnswer": "4"},
            ],
            "scheduledStart": start,
            "scheduledEnd": start + timedelta(hours=1),
        }
    return _make_draft


def make_token(user_id="user-1", display_name="Ada", user_type="student", **extra):
    payload = {"id": user_id, "userType": user_type, **extra}
    if display_name:
        payload["displayName"] = display_name
    return jwt.encode(payload, os.environ["JWT_SECRET"], algorithm="HS256")


@pytest.fixture
def auth_headers():
    def _auth_headers(**kwargs):
        return {"Authorization": f"Bearer {make_token(**kwargs)}"}
    return _auth_headers
