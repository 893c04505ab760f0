# tests/conftest.py
import copy
import os
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace

# Settings are read at import time
os.environ["SUPABASE_KEY"] = "test-anon-key"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["API_PREFIX"] = "/api/v1"

import pytest
from fastapi.testclient import TestClient
from supabase import AuthApiError

from projtrackr.main import app
from projtrackr.database.supabase_client import get_auth_client, get_service_supabase

API = "/api/v1"
ANON_KEY = "test-anon-key"


class FakeQuery:
    """Just enough of the PostgREST builder for the KV table (primary key: "key")"""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload = None
        self.filters = []
        self._limit = None

    def select(self, columns="*"):
        self.op = "select"
        return self

    def upsert(self, payload):
        self.op = "upsert"
        self.payload = payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def like(self, column, pattern):
        assert pattern.endswith("%") and "%" not in pattern[:-1]
        prefix = pattern[:-1]
        self.filters.append(lambda row: str(row.get(column, "")).startswith(prefix))
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def limit(self, n):
        self._limit = n
        return self

    def execute(self):
        rows = self.db.tables.setdefault(self.table, {})
        self.db.calls.append((self.table, self.op))
        if self.op == "upsert":
            payload = self.payload if isinstance(self.payload, list) else [self.payload]
            for row in payload:
                rows[row["key"]] = copy.deepcopy(row)
            return SimpleNamespace(data=copy.deepcopy(payload))
        matched = [row for row in rows.values() if all(f(row) for f in self.filters)]
        if self.op == "delete":
            for row in matched:
                del rows[row["key"]]
            return SimpleNamespace(data=matched)
        if self._limit is not None:
            matched = matched[:self._limit]
        return SimpleNamespace(data=copy.deepcopy(matched))


class FakeAdmin:
    def __init__(self, auth):
        self.auth = auth

    def create_user(self, attributes):
        email = attributes["email"]
        if email in self.auth.passwords:
            raise AuthApiError("A user with this email address has already been registered", 422, "email_exists")
        user = self.auth.add_user(email, attributes["password"], attributes.get("user_metadata"))
        return SimpleNamespace(user=user)

    def update_user_by_id(self, user_id, attributes):
        user = self.auth.users.get(user_id)
        if user is None:
            raise AuthApiError("User not found", 404, "user_not_found")
        user.user_metadata = {**user.user_metadata, **attributes.get("user_metadata", {})}
        return SimpleNamespace(user=user)


class FakeAuth:
    def __init__(self):
        self.users = {}
        self.passwords = {}
        self.tokens = {}
        self.verifications = 0
        self.admin = FakeAdmin(self)

    def add_user(self, email, password, user_metadata=None):
        user = SimpleNamespace(
            id=str(uuid.uuid4()),
            email=email,
            user_metadata=dict(user_metadata or {}),
            app_metadata={"provider": "email"},
            created_at=datetime(2025, 9, 1, tzinfo=timezone.utc),
        )
        self.users[user.id] = user
        self.passwords[email] = (password, user.id)
        return user

    def issue_token(self, user_id):
        token = f"token-{uuid.uuid4()}"
        self.tokens[token] = user_id
        return token

    def get_user(self, jwt=None):
        self.verifications += 1
        if jwt not in self.tokens:
            raise AuthApiError("invalid JWT: unable to parse or verify signature", 403, "bad_jwt")
        return SimpleNamespace(user=self.users[self.tokens[jwt]])

    def sign_in_with_password(self, credentials):
        stored = self.passwords.get(credentials["email"])
        if stored is None or stored[0] != credentials["password"]:
            raise AuthApiError("Invalid login credentials", 400, "invalid_credentials")
        user = self.users[stored[1]]
        return SimpleNamespace(user=user, session=SimpleNamespace(access_token=self.issue_token(user.id)))


class FakeSupabase:
    def __init__(self):
        self.auth = FakeAuth()
        self.tables = {}
        self.calls = []

    def table(self, name):
        return FakeQuery(self, name)


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def client(fake_supabase):
    app.dependency_overrides[get_service_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_auth_client] = lambda: fake_supabase
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(fake_supabase):
    """Create a user directly in the fake auth and return (user_id, auth headers)"""
    def _make_user(email, password="secret-pass", **metadata):
        user = fake_supabase.auth.add_user(email, password, metadata)
        token = fake_supabase.auth.issue_token(user.id)
        return user.id, {"Authorization": f"Bearer {token}"}
    return _make_user


@pytest.fixture
def sample_project():
    return {
        "name": "X",
        "email": "a@b.com",
        "batch": "Fall 2025",
        "vibe_link": "https://x.com",
        "github_link": "https://github.com/a/b",
        "tags": ["Personal"],
    }
