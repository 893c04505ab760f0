import pytest
from supabase import AuthApiError, AuthRetryableError

from conftest import API, ANON_KEY

ANON_HEADERS = {"Authorization": f"Bearer {ANON_KEY}"}


def test_health(client):
    r = client.get(f"{API}/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert "timestamp" in body
    assert r.headers["X-Content-Type-Options"] == "nosniff"


def test_signup_returns_public_fields_with_defaults(client, fake_supabase):
    r = client.post(f"{API}/signup", json={"email": "ada@lovelace.io", "password": "analytical"}, headers=ANON_HEADERS)
    assert r.status_code == 200, r.text
    user = r.json()["user"]
    assert user["email"] == "ada@lovelace.io"
    assert user["name"] == "ada"
    assert user["full_name"] == "ada"
    assert user["id"] in fake_supabase.auth.users


def test_signup_full_name_falls_back_to_name(client):
    r = client.post(
        f"{API}/signup",
        json={"email": "grace@hopper.io", "password": "cobol1959", "name": "Grace"},
        headers=ANON_HEADERS,
    )
    assert r.status_code == 200
    assert r.json()["user"]["full_name"] == "Grace"


def test_signup_then_login_with_same_credentials(client):
    creds = {"email": "u1@portfolio.dev", "password": "hunter22"}
    r = client.post(f"{API}/signup", json={**creds, "full_name": "User One"}, headers=ANON_HEADERS)
    assert r.status_code == 200
    user_id = r.json()["user"]["id"]

    r = client.post(f"{API}/login", json=creds)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["user_id"] == user_id
    assert body["token_type"] == "bearer"

    r = client.get(f"{API}/projects", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert r.status_code == 200
    assert r.json() == {"projects": []}


def test_signup_missing_password_is_400(client):
    r = client.post(f"{API}/signup", json={"email": "x@y.io"}, headers=ANON_HEADERS)
    assert r.status_code == 400
    assert r.json() == {"error": "Email and password are required"}


def test_signup_missing_email_is_400(client):
    r = client.post(f"{API}/signup", json={"password": "pw"}, headers=ANON_HEADERS)
    assert r.status_code == 400
    assert "error" in r.json()


def test_signup_duplicate_email_is_provider_error(client):
    payload = {"email": "dup@portfolio.dev", "password": "pw123456"}
    assert client.post(f"{API}/signup", json=payload, headers=ANON_HEADERS).status_code == 200
    r = client.post(f"{API}/signup", json=payload, headers=ANON_HEADERS)
    assert r.status_code == 400
    assert "already been registered" in r.json()["error"]


def test_signup_requires_anon_key(client):
    payload = {"email": "nokey@portfolio.dev", "password": "pw123456"}
    assert client.post(f"{API}/signup", json=payload).status_code == 401
    r = client.post(f"{API}/signup", json=payload, headers={"Authorization": "Bearer wrong"})
    assert r.status_code == 401
    assert r.json() == {"error": "Authorization required"}


def test_login_bad_password_is_401(client, make_user):
    make_user("me@portfolio.dev", password="right-one")
    r = client.post(f"{API}/login", json={"email": "me@portfolio.dev", "password": "wrong-one"})
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid email or password"}


@pytest.mark.parametrize("provider_error", [
    AuthRetryableError("Service Unavailable", 503),
    AuthApiError("Database error querying schema", 500, "unexpected_failure"),
])
def test_provider_outage_during_verification_is_500(client, fake_supabase, make_user, provider_error):
    _, headers = make_user("me@portfolio.dev")

    def unavailable(jwt=None):
        raise provider_error

    fake_supabase.auth.get_user = unavailable
    r = client.get(f"{API}/projects", headers=headers)
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to verify token"}
    assert fake_supabase.calls == []


def test_login_throttled_by_provider_is_not_bad_credentials(client, fake_supabase, make_user):
    make_user("me@portfolio.dev", password="right-one")

    def throttled(credentials):
        raise AuthApiError("Request rate limit reached", 429, "over_request_rate_limit")

    fake_supabase.auth.sign_in_with_password = throttled
    r = client.post(f"{API}/login", json={"email": "me@portfolio.dev", "password": "right-one"})
    assert r.status_code == 400
    assert r.json() == {"error": "Request rate limit reached"}


def test_login_provider_failure_is_500(client, fake_supabase, make_user):
    make_user("me@portfolio.dev", password="right-one")

    def broken(credentials):
        raise AuthApiError("Database error granting user", 500, "unexpected_failure")

    fake_supabase.auth.sign_in_with_password = broken
    r = client.post(f"{API}/login", json={"email": "me@portfolio.dev", "password": "right-one"})
    assert r.status_code == 500
    assert r.json() == {"error": "Login failed"}
