"""Auth Routes — sign-up, login, logout and session view over HTTP.

Invariants:
    - /auth/me reports is_authenticated without failing for anonymous callers
    - Bad credentials answer 401 with AUTHENTICATION_FAILED
    - Duplicate sign-up answers 409
"""


async def test_me_is_anonymous_by_default(client):
    res = await client.get("/api/v1/auth/me")
    assert res.status_code == 200
    assert res.json() == {"is_authenticated": False, "user": None}


async def test_signup_logs_in(client, signup_payload):
    res = await client.post("/api/v1/auth/signup", json=signup_payload)
    assert res.status_code == 201
    body = res.json()
    assert body["is_authenticated"] is True
    assert body["user"]["name"] == "Asha Patil"
    assert "password" not in body["user"]

    me = (await client.get("/api/v1/auth/me")).json()
    assert me["is_authenticated"] is True
    assert me["user"]["email"] == "asha@example.com"


async def test_signup_duplicate_email(customer_client, signup_payload):
    res = await customer_client.post("/api/v1/auth/signup", json=signup_payload)
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "CONFLICT"


async def test_signup_short_password(client, signup_payload):
    signup_payload["password"] = "123"
    res = await client.post("/api/v1/auth/signup", json=signup_payload)
    assert res.status_code == 400
    assert res.json()["error"]["context"]["field"] == "password"


async def test_signup_missing_name_is_request_validation(client, signup_payload):
    del signup_payload["name"]
    res = await client.post("/api/v1/auth/signup", json=signup_payload)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert res.json()["error"]["context"]["field"] == "name"
    assert res.json()["error"]["details"][0]["type"] == "missing"


async def test_malformed_request_logged_with_code_and_path(client, signup_payload, caplog):
    caplog.set_level("WARNING", logger="worknearby.api.error_handlers")
    del signup_payload["email"]
    await client.post("/api/v1/auth/signup", json=signup_payload)
    records = [r for r in caplog.records if r.name == "worknearby.api.error_handlers"]
    assert records[-1].error_code == "VALIDATION_ERROR"
    assert records[-1].path == "/api/v1/auth/signup"


async def test_logout_then_login(customer_client):
    res = await customer_client.post("/api/v1/auth/logout")
    assert res.json() == {"is_authenticated": False}

    res = await customer_client.post(
        "/api/v1/auth/login",
        json={"email": "asha@example.com", "password": "secret-pass"},
    )
    assert res.status_code == 200
    assert res.json()["user"]["phone"] == "9876543210"


async def test_login_wrong_password(customer_client):
    await customer_client.post("/api/v1/auth/logout")
    res = await customer_client.post(
        "/api/v1/auth/login",
        json={"email": "asha@example.com", "password": "not-it"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "AUTHENTICATION_FAILED"
    me = (await customer_client.get("/api/v1/auth/me")).json()
    assert me["is_authenticated"] is False


async def test_profile_update(customer_client):
    res = await customer_client.put(
        "/api/v1/users/me",
        json={"name": "Asha P.", "phone": "111", "location": "Nagpur"},
    )
    assert res.status_code == 200
    assert res.json()["name"] == "Asha P."
    assert res.json()["email"] == "asha@example.com"


async def test_profile_requires_session(client):
    res = await client.get("/api/v1/users/me")
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHORIZED"


async def test_health(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"
