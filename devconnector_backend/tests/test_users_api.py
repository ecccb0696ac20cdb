from app.security import sign_token


def test_register_returns_token(client):
    res = client.post("/api/users", json={"name": "Alice", "email": "a@x.com", "password": "secret1"})
    assert res.status_code == 200
    assert res.json()["token"]


def test_register_same_email_twice_conflicts(client):
    body = {"name": "Alice", "email": "a@x.com", "password": "secret1"}
    assert client.post("/api/users", json=body).status_code == 200

    res = client.post("/api/users", json={**body, "email": "A@X.com"})
    assert res.status_code == 400
    assert res.json() == {"msg": "User Already Exists"}


def test_register_lists_every_violation(client):
    res = client.post("/api/users", json={"name": "", "email": "not-an-email", "password": "123"})
    assert res.status_code == 400
    params = [e["param"] for e in res.json()["errors"]]
    assert params == ["name", "email", "password"]


def test_register_missing_body_fields(client):
    res = client.post("/api/users", json={})
    assert res.status_code == 400
    assert len(res.json()["errors"]) == 3


def test_register_wrong_field_type_is_400(client):
    res = client.post("/api/users", json={"name": ["x"], "email": "a@x.com", "password": "secret1"})
    assert res.status_code == 400
    assert res.json()["errors"][0]["param"] == "name"


def test_current_user_hides_password(client, make_user):
    user = make_user()
    res = client.get("/api/auth", headers=user["headers"])
    assert res.status_code == 200
    body = res.json()
    assert body["name"] == "Alice"
    assert body["email"] == "a@x.com"
    assert body["avatar"].startswith("//www.gravatar.com/avatar/")
    assert "password" not in body


def test_current_user_gone(client):
    res = client.get("/api/auth", headers={"x-auth-token": sign_token("0" * 32)})
    assert res.status_code == 404
    assert res.json() == {"msg": "User Not Found"}


def test_login(client, make_user):
    make_user()
    res = client.post("/api/auth", json={"email": "a@x.com", "password": "secret1"})
    assert res.status_code == 200
    token = res.json()["token"]
    assert client.get("/api/auth", headers={"Authorization": f"Bearer {token}"}).status_code == 200


def test_login_bad_password(client, make_user):
    make_user()
    res = client.post("/api/auth", json={"email": "a@x.com", "password": "wrong-one"})
    assert res.status_code == 400
    assert res.json()["errors"][0]["msg"] == "Invalid Credentials"


def test_login_unknown_email(client):
    res = client.post("/api/auth", json={"email": "nobody@x.com", "password": "secret1"})
    assert res.status_code == 400
    assert res.json()["errors"][0]["msg"] == "Invalid Credentials"


def test_missing_token(client):
    res = client.get("/api/posts")
    assert res.status_code == 401
    assert res.json() == {"msg": "No token, authorization denied"}


def test_invalid_token(client):
    res = client.get("/api/posts", headers={"x-auth-token": "garbage"})
    assert res.status_code == 401
    assert res.json() == {"msg": "Token is not valid"}


def test_expired_token(client, make_user):
    user = make_user()
    expired = sign_token(user["id"], expires_in=-10)
    res = client.get("/api/posts", headers={"x-auth-token": expired})
    assert res.status_code == 401


def test_non_bearer_authorization_scheme_ignored(client, make_user):
    user = make_user()
    res = client.get("/api/posts", headers={"Authorization": f"Basic {user['token']}"})
    assert res.status_code == 401
    assert res.json() == {"msg": "No token, authorization denied"}


def test_register_password_over_bcrypt_limit(client):
    res = client.post("/api/users", json={"name": "Alice", "email": "a@x.com", "password": "p" * 100})
    assert res.status_code == 400
    assert res.json()["errors"] == [
        {"msg": "Password must be at most 72 bytes", "param": "password", "location": "body"},
    ]


def test_register_password_at_bcrypt_limit(client):
    res = client.post("/api/users", json={"name": "Alice", "email": "a@x.com", "password": "p" * 72})
    assert res.status_code == 200


def test_login_password_over_bcrypt_limit(client, make_user):
    make_user()
    res = client.post("/api/auth", json={"email": "a@x.com", "password": "é" * 40})
    assert res.status_code == 400
    assert res.json()["errors"][0]["param"] == "password"
