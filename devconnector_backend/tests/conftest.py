import os
import tempfile
from pathlib import Path

import pytest

_TMP_DIR = Path(tempfile.mkdtemp(prefix="devconnector-tests-"))
os.environ["DATABASE_PATH"] = str(_TMP_DIR / "test.db")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

from fastapi.testclient import TestClient  # noqa: E402

from app.config import settings  # noqa: E402
from app.main import app  # noqa: E402


def _remove_db():
    db_path = Path(settings.DATABASE_PATH)
    if db_path.exists():
        db_path.unlink()


@pytest.fixture
def fresh_db():
    _remove_db()
    yield Path(settings.DATABASE_PATH)
    _remove_db()


@pytest.fixture
def client(fresh_db):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(client):
    def _make_user(name="Alice", email="a@x.com", password="secret1"):
        res = client.post("/api/users", json={"name": name, "email": email, "password": password})
        assert res.status_code == 200, res.text
        token = res.json()["token"]
        headers = {"x-auth-token": token}
        me = client.get("/api/auth", headers=headers)
        assert me.status_code == 200, me.text
        return {"token": token, "headers": headers, "id": me.json()["id"]}
    return _make_user
