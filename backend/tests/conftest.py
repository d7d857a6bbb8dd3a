import itertools

import pytest
from argon2 import PasswordHasher
from fastapi.testclient import TestClient

from jobboard.config import settings
from jobboard.database import create_session_factory, get_db, get_engine, init_db
from jobboard.main import app
from jobboard.utils import security


@pytest.fixture(autouse=True)
def fast_password_hasher(monkeypatch):
    """Cheap argon2 parameters so registration-heavy tests stay quick."""
    monkeypatch.setattr(security, "ph", PasswordHasher(time_cost=1, memory_cost=1024, parallelism=1))


@pytest.fixture
def tmp_data(tmp_path):
    data_path = tmp_path / "JobBoard"
    data_path.mkdir()
    return data_path


@pytest.fixture
def test_db(tmp_data):
    engine = get_engine(tmp_data / "jobboard.sqlite")
    init_db(engine)
    TestSession = create_session_factory(engine)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def db(test_db):
    session = test_db()
    yield session
    session.close()


@pytest.fixture
def client(tmp_data, test_db):
    original_data_path = settings.data_path
    settings.data_path = tmp_data
    c = TestClient(app)
    yield c
    settings.data_path = original_data_path


@pytest.fixture
def make_user(client):
    """Register and log in a user; returns id, auth headers and identity."""
    counter = itertools.count(1)

    def _make(role: str = "jobseeker", full_name: str | None = None, password: str = "secret-pass-1"):
        n = next(counter)
        email = f"{role}{n}@example.com"
        name = full_name or f"{role.title()} {n}"
        r = client.post("/api/users/register", json={
            "full_name": name,
            "email": email,
            "password": password,
            "role": role,
        })
        assert r.status_code == 201, r.text
        login = client.post("/api/users/login", json={"email": email, "password": password, "role": role})
        assert login.status_code == 200, login.text
        return {
            "id": r.json()["user_id"],
            "email": email,
            "full_name": name,
            "headers": {"Authorization": f"Bearer {login.json()['token']}"},
        }

    return _make


@pytest.fixture
def post_job(client):
    def _post(employer: dict, **overrides):
        payload = {
            "title": "Caregiver",
            "salary": 20,
            "salary_period": "hour",
            "employment_type": "Full-time",
            "location": "Leeds",
            "description": "Support clients at home",
            "requirements": ["DBS check"],
        }
        payload.update(overrides)
        r = client.post("/api/jobs/create", json=payload, headers=employer["headers"])
        assert r.status_code == 201, r.text
        return r.json()["job_id"]

    return _post


@pytest.fixture
def apply_to(client):
    def _apply(jobseeker: dict, job_id: str, cover_letter: str = "Hi", **extra):
        data = {"job_id": job_id, "cover_letter": cover_letter}
        data.update(extra.pop("data", {}))
        return client.post("/api/applications/apply", data=data, headers=jobseeker["headers"], **extra)

    return _apply
