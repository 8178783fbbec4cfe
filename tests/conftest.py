import pytest

from pregnancy_tracker import create_app
from pregnancy_tracker.extensions import db


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def register(client):
    def _register(username="drsmith", password="s3cret-pass", **extra):
        payload = {
            "username": username,
            "email": extra.pop("email", f"{username}@example.com"),
            "password": password,
            "first_name": extra.pop("first_name", "Ada"),
            "last_name": extra.pop("last_name", "Smith"),
        }
        payload.update(extra)
        return client.post("/api/auth/register", json=payload)
    return _register


@pytest.fixture
def auth_headers(register):
    res = register()
    assert res.status_code == 201
    return {"Authorization": f"Bearer {res.get_json()['access_token']}"}


@pytest.fixture
def other_auth_headers(register):
    res = register(username="drjones")
    assert res.status_code == 201
    return {"Authorization": f"Bearer {res.get_json()['access_token']}"}
