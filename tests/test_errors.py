import mongomock
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from config import Settings
from main import create_app


def test_database_errors_are_redacted(client, user, auth_headers, monkeypatch):
    def broken_find(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("db-host-17:27017: connection refused")

    monkeypatch.setattr(mongomock.Collection, "find", broken_find)
    response = client.get("/movies", headers=auth_headers)
    assert response.status_code == 500
    assert response.json() == {"detail": "Database error"}
    assert "db-host-17" not in response.text


def test_unexpected_errors_are_redacted(app, auth_headers, monkeypatch):
    def broken_find(self, *args, **kwargs):
        raise RuntimeError("secret")

    monkeypatch.setattr(mongomock.Collection, "find", broken_find)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        response = test_client.get("/movies", headers=auth_headers)
    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
    assert "secret" not in response.text


def test_cors_only_allows_configured_origins(settings):
    restricted = Settings(mongo_db=settings.mongo_db, secret_key="test-secret", allowed_origins=["http://a.test"])
    app = create_app(restricted, client=mongomock.MongoClient())
    with TestClient(app) as test_client:
        allowed = test_client.get("/", headers={"Origin": "http://a.test"})
        denied = test_client.get("/", headers={"Origin": "http://b.test"})
    assert allowed.headers["access-control-allow-origin"] == "http://a.test"
    assert "access-control-allow-origin" not in denied.headers
