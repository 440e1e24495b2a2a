"""API tests for the REST signup/login routes and the health endpoint."""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_auth_service, get_upload_store
from app.core.config import settings
from app.core.database import build_session_factory, get_db
from app.main import app
from app.models import Base
from app.services.auth import AuthService
from app.services.uploads import UploadStore

AUTH = f"{settings.API_V1_PREFIX}/auth"


def _session_factory() -> sessionmaker:
    """Fresh in-memory SQLite store with all tables."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return build_session_factory(engine)


class _ApiTestCase(unittest.TestCase):
    """TestClient with services bound to an in-memory store."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.upload_dir = Path(self._tmp.name)
        self.factory = _session_factory()

        def _db():
            db = self.factory()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_auth_service] = lambda: AuthService(self.factory)
        app.dependency_overrides[get_upload_store] = lambda: UploadStore(
            self.upload_dir, base_url="http://localhost:5000"
        )
        app.dependency_overrides[get_db] = _db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        self._tmp.cleanup()

    def _signup(self, name: str = "Ana", email: str = "ana@x.com", password: str = "pw123"):
        return self.client.post(
            f"{AUTH}/signup",
            json={"name": name, "email": email, "password": password},
        )


class TestSignupRoute(_ApiTestCase):
    """POST /signup returns the public user; failures map to 400/500."""

    def test_created_user_has_no_password(self) -> None:
        response = self._signup()
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(set(body), {"id", "name", "email"})
        self.assertEqual(body["name"], "Ana")
        self.assertEqual(body["email"], "ana@x.com")

    def test_missing_password(self) -> None:
        response = self.client.post(f"{AUTH}/signup", json={"name": "Ana", "email": "ana@x.com"})
        self.assertEqual(response.status_code, 400)
        self.assertIn("password", response.json()["message"])

    def test_duplicate_email_passes_store_message_in_dev(self) -> None:
        self._signup()
        response = self._signup(name="Other")
        self.assertEqual(response.status_code, 500)
        self.assertIn("UNIQUE", response.json()["error"].upper())

    @patch("app.api.v1.auth.get_settings")
    def test_duplicate_email_is_opaque_in_prod(self, mock_settings: MagicMock) -> None:
        mock_settings.return_value = MagicMock(APP_ENV="prod", AUTH_GENERIC_ERRORS=False)
        self._signup()
        response = self._signup(name="Other")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Internal server error"})


class TestLoginRoute(_ApiTestCase):
    """POST /login: 400 on missing fields, 401 on bad credentials, 200 otherwise."""

    def setUp(self) -> None:
        super().setUp()
        self._signup()

    def test_success(self) -> None:
        response = self.client.post(f"{AUTH}/login", json={"email": "ana@x.com", "password": "pw123"})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["message"], "Login successful")
        self.assertEqual(set(body["user"]), {"id", "name", "email"})
        self.assertEqual(body["user"]["email"], "ana@x.com")

    def test_missing_fields(self) -> None:
        response = self.client.post(f"{AUTH}/login", json={"email": "ana@x.com"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "Email and password are required"})

    def test_unknown_user(self) -> None:
        response = self.client.post(f"{AUTH}/login", json={"email": "bo@x.com", "password": "pw123"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"message": "User not found"})

    def test_wrong_password(self) -> None:
        response = self.client.post(f"{AUTH}/login", json={"email": "ana@x.com", "password": "wrong"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"message": "Incorrect password"})

    @patch("app.api.v1.auth.get_settings")
    def test_generic_messages_when_enabled(self, mock_settings: MagicMock) -> None:
        mock_settings.return_value = MagicMock(APP_ENV="dev", AUTH_GENERIC_ERRORS=True)
        unknown = self.client.post(f"{AUTH}/login", json={"email": "bo@x.com", "password": "pw123"})
        wrong = self.client.post(f"{AUTH}/login", json={"email": "ana@x.com", "password": "wrong"})
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(unknown.json(), wrong.json())
        self.assertEqual(wrong.json(), {"message": "Invalid email or password"})


class TestHealthRoute(_ApiTestCase):
    """GET /health reports database and upload storage status."""

    def test_health(self) -> None:
        response = self.client.get(f"{settings.API_V1_PREFIX}/health")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["database"], "connected")
        self.assertEqual(body["uploads"], "writable")


if __name__ == "__main__":
    unittest.main()
