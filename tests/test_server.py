"""End-to-end tests for the HTTP front end."""
import sys
import os
import json
import shutil
import tempfile
from unittest.mock import Mock, patch

from fastapi.testclient import TestClient
from google.oauth2.credentials import Credentials
from googleapiclient.errors import HttpError

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../src"))

from play_reviews.auth.credential_store import TokenFileCredentialStore
from play_reviews.auth.google_auth import ConsentProvider, CredentialManager
from play_reviews.client.reviews import AuthorizedRequestGateway
from play_reviews.server.main import create_app
from play_reviews.utils.errors import AuthorizationError

REVIEWS = [{"reviewId": "r1", "authorName": "Ada"}]
ERROR_BODY = {"error": "Failed to fetch reviews"}


class TestReviewsEndpoint:
    """Tests for GET /reviews wired to a real manager and gateway."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.token_path = os.path.join(self.temp_dir, "token.json")
        self.secrets_path = os.path.join(self.temp_dir, "credentials.json")
        with open(self.secrets_path, "w") as f:
            json.dump({"installed": {"client_id": "cid", "client_secret": "csecret"}}, f)

        self.env_patch = patch.dict(os.environ)
        self.env_patch.start()
        os.environ.pop("GOOGLE_OAUTH_CLIENT_ID", None)
        os.environ.pop("GOOGLE_OAUTH_CLIENT_SECRET", None)

        self.consent = Mock(spec=ConsentProvider)
        self.consent.authorize.return_value = Credentials(
            token="access", refresh_token="granted-refresh"
        )
        self.manager = CredentialManager(
            store=TokenFileCredentialStore(path=self.token_path),
            consent_provider=self.consent,
            config=Mock(
                client_secrets_path=self.secrets_path,
                consent_timeout=5,
                proactive_refresh=False,
            ),
        )

        self.service = Mock()
        self.execute = self.service.reviews.return_value.list.return_value.execute
        self.execute.return_value = {"reviews": REVIEWS}
        self.factory = Mock(return_value=self.service)
        self.gateway = AuthorizedRequestGateway(service_factory=self.factory)

        self.client = TestClient(
            create_app(
                manager=self.manager,
                gateway=self.gateway,
                public_dir=os.path.join(self.temp_dir, "public"),
            )
        )

    def teardown_method(self):
        self.env_patch.stop()
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_first_run_consents_and_stores_token(self):
        response = self.client.get("/reviews", params={"packageName": "com.example.app"})

        assert response.status_code == 200
        assert response.json() == REVIEWS
        self.consent.authorize.assert_called_once()

        with open(self.token_path) as f:
            record = json.load(f)
        assert record == {
            "type": "authorized_user",
            "client_id": "cid",
            "client_secret": "csecret",
            "refresh_token": "granted-refresh",
        }
        assert self.factory.call_count == 1

    def test_cached_token_skips_consent(self):
        with open(self.token_path, "w") as f:
            json.dump({
                "type": "authorized_user",
                "client_id": "cid",
                "client_secret": "csecret",
                "refresh_token": "cached-refresh",
            }, f)

        response = self.client.get("/reviews", params={"packageName": "com.example.app"})

        assert response.status_code == 200
        self.consent.authorize.assert_not_called()
        self.factory.assert_called_once()
        used = self.factory.call_args[0][0]
        assert used.refresh_token == "cached-refresh"
        assert used.client_id == "cid"

    def test_upstream_error_returns_generic_500(self):
        self.execute.side_effect = HttpError(Mock(status=500, reason="Backend"), b"boom")

        response = self.client.get("/reviews", params={"packageName": "com.example.app"})

        assert response.status_code == 500
        assert response.json() == ERROR_BODY

    def test_missing_package_name_returns_500_without_upstream_call(self):
        response = self.client.get("/reviews")

        assert response.status_code == 500
        assert response.json() == ERROR_BODY
        assert self.factory.call_count == 0

    def test_empty_package_name_returns_500(self):
        response = self.client.get("/reviews", params={"packageName": ""})

        assert response.status_code == 500
        assert self.factory.call_count == 0

    def test_consent_failure_returns_generic_500(self):
        self.consent.authorize.side_effect = RuntimeError("denied")

        response = self.client.get("/reviews", params={"packageName": "com.example.app"})

        assert response.status_code == 500
        assert response.json() == ERROR_BODY
        assert self.factory.call_count == 0


class TestAppWiring:
    """Tests for create_app with mocked collaborators."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()

    def teardown_method(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_authorization_error_is_not_leaked(self):
        manager = Mock()
        manager.acquire.side_effect = AuthorizationError("Interactive consent failed", "secret detail")
        gateway = Mock()
        client = TestClient(create_app(manager=manager, gateway=gateway, public_dir=self.temp_dir))

        response = client.get("/reviews", params={"packageName": "com.example.app"})

        assert response.status_code == 500
        assert "secret detail" not in response.text
        gateway.fetch.assert_not_called()

    def test_serves_static_files(self):
        with open(os.path.join(self.temp_dir, "index.html"), "w") as f:
            f.write("<h1>Reviews</h1>")
        client = TestClient(create_app(manager=Mock(), gateway=Mock(), public_dir=self.temp_dir))

        response = client.get("/")

        assert response.status_code == 200
        assert "<h1>Reviews</h1>" in response.text

    def test_reviews_route_takes_precedence_over_static(self):
        manager = Mock()
        gateway = Mock()
        gateway.fetch.return_value = REVIEWS
        client = TestClient(create_app(manager=manager, gateway=gateway, public_dir=self.temp_dir))

        response = client.get("/reviews", params={"packageName": "com.example.app"})

        assert response.status_code == 200
        assert response.json() == REVIEWS
        gateway.fetch.assert_called_once_with("com.example.app", manager.acquire.return_value)

    def test_missing_public_dir_is_skipped(self):
        app = create_app(
            manager=Mock(),
            gateway=Mock(),
            public_dir=os.path.join(self.temp_dir, "absent"),
        )

        assert all(getattr(route, "name", None) != "public" for route in app.routes)
