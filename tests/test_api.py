"""Tests for the connection and post endpoints."""

from fastapi.testclient import TestClient

from socialcast.domain.models import SocialAccount
from socialcast.errors import BackendError


def _connect(workspace, *platforms: str) -> None:
    for platform in platforms:
        workspace.store.upsert(SocialAccount(id=f"acc-{platform}", platform=platform))


class TestConnectionsApi:
    """Tests for /api/v1/connections."""

    def test_list_connections(self, test_client: TestClient) -> None:
        response = test_client.get("/api/v1/connections")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 5
        by_platform = {c["platform"]: c for c in data["connections"]}
        assert by_platform["instagram"]["auth_id"] == "facebook"
        assert by_platform["instagram"]["connect_label"] == "Connect via Facebook"
        assert by_platform["twitter"]["state"] == "unlinked"
        assert by_platform["twitter"]["connected"] is False

    def test_list_connections_refresh(self, test_client: TestClient, workspace, backend) -> None:
        backend.accounts["youtube"] = SocialAccount(id="y", platform="youtube", display_name="chan")

        response = test_client.get("/api/v1/connections", params={"refresh": True})

        by_platform = {c["platform"]: c for c in response.json()["connections"]}
        assert by_platform["youtube"]["state"] == "linked"
        assert by_platform["youtube"]["account_name"] == "chan"

    def test_begin_link(self, test_client: TestClient, backend) -> None:
        backend.authorization_urls["facebook"] = "https://facebook.example/dialog"

        response = test_client.post("/api/v1/connections/instagram/link")

        assert response.status_code == 200
        assert response.json() == {
            "platform": "instagram",
            "url": "https://facebook.example/dialog",
        }

    def test_begin_link_unknown_platform(self, test_client: TestClient) -> None:
        response = test_client.post("/api/v1/connections/myspace/link")

        assert response.status_code == 404

    def test_begin_link_backend_failure(self, test_client: TestClient, backend) -> None:
        backend.auth_error = BackendError("provider down", status_code=500)

        response = test_client.post("/api/v1/connections/twitter/link")

        assert response.status_code == 502
        assert response.json()["detail"] == "provider down"

    def test_disconnect(self, test_client: TestClient, workspace) -> None:
        _connect(workspace, "twitter")

        response = test_client.delete("/api/v1/connections/twitter")

        assert response.status_code == 204
        assert not workspace.store.is_connected("twitter")

    def test_disconnect_failure(self, test_client: TestClient, workspace, backend) -> None:
        _connect(workspace, "twitter")
        backend.disconnect_error = BackendError("try later", status_code=503)

        response = test_client.delete("/api/v1/connections/twitter")

        assert response.status_code == 502
        assert workspace.store.is_connected("twitter")


class TestOAuthReturn:
    """Tests for the page identity providers redirect back to."""

    def test_callback_completes_and_redirects(self, test_client: TestClient, workspace, backend) -> None:
        response = test_client.get(
            "/dashboard/connections",
            params={"platform": "twitter", "code": "abc123", "tab": "all"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "http://testserver/dashboard/connections?tab=all"
        assert workspace.store.is_connected("twitter")
        assert backend.calls_to("connect")[0]["code"] == "abc123"

    def test_oauth1_callback(self, test_client: TestClient, workspace, backend) -> None:
        response = test_client.get(
            "/dashboard/connections",
            params={"platform": "linkedin", "oauth_token": "T", "oauth_verifier": "V"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert "oauth_token" not in response.headers["location"]
        assert backend.calls_to("connect")[0]["code"] is None
        assert workspace.store.is_connected("linkedin")

    def test_plain_visit_lists_connections(self, test_client: TestClient, backend) -> None:
        response = test_client.get("/dashboard/connections")

        assert response.status_code == 200
        assert response.json()["total"] == 5
        assert backend.calls_to("connect") == []

    def test_rejected_callback(self, test_client: TestClient, workspace, backend) -> None:
        backend.connect_error = BackendError("invalid code", status_code=400)

        response = test_client.get(
            "/dashboard/connections",
            params={"platform": "twitter", "code": "stale"},
            follow_redirects=False,
        )

        assert response.status_code == 502
        assert response.json()["detail"] == "invalid code"
        assert not workspace.store.is_connected("twitter")


class TestPostsApi:
    """Tests for /api/v1/posts."""

    def test_publish_partial_failure(self, test_client: TestClient, workspace, backend) -> None:
        _connect(workspace, "facebook_page", "instagram")
        backend.publish_response = {
            "facebook_page": {"status": "success", "url": "u"},
            "instagram": {"status": "error", "error": "token expired"},
        }

        response = test_client.post(
            "/api/v1/posts/publish",
            json={
                "content": {"text": "Launch", "images": [{"url": "https://img/1.jpg"}]},
                "platforms": ["facebook_page", "instagram"],
            },
        )

        assert response.status_code == 200
        assert response.json() == {
            "facebook_page": {"status": "success", "url": "u", "error": None},
            "instagram": {"status": "error", "url": None, "error": "token expired"},
        }

    def test_publish_ai_schedule(self, test_client: TestClient, workspace, backend) -> None:
        _connect(workspace, "twitter")

        response = test_client.post(
            "/api/v1/posts/publish",
            json={"content": {"text": "Later"}, "platforms": ["twitter"], "schedule_type": "ai"},
        )

        assert response.status_code == 200
        assert backend.calls_to("publish")[0]["payload"]["schedule_type"] == "ai"

    def test_publish_unconnected(self, test_client: TestClient, backend) -> None:
        response = test_client.post(
            "/api/v1/posts/publish",
            json={"content": {"text": "Hi"}, "platforms": ["twitter"]},
        )

        assert response.status_code == 400
        assert "twitter" in response.json()["detail"]
        assert backend.calls_to("publish") == []

    def test_publish_past_time(self, test_client: TestClient, workspace, backend) -> None:
        _connect(workspace, "twitter")

        response = test_client.post(
            "/api/v1/posts/publish",
            json={
                "content": {"text": "Hi"},
                "platforms": ["twitter"],
                "scheduled_time": "2000-01-01T00:00:00Z",
            },
        )

        assert response.status_code == 400
        assert backend.calls_to("publish") == []

    def test_publish_transport_error(self, test_client: TestClient, workspace, backend) -> None:
        _connect(workspace, "twitter")
        backend.publish_error = BackendError("Backend unreachable: refused")

        response = test_client.post(
            "/api/v1/posts/publish",
            json={"content": {"text": "Hi"}, "platforms": ["twitter"]},
        )

        assert response.status_code == 502

    def test_list_and_delete_posts(self, test_client: TestClient, workspace) -> None:
        _connect(workspace, "twitter")
        test_client.post(
            "/api/v1/posts/publish",
            json={"content": {"text": "Hi"}, "platforms": ["twitter"]},
        )

        posts = test_client.get("/api/v1/posts").json()

        assert len(posts) == 1
        assert posts[0]["text"] == "Hi"
        assert posts[0]["results"]["twitter"]["status"] == "success"

        response = test_client.delete(f"/api/v1/posts/{posts[0]['id']}")
        assert response.status_code == 204
        assert test_client.get("/api/v1/posts").json() == []

    def test_delete_missing_post(self, test_client: TestClient) -> None:
        response = test_client.delete("/api/v1/posts/missing")

        assert response.status_code == 404
