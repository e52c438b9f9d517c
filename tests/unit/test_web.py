"""Unit tests for the HTTP API."""

import json

import pytest
from fastapi.testclient import TestClient

from topohealth.config import TopoHealthSettings


@pytest.fixture(autouse=True)
def disable_global_limiter():
    """Disable the global rate limiter for tests."""
    from topohealth.web.deps import limiter

    original_enabled = limiter.enabled
    limiter.enabled = False
    limiter.reset()
    yield
    limiter.enabled = original_enabled


@pytest.fixture
def settings(data_files):
    snapshot_file, isis_file = data_files
    return TopoHealthSettings(snapshot_file=snapshot_file, isis_file=isis_file)


@pytest.fixture
def app(settings):
    """Create a fresh app instance with rate limiting disabled."""
    from topohealth.web.app import create_app

    return create_app(rate_limit_enabled=False, settings=settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def upload_files(snapshot_data, isis_data):
    return {
        "snapshot": ("snapshot.json", json.dumps(snapshot_data).encode(), "application/json"),
        "isis": ("isis-db.json", json.dumps(isis_data).encode(), "application/json"),
    }


@pytest.fixture
def loaded_client(client, upload_files):
    """Client whose app already holds a processed topology."""
    response = client.post("/api/upload", files=upload_files)
    assert response.status_code == 200
    return client


class TestWebAppCreation:
    """Tests for FastAPI app creation."""

    def test_app_has_routes(self, app):
        paths = app.openapi()["paths"]

        assert "/api/health" in paths
        assert "/api/topology" in paths
        assert "/api/upload" in paths
        assert "/api/links" in paths
        assert "/api/path" in paths

    def test_routes_respond(self, client):
        assert client.get("/api/health").status_code == 200
        assert client.get("/api/links").status_code == 404
        assert client.post("/api/upload").status_code == 400

    def test_security_headers(self, client):
        response = client.get("/api/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"


class TestHealth:
    """Tests for the liveness probe."""

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert "timestamp" in body


class TestTopology:
    """Tests for processing the configured local files."""

    def test_get_topology(self, client):
        response = client.get("/api/topology")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert data["summary"] == {
            "total_links": 4,
            "healthy": 1,
            "drift_high": 1,
            "missing_telemetry": 1,
            "missing_isis": 1,
        }
        assert len(data["topology"]) == 4
        assert len(data["locations"]) == 4
        assert data["bandwidth_stats"]["total_capacity_gbps"] == 310
        assert "processed_at" in data

    def test_link_wire_fields(self, client):
        link = next(
            link for link in client.get("/api/topology").json()["data"]["topology"] if link["link_pk"] == "link-1"
        )

        assert link["link_code"] == "ams-dz1:fra-dz1"
        assert link["health_status"] == "HEALTHY"
        assert link["data_status"] == "COMPLETE"
        assert link["bandwidth_tier"] == 100
        assert link["isis_metric"] == 10

    def test_missing_files(self, tmp_path):
        from topohealth.web.app import create_app

        settings = TopoHealthSettings(snapshot_file=tmp_path / "none.json", isis_file=tmp_path / "none2.json")
        client = TestClient(create_app(rate_limit_enabled=False, settings=settings))
        response = client.get("/api/topology")

        assert response.status_code == 500
        assert response.json()["success"] is False
        assert "not found" in response.json()["error"]


class TestUpload:
    """Tests for document upload validation and processing."""

    def test_upload(self, client, upload_files):
        response = client.post("/api/upload", files=upload_files)

        assert response.status_code == 200
        assert response.json()["data"]["summary"]["total_links"] == 4

    def test_missing_file(self, client, upload_files):
        response = client.post("/api/upload", files={"snapshot": upload_files["snapshot"]})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Both snapshot and ISIS files are required"}

    def test_invalid_snapshot_json(self, client, upload_files):
        files = dict(upload_files, snapshot=("snapshot.json", b"{broken", "application/json"))
        response = client.post("/api/upload", files=files)

        assert response.status_code == 400
        assert response.json()["error"] == "Snapshot file contains invalid JSON"

    def test_invalid_isis_json(self, client, upload_files):
        files = dict(upload_files, isis=("isis-db.json", b"not json", "application/json"))
        response = client.post("/api/upload", files=files)

        assert response.status_code == 400
        assert response.json()["error"] == "ISIS file contains invalid JSON"

    def test_wrong_shape(self, client, upload_files):
        files = dict(upload_files, isis=("isis-db.json", b'{"vrfs": []}', "application/json"))
        response = client.post("/api/upload", files=files)

        assert response.status_code == 400

    def test_oversized_file(self, data_files, upload_files):
        from topohealth.web.app import create_app

        snapshot_file, isis_file = data_files
        settings = TopoHealthSettings(snapshot_file=snapshot_file, isis_file=isis_file, max_isis_bytes=16)
        client = TestClient(create_app(rate_limit_enabled=False, settings=settings))
        response = client.post("/api/upload", files=upload_files)

        assert response.status_code == 400
        assert response.json()["error"].startswith("ISIS file must be less than")


class TestLinks:
    """Tests for filtered link listing."""

    def test_requires_topology(self, client):
        assert client.get("/api/links").status_code == 404

    def test_all_links(self, loaded_client):
        data = loaded_client.get("/api/links").json()["data"]

        assert len(data["links"]) == 4
        assert data["stats"]["percentage_visible"] == 100

    def test_filters(self, loaded_client):
        response = loaded_client.get(
            "/api/links",
            params={"health_status": ["HEALTHY", "DRIFT_HIGH"], "search": "lon"},
        )
        data = response.json()["data"]

        assert [link["link_pk"] for link in data["links"]] == ["link-2"]
        assert data["stats"]["hidden_links"] == 3

    def test_bandwidth_tier_filter(self, loaded_client):
        data = loaded_client.get("/api/links", params={"bandwidth_tier": [0, 200]}).json()["data"]
        assert sorted(link["link_pk"] for link in data["links"]) == ["link-3", "link-4"]

    def test_invalid_filters(self, loaded_client):
        assert loaded_client.get("/api/links", params={"drift_min": 50, "drift_max": 10}).status_code == 400
        assert loaded_client.get("/api/links", params={"bandwidth_tier": 7}).status_code == 400
        assert loaded_client.get("/api/links", params={"health_status": "GREAT"}).status_code == 422


class TestPath:
    """Tests for shortest path queries."""

    def test_requires_topology(self, client):
        response = client.post("/api/path", json={"sourceDeviceId": "ams-dz1", "destinationDeviceId": "nyc-dz1"})

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_path(self, loaded_client):
        response = loaded_client.post(
            "/api/path",
            json={"sourceDeviceId": "ams-dz1", "destinationDeviceId": "nyc-dz1", "strategy": "isis-metric"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["error"] is None
        assert body["compute_time_ms"] >= 0

        path = body["data"]
        assert [hop["id"] for hop in path["hops"]] == ["ams-dz1", "fra-dz1", "lon-dz1", "nyc-dz1"]
        assert path["totalHops"] == 3
        assert path["minBandwidthGbps"] == 10
        assert path["strategy"] == "isis-metric"
        assert path["links"][0]["latencyUs"] == pytest.approx(5190)
        assert path["links"][0]["healthStatus"] == "HEALTHY"

    def test_default_strategy(self, loaded_client):
        body = loaded_client.post(
            "/api/path", json={"sourceDeviceId": "ams-dz1", "destinationDeviceId": "nyc-dz1"}
        ).json()

        assert body["data"]["strategy"] == "latency"
        assert body["data"]["totalHops"] == 1

    def test_unknown_device(self, loaded_client):
        body = loaded_client.post(
            "/api/path", json={"sourceDeviceId": "tok-dz1", "destinationDeviceId": "nyc-dz1"}
        ).json()

        assert body["data"] is None
        assert body["error"] == 'Source device "tok-dz1" not found in topology'

    def test_unknown_strategy(self, loaded_client):
        response = loaded_client.post(
            "/api/path",
            json={"sourceDeviceId": "ams-dz1", "destinationDeviceId": "nyc-dz1", "strategy": "fastest"},
        )
        assert response.status_code == 422


class TestRateLimiting:
    """Tests for slowapi rate limiting."""

    @pytest.fixture
    def enabled_limiter(self):
        from topohealth.web.deps import limiter

        limiter.enabled = True
        limiter.reset()
        yield limiter
        limiter.enabled = False
        limiter.reset()

    def test_rate_limit_enforced(self, settings, enabled_limiter):
        from topohealth.web.app import create_app

        client = TestClient(create_app(rate_limit_enabled=True, settings=settings))
        statuses = [client.get("/api/links").status_code for _ in range(61)]

        assert statuses[:60] == [404] * 60
        assert statuses[60] == 429

    def test_disabled_app_leaves_shared_limiter_alone(self, settings, enabled_limiter):
        from topohealth.web.app import create_app

        limited = TestClient(create_app(rate_limit_enabled=True, settings=settings))
        unlimited_app = create_app(rate_limit_enabled=False, settings=settings)

        assert enabled_limiter.enabled
        assert unlimited_app.state.limiter is not enabled_limiter
        assert not unlimited_app.state.limiter.enabled

        statuses = [limited.get("/api/links").status_code for _ in range(61)]
        assert statuses[60] == 429

        unlimited = TestClient(unlimited_app)
        assert all(unlimited.get("/api/links").status_code == 404 for _ in range(61))
