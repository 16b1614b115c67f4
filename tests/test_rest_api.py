"""Tests for the REST API."""

import json
import pytest
from fastapi.testclient import TestClient
from json_query_transformer import QueryTransformer, __version__
from json_query_transformer.config import ServiceConfig
from json_query_transformer.rest import create_app

TRANSFORM_URL = "/api/v1/transform"


@pytest.fixture
def config():
    """Configuration with a small payload limit."""
    return ServiceConfig(service_name="Test Transformation Service", max_payload_bytes=1024)


@pytest.fixture
def client(config):
    """Client for an app backed by the jq engine."""
    return TestClient(create_app(config))


class TestTransformEndpoint:
    """Tests for POST /api/v1/transform."""

    def test_transform_object(self, client):
        """Test transforming a structured value."""
        response = client.post(TRANSFORM_URL, json={
            "jsonData": {"name": "test"},
            "query": "{result: .name}"
        })

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["result"] == {"result": "test"}
        assert body["errorMessage"] is None
        assert body["processingTimeMs"] >= 0
        assert body["requestId"]
        assert body["timestamp"]

    def test_transform_json_text(self, client):
        """Test that string data is parsed as JSON text."""
        response = client.post(TRANSFORM_URL, json={
            "jsonData": '{"items": [1, 2, 3]}',
            "query": ".items | add"
        })

        assert response.status_code == 200
        assert response.json()["result"] == 6

    def test_return_as_string(self, client):
        """Test returning the result as pretty-printed JSON text."""
        response = client.post(TRANSFORM_URL, json={
            "jsonData": {"name": "test"},
            "query": "{result: .name}",
            "prettyPrint": True,
            "returnAsString": True
        })

        result = response.json()["result"]
        assert isinstance(result, str)
        assert result == '{\n  "result": "test"\n}'

    def test_compilation_error_is_200_envelope(self, client):
        """Test that transform failures are reported in a 200 envelope."""
        response = client.post(TRANSFORM_URL, json={
            "jsonData": {"name": "test"},
            "query": "{result: .name"
        })

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["result"] is None
        assert "compilation failed" in body["errorMessage"].lower()
        assert body["processingTimeMs"] >= 0

    def test_invalid_json_text_is_200_envelope(self, client):
        """Test that unparsable JSON text is a transform failure."""
        response = client.post(TRANSFORM_URL, json={"jsonData": "{oops", "query": "."})

        assert response.status_code == 200
        assert response.json()["success"] is False

    @pytest.mark.parametrize("body", [
        {"query": "."},
        {"jsonData": None, "query": "."},
        {"jsonData": {"a": 1}},
        {"jsonData": {"a": 1}, "query": "   "},
    ])
    def test_invalid_request(self, client, body):
        """Test that invalid requests get a 400 envelope."""
        response = client.post(TRANSFORM_URL, json=body)

        assert response.status_code == 400
        payload = response.json()
        assert payload["success"] is False
        assert payload["errorMessage"].startswith("Invalid request")
        assert payload["processingTimeMs"] == 0

    def test_malformed_body(self, client):
        """Test that a non-JSON body gets a 400 envelope."""
        response = client.post(TRANSFORM_URL, content=b"{not json",
                               headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_oversized_payload_not_transformed(self, config, recording_engine):
        """Test that data over the size limit never reaches the engine."""
        client = TestClient(create_app(config, QueryTransformer(engine=recording_engine)))

        response = client.post(TRANSFORM_URL, json={
            "jsonData": {"blob": "x" * 2048},
            "query": "."
        })

        assert response.status_code == 413
        body = response.json()
        assert body["success"] is False
        assert "exceeds maximum allowed size (1024 bytes)" in body["errorMessage"]
        assert recording_engine.compiled == []
        assert recording_engine.applied == []

    def test_oversized_text_payload(self, client):
        """Test the limit applies to JSON text too."""
        response = client.post(TRANSFORM_URL, json={
            "jsonData": json.dumps(["y" * 100] * 20),
            "query": "."
        })

        assert response.status_code == 413

    def test_unexpected_error_is_500_envelope(self, config, monkeypatch):
        """Test that errors outside the invoker become 500 envelopes."""
        transformer = QueryTransformer()

        def explode(value, request):
            raise RuntimeError("renderer broke")

        monkeypatch.setattr(transformer, "render_result", explode)
        client = TestClient(create_app(config, transformer))

        response = client.post(TRANSFORM_URL, json={"jsonData": {"a": 1}, "query": ".a"})

        assert response.status_code == 500
        assert "renderer broke" in response.json()["errorMessage"]


class TestInfoEndpoints:
    """Tests for the health and version endpoints."""

    def test_health(self, client):
        """Test the health endpoint."""
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "UP"
        assert body["timestamp"]

    def test_version(self, client):
        """Test the version endpoint."""
        response = client.get("/api/v1/version")

        assert response.status_code == 200
        assert response.json() == {
            "version": __version__,
            "serviceName": "Test Transformation Service"
        }


class TestOpenApi:
    """Tests for the published API schema."""

    def test_transform_documents_envelope_for_each_status(self, client):
        """Test every transform status code is documented with the envelope."""
        schema = client.get("/openapi.json").json()

        responses = schema["paths"][TRANSFORM_URL]["post"]["responses"]
        for status in ("200", "400", "413", "500"):
            content_schema = responses[status]["content"]["application/json"]["schema"]
            assert content_schema["$ref"].endswith("/TransformationResponse")
        assert "TransformationResponse" in schema["components"]["schemas"]
