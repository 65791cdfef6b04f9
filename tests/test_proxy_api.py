"""
Tests for POST /api/analyze-image, with the Gemini endpoint mocked at the transport.
"""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from vision_assistant.adapters.vision.base import FALLBACK_DESCRIPTION
from vision_assistant.adapters.vision.gemini_vision import PROMPT
from vision_assistant.services.api import create_api

IMAGE_B64 = "/9j/4AAQSkZJRgABAQAAAQABAAD/2wBDAA=="


def gemini_reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


@pytest.fixture
def calls():
    return []


@pytest.fixture
def client_for(mock_settings, make_gemini, calls, status):
    def _client(handler, api_key="test-key"):
        def recording(request: httpx.Request):
            calls.append(request)
            return handler(request)
        vision = make_gemini(recording, api_key=api_key)
        return TestClient(create_api(mock_settings, vision=vision, status=status))
    return _client


def ok_handler(request):
    return httpx.Response(200, json=gemini_reply("A person stands near a doorway."))


class TestValidation:
    def test_empty_body_returns_400(self, client_for, calls):
        r = client_for(ok_handler).post("/api/analyze-image", json={})
        assert r.status_code == 400
        assert r.json() == {"error": "Image data is required"}
        assert calls == []

    @pytest.mark.parametrize("body", [{"image": ""}, {"image": None}, {"image": "   "}])
    def test_blank_image_returns_400(self, client_for, calls, body):
        r = client_for(ok_handler).post("/api/analyze-image", json=body)
        assert r.status_code == 400
        assert r.json() == {"error": "Image data is required"}
        assert calls == []

    def test_malformed_json_returns_400(self, client_for):
        r = client_for(ok_handler).post(
            "/api/analyze-image", content=b"{not json", headers={"Content-Type": "application/json"}
        )
        assert r.status_code == 400
        assert r.json() == {"error": "Image data is required"}


class TestSuccess:
    def test_returns_candidate_text(self, client_for):
        r = client_for(ok_handler).post("/api/analyze-image", json={"image": IMAGE_B64})
        assert r.status_code == 200
        assert r.json() == {"description": "A person stands near a doorway."}

    def test_upstream_request_shape(self, client_for, calls):
        client_for(ok_handler).post("/api/analyze-image", json={"image": IMAGE_B64})
        assert len(calls) == 1
        req = calls[0]
        assert req.method == "POST"
        assert str(req.url) == (
            "https://generativelanguage.googleapis.com/v1/models/gemini-2.0-flash-001:generateContent"
        )
        assert req.headers["x-goog-api-key"] == "test-key"
        body = json.loads(req.content)
        parts = body["contents"][0]["parts"]
        assert parts[0] == {"text": PROMPT}
        assert parts[1] == {"inline_data": {"mime_type": "image/jpeg", "data": IMAGE_B64}}
        assert body["generation_config"] == {"temperature": 0.4, "max_output_tokens": 1024}

    def test_data_url_prefix_is_stripped(self, client_for, calls):
        client_for(ok_handler).post("/api/analyze-image", json={"image": f"data:image/jpeg;base64,{IMAGE_B64}"})
        parts = json.loads(calls[0].content)["contents"][0]["parts"]
        assert parts[1]["inline_data"]["data"] == IMAGE_B64

    @pytest.mark.parametrize("reply", [
        {},
        {"candidates": []},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"content": {"parts": [{"text": ""}]}}]},
        {"candidates": [{"finishReason": "SAFETY"}]},
    ])
    def test_missing_text_falls_back(self, client_for, reply):
        r = client_for(lambda req: httpx.Response(200, json=reply)).post(
            "/api/analyze-image", json={"image": IMAGE_B64}
        )
        assert r.status_code == 200
        assert r.json() == {"description": FALLBACK_DESCRIPTION}
        assert FALLBACK_DESCRIPTION == "Unable to analyze the image. Please try again."


class TestFailures:
    @pytest.mark.parametrize("code", [400, 403, 429, 500, 503])
    def test_upstream_non_success_returns_500(self, client_for, calls, code):
        handler = lambda req: httpx.Response(code, json={"error": {"code": code, "message": "nope"}})
        r = client_for(handler).post("/api/analyze-image", json={"image": IMAGE_B64})
        assert r.status_code == 500
        assert r.json() == {"error": "Failed to analyze image with Gemini API"}
        assert len(calls) == 1  # no retry

    def test_transport_error_is_upstream_error(self, client_for):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)
        r = client_for(handler).post("/api/analyze-image", json={"image": IMAGE_B64})
        assert r.status_code == 500
        assert r.json() == {"error": "Failed to analyze image with Gemini API"}

    def test_non_json_reply_is_internal_error(self, client_for):
        handler = lambda req: httpx.Response(200, content=b"<html>oops</html>")
        r = client_for(handler).post("/api/analyze-image", json={"image": IMAGE_B64})
        assert r.status_code == 500
        assert r.json() == {"error": "Internal server error"}

    def test_missing_api_key_is_internal_error(self, client_for, calls):
        r = client_for(ok_handler, api_key=None).post("/api/analyze-image", json={"image": IMAGE_B64})
        assert r.status_code == 500
        assert r.json() == {"error": "Internal server error"}
        assert calls == []

    def test_unexpected_exception_is_internal_error(self, mock_settings, status):
        class Exploding:
            def describe(self, image_b64):
                raise RuntimeError("boom")

        client = TestClient(create_api(mock_settings, vision=Exploding(), status=status))
        r = client.post("/api/analyze-image", json={"image": IMAGE_B64})
        assert r.status_code == 500
        assert r.json() == {"error": "Internal server error"}
        assert any("RuntimeError" in line for line in status.logs)
