"""
HTTP analyzer: sends a still to the inference proxy.

Contract:
  Request:  POST /api/analyze-image  {"image": "<base64 jpeg>"}
  Response: {"description": "..."}  (or {"error": "..."} with 4xx/5xx)
"""

import httpx
from vision_assistant.orchestrator.contracts import StillImage
from vision_assistant.orchestrator.errors import InternalError, UpstreamError

ANALYZE_PATH = "/api/analyze-image"


class HttpAnalyzer:
    def __init__(self, status_store, base_url: str = "http://127.0.0.1:8000", timeout: float = 30.0,
                 client: httpx.Client | None = None):
        self.status = status_store
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout)

    def analyze(self, image: StillImage) -> str:
        url = f"{self.base_url}{ANALYZE_PATH}"
        self.status.log(f"http_analyzer: POST {ANALYZE_PATH} ({len(image.jpeg)} bytes)")
        try:
            resp = self._client.post(url, json={"image": image.to_base64()})
        except httpx.HTTPError as e:
            raise UpstreamError(f"proxy unreachable: {e}") from e

        if not resp.is_success:
            try:
                data = resp.json()
            except ValueError:
                data = resp.text
            detail = data.get("error", "unknown") if isinstance(data, dict) else str(data)[:200]
            raise UpstreamError(f"proxy HTTP {resp.status_code}: {detail}")

        try:
            description = resp.json()["description"]
        except (ValueError, KeyError, TypeError) as e:
            raise InternalError("proxy reply has no description") from e
        if not isinstance(description, str) or not description:
            raise InternalError(f"proxy reply has unusable description: {description!r}")
        self.status.log("http_analyzer: done")
        return description

    def close(self):
        self._client.close()
