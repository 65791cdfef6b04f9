"""
Gemini scene describer.

Calls the generateContent REST endpoint directly with httpx: one fixed
prompt, one inline JPEG, fixed temperature and output budget.
Requires GEMINI_API_KEY (vision_assistant/.env or system env).
"""
import httpx
from vision_assistant.adapters.vision.base import VisionAdapter, FALLBACK_DESCRIPTION
from vision_assistant.orchestrator.errors import InternalError, UpstreamError

PROMPT = (
    "Analyze this image and describe what you see in detail. "
    "This description will be read to a blind person to help them understand their surroundings. "
    "Be clear, concise, and focus on important elements like people, obstacles, text, "
    "and spatial relationships. Limit your response to 3-4 sentences."
)

TEMPERATURE = 0.4
MAX_OUTPUT_TOKENS = 1024


def build_payload(image_b64: str) -> dict:
    return {
        "contents": [
            {
                "parts": [
                    {"text": PROMPT},
                    {"inline_data": {"mime_type": "image/jpeg", "data": image_b64}},
                ],
            }
        ],
        "generation_config": {
            "temperature": TEMPERATURE,
            "max_output_tokens": MAX_OUTPUT_TOKENS,
        },
    }


def extract_text(data) -> str | None:
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) and text else None


class GeminiVision(VisionAdapter):
    def __init__(self, status_store, api_key: str | None, model: str = "gemini-2.0-flash-001",
                 api_base: str = "https://generativelanguage.googleapis.com/v1",
                 timeout: float = 30.0, client: httpx.Client | None = None):
        self.status = status_store
        self._api_key = api_key
        self.model = model
        self.url = f"{api_base.rstrip('/')}/models/{model}:generateContent"
        self._client = client or httpx.Client(timeout=timeout)
        if self.ready:
            self.status.log(f"gemini_vision: ready (model={model})")
        else:
            self.status.log("gemini_vision: GEMINI_API_KEY not set")

    @property
    def ready(self) -> bool:
        return bool(self._api_key)

    def describe(self, image_b64: str) -> str:
        if not self.ready:
            raise InternalError("GEMINI_API_KEY not configured")

        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self._api_key,
        }
        try:
            resp = self._client.post(self.url, json=build_payload(image_b64), headers=headers)
        except httpx.HTTPError as e:
            self.status.log(f"gemini_vision: transport error: {e}")
            raise UpstreamError(str(e)) from e

        if not resp.is_success:
            self.status.log(f"gemini_vision: HTTP {resp.status_code} — {resp.text[:300]}")
            raise UpstreamError(f"HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            self.status.log(f"gemini_vision: unreadable response: {e}")
            raise InternalError("response is not JSON") from e

        text = extract_text(data)
        if text is None:
            self.status.log("gemini_vision: no candidate text, using fallback")
            return FALLBACK_DESCRIPTION
        self.status.log(f"gemini_vision: {len(text)} chars")
        return text

    def close(self):
        self._client.close()
