"""
Inference proxy: validate an image payload, hand it to the vision adapter,
and map every failure onto the fixed error taxonomy. Holds no state between
calls beyond its collaborators.
"""
from vision_assistant.orchestrator.errors import (
    AssistantError, InternalError, UpstreamError, ValidationError,
)

MSG_IMAGE_REQUIRED = "Image data is required"
MSG_UPSTREAM = "Failed to analyze image with Gemini API"
MSG_INTERNAL = "Internal server error"

_DATA_URL_MARKER = ";base64,"


def strip_data_url(image: str) -> str:
    if image.startswith("data:") and _DATA_URL_MARKER in image:
        return image.split(_DATA_URL_MARKER, 1)[1]
    return image


class InferenceProxy:
    def __init__(self, vision, status_store):
        self.vision = vision
        self.status = status_store

    def analyze(self, image: str | None) -> str:
        if not image or not image.strip():
            raise ValidationError(MSG_IMAGE_REQUIRED)

        try:
            payload = strip_data_url(image.strip())
            return self.vision.describe(payload)
        except AssistantError:
            raise
        except Exception as e:
            self.status.log(f"proxy: unexpected {type(e).__name__}: {e}")
            raise InternalError(MSG_INTERNAL) from e


def error_response(err: AssistantError) -> tuple[int, dict]:
    """HTTP status and body for a proxy failure."""
    if isinstance(err, ValidationError):
        return 400, {"error": MSG_IMAGE_REQUIRED}
    if isinstance(err, UpstreamError):
        return 500, {"error": MSG_UPSTREAM}
    return 500, {"error": MSG_INTERNAL}
