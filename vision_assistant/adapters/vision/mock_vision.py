from vision_assistant.adapters.vision.base import VisionAdapter

MOCK_DESCRIPTION = (
    "A hallway stretches ahead with a closed door about three meters away. "
    "There are no people or obstacles in the path."
)


class MockVision(VisionAdapter):
    def __init__(self, status_store, description: str = MOCK_DESCRIPTION):
        self.status = status_store
        self.description = description

    def describe(self, image_b64: str) -> str:
        # Mock: ignore the image
        self.status.log(f"mock_vision: {len(image_b64)} b64 chars")
        return self.description
