"""
Shared pytest fixtures for vision_assistant tests.
"""
import threading

import httpx
import pytest

from vision_assistant.adapters.camera.frame_grabber import FrameGrabber
from vision_assistant.adapters.camera.mock_camera import MockCamera
from vision_assistant.adapters.tts.mock_narrator import MockNarrator
from vision_assistant.adapters.vision.gemini_vision import GeminiVision
from vision_assistant.config import Settings
from vision_assistant.orchestrator.state_machine import TapStateMachine
from vision_assistant.services.status_store import StatusStore


class FixedAnalyzer:
    def __init__(self, description="A person stands near a doorway.", error: Exception | None = None):
        self.description = description
        self.error = error
        self.images = []

    def analyze(self, image):
        self.images.append(image)
        if self.error is not None:
            raise self.error
        return self.description


class BlockingAnalyzer:
    """Holds the request open until release is set."""

    def __init__(self, description="done"):
        self.description = description
        self.entered = threading.Event()
        self.release = threading.Event()
        self.calls = 0

    def analyze(self, image):
        self.calls += 1
        self.entered.set()
        self.release.wait(5)
        return self.description


@pytest.fixture
def status():
    return StatusStore()


@pytest.fixture
def camera(status):
    return MockCamera(status, width=320, height=240)


@pytest.fixture
def narrator(status):
    return MockNarrator(status)


@pytest.fixture
def analyzer():
    return FixedAnalyzer()


@pytest.fixture
def machine(camera, narrator, analyzer, status):
    return TapStateMachine(
        camera=camera,
        grabber=FrameGrabber(status),
        analyzer=analyzer,
        narrator=narrator,
        status_store=status,
    )


@pytest.fixture
def mock_settings():
    return Settings(vision_adapter="mock", camera_adapter="mock", narrator="mock",
                    camera_width=320, camera_height=240)


@pytest.fixture
def make_gemini(status):
    """Build a GeminiVision whose HTTP traffic goes to a handler(request) -> httpx.Response."""
    def _make(handler, api_key="test-key"):
        client = httpx.Client(transport=httpx.MockTransport(handler))
        return GeminiVision(status, api_key=api_key, client=client)
    return _make


@pytest.fixture
def blocking_analyzer():
    analyzer = BlockingAnalyzer()
    yield analyzer
    analyzer.release.set()


@pytest.fixture
def make_machine(narrator, status):
    def _make(camera=None, analyzer=None):
        return TapStateMachine(
            camera=camera or MockCamera(status, width=320, height=240),
            grabber=FrameGrabber(status),
            analyzer=analyzer or FixedAnalyzer(),
            narrator=narrator,
            status_store=status,
        )
    return _make
