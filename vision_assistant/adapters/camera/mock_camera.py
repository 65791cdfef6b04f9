"""Mock camera: synthetic gradient frames, optionally simulating a denied device."""
import numpy as np
from vision_assistant.adapters.camera.base import CameraAdapter, CaptureSession
from vision_assistant.orchestrator.errors import DeviceError


class MockCamera(CameraAdapter):
    def __init__(self, status_store, width: int = 1280, height: int = 720, deny: bool = False):
        self.status = status_store
        self.width = width
        self.height = height
        self.deny = deny
        self.session = None
        self._tick = 0

    def start(self) -> CaptureSession:
        if self.deny:
            self.status.log("mock_camera: permission denied")
            raise DeviceError("permission denied")
        if self.session is None:
            self.session = CaptureSession(handle=None, width=self.width, height=self.height)
            self.status.log(f"mock_camera: streaming {self.width}x{self.height}")
        return self.session

    def stop(self) -> None:
        if self.session is not None:
            self.session = None
            self.status.log("mock_camera: released")

    def read_frame(self):
        if self.session is None:
            raise DeviceError("camera not started")
        self._tick = (self._tick + 8) % 256
        row = np.linspace(0, 255, self.width, dtype=np.uint8)
        frame = np.empty((self.height, self.width, 3), dtype=np.uint8)
        frame[:, :, 0] = row
        frame[:, :, 1] = self._tick
        frame[:, :, 2] = row[::-1]
        return frame
