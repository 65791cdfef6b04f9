from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass
class CaptureSession:
    handle: Any          # device handle owned by the adapter
    width: int           # native stream resolution, read back from the device
    height: int


class CameraAdapter(ABC):
    session: CaptureSession | None = None

    @property
    def active(self) -> bool:
        return self.session is not None

    @abstractmethod
    def start(self) -> CaptureSession:
        """Acquire the stream. Raises DeviceError when unavailable or denied."""
        ...

    @abstractmethod
    def stop(self) -> None:
        """Release the stream. No-op when already stopped."""
        ...

    @abstractmethod
    def read_frame(self):
        """Current frame as a BGR numpy array. Raises DeviceError."""
        ...
