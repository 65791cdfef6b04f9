"""
OpenCV capture controller.
CAMERA_INDEX selects the device; 1280x720 is requested but not required,
the session records whatever resolution the device actually delivers.
"""
import cv2
from vision_assistant.adapters.camera.base import CameraAdapter, CaptureSession
from vision_assistant.orchestrator.errors import DeviceError


class CV2Camera(CameraAdapter):
    def __init__(self, status_store, index: int = 0, width: int = 1280, height: int = 720):
        self.status = status_store
        self._index = index
        self._want = (width, height)
        self.session = None

    def start(self) -> CaptureSession:
        if self.session is not None:
            return self.session
        cap = cv2.VideoCapture(self._index)
        if not cap.isOpened():
            cap.release()
            self.status.log(f"cv2_camera: failed to open device {self._index}")
            raise DeviceError(f"camera {self._index} unavailable")

        # best-effort: drivers may ignore these
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self._want[0])
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self._want[1])
        width = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH)) or self._want[0]
        height = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT)) or self._want[1]

        self.session = CaptureSession(handle=cap, width=width, height=height)
        self.status.log(f"cv2_camera: device {self._index} open at {width}x{height}")
        return self.session

    def stop(self) -> None:
        if self.session is None:
            return
        cap = self.session.handle
        self.session = None
        if cap.isOpened():
            cap.release()
        self.status.log("cv2_camera: released")

    def read_frame(self):
        if self.session is None:
            raise DeviceError("camera not started")
        ret, frame = self.session.handle.read()
        if not ret or frame is None:
            self.status.log("cv2_camera: frame capture failed")
            raise DeviceError("frame capture failed")
        return frame
