"""Rasterize the live frame into a JPEG still at the stream's native size."""
import cv2
from vision_assistant.adapters.camera.base import CameraAdapter
from vision_assistant.orchestrator.contracts import StillImage
from vision_assistant.orchestrator.errors import DeviceError


class FrameGrabber:
    def __init__(self, status_store, jpeg_quality: int = 85):
        self.status = status_store
        self.jpeg_quality = jpeg_quality

    def grab(self, camera: CameraAdapter) -> StillImage:
        session = camera.session
        if session is None:
            raise DeviceError("camera not started")
        frame = camera.read_frame()

        h, w = frame.shape[:2]
        if (w, h) != (session.width, session.height):
            frame = cv2.resize(frame, (session.width, session.height), interpolation=cv2.INTER_AREA)

        ok, buf = cv2.imencode(".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, self.jpeg_quality])
        if not ok:
            raise DeviceError("jpeg encode failed")
        jpeg = bytes(buf)
        self.status.log(f"frame_grabber: {session.width}x{session.height} -> {len(jpeg)} bytes")
        return StillImage(jpeg=jpeg, width=session.width, height=session.height)
