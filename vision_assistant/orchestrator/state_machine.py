import threading
import time
from vision_assistant.adapters.tts import lines as L
from vision_assistant.orchestrator.contracts import AssistantState, StillImage, TapOutcome
from vision_assistant.orchestrator import errors
from vision_assistant.orchestrator.errors import AssistantError, DeviceError

HINTS = {
    AssistantState.CAPTURING: "Tap again to capture",
    AssistantState.ANALYZING: "Analyzing...",
}


class TapStateMachine:
    """
    Idle --tap--> Capturing --tap--> Analyzing --response--> Idle.

    A tap while Analyzing is ignored. The network call runs outside the lock
    with the state parked at Analyzing, so at most one request is in flight.
    """

    def __init__(self, camera, grabber, analyzer, narrator, status_store):
        self.camera = camera
        self.grabber = grabber
        self.analyzer = analyzer
        self.narrator = narrator
        self.status = status_store
        self.state = AssistantState.IDLE
        self._lock = threading.Lock()
        self._generation = 0

    def welcome(self):
        self.narrator.say(L.WELCOME)

    def hint(self) -> str:
        if self.state is AssistantState.IDLE:
            return "Tap to capture again" if self.status.last_result else "Tap anywhere to capture"
        return HINTS[self.state]

    def tap(self) -> TapOutcome:
        with self._lock:
            state = self.state
            self.status.log(f"tap: state={state.value}")
            if state is AssistantState.ANALYZING:
                self.status.log("tap: ignored, analysis in flight")
                return TapOutcome(state=state, action="ignored", error_code=errors.ERR_BUSY)
            if state is AssistantState.IDLE:
                return self._start_capture()
            if state is AssistantState.CAPTURING:
                captured = self._capture()
                if isinstance(captured, TapOutcome):
                    return captured
                image, generation = captured
            else:
                raise AssertionError(f"unhandled state {state!r}")

        return self._analyze(image, generation)

    def read_again(self) -> str | None:
        result = self.status.last_result
        if result:
            self.narrator.speak(result)
        else:
            self.narrator.say(L.NO_RESULT)
        return result

    def preview_jpeg(self) -> bytes | None:
        """Current frame while capturing, else None."""
        with self._lock:
            if self.state is not AssistantState.CAPTURING:
                return None
            try:
                return self.grabber.grab(self.camera).jpeg
            except DeviceError as e:
                self.status.log(f"preview: {e}")
                return None

    def shutdown(self):
        """Release the camera, silence speech, and orphan any in-flight result."""
        with self._lock:
            self._generation += 1
            if self.state is AssistantState.CAPTURING:
                self.state = AssistantState.IDLE
            self.camera.stop()
        self.narrator.cancel()
        self.status.log("shutdown")

    # Called with the lock held.
    def _fail(self, action, line_key: str, error_code: str, msg: str) -> TapOutcome:
        self.state = AssistantState.IDLE
        self.status.last_error = error_code
        self.status.log(msg)
        self.narrator.say(line_key)
        return TapOutcome(state=self.state, action=action, error_code=error_code)

    # Called with the lock held.
    def _start_capture(self) -> TapOutcome:
        try:
            self.camera.start()
        except DeviceError as e:
            self.camera.stop()
            return self._fail("camera_failed", L.CAMERA_FAILED, errors.ERR_DEVICE, f"camera: start failed: {e}")
        except Exception as e:
            self.camera.stop()
            return self._fail("camera_failed", L.CAMERA_FAILED, errors.ERR_INTERNAL,
                              f"camera: start error {type(e).__name__}: {e}")

        self.state = AssistantState.CAPTURING
        self.narrator.say(L.CAMERA_ACTIVE)
        return TapOutcome(state=self.state, action="started")

    # Called with the lock held.
    def _capture(self) -> tuple[StillImage, int] | TapOutcome:
        try:
            image = self.grabber.grab(self.camera)
        except DeviceError as e:
            return self._fail("analysis_failed", L.ANALYSIS_FAILED, errors.ERR_DEVICE, f"capture: {e}")
        except Exception as e:
            return self._fail("analysis_failed", L.ANALYSIS_FAILED, errors.ERR_INTERNAL,
                              f"capture: error {type(e).__name__}: {e}")
        finally:
            self.camera.stop()

        self.state = AssistantState.ANALYZING
        self.narrator.say(L.ANALYZING)
        return image, self._generation

    def _analyze(self, image: StillImage, generation: int) -> TapOutcome:
        t0 = time.time()
        description = None
        error_code = None
        try:
            description = self.analyzer.analyze(image)
        except AssistantError as e:
            error_code = e.code
            self.status.log(f"analyze: {type(e).__name__}: {e}")
        except Exception as e:
            error_code = errors.ERR_INTERNAL
            self.status.log(f"analyze: unexpected {type(e).__name__}: {e}")
        dt = int((time.time() - t0) * 1000)

        with self._lock:
            self.state = AssistantState.IDLE
            if generation != self._generation:
                self.status.log(f"analyze: stale result discarded dt={dt}ms")
                return TapOutcome(state=self.state, action="analysis_failed", error_code=errors.ERR_STALE)

            if error_code is not None:
                self.status.last_error = error_code
                self.narrator.say(L.ANALYSIS_FAILED)
                return TapOutcome(state=self.state, action="analysis_failed", error_code=error_code)

            self.status.last_result = description
            self.status.last_error = None
            self.status.log(f"analyze: done dt={dt}ms")
            self.narrator.speak(description)
            return TapOutcome(state=self.state, action="captured", description=description)
