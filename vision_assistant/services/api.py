from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from vision_assistant.config import Settings, get_settings
from vision_assistant.services.models import (
    AnalyzeImageRequest, AnalyzeImageResponse, ErrorResponse,
    TapResponse, ReadAgainResponse, StatusResponse,
)
from vision_assistant.services.proxy import InferenceProxy, MSG_IMAGE_REQUIRED, error_response
from vision_assistant.services.status_store import StatusStore
from vision_assistant.orchestrator.errors import AssistantError
from vision_assistant.orchestrator.state_machine import TapStateMachine
from vision_assistant.adapters.camera.frame_grabber import FrameGrabber

ANALYZE_PATH = "/api/analyze-image"


def build_vision(settings: Settings, status: StatusStore):
    # Values: gemini | mock  (default: gemini)
    if settings.vision_adapter == "mock":
        from vision_assistant.adapters.vision.mock_vision import MockVision
        return MockVision(status)
    from vision_assistant.adapters.vision.gemini_vision import GeminiVision
    return GeminiVision(
        status,
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        api_base=settings.gemini_api_base,
        timeout=settings.gemini_timeout_s,
    )


def build_camera(settings: Settings, status: StatusStore):
    if settings.camera_adapter == "mock":
        from vision_assistant.adapters.camera.mock_camera import MockCamera
        return MockCamera(status, width=settings.camera_width, height=settings.camera_height)
    from vision_assistant.adapters.camera.cv2_camera import CV2Camera
    return CV2Camera(status, index=settings.camera_index,
                     width=settings.camera_width, height=settings.camera_height)


def build_narrator(settings: Settings, status: StatusStore):
    if settings.narrator == "mock":
        from vision_assistant.adapters.tts.mock_narrator import MockNarrator
        return MockNarrator(status)
    from vision_assistant.adapters.tts.narrator import Narrator
    return Narrator(status, rate=settings.tts_rate, pitch=settings.tts_pitch, voice=settings.tts_voice)


def build_analyzer(settings: Settings, status: StatusStore, proxy: InferenceProxy):
    # Values: local | http  (default: local, same process as the proxy)
    if settings.analyzer == "http":
        from vision_assistant.adapters.analyzer.http_analyzer import HttpAnalyzer
        return HttpAnalyzer(status, base_url=settings.proxy_url, timeout=settings.gemini_timeout_s)
    from vision_assistant.adapters.analyzer.local_analyzer import LocalAnalyzer
    return LocalAnalyzer(proxy)


def create_api(settings: Settings | None = None, *, vision=None, camera=None, narrator=None,
               analyzer=None, status: StatusStore | None = None) -> FastAPI:
    settings = settings or get_settings()
    status = status or StatusStore()

    vision = vision or build_vision(settings, status)
    proxy = InferenceProxy(vision, status)
    camera = camera or build_camera(settings, status)
    narrator = narrator or build_narrator(settings, status)
    analyzer = analyzer or build_analyzer(settings, status, proxy)
    grabber = FrameGrabber(status, jpeg_quality=settings.jpeg_quality)
    assistant = TapStateMachine(camera=camera, grabber=grabber, analyzer=analyzer,
                                narrator=narrator, status_store=status)

    status.log(f"vision adapter: {type(vision).__name__}")
    status.log(f"camera adapter: {type(camera).__name__}")
    status.log(f"analyzer: {type(analyzer).__name__}")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        assistant.welcome()
        yield
        assistant.shutdown()
        for part in (vision, analyzer):
            if hasattr(part, "close"):
                part.close()

    app = FastAPI(title="vision-assistant", lifespan=lifespan)
    app.state.status = status
    app.state.proxy = proxy
    app.state.assistant = assistant

    @app.exception_handler(RequestValidationError)
    async def on_invalid_body(request: Request, exc: RequestValidationError):
        # malformed JSON or a non-string image: same contract as a missing image
        if request.url.path == ANALYZE_PATH:
            status.log(f"proxy: rejected body: {exc.errors()[:1]}")
            return JSONResponse({"error": MSG_IMAGE_REQUIRED}, status_code=400)
        return JSONResponse({"detail": exc.errors()}, status_code=422)

    @app.post(
        ANALYZE_PATH,
        response_model=AnalyzeImageResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    def analyze_image(req: AnalyzeImageRequest):
        try:
            description = proxy.analyze(req.image)
        except AssistantError as e:
            code, body = error_response(e)
            status.log(f"ANALYZE_IMAGE failed: {type(e).__name__}: {e}")
            return JSONResponse(body, status_code=code)
        status.log("ANALYZE_IMAGE ok")
        return AnalyzeImageResponse(description=description)

    @app.post("/tap", response_model=TapResponse)
    def tap():
        out = assistant.tap()
        return TapResponse(
            ok=out.ok,
            state=out.state.value,
            action=out.action,
            hint=assistant.hint(),
            description=out.description,
            error_code=out.error_code,
        )

    @app.post("/read_again", response_model=ReadAgainResponse)
    def read_again():
        """Speak the last description again (or say there is none)."""
        text = assistant.read_again()
        return ReadAgainResponse(ok=text is not None, description=text)

    @app.get("/status", response_model=StatusResponse)
    def get_status():
        return StatusResponse(
            state=assistant.state.value,
            hint=assistant.hint(),
            last_result=status.last_result,
            last_error=status.last_error,
            logs=status.logs,
        )

    @app.get("/preview.jpg")
    def preview():
        jpeg = assistant.preview_jpeg()
        if jpeg is None:
            return Response(status_code=204)
        return Response(content=jpeg, media_type="image/jpeg", headers={"Cache-Control": "no-store"})

    @app.get("/health")
    def health():
        """Report which adapters are wired and whether the vision backend can be called."""
        checks = {
            "api": True,
            "vision_adapter": type(vision).__name__,
            "vision_ready": bool(getattr(vision, "ready", True)),
            "camera_adapter": type(camera).__name__,
            "camera_active": camera.active,
            "narrator": type(narrator).__name__,
            "narrator_speaking": narrator.is_speaking,
            "analyzer": type(analyzer).__name__,
        }
        checks["all_ok"] = checks["api"] and checks["vision_ready"]
        return checks

    return app
