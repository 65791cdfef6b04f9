"""
Runtime settings, read from the environment.

vision_assistant/.env is loaded first (real env vars win), then every
setting falls back to the default below. GEMINI_API_KEY has no default.
"""
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

ENV_FILE = Path(__file__).parent / ".env"


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.0-flash-001"
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1"
    gemini_timeout_s: float = 30.0

    vision_adapter: str = "gemini"   # gemini | mock
    camera_adapter: str = "cv2"      # cv2 | mock
    camera_index: int = 0
    camera_width: int = 1280
    camera_height: int = 720
    jpeg_quality: int = 85

    tts_rate: int = 175              # words per minute
    tts_pitch: int = 50              # espeak scale 0-99
    tts_voice: str | None = None
    narrator: str = "local"          # local | mock

    analyzer: str = "local"          # local | http
    proxy_url: str = "http://127.0.0.1:8000"


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw else default


def _float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw else default


def load_settings() -> Settings:
    load_dotenv(dotenv_path=ENV_FILE, override=False)
    d = Settings()
    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
        gemini_model=os.getenv("GEMINI_MODEL", d.gemini_model),
        gemini_api_base=os.getenv("GEMINI_API_BASE", d.gemini_api_base).rstrip("/"),
        gemini_timeout_s=_float("GEMINI_TIMEOUT_S", d.gemini_timeout_s),
        vision_adapter=os.getenv("VISION_ADAPTER", d.vision_adapter).lower(),
        camera_adapter=os.getenv("CAMERA_ADAPTER", d.camera_adapter).lower(),
        camera_index=_int("CAMERA_INDEX", d.camera_index),
        camera_width=_int("CAMERA_WIDTH", d.camera_width),
        camera_height=_int("CAMERA_HEIGHT", d.camera_height),
        jpeg_quality=_int("JPEG_QUALITY", d.jpeg_quality),
        tts_rate=_int("TTS_RATE", d.tts_rate),
        tts_pitch=_int("TTS_PITCH", d.tts_pitch),
        tts_voice=os.getenv("TTS_VOICE") or None,
        narrator=os.getenv("NARRATOR", d.narrator).lower(),
        analyzer=os.getenv("ANALYZER", d.analyzer).lower(),
        proxy_url=os.getenv("PROXY_URL", d.proxy_url).rstrip("/"),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
