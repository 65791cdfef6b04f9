import os
from unittest.mock import patch

from vision_assistant import config
from vision_assistant.config import load_settings


def test_defaults_without_env(tmp_path):
    with patch.dict(os.environ, {}, clear=True), patch.object(config, "ENV_FILE", tmp_path / "missing.env"):
        s = load_settings()
    assert s.gemini_api_key is None
    assert s.gemini_model == "gemini-2.0-flash-001"
    assert s.gemini_api_base == "https://generativelanguage.googleapis.com/v1"
    assert (s.camera_width, s.camera_height) == (1280, 720)
    assert s.vision_adapter == "gemini"
    assert s.analyzer == "local"


def test_env_overrides(tmp_path):
    env = {
        "GEMINI_API_KEY": "k",
        "GEMINI_API_BASE": "http://127.0.0.1:9100/v1/",
        "VISION_ADAPTER": "MOCK",
        "CAMERA_INDEX": "2",
        "GEMINI_TIMEOUT_S": "5.5",
        "PROXY_URL": "http://pi.local:8000/",
    }
    with patch.dict(os.environ, env, clear=True), patch.object(config, "ENV_FILE", tmp_path / "missing.env"):
        s = load_settings()
    assert s.gemini_api_key == "k"
    assert s.gemini_api_base == "http://127.0.0.1:9100/v1"
    assert s.vision_adapter == "mock"
    assert s.camera_index == 2
    assert s.gemini_timeout_s == 5.5
    assert s.proxy_url == "http://pi.local:8000"


def test_dotenv_file_does_not_override_real_env(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("GEMINI_API_KEY=from-file\nGEMINI_MODEL=gemini-file-model\n")
    with patch.dict(os.environ, {"GEMINI_API_KEY": "from-env"}, clear=True), \
         patch.object(config, "ENV_FILE", env_file):
        s = load_settings()
    assert s.gemini_api_key == "from-env"
    assert s.gemini_model == "gemini-file-model"
