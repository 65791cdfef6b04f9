"""
Narrator — cross-platform, non-blocking, one utterance at a time.

Every call preempts whatever is still playing.

Priority for fixed lines:
  1. Pre-recorded audio: assets/<line>.mp3 (see scripts/gen_tts.py)
  2. Text synthesis: macOS `say`, or espeak / espeak-ng
  3. Log only, if no tool is available
Dynamic text (descriptions) always goes through 2/3.
"""

import os
import shutil
import subprocess
import sys
import threading
from vision_assistant.adapters.tts import lines as L

ASSETS_DIR = os.path.join(os.path.dirname(__file__), "assets")


class Narrator:
    def __init__(self, status_store, rate: int = 175, pitch: int = 50, voice: str | None = None,
                 assets_dir: str | None = None):
        self.status = status_store
        self.rate = rate
        self.pitch = pitch
        self.voice = voice
        self.assets_dir = assets_dir or ASSETS_DIR
        self._proc: subprocess.Popen | None = None
        self._lock = threading.Lock()

    @property
    def is_speaking(self) -> bool:
        with self._lock:
            return self._proc is not None and self._proc.poll() is None

    def say(self, line_key: str):
        path = os.path.join(self.assets_dir, L.LINE_AUDIO.get(line_key, "unknown.mp3"))
        if os.path.isfile(path):
            cmd = self._player_cmd(path)
            if cmd:
                self.status.log(f"tts: playing {os.path.basename(path)}")
                self._start(cmd)
                return
        self.speak(L.LINE_TEXT.get(line_key, line_key))

    def speak(self, text: str):
        self.status.log(f"tts: {text}")
        cmd = self._speech_cmd(text)
        if cmd is None:
            self.cancel()
            self.status.log("tts: no speech tool available")
            return
        self._start(cmd)

    def cancel(self):
        with self._lock:
            self._stop_locked()

    def _start(self, cmd: list[str]):
        with self._lock:
            self._stop_locked()
            try:
                self._proc = subprocess.Popen(cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
            except OSError as e:
                self._proc = None
                self.status.log(f"tts: failed to start {cmd[0]}: {e}")

    def _stop_locked(self):
        proc, self._proc = self._proc, None
        if proc is not None and proc.poll() is None:
            proc.terminate()
            try:
                proc.wait(timeout=1.0)
            except subprocess.TimeoutExpired:
                proc.kill()

    def _speech_cmd(self, text: str) -> list[str] | None:
        if sys.platform == "darwin":
            cmd = ["say", "-r", str(self.rate)]
            if self.voice:
                cmd += ["-v", self.voice]
            return cmd + [text]
        for tool in ("espeak", "espeak-ng"):
            if shutil.which(tool):
                cmd = [tool, "-s", str(self.rate), "-p", str(self.pitch)]
                if self.voice:
                    cmd += ["-v", self.voice]
                return cmd + [text]
        return None

    def _player_cmd(self, path: str) -> list[str] | None:
        if sys.platform == "darwin":
            return ["afplay", path]
        if shutil.which("ffplay"):
            return ["ffplay", "-nodisp", "-autoexit", "-loglevel", "quiet", path]
        if shutil.which("mpv"):
            return ["mpv", "--no-video", path]
        if shutil.which("paplay"):
            return ["paplay", path]
        return None
