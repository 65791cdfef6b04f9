from vision_assistant.adapters.tts import lines as L


class MockNarrator:
    """Records what would have been spoken; nothing reaches the speakers."""

    def __init__(self, status_store):
        self.status = status_store
        self.spoken: list[str] = []
        self.cancelled = 0

    @property
    def is_speaking(self) -> bool:
        return False

    def say(self, line_key: str):
        self.speak(L.LINE_TEXT.get(line_key, line_key))

    def speak(self, text: str):
        self.cancel()
        self.spoken.append(text)
        self.status.log(f"mock_tts: {text}")

    def cancel(self):
        self.cancelled += 1
