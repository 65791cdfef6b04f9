from vision_assistant.orchestrator.contracts import StillImage


class LocalAnalyzer:
    """Calls the inference proxy in-process, skipping the HTTP hop."""

    def __init__(self, proxy):
        self.proxy = proxy

    def analyze(self, image: StillImage) -> str:
        return self.proxy.analyze(image.to_base64())
