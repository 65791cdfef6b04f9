FALLBACK_DESCRIPTION = "Unable to analyze the image. Please try again."


class VisionAdapter:
    def describe(self, image_b64: str) -> str:
        """Return a spoken-style description of a base64 JPEG.

        Raises UpstreamError when the remote service refuses or is unreachable,
        InternalError when the request cannot be built or the reply parsed.
        """
        raise NotImplementedError
