ERR_BUSY = "ERR_BUSY"
ERR_VALIDATION = "ERR_VALIDATION"
ERR_UPSTREAM = "ERR_UPSTREAM"
ERR_INTERNAL = "ERR_INTERNAL"
ERR_DEVICE = "ERR_DEVICE"
ERR_STALE = "ERR_STALE"


class AssistantError(Exception):
    code = ERR_INTERNAL


class ValidationError(AssistantError):
    """Request is missing required input."""
    code = ERR_VALIDATION


class UpstreamError(AssistantError):
    """The vision API (or the proxy, seen from the client) returned non-success."""
    code = ERR_UPSTREAM


class InternalError(AssistantError):
    """Unexpected failure while building the request or parsing the response."""
    code = ERR_INTERNAL


class DeviceError(AssistantError):
    """Camera unavailable, denied, or failed to produce a frame."""
    code = ERR_DEVICE
