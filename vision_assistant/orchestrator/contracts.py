import base64
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional


class AssistantState(str, Enum):
    IDLE = "idle"
    CAPTURING = "capturing"
    ANALYZING = "analyzing"


TapAction = Literal["started", "captured", "ignored", "camera_failed", "analysis_failed"]


@dataclass
class StillImage:
    jpeg: bytes
    width: int
    height: int

    def to_base64(self) -> str:
        return base64.standard_b64encode(self.jpeg).decode("ascii")


@dataclass
class TapOutcome:
    state: AssistantState          # state after the tap was handled
    action: TapAction
    description: Optional[str] = None
    error_code: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.action in ("started", "captured")
