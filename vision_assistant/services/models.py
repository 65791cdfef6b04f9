from pydantic import BaseModel
from typing import Literal, Optional

StateName = Literal["idle", "capturing", "analyzing"]


class AnalyzeImageRequest(BaseModel):
    image: Optional[str] = None  # base64 JPEG, a data: URL prefix is tolerated


class AnalyzeImageResponse(BaseModel):
    description: str


class ErrorResponse(BaseModel):
    error: str


class TapResponse(BaseModel):
    ok: bool
    state: StateName
    action: Literal["started", "captured", "ignored", "camera_failed", "analysis_failed"]
    hint: str
    description: Optional[str] = None
    error_code: Optional[str] = None


class ReadAgainResponse(BaseModel):
    ok: bool
    description: Optional[str] = None


class StatusResponse(BaseModel):
    state: StateName
    hint: str
    last_result: Optional[str] = None
    last_error: Optional[str] = None
    logs: list[str]
