from typing import Any, Optional, Union
from pydantic import BaseModel

class CorrectionRequest(BaseModel):
    text: Optional[str] = None

class ViewModel(BaseModel):
    originaltext: str = ""
    corrected: str = ""


class CorrectionSuccess(BaseModel):
    text: str

class MalformedResponse(BaseModel):
    """2xx body without candidates[0].content.parts[0].text."""

class ApiError(BaseModel):
    status: int
    reason: str = ""
    message: str
    payload: Any = None


CorrectionResult = Union[CorrectionSuccess, MalformedResponse, ApiError]
