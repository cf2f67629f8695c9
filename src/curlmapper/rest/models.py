from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class JobStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


class DispatchResult(BaseModel):
    ok: bool
    status_code: int
    response_preview: str = ""
    payload: Optional[Dict[str, Any]] = None


class JobLog(BaseModel):
    id: int
    status: JobStatus = JobStatus.PENDING
    status_code: Optional[int] = None
    response: Optional[str] = None
    data: Dict[str, str]
    timestamp: datetime = Field(default_factory=datetime.now)


class RunStats(BaseModel):
    total: int
    success: int = 0
    error: int = 0
    pending: int = 0
