# quiz_anticheat/models.py
from pydantic import BaseModel, Field
from typing import Optional, Any

class ExamEventIn(BaseModel):
    assignment_id: str = Field(..., min_length=1)
    event_type: str = Field(..., min_length=1, max_length=32)
    attempt: Optional[int] = Field(default=None, ge=1, le=999)
    metadata: Optional[Any] = None  # untrusted client payload, size-checked before storing
