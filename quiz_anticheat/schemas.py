# quiz_anticheat/schemas.py
from pydantic import BaseModel, ConfigDict
from typing import Optional, Dict, Any, List, Literal
from datetime import datetime

class StudentOut(BaseModel):
    id: str
    fullname: Optional[str] = None
    email: Optional[str] = None

class ExamEventOut(BaseModel):
    id: str
    assignment_id: str
    student_id: str
    attempt: Optional[int] = None
    event_type: str
    created_at: datetime
    metadata: Optional[Any] = None
    student: Optional[StudentOut] = None

    model_config = ConfigDict(from_attributes=True)

class RuleBreakdownItem(BaseModel):
    rule_id: str
    title: str
    count: int
    points: int
    max_points: int
    details: str

class AntiCheatScoreOut(BaseModel):
    suspicion_score: int
    risk_level: Literal["low", "medium", "high"]
    breakdown: List[RuleBreakdownItem]
    counts_by_type: Dict[str, int]
    total_events: int

class ExamEventListResponse(BaseModel):
    success: bool = True
    data: List[ExamEventOut]

class AntiCheatScoreResponse(BaseModel):
    success: bool = True
    data: AntiCheatScoreOut
