# quiz_anticheat/routes/exam_events.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional
from ..config import settings
from ..models import ExamEventIn
from ..schemas import ExamEventListResponse
from ..services.access import get_student_classroom_for_assignment, is_teacher_of_assignment
from ..services.event_service import (
    attach_students,
    build_event_query,
    fetch_exam_events,
    metadata_size,
    parse_iso_datetime,
    store_exam_event,
)
from ..utils.auth import require_role

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["exam-events"])


@router.post("/exam-events")
async def post_exam_event(event: ExamEventIn, student: dict = Depends(require_role("STUDENT"))):
    """
    Record one proctoring signal sent by the student's browser during a quiz attempt.
    The raw event type is stored as-is; normalization happens at scoring time.
    """
    classroom_id = await get_student_classroom_for_assignment(student["user_id"], event.assignment_id)
    if not classroom_id:
        raise HTTPException(status_code=403, detail="Forbidden")

    try:
        size = metadata_size(event.metadata)
    except ValueError:
        raise HTTPException(status_code=400, detail="metadata: Invalid JSON")
    if size > settings.METADATA_MAX_CHARS:
        raise HTTPException(status_code=400, detail="metadata: Payload too large")

    event_id = await store_exam_event(
        assignment_id=event.assignment_id,
        student_id=student["user_id"],
        event_type=event.event_type,
        attempt=event.attempt,
        metadata=event.metadata,
    )
    logger.info(
        "exam event %s assignment=%s student=%s attempt=%s",
        event.event_type, event.assignment_id, student["user_id"], event.attempt,
    )
    return {"success": True, "event_id": event_id}


@router.get("/exam-events", response_model=ExamEventListResponse)
async def list_exam_events(
    assignment_id: str = Query(..., min_length=1),
    student_id: Optional[str] = Query(default=None, min_length=1),
    attempt: Optional[int] = Query(default=None, ge=1, le=999),
    limit: int = Query(default=settings.EVENT_QUERY_DEFAULT_LIMIT, ge=1, le=settings.EVENT_QUERY_MAX_LIMIT),
    created_from: Optional[str] = Query(default=None, alias="from"),
    created_to: Optional[str] = Query(default=None, alias="to"),
    teacher: dict = Depends(require_role("TEACHER")),
):
    """
    Teacher-only listing of an assignment's exam events, newest first.
    """
    if not await is_teacher_of_assignment(teacher["user_id"], assignment_id):
        raise HTTPException(status_code=403, detail="Forbidden")

    try:
        from_dt = parse_iso_datetime(created_from)
    except ValueError:
        raise HTTPException(status_code=400, detail="from: Invalid date")
    try:
        to_dt = parse_iso_datetime(created_to)
    except ValueError:
        raise HTTPException(status_code=400, detail="to: Invalid date")

    query = build_event_query(assignment_id, student_id, attempt, from_dt, to_dt)
    events = await fetch_exam_events(query, limit, ascending=False)
    events = await attach_students(events)
    return {"success": True, "data": events}
