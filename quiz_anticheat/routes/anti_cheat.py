# quiz_anticheat/routes/anti_cheat.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Response
from typing import Optional
from ..config import settings
from ..schemas import AntiCheatScoreResponse
from ..services.access import get_assignment, is_teacher_of_assignment
from ..services.event_service import build_event_query, fetch_exam_events
from ..services.report_service import make_score_pdf_report
from ..utils.auth import require_role
from ..utils.scoring import compute_quiz_anti_cheat_score

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/teachers", tags=["anti-cheat"])


@router.get("/assignments/{assignment_id}/anti-cheat/score", response_model=AntiCheatScoreResponse)
async def get_anti_cheat_score(
    assignment_id: str,
    student_id: Optional[str] = Query(default=None, min_length=1),
    attempt: Optional[int] = Query(default=None, ge=1, le=999),
    limit: int = Query(default=settings.EVENT_QUERY_DEFAULT_LIMIT, ge=1, le=settings.EVENT_QUERY_MAX_LIMIT),
    format: str = "json",
    teacher: dict = Depends(require_role("TEACHER")),
):
    """
    Suspicion score + rule breakdown computed on demand from the stored exam events.
    Returns JSON, or a PDF report with format=pdf.
    """
    if format not in ("json", "pdf"):
        raise HTTPException(status_code=400, detail="format must be json|pdf")

    if not await is_teacher_of_assignment(teacher["user_id"], assignment_id):
        raise HTTPException(status_code=403, detail="Forbidden - Not your assignment")

    assignment = await get_assignment(assignment_id)
    if not assignment:
        raise HTTPException(status_code=404, detail="Assignment not found")
    if assignment.get("type") != "QUIZ":
        raise HTTPException(status_code=400, detail="Anti-cheat scoring only applies to QUIZ assignments")

    query = build_event_query(assignment_id, student_id, attempt)
    events = await fetch_exam_events(query, limit, ascending=True)

    score = compute_quiz_anti_cheat_score(events, settings.EVENT_TYPE_ALIASES)
    score["total_events"] = len(events)
    logger.info(
        "anti-cheat score assignment=%s student=%s attempt=%s score=%s risk=%s events=%s",
        assignment_id, student_id, attempt, score["suspicion_score"], score["risk_level"], len(events),
    )

    if format == "pdf":
        pdf_bytes = make_score_pdf_report(assignment, score, events, student_id, attempt)
        filename = f"{assignment_id}_{student_id or 'all'}_anticheat.pdf"
        return Response(
            content=pdf_bytes,
            media_type="application/pdf",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
    return {"success": True, "data": score}
