# quiz_anticheat/services/report_service.py
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas
from io import BytesIO
from datetime import datetime
from typing import List, Dict, Optional

RECENT_EVENTS_SHOWN = 50

def make_score_pdf_report(
    assignment: Dict,
    score: Dict,
    events: List[Dict],
    student_id: Optional[str] = None,
    attempt: Optional[int] = None,
) -> bytes:
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=letter)
    W, H = letter
    y = H - 50

    def line(x, text, step=12):
        nonlocal y
        if y < 60:
            c.showPage()
            c.setFont("Helvetica", 9)
            y = H - 50
        c.drawString(x, y, text[:150])
        y -= step

    c.setFont("Helvetica-Bold", 16)
    line(50, f"Anti-Cheat Report - {assignment.get('title') or assignment.get('_id')}", 30)

    c.setFont("Helvetica", 10)
    line(50, f"Generated: {datetime.utcnow().isoformat()} UTC")
    line(50, f"Student: {student_id or 'all'}    Attempt: {attempt if attempt is not None else 'all'}", 20)

    c.setFont("Helvetica-Bold", 12)
    line(50, "Summary", 16)
    c.setFont("Helvetica", 10)
    line(60, f"Suspicion Score: {score.get('suspicion_score')} / 100")
    line(60, f"Risk Level: {str(score.get('risk_level', '')).upper()}")
    line(60, f"Total Events: {score.get('total_events', len(events))}", 14)

    c.setFont("Helvetica-Bold", 11)
    line(50, "Rule breakdown:", 14)
    c.setFont("Helvetica", 10)
    breakdown = score.get("breakdown") or []
    if not breakdown:
        line(60, "No rule was triggered.")
    for item in breakdown:
        line(60, f"{item['title']}: {item['count']} hit(s), {item['points']}/{item['max_points']} pts")
        line(70, item["details"])

    y -= 10
    c.setFont("Helvetica-Bold", 11)
    line(50, "Event counts:", 14)
    c.setFont("Helvetica", 10)
    for k, v in sorted((score.get("counts_by_type") or {}).items()):
        line(60, f"{k}: {v}")

    y -= 10
    c.setFont("Helvetica-Bold", 11)
    line(50, f"Events (last {RECENT_EVENTS_SHOWN}):", 16)
    c.setFont("Helvetica", 9)
    for e in events[-RECENT_EVENTS_SHOWN:]:
        ts = e.get("created_at")
        ts = ts.isoformat() if hasattr(ts, "isoformat") else (ts or "")
        line(50, f"{ts} | {e.get('student_id', '')} | {e.get('event_type')}")

    c.showPage()
    c.save()
    pdf = buffer.getvalue()
    buffer.close()
    return pdf
