# quiz_anticheat/services/event_service.py
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from ..db import events_col, users_col

logger = logging.getLogger(__name__)


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 string (a trailing "Z" is accepted) into a naive UTC datetime.
    Returns None for empty input, raises ValueError for anything unparseable.
    """
    if value is None or not value.strip():
        return None
    dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def metadata_size(metadata: Any) -> int:
    """
    Length in characters of the compact JSON form of `metadata`.
    NaN/Infinity are rejected, they are not valid JSON.
    """
    if metadata is None:
        return 0
    try:
        return len(json.dumps(metadata, separators=(",", ":"), ensure_ascii=False, allow_nan=False))
    except (TypeError, ValueError) as exc:
        raise ValueError("metadata is not JSON serializable") from exc


def build_event_query(
    assignment_id: str,
    student_id: Optional[str] = None,
    attempt: Optional[int] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
) -> Dict[str, Any]:
    query: Dict[str, Any] = {"assignment_id": assignment_id}
    if student_id:
        query["student_id"] = student_id
    if attempt is not None:
        query["attempt"] = attempt
    if created_from or created_to:
        query["created_at"] = {}
        if created_from:
            query["created_at"]["$gte"] = created_from
        if created_to:
            query["created_at"]["$lte"] = created_to
    return query


async def store_exam_event(
    assignment_id: str,
    student_id: str,
    event_type: str,
    attempt: Optional[int] = None,
    metadata: Any = None,
) -> str:
    doc = {
        "assignment_id": assignment_id,
        "student_id": student_id,
        "attempt": attempt,
        "event_type": event_type,
        "metadata": metadata,
        "created_at": datetime.utcnow(),
    }
    res = await events_col.insert_one(doc)
    logger.debug("stored exam event %s for assignment=%s student=%s", event_type, assignment_id, student_id)
    return str(res.inserted_id)


async def fetch_exam_events(query: Dict[str, Any], limit: int, ascending: bool = True) -> List[Dict[str, Any]]:
    cursor = events_col.find(query).sort("created_at", 1 if ascending else -1).limit(limit)
    out = []
    async for d in cursor:
        d["id"] = str(d.pop("_id"))
        out.append(d)
    return out


async def attach_students(events: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Set event["student"] = {id, fullname, email} from the users collection,
    one query for the whole page. Unknown students get None.
    """
    student_ids = sorted({e["student_id"] for e in events if e.get("student_id")})
    students: Dict[str, Dict[str, Any]] = {}
    if student_ids:
        cursor = users_col.find({"_id": {"$in": student_ids}}, {"fullname": 1, "email": 1})
        async for u in cursor:
            sid = str(u["_id"])
            students[sid] = {"id": sid, "fullname": u.get("fullname"), "email": u.get("email")}
    for e in events:
        e["student"] = students.get(e.get("student_id"))
    return events
