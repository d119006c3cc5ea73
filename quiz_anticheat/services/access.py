# quiz_anticheat/services/access.py
from typing import Optional
from ..db import assignments_col, classrooms_col


async def is_teacher_of_assignment(teacher_id: str, assignment_id: str) -> bool:
    doc = await assignments_col.find_one({"_id": assignment_id, "teacher_id": teacher_id}, {"_id": 1})
    return doc is not None


async def get_assignment(assignment_id: str) -> Optional[dict]:
    return await assignments_col.find_one(
        {"_id": assignment_id}, {"_id": 1, "title": 1, "type": 1, "teacher_id": 1}
    )


async def get_student_classroom_for_assignment(student_id: str, assignment_id: str) -> Optional[str]:
    """
    Return the id of a classroom that both contains the student and has the
    assignment assigned to it, or None.
    """
    assignment = await assignments_col.find_one({"_id": assignment_id}, {"classroom_ids": 1})
    if not assignment or not assignment.get("classroom_ids"):
        return None
    classroom = await classrooms_col.find_one(
        {"_id": {"$in": assignment["classroom_ids"]}, "student_ids": student_id}, {"_id": 1}
    )
    return str(classroom["_id"]) if classroom else None
