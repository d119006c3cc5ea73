# quiz_anticheat/db.py
from motor.motor_asyncio import AsyncIOMotorClient
from .config import settings

_client = AsyncIOMotorClient(settings.MONGODB_URI)
db = _client[settings.DATABASE_NAME]

events_col = db["exam_events"]
assignments_col = db["assignments"]
classrooms_col = db["classrooms"]
users_col = db["users"]

async def create_indexes():
    # scoring and listing both filter by assignment, then student/attempt, ordered by time
    await events_col.create_index([("assignment_id", 1), ("student_id", 1), ("attempt", 1), ("created_at", 1)])
    await events_col.create_index("created_at")
    await assignments_col.create_index("teacher_id")
    await classrooms_col.create_index("student_ids")
