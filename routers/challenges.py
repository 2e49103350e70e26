import logging
import re
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from database import CHALLENGE, create_document, get_db, get_documents, update_document_by_id, utcnow
from errors import NotFoundError, ValidationError
from schemas import ChallengeIn, ChallengeUpdate
from security import REVIEWER_ROLES, require_roles

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/challenges", tags=["challenges"])

STATUSES = ("submitted", "reviewed", "resolved")
PRIORITIES = ("high", "medium", "low")
NOT_SPECIFIED = "Not specified"


def _check_choice(field: str, value: Optional[str], choices) -> None:
    if value is not None and value not in choices:
        raise ValidationError(f"{field} must be one of: {', '.join(choices)}")


@router.post("", status_code=status.HTTP_201_CREATED)
def submit_challenge(payload: ChallengeIn, db: Database = Depends(get_db)):
    if not payload.challenge or not payload.studentId:
        raise ValidationError("Challenge description and student ID are required")
    _check_choice("priority", payload.priority, PRIORITIES)

    data = {
        "studentId": payload.studentId,
        "studentName": payload.studentName or "Anonymous Student",
        "program": payload.program or NOT_SPECIFIED,
        "level": payload.level or NOT_SPECIFIED,
        "semester": payload.semester or NOT_SPECIFIED,
        "course": payload.course or NOT_SPECIFIED,
        "lecturer": payload.lecturer or NOT_SPECIFIED,
        "challenge": payload.challenge,
        "status": "submitted",
        "priority": payload.priority or "medium",
        "submittedDate": utcnow(),
        "reviewedBy": None,
        "reviewedDate": None,
        "response": None,
        "resolution": None,
    }
    challenge = create_document(db, CHALLENGE, data)
    logger.info("New challenge submitted by %s (%s)", challenge["studentName"], challenge["studentId"])
    return {"message": "Challenge submitted successfully to the Principal Lecturer!", "challenge": challenge}


@router.get("")
def list_challenges(
    status: Optional[str] = None,
    priority: Optional[str] = None,
    lecturer: Optional[str] = None,
    db: Database = Depends(get_db),
):
    flt: Dict[str, Any] = {}
    if status:
        flt["status"] = status
    if priority:
        flt["priority"] = priority
    if lecturer:
        flt["lecturer"] = {"$regex": re.escape(lecturer), "$options": "i"}
    return get_documents(db, CHALLENGE, flt, sort=[("submittedDate", -1)])


@router.get("/stats", dependencies=[Depends(require_roles(*REVIEWER_ROLES))])
def challenge_stats(db: Database = Depends(get_db)):
    challenges = get_documents(db, CHALLENGE)
    by_status = {s: 0 for s in STATUSES}
    by_priority = {p: 0 for p in PRIORITIES}
    by_lecturer: Dict[str, int] = {}
    for challenge in challenges:
        state = challenge.get("status") or "submitted"
        by_status[state] = by_status.get(state, 0) + 1
        priority = challenge.get("priority") or "medium"
        by_priority[priority] = by_priority.get(priority, 0) + 1
        lecturer = challenge.get("lecturer") or "Unknown"
        by_lecturer[lecturer] = by_lecturer.get(lecturer, 0) + 1

    return {
        "totalChallenges": len(challenges),
        "byStatus": by_status,
        "byPriority": by_priority,
        "byLecturer": by_lecturer,
        "recentChallenges": get_documents(db, CHALLENGE, sort=[("submittedDate", -1)], limit=10),
    }


@router.put("/{challenge_id}")
def update_challenge(
    challenge_id: str,
    payload: ChallengeUpdate,
    db: Database = Depends(get_db),
    reviewer: Optional[Dict[str, Any]] = Depends(require_roles(*REVIEWER_ROLES)),
):
    _check_choice("status", payload.status, STATUSES)
    _check_choice("priority", payload.priority, PRIORITIES)

    updates: Dict[str, Any] = {}
    for field in ("status", "response", "resolution", "priority"):
        value = getattr(payload, field)
        if value:
            updates[field] = value
    if payload.reviewedBy:
        updates["reviewedBy"] = payload.reviewedBy
        updates["reviewedDate"] = utcnow()

    challenge = update_document_by_id(db, CHALLENGE, challenge_id, updates)
    if not challenge:
        raise NotFoundError("Challenge not found")
    if reviewer:
        logger.info("Challenge %s updated by %s", challenge_id, reviewer["email"])
    return {"message": "Challenge updated successfully", "challenge": challenge}
