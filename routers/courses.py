import logging

from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from database import ASSIGNED_COURSE, create_document, delete_document_by_id, get_db, get_documents, utcnow
from errors import NotFoundError, ValidationError
from schemas import CourseAssignmentIn
from security import REVIEWER_ROLES, require_roles

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/courses", tags=["courses"])


@router.get("/assigned")
def list_assigned_courses(db: Database = Depends(get_db)):
    return get_documents(db, ASSIGNED_COURSE, sort=[("assignedDate", -1)])


@router.post(
    "/assign",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(*REVIEWER_ROLES))],
)
def assign_course(payload: CourseAssignmentIn, db: Database = Depends(get_db)):
    required = (payload.program, payload.course, payload.code, payload.lecturer, payload.day, payload.time)
    if not all(required):
        raise ValidationError("All fields are required")

    data = {
        "program": payload.program,
        "course": payload.course,
        "code": payload.code,
        "lecturer": payload.lecturer,
        "day": payload.day,
        "time": payload.time,
        "week": payload.week or 1,
        "semester": payload.semester or "semester1",
        "year": payload.year or "certificate",
        "assignedDate": utcnow(),
    }
    assignment = create_document(db, ASSIGNED_COURSE, data)
    logger.info("Assigned %s (%s) to %s on %s %s", data["course"], data["code"], data["lecturer"], data["day"], data["time"])
    return {"message": "Course assigned successfully!", "assignment": assignment}


@router.delete("/assigned/{assignment_id}", dependencies=[Depends(require_roles(*REVIEWER_ROLES))])
def remove_assignment(assignment_id: str, db: Database = Depends(get_db)):
    assignment = delete_document_by_id(db, ASSIGNED_COURSE, assignment_id)
    if not assignment:
        raise NotFoundError("Assignment not found")
    return {"message": "Assignment removed successfully", "assignment": assignment}
