import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from database import (
    PRINCIPAL_REPORT,
    REPORT,
    create_document,
    delete_document_by_id,
    get_db,
    get_documents,
    update_document_by_id,
    utcnow,
)
from errors import NotFoundError, ValidationError
from schemas import PrincipalReportIn, PrincipalReportUpdate, ReportIn
from security import REVIEWER_ROLES, require_roles

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["reports"])

PRINCIPAL_REPORT_STATUSES = ("pending", "submitted")


def display_date(moment) -> str:
    return f"{moment.month}/{moment.day}/{moment.year}"


@router.get("/reports")
def list_reports(db: Database = Depends(get_db)):
    return get_documents(db, REPORT, sort=[("createdDate", -1)])


@router.post(
    "/reports",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(*REVIEWER_ROLES))],
)
def compile_report(payload: ReportIn, db: Database = Depends(get_db)):
    if not payload.type or not payload.program or not payload.period:
        raise ValidationError("Report type, program, and period are required")

    now = utcnow()
    data = {
        "type": payload.type,
        "program": payload.program,
        "period": payload.period,
        "date": display_date(now),
        "status": "Compiled",
        "data": payload.data or {},
        "createdDate": now,
    }
    report = create_document(db, REPORT, data)
    logger.info("Compiled %s report for %s (%s)", data["type"], data["program"], data["period"])
    return {"message": "Report compiled successfully!", "report": report}


@router.delete("/reports/{report_id}", dependencies=[Depends(require_roles(*REVIEWER_ROLES))])
def delete_report(report_id: str, db: Database = Depends(get_db)):
    report = delete_document_by_id(db, REPORT, report_id)
    if not report:
        raise NotFoundError("Report not found")
    return {"message": "Report deleted successfully", "report": report}


@router.get("/principal-reports")
def list_principal_reports(db: Database = Depends(get_db)):
    return get_documents(db, PRINCIPAL_REPORT, sort=[("date", -1)])


@router.post(
    "/principal-reports",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(*REVIEWER_ROLES))],
)
def create_principal_report(payload: PrincipalReportIn, db: Database = Depends(get_db)):
    if not payload.title or not payload.priority or not payload.sender:
        raise ValidationError("Title, priority, and sender are required")

    data = payload.model_dump(by_alias=True)
    data.update({
        "date": payload.date or utcnow().date().isoformat(),
        "response": None,
        "status": "pending",
        "responseDate": None,
    })
    report = create_document(db, PRINCIPAL_REPORT, data)
    return {"message": "Principal report created successfully", "report": report}


@router.put("/principal-reports/{report_id}", dependencies=[Depends(require_roles(*REVIEWER_ROLES))])
def respond_to_principal_report(
    report_id: str,
    payload: PrincipalReportUpdate,
    db: Database = Depends(get_db),
):
    if payload.status and payload.status not in PRINCIPAL_REPORT_STATUSES:
        raise ValidationError(f"status must be one of: {', '.join(PRINCIPAL_REPORT_STATUSES)}")

    updates: Dict[str, Optional[Any]] = {}
    if payload.response:
        updates["response"] = payload.response
    if payload.status:
        updates["status"] = payload.status
        if payload.status == "submitted":
            updates["responseDate"] = utcnow().date().isoformat()

    report = update_document_by_id(db, PRINCIPAL_REPORT, report_id, updates)
    if not report:
        raise NotFoundError("Report not found")
    return {"message": "Report response updated successfully", "report": report}
