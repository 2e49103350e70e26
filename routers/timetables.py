import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from pymongo.database import Database

from database import TIMETABLE, TIMETABLE_KEY, get_db, get_documents, serialize, utcnow
from errors import NotFoundError, ValidationError
from schemas import TimetableIn
from security import REVIEWER_ROLES, require_roles

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/timetables", tags=["timetables"])

SLOT_ORDER = [("week", 1), ("day", 1), ("time", 1)]


def _listing(entries):
    return {"timetables": entries, "count": len(entries)}


@router.post("", dependencies=[Depends(require_roles(*REVIEWER_ROLES))])
def save_timetable_entry(payload: TimetableIn, db: Database = Depends(get_db)):
    data = payload.model_dump()
    missing = [field for field in TIMETABLE_KEY + ("course", "lecturer", "code") if not data.get(field)]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    # Upsert by natural key: one document per slot
    key = {field: data[field] for field in TIMETABLE_KEY}
    now = utcnow()
    result = db[TIMETABLE].update_one(
        key,
        {
            "$set": {"course": data["course"], "lecturer": data["lecturer"], "code": data["code"], "updatedAt": now},
            "$setOnInsert": {"createdAt": now},
        },
        upsert=True,
    )
    entry = serialize(db[TIMETABLE].find_one(key))
    if result.matched_count:
        message = "Timetable entry updated successfully"
    else:
        message = "Timetable entry created successfully"

    logger.info("%s: %s week %s %s %s", message, data["program"], data["week"], data["day"], data["time"])
    return {"message": message, "timetable": entry}


@router.get("/all")
def list_all_timetables(db: Database = Depends(get_db)):
    return _listing(get_documents(db, TIMETABLE, sort=SLOT_ORDER))


@router.get("")
def list_timetables(
    program: Optional[str] = None,
    level: Optional[str] = None,
    year: Optional[str] = None,
    semester: Optional[str] = None,
    week: Optional[str] = None,
    db: Database = Depends(get_db),
):
    flt: Dict[str, Any] = {}
    for field, value in (("program", program), ("level", level), ("year", year), ("semester", semester)):
        if value and value != "all":
            flt[field] = value
    if week and week != "all":
        if not week.isdigit():
            raise ValidationError("week must be a number or 'all'")
        flt["week"] = int(week)
    return _listing(get_documents(db, TIMETABLE, flt, sort=SLOT_ORDER))


@router.delete("", dependencies=[Depends(require_roles(*REVIEWER_ROLES))])
def delete_timetable_entry(
    program: Optional[str] = None,
    level: Optional[str] = None,
    year: Optional[str] = None,
    semester: Optional[str] = None,
    week: Optional[int] = Query(None, ge=1),
    day: Optional[str] = None,
    time: Optional[str] = None,
    db: Database = Depends(get_db),
):
    key = {
        "program": program,
        "level": level,
        "year": year,
        "semester": semester,
        "week": week,
        "day": day,
        "time": time,
    }
    missing = [field for field, value in key.items() if value is None or value == ""]
    if missing:
        raise ValidationError(f"Missing required query parameters: {', '.join(missing)}")

    entry = db[TIMETABLE].find_one_and_delete(key)
    if not entry:
        raise NotFoundError("Timetable entry not found")
    return {"message": "Timetable entry deleted successfully", "timetable": serialize(entry)}
