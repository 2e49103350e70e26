import re
from typing import Optional

from fastapi import APIRouter, Depends
from pymongo.database import Database

from database import LECTURER, get_db, get_document_by_id, get_documents
from errors import NotFoundError, ValidationError

router = APIRouter(prefix="/api/lecturers", tags=["lecturers"])


@router.get("")
def list_lecturers(db: Database = Depends(get_db)):
    return get_documents(db, LECTURER, sort=[("name", 1)])


# Declared before /{lecturer_id} so "search" is not taken for an id
@router.get("/search")
def search_lecturers(query: Optional[str] = None, db: Database = Depends(get_db)):
    if not query or not query.strip():
        raise ValidationError("Search query is required")
    pattern = {"$regex": re.escape(query.strip()), "$options": "i"}
    flt = {"$or": [
        {"name": pattern},
        {"department": pattern},
        {"courses": pattern},
    ]}
    return get_documents(db, LECTURER, flt, sort=[("name", 1)])


@router.get("/{lecturer_id}")
def get_lecturer(lecturer_id: str, db: Database = Depends(get_db)):
    lecturer = get_document_by_id(db, LECTURER, lecturer_id)
    if not lecturer:
        raise NotFoundError("Lecturer not found")
    return lecturer
