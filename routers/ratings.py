import logging
import re
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from database import LECTURER, RATING, create_document, get_db, get_documents, utcnow
from errors import ValidationError
from schemas import RatingIn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ratings", tags=["ratings"])

RATING_SCORES = {
    "excellent": 5,
    "good": 4,
    "average": 3,
    "poor": 2,
}
DEFAULT_SCORE = 3


def score_for(label: Any) -> int:
    return RATING_SCORES.get(str(label).strip().lower(), DEFAULT_SCORE)


def bucket_for(score: float) -> str:
    if score >= 4.5:
        return "excellent"
    if score >= 3.5:
        return "good"
    if score >= 2.5:
        return "average"
    return "poor"


def apply_rating_to_lecturer(db: Database, lecturer_name: str, course_name: str, score: int) -> bool:
    """Fold one score into the lecturer's running average.

    Returns False when no lecturer has that name (case-insensitive).
    """
    lecturer = db[LECTURER].find_one(
        {"name": {"$regex": f"^{re.escape(lecturer_name.strip())}$", "$options": "i"}}
    )
    if not lecturer:
        return False

    old_avg = float(lecturer.get("overallRating") or 0)
    old_count = int(lecturer.get("totalRatings") or 0)
    new_count = old_count + 1
    db[LECTURER].update_one(
        {"_id": lecturer["_id"]},
        {
            "$set": {"overallRating": (old_avg * old_count + score) / new_count, "totalRatings": new_count},
            "$addToSet": {"courses": course_name},
        },
    )
    return True


@router.post("", status_code=status.HTTP_201_CREATED)
def submit_rating(payload: RatingIn, db: Database = Depends(get_db)):
    if not payload.lecturerName or not payload.courseName or not payload.rating:
        raise ValidationError("Lecturer name, course name, and rating are required")

    score = score_for(payload.rating)
    data = {
        "studentId": payload.studentId,
        "studentName": payload.studentName or "Anonymous Student",
        "lecturerName": payload.lecturerName,
        "courseName": payload.courseName,
        "rating": score,
        "ratingLabel": str(payload.rating),
        "comments": payload.comments or "",
        "submittedDate": utcnow(),
        "isAnonymous": not payload.studentName,
    }
    rating = create_document(db, RATING, data)

    # Separate write; a failure here leaves the rating saved
    lecturer_updated = apply_rating_to_lecturer(db, payload.lecturerName, payload.courseName, score)
    if not lecturer_updated:
        logger.warning("No lecturer named %r; rating saved without aggregate update", payload.lecturerName)

    logger.info("New rating submitted for %s - %s", payload.lecturerName, payload.courseName)
    return {
        "message": f"Rating submitted successfully for {payload.lecturerName} - {payload.courseName}",
        "rating": rating,
        "lecturerUpdated": lecturer_updated,
    }


@router.get("")
def list_ratings(
    lecturer: Optional[str] = None,
    course: Optional[str] = None,
    minRating: Optional[int] = None,
    maxRating: Optional[int] = None,
    db: Database = Depends(get_db),
):
    flt: Dict[str, Any] = {}
    if lecturer:
        flt["lecturerName"] = {"$regex": re.escape(lecturer), "$options": "i"}
    if course:
        flt["courseName"] = {"$regex": re.escape(course), "$options": "i"}
    bounds: Dict[str, int] = {}
    if minRating is not None:
        bounds["$gte"] = minRating
    if maxRating is not None:
        bounds["$lte"] = maxRating
    if bounds:
        flt["rating"] = bounds
    return get_documents(db, RATING, flt, sort=[("submittedDate", -1)])


@router.get("/stats")
def rating_stats(db: Database = Depends(get_db)):
    ratings = get_documents(db, RATING)
    distribution = {"excellent": 0, "good": 0, "average": 0, "poor": 0}
    total_score = 0.0
    for rating in ratings:
        score = float(rating.get("rating") or 0)
        total_score += score
        distribution[bucket_for(score)] += 1

    top = get_documents(db, LECTURER, sort=[("overallRating", -1)], limit=5)
    return {
        "totalRatings": len(ratings),
        "averageRating": total_score / len(ratings) if ratings else 0,
        "ratingDistribution": distribution,
        "topLecturers": [
            {
                "name": lecturer.get("name"),
                "department": lecturer.get("department"),
                "overallRating": lecturer.get("overallRating", 0),
                "totalRatings": lecturer.get("totalRatings", 0),
                "courses": lecturer.get("courses", []),
            }
            for lecturer in top
        ],
        "recentSubmissions": get_documents(db, RATING, sort=[("submittedDate", -1)], limit=10),
    }
