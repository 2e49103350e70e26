import asyncio

from fastapi import APIRouter, Depends
from pymongo.database import Database
from starlette.concurrency import run_in_threadpool

from database import ASSIGNED_COURSE, CHALLENGE, LECTURER, RATING, REPORT, count_documents, get_db

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


def _challenge_statuses(db: Database):
    return [doc.get("status") for doc in db[CHALLENGE].find({}, {"status": 1})]


def _rating_scores(db: Database):
    return [doc.get("rating", 0) for doc in db[RATING].find({}, {"rating": 1})]


@router.get("/stats")
async def dashboard_stats(db: Database = Depends(get_db)):
    # Independent reads, fetched concurrently
    statuses, scores, lecturers, assigned, reports = await asyncio.gather(
        run_in_threadpool(_challenge_statuses, db),
        run_in_threadpool(_rating_scores, db),
        run_in_threadpool(count_documents, db, LECTURER),
        run_in_threadpool(count_documents, db, ASSIGNED_COURSE),
        run_in_threadpool(count_documents, db, REPORT),
    )
    return {
        "overview": {
            "totalLecturers": lecturers,
            "totalAssignedCourses": assigned,
            "totalChallenges": len(statuses),
            "totalRatings": len(scores),
            "totalReports": reports,
        },
        "challenges": {
            "pending": statuses.count("submitted"),
            "reviewed": statuses.count("reviewed"),
            "resolved": statuses.count("resolved"),
        },
        "ratings": {
            "averageRating": round(sum(scores) / len(scores), 1) if scores else 0,
            "totalRatings": len(scores),
        },
    }
