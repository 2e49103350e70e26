"""Default records inserted into an empty database at startup."""
import logging

from pymongo.database import Database

from database import LECTURER, PRINCIPAL_REPORT, count_documents

logger = logging.getLogger(__name__)

DEFAULT_LECTURERS = [
    {
        "name": "Mr. Molao",
        "department": "IT",
        "email": "molao@college.ac.za",
        "courses": ["Programming Principles", "Advanced Programming"],
        "contact": "+27 11 123 4567",
        "office": "IT Building Room 101",
    },
    {
        "name": "Mr. Makheka",
        "department": "IT",
        "email": "makheka@college.ac.za",
        "courses": ["Web Technologies", "Web Application Development"],
        "contact": "+27 11 123 4568",
        "office": "IT Building Room 102",
    },
    {
        "name": "Mr. Thokoane",
        "department": "IT",
        "email": "thokoane@college.ac.za",
        "courses": ["Database Systems", "Database Management"],
        "contact": "+27 11 123 4569",
        "office": "IT Building Room 103",
    },
]

DEFAULT_PRINCIPAL_REPORTS = [
    {
        "title": "Program Performance Review - Q1 2024",
        "priority": "high",
        "from": "Principal Office",
        "date": "2024-01-20",
        "dueDate": "2024-01-27",
        "subject": "IT Program Performance Analysis - Semester 1 2024",
        "keyConcerns": [
            "Attendance rate dropped by 8% compared to previous semester",
            "Student performance in advanced programming courses below expectations",
            "Industry feedback suggests need for updated curriculum in web technologies",
        ],
        "keyPoints": [],
        "opportunities": [],
        "actionRequired": "Please provide detailed response addressing these concerns and proposed improvement plan.",
    },
    {
        "title": "Resource Allocation Review",
        "priority": "medium",
        "from": "Academic Committee",
        "date": "2024-01-18",
        "dueDate": "2024-02-01",
        "subject": "IT Department Resource Utilization and Requirements",
        "keyConcerns": [],
        "keyPoints": [
            "Review current laboratory equipment utilization rates",
            "Assess software licensing needs for next academic year",
            "Provide justification for additional teaching staff requests",
        ],
        "opportunities": [],
        "actionRequired": "Submit detailed resource assessment and requirements proposal.",
    },
]


def seed_defaults(db: Database) -> None:
    if count_documents(db, LECTURER) == 0:
        db[LECTURER].insert_many(
            [{**lecturer, "overallRating": 0.0, "totalRatings": 0} for lecturer in DEFAULT_LECTURERS]
        )
        logger.info("Default lecturers created")

    if count_documents(db, PRINCIPAL_REPORT) == 0:
        db[PRINCIPAL_REPORT].insert_many(
            [{**report, "status": "pending", "response": None, "responseDate": None} for report in DEFAULT_PRINCIPAL_REPORTS]
        )
        logger.info("Default principal reports created")
