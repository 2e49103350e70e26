"""
Request Schemas for the College Management API

Each Pydantic model describes the JSON body accepted by one write endpoint.
Fields mirror the camelCase names stored in MongoDB. Required fields are
declared Optional and checked by the route so that a missing or empty value
produces the API's own `{"error": ...}` message rather than a schema error.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class SignupIn(BaseModel):
    email: Optional[str] = Field(None, description="Login email, unique")
    password: Optional[str] = None
    confirmPassword: Optional[str] = None
    fullName: Optional[str] = None
    role: Optional[str] = Field(None, description="student | lecturer | principal")
    studentId: Optional[str] = Field(None, description="Kept for students only")
    employeeId: Optional[str] = Field(None, description="Kept for lecturers and principals only")


class LoginIn(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class ChallengeIn(BaseModel):
    studentId: Optional[str] = None
    studentName: Optional[str] = None
    program: Optional[str] = None
    level: Optional[str] = None
    semester: Optional[str] = None
    course: Optional[str] = None
    lecturer: Optional[str] = None
    challenge: Optional[str] = Field(None, description="Challenge description (required)")
    priority: Optional[str] = Field(None, description="low | medium | high")


class ChallengeUpdate(BaseModel):
    status: Optional[str] = Field(None, description="submitted | reviewed | resolved")
    response: Optional[str] = None
    resolution: Optional[str] = None
    priority: Optional[str] = None
    reviewedBy: Optional[str] = None


class RatingIn(BaseModel):
    studentId: Optional[str] = None
    studentName: Optional[str] = None
    lecturerName: Optional[str] = None
    courseName: Optional[str] = None
    rating: Optional[Any] = Field(None, description="excellent | good | average | poor")
    comments: Optional[str] = None


class CourseAssignmentIn(BaseModel):
    program: Optional[str] = None
    course: Optional[str] = None
    code: Optional[str] = None
    lecturer: Optional[str] = None
    day: Optional[str] = None
    time: Optional[str] = None
    week: Optional[int] = Field(None, ge=1)
    semester: Optional[str] = None
    year: Optional[str] = Field(None, description="Year/level tier, e.g. certificate, diploma")


class TimetableIn(BaseModel):
    program: Optional[str] = None
    level: Optional[str] = None
    year: Optional[str] = None
    semester: Optional[str] = None
    week: Optional[int] = Field(None, ge=1)
    day: Optional[str] = None
    time: Optional[str] = None
    course: Optional[str] = None
    lecturer: Optional[str] = None
    code: Optional[str] = None


class ReportIn(BaseModel):
    type: Optional[str] = None
    program: Optional[str] = None
    period: Optional[str] = None
    data: Optional[Dict[str, Any]] = Field(None, description="Opaque compiled payload")


class PrincipalReportIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    priority: Optional[str] = None
    sender: Optional[str] = Field(None, alias="from")
    date: Optional[str] = None
    dueDate: Optional[str] = None
    subject: Optional[str] = None
    keyConcerns: List[str] = Field(default_factory=list)
    keyPoints: List[str] = Field(default_factory=list)
    opportunities: List[str] = Field(default_factory=list)
    actionRequired: Optional[str] = None


class PrincipalReportUpdate(BaseModel):
    response: Optional[str] = None
    status: Optional[str] = Field(None, description="pending | submitted")
