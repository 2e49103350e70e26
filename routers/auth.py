import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from config import Settings
from database import USER, get_db, get_document_by_id, utcnow
from errors import AuthError, ConflictError, NotFoundError, ValidationError
from schemas import LoginIn, SignupIn
from security import (
    ROLES,
    create_access_token,
    get_current_user,
    get_password_hash,
    get_settings_dep,
    user_claims,
    user_summary,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(
    payload: SignupIn,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
):
    if not all([payload.email, payload.password, payload.confirmPassword, payload.fullName, payload.role]):
        raise ValidationError("All fields are required")
    if payload.password != payload.confirmPassword:
        raise ValidationError("Passwords do not match")
    if payload.role not in ROLES:
        raise ValidationError(f"Role must be one of: {', '.join(ROLES)}")

    if db[USER].find_one({"email": payload.email}):
        raise ConflictError("User already exists with this email")

    user = {
        "email": payload.email,
        "password": get_password_hash(payload.password),
        "fullName": payload.fullName,
        "role": payload.role,
        "studentId": payload.studentId if payload.role == "student" else None,
        "employeeId": payload.employeeId if payload.role != "student" else None,
        "createdAt": utcnow(),
    }
    try:
        result = db[USER].insert_one(user)
    except DuplicateKeyError:
        raise ConflictError("User already exists with this email")
    user["_id"] = result.inserted_id

    token = create_access_token(user_claims(user), settings)
    logger.info("User %s registered as %s", user["email"], user["role"])
    return {"message": "User created successfully", "user": user_summary(user), "token": token}


@router.post("/login")
def login(
    payload: LoginIn,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
):
    if not payload.email or not payload.password or not payload.role:
        raise ValidationError("Email, password, and role are required")

    user = db[USER].find_one({"email": payload.email})
    if not user or not verify_password(payload.password, user.get("password", "")):
        raise AuthError()
    if user["role"] != payload.role:
        raise AuthError()

    token = create_access_token(user_claims(user), settings)
    return {"message": "Login successful", "user": user_summary(user), "token": token}


@router.get("/me")
def read_current_user(
    claims: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    user = get_document_by_id(db, USER, claims["userId"])
    if not user:
        raise NotFoundError("User not found")
    return user_summary(user)
