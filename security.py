from datetime import timedelta
from typing import Any, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from config import Settings
from database import utcnow
from errors import ForbiddenError, TokenError

ROLES = ("student", "lecturer", "principal")
REVIEWER_ROLES = ("lecturer", "principal")

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
bearer_scheme = HTTPBearer(auto_error=False)


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def user_claims(user: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "userId": str(user["_id"]),
        "email": user["email"],
        "role": user["role"],
        "name": user["fullName"],
    }


def user_summary(user: Dict[str, Any]) -> Dict[str, Any]:
    # Never include the password hash
    return {
        "id": str(user["_id"]),
        "email": user["email"],
        "name": user["fullName"],
        "role": user["role"],
        "studentId": user.get("studentId"),
        "employeeId": user.get("employeeId"),
    }


def create_access_token(data: dict, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = utcnow() + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: Settings) -> Dict[str, Any]:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        raise TokenError()
    if not payload.get("userId") or not payload.get("email"):
        raise TokenError()
    return payload


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings_dep),
) -> Dict[str, Any]:
    if credentials is None:
        raise TokenError("Not authenticated")
    return decode_access_token(credentials.credentials, settings)


def require_roles(*roles: str):
    """Route guard honoured only when AUTH_REQUIRED is on.

    Returns the token claims, or None when the guard is disabled.
    """

    def guard(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        settings: Settings = Depends(get_settings_dep),
    ) -> Optional[Dict[str, Any]]:
        if not settings.auth_required:
            return None
        if credentials is None:
            raise TokenError("Not authenticated")
        claims = decode_access_token(credentials.credentials, settings)
        if roles and claims.get("role") not in roles:
            raise ForbiddenError()
        return claims

    return guard
