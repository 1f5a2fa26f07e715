# staynest/security.py
from __future__ import annotations
import datetime as dt
from typing import Any, Dict, Optional
from jose import jwt
from passlib.context import CryptContext
from fastapi.security import OAuth2PasswordBearer
from .config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
# Swagger's "Authorize" button posts form data; the app logs in with JSON at the same path.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(claims: Dict[str, Any], lifetime: Optional[dt.timedelta] = None) -> str:
    now = dt.datetime.now(dt.timezone.utc)
    lifetime = lifetime or dt.timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    body = {**claims, "iat": now, "exp": now + lifetime}
    return jwt.encode(body, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def issue_token(user_id: str, role: str) -> str:
    """Bearer token for a resident or head; ``sub`` is the user id."""
    return create_access_token({"sub": user_id, "role": role})
