# staynest/deps.py
from __future__ import annotations

import logging
from typing import Callable

from fastapi import Depends, HTTPException, status
from jose import JWTError, jwt
from pydantic import ValidationError
from sqlalchemy.orm import Session

from .config import settings
from .db import get_db
from .models.user import User
from .schemas.auth import TokenPayload
from .security import oauth2_scheme

log = logging.getLogger(__name__)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    """Resolve the bearer token to an active user; suspended accounts are treated as logged out."""
    try:
        claims = TokenPayload(**jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG]))
    except (JWTError, ValidationError):
        raise _unauthorized()

    user = db.get(User, claims.sub)
    if user is None or not user.is_active:
        log.debug("Rejected token for %s", claims.sub)
        raise _unauthorized()
    return user


def require_roles(*roles: str) -> Callable[..., User]:
    def _check(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return current_user

    return _check


require_head = require_roles("head")
require_guest = require_roles("guest")
