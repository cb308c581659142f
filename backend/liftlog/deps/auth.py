# liftlog/deps/auth.py
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from jose.exceptions import ExpiredSignatureError, JWTError

from liftlog.db import get_db
from liftlog.models import User
from liftlog.repositories.user_repo import UserRepository
from liftlog.security import decode_token

log = logging.getLogger(__name__)

# Bearer token issued by POST /auth/login; also wires the Swagger "Authorize" button
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

def _unauthorized(detail: str = "Not authenticated") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )

def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """The user named by the token's ``sub`` claim, or 401."""
    try:
        claims = decode_token(token)
    except ExpiredSignatureError:
        raise _unauthorized("Token expired")
    except JWTError as e:
        log.debug("rejected token: %s", e)
        raise _unauthorized()

    try:
        user_id = int(claims.get("sub"))
    except (TypeError, ValueError):
        # missing or non-numeric sub
        raise _unauthorized()

    user = UserRepository(db).get(user_id)
    if user is None:
        raise _unauthorized()
    return user
