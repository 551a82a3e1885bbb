import logging

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.orm import Session

from .db import get_db
from .exceptions import Unauthorized
from .models import User
from .security import decode_access_token

logger = logging.getLogger("sleep_tracker.deps")

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def get_current_user(
    db: Session = Depends(get_db), token: str = Depends(oauth2_scheme)
) -> User:
    try:
        user_id = decode_access_token(token)
    except JWTError:
        logger.warning("auth failed | reason=invalid_token")
        raise Unauthorized("Invalid token")

    user = db.get(User, int(user_id)) if user_id.isdigit() else None
    if not user:
        logger.warning("auth failed | user_id=%s | reason=user_not_found", user_id)
        raise Unauthorized("User not found")
    return user
