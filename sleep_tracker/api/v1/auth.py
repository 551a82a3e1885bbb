import logging

from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sleep_tracker.db import get_db
from sleep_tracker.deps import get_current_user
from sleep_tracker.exceptions import Conflict, Unauthorized
from sleep_tracker.models import User
from sleep_tracker.schemas import RegisterRequest, TokenResponse, UserOut
from sleep_tracker.security import create_access_token, hash_password, verify_password

logger = logging.getLogger("sleep_tracker.api.auth")

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=201, response_model=UserOut)
def register(req: RegisterRequest, db: Session = Depends(get_db)):
    email = req.email.lower()
    exists = db.query(User).filter(User.email == email).one_or_none()
    if exists:
        logger.warning("register failed | email=%s | reason=email_taken", email)
        raise Conflict("Email already registered")

    user = User(email=email, password_hash=hash_password(req.password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # same e-mail committed by a concurrent registration
        db.rollback()
        logger.warning("register failed | email=%s | reason=email_taken", email)
        raise Conflict("Email already registered")
    db.refresh(user)
    logger.info("register success | user_id=%s | email=%s", user.id, user.email)
    return user


@router.post("/login", response_model=TokenResponse)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    email = form_data.username.lower()
    user = db.query(User).filter(User.email == email).one_or_none()
    if not user or not verify_password(form_data.password, user.password_hash):
        logger.warning(
            "login failed | email=%s",
            email,
        )
        raise Unauthorized("Incorrect username or password")
    logger.info(
        "login success | user_id=%s",
        user.id,
    )
    token = create_access_token(str(user.id))
    return TokenResponse(access_token=token)


@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)):
    return user
