from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import crud
from ..auth import authenticate_user, get_current_user_id
from ..database import get_db
from ..errors import Conflict, InvalidCredentials, NotFound
from ..schemas import LoginIn, LoginOut, RegisteredUserOut, RegisterIn, UserOut
from ..token import create_access_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=RegisteredUserOut, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    if crud.get_user_by_email(db, payload.email):
        raise Conflict()
    try:
        user = crud.create_user(db, payload.email, payload.password, payload.name)
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        raise Conflict()
    return user


@router.post("/login", response_model=LoginOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    user = authenticate_user(db, payload.email, payload.password)
    if not user:
        raise InvalidCredentials()
    logger.info("User id=%s logged in", user.id)
    return {"message": "Login successful.", "token": create_access_token(subject=user.id)}


@router.get("/me", response_model=UserOut)
def me(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    user = crud.get_user(db, user_id)
    if user is None:
        raise NotFound("User not found.")
    return user
