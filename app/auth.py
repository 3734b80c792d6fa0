from __future__ import annotations

import logging
from typing import Any, Callable, Coroutine

from fastapi import Request, Response
from fastapi.routing import APIRoute
import jwt
from sqlalchemy.orm import Session

from . import crud, models, security
from .errors import Unauthenticated
from .token import decode_access_token

logger = logging.getLogger(__name__)

TOKEN_FAILED = "Not authorized, token failed."


def authenticate_user(db: Session, email: str, password: str) -> models.User | None:
    """
    Authenticates a user by email and password.

    Returns the user object if authentication is successful, otherwise None.
    An unknown email and a wrong password both return None.
    """
    user = crud.get_user_by_email(db, email)
    if not user or not security.verify_password(password, user.hashed_password):
        return None
    return user


def get_token_from_header(request: Request) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header"""
    authorization = request.headers.get("Authorization")
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not token.strip():
        return None
    return token.strip()


def get_current_user_id(request: Request) -> int:
    """
    Resolve the bearer token to the caller's user id.

    The id is also attached to ``request.state.user_id``. The store is not
    consulted; every owned-resource query filters on this id.
    """
    user_id = getattr(request.state, "user_id", None)
    if user_id is not None:
        return user_id

    token = get_token_from_header(request)
    if not token:
        raise Unauthenticated()

    try:
        payload = decode_access_token(token)
        user_id = int(payload["sub"])
    except (jwt.PyJWTError, KeyError, TypeError, ValueError) as exc:
        logger.warning("Token verification failed: %s", exc)
        raise Unauthenticated(TOKEN_FAILED) from exc

    request.state.user_id = user_id
    return user_id


class AuthenticatedRoute(APIRoute):
    """
    Route that runs the identity gate before FastAPI reads or validates the
    request body, so an unauthenticated call is rejected with 401 even when
    its body is malformed.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()

        async def gated_handler(request: Request) -> Response:
            get_current_user_id(request)
            return await handler(request)

        return gated_handler
