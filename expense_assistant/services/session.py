"""Session resolution from request cookies.

The session token is read from the ``__Secure-`` prefixed cookie first (set
when served over HTTPS), then from the plain cookie. A token resolves to a
Session only while the row exists, has not expired, and its user exists.
"""

from __future__ import annotations
import logging
from datetime import datetime
from typing import Optional

from fastapi import Request

from expense_assistant.db.dal import Database
from expense_assistant.models.constants import (
    SECURE_SESSION_COOKIE_NAME,
    SESSION_COOKIE_NAME,
)
from expense_assistant.models.session import Session, SessionUser
from expense_assistant.services.dates import parse_timestamp, utcnow

logger = logging.getLogger("app.session")


def read_session_token(request: Request) -> Optional[str]:
    for name in (SECURE_SESSION_COOKIE_NAME, SESSION_COOKIE_NAME):
        token = request.cookies.get(name)
        if token:
            return token
    return None


def get_session(
    request: Request, db: Database, now: Optional[datetime] = None
) -> Optional[Session]:
    token = read_session_token(request)
    if token is None:
        return None
    row = db.get_session_with_user(token)
    if row is None:
        logger.debug("unknown session token")
        return None
    expires = parse_timestamp(row["expires"])
    if expires <= (now or utcnow()):
        logger.debug("expired session for user %s", row["user_id"])
        return None
    return Session(
        user=SessionUser(
            id=row["user_id"],
            email=row["email"],
            name=row.get("name"),
            image=row.get("image"),
        ),
        expires=expires,
    )


class SessionProvider:
    """Injectable `auth()`: resolves the current request's session or None."""

    def __init__(self, db: Database):
        self.db = db

    def auth(self, request: Request) -> Optional[Session]:
        return get_session(request, self.db)

