from __future__ import annotations
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SessionUser(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    image: Optional[str] = None


class Session(BaseModel):
    """Authenticated session resolved from the session cookie."""

    user: SessionUser
    expires: datetime
