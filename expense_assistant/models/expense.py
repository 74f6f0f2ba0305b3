from __future__ import annotations
from datetime import datetime

from .base import CamelModel


class Expense(CamelModel):
    id: str
    user_id: str
    amount: float
    description: str = ""
    category: str
    date: datetime
    created_at: datetime
    updated_at: datetime
