from __future__ import annotations
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from .base import CamelModel
from .constants import BUDGET_PERIODS


class Budget(CamelModel):
    id: str
    user_id: str
    category: str
    limit: float = Field(..., ge=0)
    period: str = "monthly"
    start_date: datetime
    end_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("period")
    @classmethod
    def valid_period(cls, v: str) -> str:
        v = v.lower()
        if v not in BUDGET_PERIODS:
            raise ValueError("unsupported budget period")
        return v
