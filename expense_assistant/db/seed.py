"""Seeding helpers for a local demo account.

`seed_demo_user` ensures a demo user exists with a long-lived session token
and one monthly budget per category in `DEFAULT_BUDGETS`. Existing users are
reused and existing budget categories are left untouched, so this can be
safely re-run.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Mapping, Optional

from expense_assistant.services.dates import utcnow

from .dal import Database
from .migrate import apply_migrations

DEMO_EMAIL = "demo@example.com"
DEFAULT_BUDGETS = {
    "Food": 400.0,
    "Transport": 150.0,
    "Entertainment": 100.0,
}


@dataclass(frozen=True)
class SeedResult:
    user_id: str
    session_token: str


def seed_demo_user(
    db_path: Path,
    email: str = DEMO_EMAIL,
    budgets: Optional[Mapping[str, float]] = None,
    session_days: int = 30,
    now: Optional[datetime] = None,
) -> SeedResult:
    apply_migrations(db_path)  # ensure tables exist
    now = now or utcnow()
    db = Database(db_path)

    user = db.get_user_by_email(email)
    user_id = user["id"] if user else db.create_user(email=email, name="Demo User")

    existing = {
        b["category"]
        for b in db.list_budgets_for_categories(user_id, (budgets or DEFAULT_BUDGETS))
    }
    month_start = datetime(now.year, now.month, 1)
    for category, limit in (budgets or DEFAULT_BUDGETS).items():
        if category in existing:
            continue
        db.create_budget(user_id, category, limit, "monthly", month_start)

    token = db.create_session(user_id, now + timedelta(days=session_days))
    return SeedResult(user_id=user_id, session_token=token)
