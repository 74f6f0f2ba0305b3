"""Data Access Layer utilities.

Responsibilities
----------------
- Provide CRUD helpers for users and their session tokens.
- Store per-category budgets and recorded expenses scoped to a user.
- Offer the range queries the budget-impact analyzer needs (budgets by
  category set, expenses inside a budget period).

Rows are returned as plain dicts; conversion to pydantic models happens in
the service layer.
"""

from __future__ import annotations

from pathlib import Path
import sqlite3
import uuid
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from expense_assistant.models.constants import BUDGET_PERIODS
from expense_assistant.services.dates import to_iso

UTC_NOW_SQL = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"


def _new_id() -> str:
    return uuid.uuid4().hex


class Database:
    def __init__(self, db_path: Path):
        self.db_path = db_path

    # ------------------------------------------------------------------
    # Connection helpers
    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys=ON")
        return conn

    def ping(self) -> None:
        """Run a trivial query; raises sqlite3.Error when the DB is unusable."""
        conn = self._connect()
        try:
            conn.execute("SELECT 1").fetchone()
        finally:
            conn.close()

    # ------------------------------------------------------------------
    # Users
    def create_user(
        self,
        email: str,
        name: Optional[str] = None,
        image: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> str:
        uid = user_id or _new_id()
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                f"""
                INSERT INTO users (id, email, name, image, created_at, updated_at)
                VALUES (?, ?, ?, ?, ({UTC_NOW_SQL}), ({UTC_NOW_SQL}))
                """,
                (uid, email, name, image),
            )
            conn.commit()
        return uid

    def get_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT * FROM users WHERE email = ?", (email,))
            row = cur.fetchone()
            return dict(row) if row else None

    # ------------------------------------------------------------------
    # Sessions
    def create_session(
        self, user_id: str, expires: datetime, session_token: Optional[str] = None
    ) -> str:
        token = session_token or uuid.uuid4().hex + uuid.uuid4().hex
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                "INSERT INTO sessions (session_token, user_id, expires) VALUES (?, ?, ?)",
                (token, user_id, to_iso(expires)),
            )
            conn.commit()
        return token

    def get_session_with_user(self, session_token: str) -> Optional[Dict[str, Any]]:
        """Return session joined with its user, or None when either is missing."""
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                SELECT s.session_token, s.expires, u.id AS user_id,
                       u.email, u.name, u.image
                FROM sessions s
                JOIN users u ON u.id = s.user_id
                WHERE s.session_token = ?
                """,
                (session_token,),
            )
            row = cur.fetchone()
            return dict(row) if row else None

    def delete_session(self, session_token: str) -> bool:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                "DELETE FROM sessions WHERE session_token = ?", (session_token,)
            )
            conn.commit()
            return cur.rowcount > 0

    # ------------------------------------------------------------------
    # Budgets
    def create_budget(
        self,
        user_id: str,
        category: str,
        limit: float,
        period: str,
        start_date: datetime,
        end_date: Optional[datetime] = None,
    ) -> str:
        period = period.lower()
        if period not in BUDGET_PERIODS:
            raise ValueError(f"Unsupported budget period '{period}'")
        if limit < 0:
            raise ValueError("Budget limit cannot be negative")
        budget_id = _new_id()
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                f"""
                INSERT INTO budgets (
                    id, user_id, category, limit_amount, period, start_date, end_date,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ({UTC_NOW_SQL}), ({UTC_NOW_SQL}))
                """,
                (
                    budget_id,
                    user_id,
                    category,
                    float(limit),
                    period.upper(),
                    to_iso(start_date),
                    to_iso(end_date) if end_date else None,
                ),
            )
            conn.commit()
        return budget_id

    def get_budget(self, budget_id: str) -> Optional[Dict[str, Any]]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT * FROM budgets WHERE id = ?", (budget_id,))
            row = cur.fetchone()
            return dict(row) if row else None

    def list_budgets_for_categories(
        self, user_id: str, categories: Iterable[str]
    ) -> List[Dict[str, Any]]:
        cats = list(dict.fromkeys(categories))
        if not cats:
            return []
        placeholders = ", ".join("?" for _ in cats)
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                f"""
                SELECT * FROM budgets
                WHERE user_id = ? AND category IN ({placeholders})
                ORDER BY category ASC, created_at ASC, id ASC
                """,
                [user_id, *cats],
            )
            return [dict(r) for r in cur.fetchall()]

    # ------------------------------------------------------------------
    # Expenses
    def create_expense(
        self,
        user_id: str,
        amount: float,
        category: str,
        date: datetime,
        description: str = "",
    ) -> str:
        expense_id = _new_id()
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                f"""
                INSERT INTO expenses (
                    id, user_id, amount, description, category, date, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ({UTC_NOW_SQL}), ({UTC_NOW_SQL}))
                """,
                (
                    expense_id,
                    user_id,
                    float(amount),
                    description,
                    category,
                    to_iso(date),
                ),
            )
            conn.commit()
        return expense_id

    def list_expenses_in_period(
        self,
        user_id: str,
        category: str,
        start: datetime,
        end: datetime,
    ) -> List[Dict[str, Any]]:
        """Expenses in ``category`` with ``start <= date < end``, oldest first."""
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                SELECT * FROM expenses
                WHERE user_id = ? AND category = ? AND date >= ? AND date < ?
                ORDER BY date ASC, id ASC
                """,
                (user_id, category, to_iso(start), to_iso(end)),
            )
            return [dict(r) for r in cur.fetchall()]
