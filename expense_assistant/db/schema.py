"""Database schema DDL definitions and initialization utilities.

Tables:
  - users: account records referenced by sessions, budgets and expenses
  - sessions: session tokens issued to users (cookie value -> user, expiry)
  - budgets: per-category spending limits with a recurring period
  - expenses: recorded (non-simulated) expense records
  - metadata: key/value store (schema version etc.)
"""

from __future__ import annotations
import sqlite3
from typing import Sequence
from pathlib import Path

BASIC_UTC_NOW = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"

USERS_DDL = f"""
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    email TEXT NOT NULL UNIQUE,
    name TEXT,
    image TEXT,
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW}),
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

SESSIONS_DDL = """
CREATE TABLE IF NOT EXISTS sessions (
    session_token TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    expires TEXT NOT NULL, -- ISO timestamp (UTC)
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
);
"""

BUDGETS_DDL = f"""
CREATE TABLE IF NOT EXISTS budgets (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    category TEXT NOT NULL,
    limit_amount REAL NOT NULL,
    period TEXT NOT NULL DEFAULT 'MONTHLY' CHECK (period IN ('DAILY','WEEKLY','MONTHLY')),
    start_date TEXT NOT NULL, -- ISO timestamp
    end_date TEXT,
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW}),
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW}),
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
);
"""

EXPENSES_DDL = f"""
CREATE TABLE IF NOT EXISTS expenses (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    amount REAL NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    category TEXT NOT NULL,
    date TEXT NOT NULL, -- ISO timestamp
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW}),
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW}),
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
);
"""

METADATA_DDL = f"""
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

SESSIONS_USER_INDEX_DDL = (
    "CREATE INDEX IF NOT EXISTS idx_sessions_user ON sessions(user_id);"
)
BUDGETS_USER_CATEGORY_INDEX_DDL = (
    "CREATE INDEX IF NOT EXISTS idx_budgets_user_category ON budgets(user_id, category);"
)
EXPENSES_USER_CATEGORY_DATE_INDEX_DDL = (
    "CREATE INDEX IF NOT EXISTS idx_expenses_user_category_date "
    "ON expenses(user_id, category, date);"
)

DDL_ORDER: Sequence[str] = (
    USERS_DDL,
    SESSIONS_DDL,
    BUDGETS_DDL,
    EXPENSES_DDL,
    METADATA_DDL,
)

INDEX_DDL: Sequence[str] = (
    SESSIONS_USER_INDEX_DDL,
    BUDGETS_USER_CATEGORY_INDEX_DDL,
    EXPENSES_USER_CATEGORY_DATE_INDEX_DDL,
)


def init_db(path: Path) -> None:
    """Create all tables idempotently.

    Parameters
    ----------
    path: Path to SQLite database file.
    """
    conn = sqlite3.connect(path)
    try:
        cur = conn.cursor()
        for ddl in DDL_ORDER:
            cur.execute(ddl)
        for ddl in INDEX_DDL:
            cur.execute(ddl)
        conn.commit()
    finally:
        conn.close()
