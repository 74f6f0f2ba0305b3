import sqlite3
from datetime import datetime, timedelta

import pytest

from expense_assistant.db.dal import Database
from expense_assistant.db.migrate import (
    CURRENT_SCHEMA_VERSION,
    SCHEMA_VERSION_KEY,
    apply_migrations,
)
from expense_assistant.db.seed import DEFAULT_BUDGETS, seed_demo_user


def test_apply_migrations_is_idempotent(tmp_path):
    path = tmp_path / "fresh.sqlite3"

    assert apply_migrations(path) == CURRENT_SCHEMA_VERSION
    assert apply_migrations(path) == CURRENT_SCHEMA_VERSION

    conn = sqlite3.connect(path)
    try:
        row = conn.execute(
            "SELECT value FROM metadata WHERE key = ?", (SCHEMA_VERSION_KEY,)
        ).fetchone()
        tables = {
            r[0]
            for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        }
    finally:
        conn.close()
    assert row[0] == str(CURRENT_SCHEMA_VERSION)
    assert {"users", "sessions", "budgets", "expenses", "metadata"} <= tables


def test_newer_schema_version_is_refused(tmp_path):
    path = tmp_path / "future.sqlite3"
    apply_migrations(path)
    conn = sqlite3.connect(path)
    conn.execute(
        "UPDATE metadata SET value = ? WHERE key = ?",
        (str(CURRENT_SCHEMA_VERSION + 1), SCHEMA_VERSION_KEY),
    )
    conn.commit()
    conn.close()

    with pytest.raises(RuntimeError):
        apply_migrations(path)


def test_session_lookup_joins_user(db: Database, user_id):
    expires = datetime(2030, 1, 1, 12)
    token = db.create_session(user_id, expires)

    row = db.get_session_with_user(token)

    assert row["user_id"] == user_id
    assert row["email"] == "alice@example.com"
    assert row["expires"].startswith("2030-01-01T12:00:00")
    assert db.get_session_with_user("missing") is None


def test_delete_session(db: Database, user_id):
    token = db.create_session(user_id, datetime(2030, 1, 1))

    assert db.delete_session(token) is True
    assert db.delete_session(token) is False
    assert db.get_session_with_user(token) is None


def test_budget_period_is_validated(db: Database, user_id):
    with pytest.raises(ValueError):
        db.create_budget(user_id, "Food", 10, "yearly", datetime(2024, 1, 1))
    with pytest.raises(ValueError):
        db.create_budget(user_id, "Food", -1, "monthly", datetime(2024, 1, 1))


def test_budget_round_trip_normalises_period(db: Database, user_id):
    budget_id = db.create_budget(
        user_id, "Food", 12.5, "Weekly", datetime(2024, 1, 1), datetime(2024, 2, 1)
    )

    row = db.get_budget(budget_id)

    assert row["period"] == "WEEKLY"
    assert row["limit_amount"] == 12.5
    assert row["end_date"].startswith("2024-02-01")


def test_list_expenses_in_period_is_half_open(db: Database, user_id):
    start, end = datetime(2024, 3, 1), datetime(2024, 4, 1)
    db.create_expense(user_id, 1, "Food", start)
    db.create_expense(user_id, 2, "Food", end - timedelta(milliseconds=1))
    db.create_expense(user_id, 3, "Food", end)
    db.create_expense(user_id, 4, "Food", start - timedelta(days=1))

    rows = db.list_expenses_in_period(user_id, "Food", start, end)

    assert [r["amount"] for r in rows] == [1.0, 2.0]


def test_seed_demo_user_is_rerunnable(tmp_path):
    path = tmp_path / "seed.sqlite3"
    now = datetime(2024, 5, 15)

    first = seed_demo_user(path, now=now)
    second = seed_demo_user(path, now=now)

    assert first.user_id == second.user_id
    assert first.session_token != second.session_token
    db = Database(path)
    budgets = db.list_budgets_for_categories(first.user_id, DEFAULT_BUDGETS)
    assert sorted(b["category"] for b in budgets) == sorted(DEFAULT_BUDGETS)
    assert db.get_session_with_user(first.session_token)["user_id"] == first.user_id
