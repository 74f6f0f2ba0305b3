"""Shared FastAPI dependencies.

Settings come from ``app.state.settings`` (set by `create_app`) so an app
built with a settings override talks to its own database.
"""

from fastapi import Depends, Request

from expense_assistant.core.config import Settings, get_settings
from expense_assistant.db.dal import Database
from expense_assistant.services.session import SessionProvider
from expense_assistant.services.simulation_utils import BudgetImpactAnalyzer


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_db(settings: Settings = Depends(get_app_settings)) -> Database:
    return Database(settings.db_path)


def get_session_provider(db: Database = Depends(get_db)) -> SessionProvider:
    return SessionProvider(db)


def get_budget_analyzer(db: Database = Depends(get_db)) -> BudgetImpactAnalyzer:
    return BudgetImpactAnalyzer(db)
