"""Domain constants shared by models, persistence and routes."""

from typing import Set

BUDGET_PERIODS: Set[str] = {"daily", "weekly", "monthly"}

# Cookie names issued by the session layer (plain and __Secure- prefixed).
SESSION_COOKIE_NAME = "next-auth.session-token"
SECURE_SESSION_COOKIE_NAME = "__Secure-next-auth.session-token"
SESSION_COOKIE_NAMES = (SESSION_COOKIE_NAME, SECURE_SESSION_COOKIE_NAME)

SIMULATED_EXPENSE_DESCRIPTION = "Simulated expense"
TEMP_SIMULATION_ID = "temp"
