"""Expense Assistant API: session logout and budget-impact simulation."""

__version__ = "0.1.0"
