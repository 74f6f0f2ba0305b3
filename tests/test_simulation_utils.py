from datetime import datetime

import pytest

from expense_assistant.models.simulation import AnalyzeRequest, SimulatedExpense
from expense_assistant.services.simulation_utils import (
    BudgetImpactAnalyzer,
    analyze_budget_impact,
    build_simulated_expenses,
)

NOW = datetime(2024, 5, 15, 12)


def simulated(amount, category, when, description="Simulated expense", index=0):
    return SimulatedExpense(
        id=f"temp-{index}",
        simulation_id="temp",
        amount=amount,
        description=description,
        category=category,
        date=when,
    )


def test_build_simulated_expenses_assigns_ids_and_defaults():
    payload = AnalyzeRequest.model_validate(
        {
            "expenses": [
                {"amount": "7.25", "category": "Food", "date": "2024-05-01"},
                {"amount": 3, "description": "", "category": "Fun", "date": "2024-05-02"},
                {"amount": 4, "description": "Cinema", "category": "Fun", "date": "2024-05-03"},
            ]
        }
    )

    result = build_simulated_expenses(payload.expenses)

    assert [e.id for e in result] == ["temp-0", "temp-1", "temp-2"]
    assert result[0].amount == 7.25
    assert result[0].date == datetime(2024, 5, 1)
    assert [e.description for e in result] == [
        "Simulated expense",
        "Simulated expense",
        "Cinema",
    ]


def test_no_budgets_returns_empty_list(db, user_id):
    result = analyze_budget_impact(
        db, [simulated(10, "Food", NOW)], user_id, now=NOW
    )

    assert result == []


def test_each_matching_budget_gets_a_status(db, user_id):
    db.create_budget(user_id, "Food", 300, "monthly", datetime(2024, 1, 1))
    db.create_budget(user_id, "Transport", 20, "weekly", datetime(2024, 5, 6))
    db.create_budget(user_id, "Rent", 1000, "monthly", datetime(2024, 1, 1))

    result = analyze_budget_impact(
        db,
        [
            simulated(40, "Food", datetime(2024, 5, 20), index=0),
            simulated(25, "Transport", datetime(2024, 5, 14), index=1),
            simulated(5, "Transport", datetime(2024, 5, 30), index=2),
        ],
        user_id,
        now=NOW,
    )

    assert [s.budget.category for s in result] == ["Food", "Transport"]
    food, transport = result
    assert food.spent == 40.0
    assert food.period_start == datetime(2024, 5, 1)
    assert food.period_end == datetime(2024, 6, 1)
    # only the simulated expense inside the current week counts
    assert transport.period_start == datetime(2024, 5, 13)
    assert transport.period_end == datetime(2024, 5, 20)
    assert transport.spent == 25.0
    assert transport.is_over_budget is True
    assert transport.expenses[0].id == "sim-0"
    assert transport.expenses[0].description == "Simulated: Simulated expense"


def test_recorded_expenses_in_period_are_combined(db, user_id):
    db.create_budget(user_id, "Food", 100, "monthly", datetime(2024, 1, 1))
    db.create_expense(user_id, 30, "Food", datetime(2024, 5, 2), description="Market")
    db.create_expense(user_id, 60, "Food", datetime(2024, 4, 30), description="April")
    db.create_expense(user_id, 15, "Rent", datetime(2024, 5, 3))

    (status,) = analyze_budget_impact(
        db, [simulated(20.5, "Food", datetime(2024, 5, 10), description="Lunch")], user_id, now=NOW
    )

    assert status.spent == 50.5
    assert status.remaining == 49.5
    assert status.percentage == pytest.approx(50.5)
    assert [e.description for e in status.expenses] == ["Market", "Simulated: Lunch"]


def test_other_users_data_is_not_counted(db, user_id):
    other = db.create_user(email="other@example.com")
    db.create_budget(user_id, "Food", 100, "monthly", datetime(2024, 1, 1))
    db.create_expense(other, 70, "Food", datetime(2024, 5, 2))

    (status,) = analyze_budget_impact(
        db, [simulated(10, "Food", NOW)], user_id, now=NOW
    )

    assert status.spent == 10.0


def test_analyzer_wrapper_uses_bound_database(db, user_id):
    db.create_budget(user_id, "Food", 100, "monthly", datetime(2000, 1, 1))

    result = BudgetImpactAnalyzer(db).analyze(
        [simulated(1, "Food", datetime(1999, 1, 1))], user_id
    )

    assert len(result) == 1
    assert result[0].spent == 0.0
