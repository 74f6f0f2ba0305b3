import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from expense_assistant.core.errors import validation_error_list
from expense_assistant.models.simulation import AnalyzeRequest
from expense_assistant.routers.deps import get_budget_analyzer, get_session_provider
from expense_assistant.services.session import SessionProvider
from expense_assistant.services.simulation_utils import (
    BudgetImpactAnalyzer,
    build_simulated_expenses,
)

router = APIRouter(prefix="/api/simulation", tags=["simulation"])

logger = logging.getLogger("app.simulation")

NO_BUDGETS_MESSAGE = "No active budgets found for the expense categories"


@router.post("/analyze", summary="Analyze budget impact of simulated expenses")
async def analyze(
    request: Request,
    sessions: SessionProvider = Depends(get_session_provider),
    analyzer: BudgetImpactAnalyzer = Depends(get_budget_analyzer),
):
    try:
        # 1. Authenticate
        session = sessions.auth(request)
        if session is None or session.user is None:
            return JSONResponse({"error": "Unauthorized"}, status_code=401)
        user_id = session.user.id

        # 2. Parse & validate body (malformed JSON falls through to the 500 path)
        body = await request.json()
        try:
            payload = AnalyzeRequest.model_validate(body)
        except ValidationError as exc:
            return JSONResponse(
                {"error": validation_error_list(exc)}, status_code=400
            )

        # 3. Transient expenses -> analyzer
        simulated = build_simulated_expenses(payload.expenses)
        budget_status = analyzer.analyze(simulated, user_id)

        if not budget_status:
            return {"budgetStatus": [], "message": NO_BUDGETS_MESSAGE}

        return {
            "budgetStatus": [
                s.model_dump(mode="json", by_alias=True) for s in budget_status
            ]
        }
    except Exception:
        logger.exception("error analyzing budget impact")
        return JSONResponse(
            {"error": "Failed to analyze budget impact"}, status_code=500
        )
