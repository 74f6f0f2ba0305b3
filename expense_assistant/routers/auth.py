from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response

from expense_assistant.core.config import Settings
from expense_assistant.models.constants import SESSION_COOKIE_NAMES
from expense_assistant.routers.deps import get_app_settings

router = APIRouter(prefix="/api/auth", tags=["auth"])

EXPIRED = datetime(1970, 1, 1, tzinfo=timezone.utc)


@router.post("/logout", summary="Log out by expiring the session cookies")
async def logout(
    response: Response,
    settings: Settings = Depends(get_app_settings),
):
    # Expire both cookie variants; the client drops them on receipt.
    for name in SESSION_COOKIE_NAMES:
        response.set_cookie(
            name,
            "",
            expires=EXPIRED,
            path="/",
            secure=settings.secure_cookies,
        )
    return {"success": True}
