"""User settings routes.

Endpoints:
    GET /api/settings   Currency and tax settings (defaults if none saved)
    PUT /api/settings   Save settings
"""

from fastapi import APIRouter, Depends

from erpdash.dependencies import get_settings_repository
from erpdash.middleware.exceptions import ERPException
from erpdash.schemas.settings import UserSettingsOut, UserSettingsUpdate
from erpdash.services.user_settings import SettingsRepository

router = APIRouter()


@router.get("", response_model=UserSettingsOut)
async def get_settings(repo: SettingsRepository = Depends(get_settings_repository)):
    return await repo.get()


@router.put("", response_model=UserSettingsOut)
async def save_settings(
    body: UserSettingsUpdate,
    repo: SettingsRepository = Depends(get_settings_repository),
):
    outcome = await repo.save(body)
    if not outcome.ok:
        raise ERPException.from_outcome(outcome)
    return outcome.value
