from typing import Any

from fastapi import APIRouter, Depends

from intouch.api.deps import get_current_user, get_session_context, get_storage
from intouch.schemas.settings import (
    LanguageChange,
    LanguageState,
    SubscriptionChange,
    SubscriptionState,
    UserSettings,
)
from intouch.schemas.user import User
from intouch.services.session_store import KeyValueStorage, PreferencesService, SessionContext

router = APIRouter()


def get_preferences(
    storage: KeyValueStorage = Depends(get_storage),
    context: SessionContext = Depends(get_session_context),
) -> PreferencesService:
    return PreferencesService(storage, language=context.language)


@router.get("", response_model=UserSettings)
def read_settings(
    preferences: PreferencesService = Depends(get_preferences),
    current_user: User = Depends(get_current_user),
) -> Any:
    return preferences.get_settings(current_user.id)


@router.put("", response_model=UserSettings)
def update_settings(
    data: UserSettings,
    preferences: PreferencesService = Depends(get_preferences),
    current_user: User = Depends(get_current_user),
) -> Any:
    return preferences.save_settings(current_user.id, data)


@router.get("/subscription", response_model=SubscriptionState)
def read_subscription(
    preferences: PreferencesService = Depends(get_preferences),
    current_user: User = Depends(get_current_user),
) -> Any:
    return preferences.get_subscription(current_user.id)


@router.put("/subscription", response_model=SubscriptionState)
def change_subscription(
    data: SubscriptionChange,
    preferences: PreferencesService = Depends(get_preferences),
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Switch plans. No payment is taken.
    """
    return preferences.change_plan(current_user.id, data.plan)


@router.put("/language", response_model=LanguageState)
def change_language(
    data: LanguageChange,
    context: SessionContext = Depends(get_session_context),
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Remember the UI language for this session.
    """
    context.store.set_language(data.language)
    return {"language": data.language}
