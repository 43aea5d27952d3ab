"""Key/value storage for the logged-in user, UI language and per-user preferences"""

import json
import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from intouch.core.config import settings
from intouch.core.i18n import SUPPORTED_LANGUAGES, translate
from intouch.db.models import StorageEntry
from intouch.schemas.settings import (
    SubscriptionPlan,
    SubscriptionPlanId,
    SubscriptionState,
    UserSettings,
)
from intouch.schemas.user import User
from intouch.services.exceptions import ValidationError

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):
    """String keys, JSON-serialisable values"""

    @abstractmethod
    def get_item(self, key: str) -> Optional[Any]:
        ...

    @abstractmethod
    def set_item(self, key: str, value: Any) -> None:
        ...

    @abstractmethod
    def remove_item(self, key: str) -> None:
        ...


class MemoryStorage(KeyValueStorage):
    def __init__(self):
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[Any]:
        raw = self._items.get(key)
        return json.loads(raw) if raw is not None else None

    def set_item(self, key: str, value: Any) -> None:
        self._items[key] = json.dumps(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class DatabaseStorage(KeyValueStorage):
    """Storage backed by the ``storage_entries`` table"""

    def __init__(self, db: Session):
        self.db = db

    def get_item(self, key: str) -> Optional[Any]:
        entry = self.db.query(StorageEntry).filter(StorageEntry.key == key).first()
        if entry is None:
            return None
        try:
            return json.loads(entry.value)
        except ValueError:
            # Unreadable entries are dropped rather than served
            logger.warning(f"Discarding unreadable storage entry {key}")
            self.remove_item(key)
            return None

    def set_item(self, key: str, value: Any) -> None:
        entry = self.db.query(StorageEntry).filter(StorageEntry.key == key).first()
        if entry is None:
            entry = StorageEntry(key=key, value=json.dumps(value))
            self.db.add(entry)
        else:
            entry.value = json.dumps(value)
        self.db.commit()

    def remove_item(self, key: str) -> None:
        self.db.query(StorageEntry).filter(StorageEntry.key == key).delete()
        self.db.commit()


def new_session_id() -> str:
    return uuid.uuid4().hex


class SessionStore:
    """
    One browser session: the current user and the chosen UI language.

    Entries are namespaced by session id so several sessions can share a
    storage backend.
    """

    def __init__(self, storage: KeyValueStorage, session_id: str):
        self.storage = storage
        self.session_id = session_id

    def _key(self, name: str) -> str:
        return f"session:{self.session_id}:{name}"

    def get_current_user(self) -> Optional[User]:
        raw = self.storage.get_item(self._key("user"))
        if raw is None:
            return None
        try:
            return User.model_validate(raw)
        except ValueError:
            logger.warning(f"Corrupt user entry in session {self.session_id}, clearing it")
            self.clear_current_user()
            return None

    def set_current_user(self, user: User) -> None:
        # Never persist the password hash
        data = User.model_validate(user.model_dump(exclude={"password_hash"})).model_dump(mode="json")
        self.storage.set_item(self._key("user"), data)

    def update_current_user(self, updates: Dict[str, Any]) -> Optional[User]:
        """Merge ``updates`` into the stored user; no-op when logged out"""
        user = self.get_current_user()
        if user is None:
            return None
        merged = user.model_copy(update=updates)
        self.set_current_user(merged)
        return merged

    def clear_current_user(self) -> None:
        self.storage.remove_item(self._key("user"))

    def get_language(self) -> Optional[str]:
        language = self.storage.get_item(self._key("language"))
        return language if language in SUPPORTED_LANGUAGES else None

    def set_language(self, language: str) -> None:
        if language not in SUPPORTED_LANGUAGES:
            raise ValidationError(
                f"Unsupported language: {language}",
                error_code="unsupportedLanguage",
                details={"language": language},
            )
        self.storage.set_item(self._key("language"), language)


# (id, name key, price, period key, feature keys, popular)
SUBSCRIPTION_PLANS = (
    (
        SubscriptionPlanId.FREE, "freePlan", 0, "forever",
        ["basicProfileListing", "receiveInquiries", "emailSupport", "basicAnalytics"],
        False,
    ),
    (
        SubscriptionPlanId.PROFESSIONAL, "professionalPlan", 19.99, "perMonth",
        ["priorityListing", "unlimitedInquiries", "advancedAnalytics",
         "customBranding", "prioritySupport", "portfolioGallery"],
        True,
    ),
    (
        SubscriptionPlanId.BUSINESS, "businessPlan", 49.99, "perMonth",
        ["multipleTeamMembers", "advancedReporting", "apiAccess",
         "whiteLabeling", "dedicatedSupport", "customIntegrations"],
        False,
    ),
)


class PreferencesService:
    """Per-user settings and subscription plan, kept in key/value storage"""

    def __init__(self, storage: KeyValueStorage, language: Optional[str] = None):
        self.storage = storage
        self.language = language or settings.DEFAULT_LANGUAGE

    def get_settings(self, user_id: str) -> UserSettings:
        raw = self.storage.get_item(f"settings_{user_id}")
        if raw is None:
            return UserSettings()
        try:
            return UserSettings.model_validate(raw)
        except ValueError:
            logger.warning(f"Stored settings for {user_id} are invalid, using defaults")
            return UserSettings()

    def save_settings(self, user_id: str, user_settings: UserSettings) -> UserSettings:
        self.storage.set_item(f"settings_{user_id}", user_settings.model_dump(mode="json"))
        logger.info(f"Settings saved for user {user_id}")
        return user_settings

    def current_plan(self, user_id: str) -> SubscriptionPlanId:
        raw = self.storage.get_item(f"subscription_{user_id}")
        try:
            return SubscriptionPlanId(raw)
        except ValueError:
            return SubscriptionPlanId.FREE

    def get_subscription(self, user_id: str) -> SubscriptionState:
        current = self.current_plan(user_id)
        plans: List[SubscriptionPlan] = [
            SubscriptionPlan(
                id=plan_id,
                name=translate(name_key, language=self.language),
                price=price,
                period=translate(period_key, language=self.language),
                features=[translate(key, language=self.language) for key in feature_keys],
                popular=popular,
                current=plan_id == current,
            )
            for plan_id, name_key, price, period_key, feature_keys, popular in SUBSCRIPTION_PLANS
        ]
        return SubscriptionState(current_plan=current, plans=plans)

    def change_plan(self, user_id: str, plan: str) -> SubscriptionState:
        try:
            plan_id = SubscriptionPlanId(plan)
        except ValueError:
            raise ValidationError(
                f"Unknown subscription plan: {plan}",
                error_code="unknownSubscriptionPlan",
                details={"plan": plan},
            )

        if plan_id != self.current_plan(user_id):
            self.storage.set_item(f"subscription_{user_id}", plan_id.value)
            logger.info(f"User {user_id} switched to the {plan_id.value} plan")

        return self.get_subscription(user_id)


class SessionContext:
    """Per-request view of the caller's session"""

    def __init__(self, store: Optional[SessionStore], language: str):
        self.store = store
        self.language = language

    @property
    def session_id(self) -> Optional[str]:
        return self.store.session_id if self.store else None

    @property
    def user(self) -> Optional[User]:
        return self.store.get_current_user() if self.store else None
