import pytest

from intouch.db.models import StorageEntry, UserRole
from intouch.schemas.settings import SubscriptionPlanId, UserSettings
from intouch.schemas.user import UserInDB
from intouch.services.exceptions import ValidationError
from intouch.services.session_store import (
    DatabaseStorage,
    MemoryStorage,
    PreferencesService,
    SessionStore,
)


@pytest.fixture(params=["memory", "database"])
def storage(request):
    if request.param == "memory":
        return MemoryStorage()
    return DatabaseStorage(request.getfixturevalue("db"))


def make_user(**overrides):
    data = {
        "id": "user_1",
        "email": "petras@example.com",
        "role": UserRole.CUSTOMER,
        "first_name": "Petras",
        "last_name": "Klientas",
        "password_hash": "hash",
    }
    data.update(overrides)
    return UserInDB(**data)


class TestStorage:
    def test_set_get_remove(self, storage):
        assert storage.get_item("missing") is None

        storage.set_item("key", {"a": [1, 2]})
        assert storage.get_item("key") == {"a": [1, 2]}

        storage.set_item("key", "replaced")
        assert storage.get_item("key") == "replaced"

        storage.remove_item("key")
        assert storage.get_item("key") is None

    def test_database_storage_drops_unreadable_entries(self, db):
        db.add(StorageEntry(key="broken", value="{not json"))
        db.commit()

        storage = DatabaseStorage(db)
        assert storage.get_item("broken") is None
        assert db.query(StorageEntry).filter(StorageEntry.key == "broken").first() is None


class TestSessionStore:
    def test_current_user_never_keeps_password_hash(self, storage):
        store = SessionStore(storage, "abc")
        store.set_current_user(make_user())

        raw = storage.get_item("session:abc:user")
        assert "password_hash" not in raw
        assert store.get_current_user().email == "petras@example.com"

    def test_sessions_are_isolated(self, storage):
        SessionStore(storage, "one").set_current_user(make_user())
        assert SessionStore(storage, "two").get_current_user() is None

    def test_update_current_user(self, storage):
        store = SessionStore(storage, "abc")
        assert store.update_current_user({"first_name": "Ona"}) is None

        store.set_current_user(make_user())
        updated = store.update_current_user({"first_name": "Ona"})
        assert updated.display_name == "Ona Klientas"
        assert store.get_current_user().first_name == "Ona"

    def test_clear_current_user(self, storage):
        store = SessionStore(storage, "abc")
        store.set_current_user(make_user())
        store.clear_current_user()
        assert store.get_current_user() is None

    def test_corrupt_user_entry_is_cleared(self, storage):
        storage.set_item("session:abc:user", {"email": "no-role@example.com"})
        store = SessionStore(storage, "abc")
        assert store.get_current_user() is None
        assert storage.get_item("session:abc:user") is None

    def test_language(self, storage):
        store = SessionStore(storage, "abc")
        assert store.get_language() is None

        store.set_language("en")
        assert store.get_language() == "en"

        with pytest.raises(ValidationError) as exc_info:
            store.set_language("fr")
        assert exc_info.value.error_code == "unsupportedLanguage"
        assert store.get_language() == "en"


class TestPreferences:
    def test_default_settings(self, storage):
        settings = PreferencesService(storage).get_settings("user_1")
        assert settings == UserSettings()
        assert settings.working_hours.start == "09:00"

    def test_save_settings(self, storage):
        preferences = PreferencesService(storage)
        preferences.save_settings("user_1", UserSettings(sms_notifications=True, profile_visibility="private"))

        saved = preferences.get_settings("user_1")
        assert saved.sms_notifications is True
        assert saved.profile_visibility == "private"
        assert preferences.get_settings("user_2") == UserSettings()

    def test_invalid_stored_settings_fall_back_to_defaults(self, storage):
        storage.set_item("settings_user_1", {"profile_visibility": "friends"})
        assert PreferencesService(storage).get_settings("user_1") == UserSettings()

    def test_subscription_defaults_to_free(self, storage):
        state = PreferencesService(storage, language="en").get_subscription("user_1")

        assert state.current_plan == SubscriptionPlanId.FREE
        assert [plan.id for plan in state.plans] == [
            SubscriptionPlanId.FREE, SubscriptionPlanId.PROFESSIONAL, SubscriptionPlanId.BUSINESS,
        ]
        assert [plan.price for plan in state.plans] == [0, 19.99, 49.99]
        assert [plan.popular for plan in state.plans] == [False, True, False]
        assert state.plans[0].name == "Free"
        assert state.plans[0].period == "forever"
        assert len(state.plans[1].features) == 6

    def test_change_plan(self, storage):
        preferences = PreferencesService(storage)
        state = preferences.change_plan("user_1", "business")

        assert state.current_plan == SubscriptionPlanId.BUSINESS
        assert [plan.current for plan in state.plans] == [False, False, True]
        assert storage.get_item("subscription_user_1") == "business"

    def test_unknown_plan(self, storage):
        with pytest.raises(ValidationError) as exc_info:
            PreferencesService(storage).change_plan("user_1", "platinum")
        assert exc_info.value.error_code == "unknownSubscriptionPlan"
