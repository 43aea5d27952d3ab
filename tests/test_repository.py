import pytest

from conftest import create_specialist
from intouch.db.models import SpecialistType, UserRole
from intouch.db.repository import InMemoryMarketplaceRepository
from intouch.db.seed import DEMO_SPECIALISTS, seed_demo_data
from intouch.schemas.specialist import SpecialistProfileCreate


@pytest.fixture(params=["memory", "sql"])
def any_repo(request):
    if request.param == "memory":
        return InMemoryMarketplaceRepository()
    return request.getfixturevalue("repo")


class TestUsers:
    def test_find_by_email_is_case_insensitive(self, any_repo):
        user = any_repo.create({"email": "Petras@Example.com", "password_hash": "x", "role": UserRole.CUSTOMER})

        found = any_repo.find_by_email("petras@example.com")
        assert found is not None
        assert found.id == user.id
        assert any_repo.find_by_email("kitas@example.com") is None

    def test_update_user(self, any_repo):
        user = any_repo.create({"email": "a@example.com", "password_hash": "x", "role": UserRole.CUSTOMER})

        updated = any_repo.update_user(user.id, {"first_name": "Ona"})

        assert updated.first_name == "Ona"
        assert any_repo.get_user(user.id).first_name == "Ona"
        assert any_repo.update_user("user_missing", {"first_name": "Ona"}) is None


class TestProfiles:
    def test_new_profile_gets_defaults(self, any_repo):
        user = any_repo.create({
            "email": "jonas@example.com", "password_hash": "x", "role": UserRole.INDIVIDUAL_SPECIALIST,
        })
        profile = any_repo.create_profile(SpecialistProfileCreate(user_id=user.id, type=SpecialistType.INDIVIDUAL))

        assert profile.hourly_rate == 25
        assert profile.experience == 1
        assert profile.verified is False
        assert profile.locations == []

    def test_update_profile_keeps_identity_fields(self, any_repo):
        user = any_repo.create({
            "email": "jonas@example.com", "password_hash": "x", "role": UserRole.INDIVIDUAL_SPECIALIST,
        })
        any_repo.create_profile(SpecialistProfileCreate(user_id=user.id, type=SpecialistType.INDIVIDUAL))

        updated = any_repo.update_profile(user.id, {
            "profession": "Santechnikas", "type": SpecialistType.BUSINESS, "user_id": "user_other",
        })

        assert updated.profession == "Santechnikas"
        assert updated.type == SpecialistType.INDIVIDUAL
        assert updated.user_id == user.id
        assert any_repo.update_profile("user_missing", {"profession": "x"}) is None

    def test_get_all_joins_owner_in_creation_order(self, repo):
        create_specialist(repo, "b@example.com", first_name="Benas", last_name="Antras")
        create_specialist(repo, "a@example.com", type=SpecialistType.BUSINESS, company_name="UAB Pirmas")

        roster = repo.get_all()

        assert [s.email for s in roster] == ["b@example.com", "a@example.com"]
        assert [s.display_name for s in roster] == ["Benas Antras", "UAB Pirmas"]
        assert roster[1].company_code == "300000000"


class TestSeed:
    def test_seed_loads_demo_roster_once(self, repo):
        created = seed_demo_data(repo, "password123")

        assert created == len(DEMO_SPECIALISTS) == 12
        assert repo.find_by_email("customer@intouch.lt").role == UserRole.CUSTOMER

        roster = repo.get_all()
        assert len(roster) == 12
        assert all(s.verified for s in roster)
        trainer = next(s for s in roster if s.email == "trainer@intouch.lt")
        assert trainer.serves_all_cities is True

        assert seed_demo_data(repo, "password123") == 0
        assert len(repo.get_all()) == 12

    def test_seed_into_memory_repository(self):
        repo = InMemoryMarketplaceRepository()
        seed_demo_data(repo, "password123")

        plumber = next(s for s in repo.get_all() if s.email == "business@intouch.lt")
        assert plumber.type == SpecialistType.BUSINESS
        assert plumber.display_name == "Petraičio Santechnika MB"
        assert plumber.hourly_rate == DEMO_SPECIALISTS[1]["hourly_rate"]
