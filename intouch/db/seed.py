"""Demo roster loaded on startup when SEED_DEMO_DATA is enabled"""

import logging
from typing import Any, Dict, List

from intouch.core.security import get_password_hash
from intouch.db.models import SpecialistType, UserRole
from intouch.db.repository import MarketplaceRepository
from intouch.schemas.specialist import SpecialistProfileCreate

logger = logging.getLogger(__name__)

DEMO_CUSTOMER = {
    "id": "user_1",
    "email": "customer@intouch.lt",
    "role": UserRole.CUSTOMER,
    "first_name": "Petras",
    "last_name": "Klientauskas",
}

# Each entry: owner fields, listing fields, then rate / experience
DEMO_SPECIALISTS: List[Dict[str, Any]] = [
    {
        "user": {"id": "user_2", "email": "individual@intouch.lt", "first_name": "Gintarė", "last_name": "Urbonaitė"},
        "type": SpecialistType.INDIVIDUAL,
        "profession": "Grafikos dizainerė",
        "categories": ["Reklama, leidyba"],
        "locations": ["Klaipėda"],
        "services": ["Grafikos dizainas", "Logo kūrimas"],
        "phone": "+37060045678",
        "description": "Kūrybinga grafikos dizainerė su 10 metų patirtimi.",
        "hourly_rate": 35,
        "experience": 10,
    },
    {
        "user": {"id": "user_3", "email": "business@intouch.lt", "company_name": "Petraičio Santechnika MB", "company_code": "305123456"},
        "type": SpecialistType.BUSINESS,
        "profession": "Santechnikas",
        "categories": ["Statyba, remontas, medžiagos, NT"],
        "locations": ["Vilnius"],
        "services": ["Santechnikos darbai", "Namų remontas"],
        "phone": "+37060012345",
        "description": "Profesionalus santechnikas su 8 metų patirtimi.",
        "hourly_rate": 25,
        "experience": 8,
    },
    {
        "user": {"id": "user_4", "email": "programmer@intouch.lt", "first_name": "Tomas", "last_name": "Programauskas"},
        "type": SpecialistType.INDIVIDUAL,
        "profession": "Programuotojas",
        "categories": ["Kompiuteriai, IT technologijos"],
        "locations": ["Vilnius", "Kaunas"],
        "services": ["Interneto svetainių kūrimas, tvarkymas", "Programinės įrangos kūrimas"],
        "phone": "+37060098765",
        "description": "Full-stack programuotojas specializuojantis web aplikacijose.",
        "hourly_rate": 45,
        "experience": 6,
    },
    {
        "user": {"id": "user_5", "email": "itcompany@intouch.lt", "company_name": "TechSolutions UAB", "company_code": "305987654"},
        "type": SpecialistType.BUSINESS,
        "profession": "IT konsultantas",
        "categories": ["Kompiuteriai, IT technologijos"],
        "locations": ["Vilnius"],
        "services": ["Kompiuterių remontas, IT paslaugos", "Programinės įrangos kūrimas"],
        "phone": "+37060087654",
        "description": "IT konsultacijų įmonė su 15 metų patirtimi rinkoje.",
        "hourly_rate": 60,
        "experience": 15,
    },
    {
        "user": {"id": "user_6", "email": "photographer@intouch.lt", "first_name": "Laura", "last_name": "Fotografė"},
        "type": SpecialistType.INDIVIDUAL,
        "profession": "Fotografė",
        "categories": ["Reklama, leidyba"],
        "locations": ["Kaunas"],
        "services": ["Fotografijos paslaugos", "Video gamyba"],
        "phone": "+37060076543",
        "description": "Profesionali fotografė specializuojantis vestuvių fotografijoje.",
        "hourly_rate": 40,
        "experience": 8,
    },
    {
        "user": {"id": "user_7", "email": "accountant@intouch.lt", "first_name": "Rasa", "last_name": "Skaičiuotoja"},
        "type": SpecialistType.INDIVIDUAL,
        "profession": "Buhalterė",
        "categories": ["Finansai, teisė, draudimas"],
        "locations": ["Šiauliai"],
        "services": ["Buhalterinė apskaita", "Apskaita"],
        "phone": "+37060065432",
        "description": "Patyrusi buhalterė su CPA sertifikatu.",
        "hourly_rate": 30,
        "experience": 12,
    },
    {
        "user": {"id": "user_8", "email": "cleaning@intouch.lt", "company_name": "Švarūs Namai MB", "company_code": "305456789"},
        "type": SpecialistType.BUSINESS,
        "profession": "Valymo paslaugos",
        "categories": ["Paslaugos"],
        "locations": ["Vilnius", "Kaunas"],
        "services": ["Valymo paslaugos"],
        "phone": "+37060054321",
        "description": "Profesionalios valymo paslaugos namams ir biurams.",
        "hourly_rate": 20,
        "experience": 5,
    },
    {
        "user": {"id": "user_9", "email": "teacher@intouch.lt", "first_name": "Ingrida", "last_name": "Mokytoja"},
        "type": SpecialistType.INDIVIDUAL,
        "profession": "Anglų kalbos mokytoja",
        "categories": ["Švietimas, ugdymas, kultūra"],
        "locations": ["Klaipėda"],
        "services": ["Kalbų kursai", "Korepetitorių paslaugos"],
        "phone": "+37060043210",
        "description": "Anglų kalbos mokytoja su tarptautiniu sertifikatu.",
        "hourly_rate": 25,
        "experience": 7,
    },
    {
        "user": {"id": "user_10", "email": "massage@intouch.lt", "first_name": "Vida", "last_name": "Masažuotoja"},
        "type": SpecialistType.INDIVIDUAL,
        "profession": "Masažuotoja",
        "categories": ["Medicina, sveikata, farmacija", "Laisvalaikis, pramogos, turizmas"],
        "locations": ["Panevėžys"],
        "services": ["Sveikatingumo, SPA centrai", "Sanatorijos, reabilitacijos centrai"],
        "phone": "+37060032109",
        "description": "Licencijuota masažuotoja specializuojantis terapiniame masaže.",
        "hourly_rate": 35,
        "experience": 9,
    },
    {
        "user": {"id": "user_11", "email": "restaurant@intouch.lt", "company_name": "Skanus Maistas UAB", "company_code": "305123789"},
        "type": SpecialistType.BUSINESS,
        "profession": "Restorano paslaugos",
        "categories": ["Laisvalaikis, pramogos, turizmas", "Maisto produktai, gėrimai, prekyba"],
        "locations": ["Vilnius"],
        "services": ["Kavinės, klubai, barai, restoranai", "Renginių organizavimas"],
        "phone": "+37060021098",
        "description": "Aukštos kokybės maitinimo paslaugos renginiams.",
        "hourly_rate": 50,
        "experience": 10,
    },
    {
        "user": {"id": "user_12", "email": "lawyer@intouch.lt", "first_name": "Mindaugas", "last_name": "Teisininkas"},
        "type": SpecialistType.INDIVIDUAL,
        "profession": "Teisės konsultantas",
        "categories": ["Finansai, teisė, draudimas"],
        "locations": ["Alytus"],
        "services": ["Teisinės paslaugos", "Konsultacijų paslaugos"],
        "phone": "+37060010987",
        "description": "Teisės konsultantas specializuojantis verslo teisėje.",
        "hourly_rate": 55,
        "experience": 14,
    },
    {
        "user": {"id": "user_13", "email": "trainer@intouch.lt", "first_name": "Eglė", "last_name": "Trenerė"},
        "type": SpecialistType.INDIVIDUAL,
        "profession": "Fitnes trenerė",
        "categories": ["Laisvalaikis, pramogos, turizmas"],
        "locations": [],  # Trains online, all of Lithuania
        "services": ["Sporto paslaugos, sporto klubai"],
        "phone": "+37060009876",
        "description": "Sertifikuota fitnes trenerė su sporto mokslo išsilavinimu.",
        "hourly_rate": 30,
        "experience": 5,
    },
]


def seed_demo_data(repo: MarketplaceRepository, password: str) -> int:
    """
    Load the demo customer and specialists.

    Does nothing when the demo customer already exists. Returns the number of
    specialists created.
    """
    if repo.find_by_email(DEMO_CUSTOMER["email"]):
        logger.info("Demo data already present, skipping seed")
        return 0

    password_hash = get_password_hash(password)
    repo.create({**DEMO_CUSTOMER, "password_hash": password_hash})

    for entry in DEMO_SPECIALISTS:
        entry = dict(entry)
        owner = entry.pop("user")
        rate = entry.pop("hourly_rate")
        experience = entry.pop("experience")
        role = (
            UserRole.BUSINESS_SPECIALIST
            if entry["type"] == SpecialistType.BUSINESS
            else UserRole.INDIVIDUAL_SPECIALIST
        )

        user = repo.create({**owner, "role": role, "password_hash": password_hash})
        repo.create_profile(SpecialistProfileCreate(user_id=user.id, **entry))
        repo.update_profile(user.id, {"hourly_rate": rate, "experience": experience, "verified": True})

    logger.info(f"Seeded {len(DEMO_SPECIALISTS)} demo specialists")
    return len(DEMO_SPECIALISTS)
