"""Service taxonomy: categories, their services and the served cities"""

import enum
from typing import Dict, List, Mapping, Tuple


class ServiceCategory(str, enum.Enum):
    TRANSPORT = "Automobiliai, transportas"
    ENERGY = "Energetika, žaliavos, kuras"
    FINANCE = "Finansai, teisė, draudimas"
    IT = "Kompiuteriai, IT technologijos"
    LEISURE = "Laisvalaikis, pramogos, turizmas"
    FOOD = "Maisto produktai, gėrimai, prekyba"
    HEALTH = "Medicina, sveikata, farmacija"
    SERVICES = "Paslaugos"
    INDUSTRY = "Pramonė, gamyba, įranga"
    TRADE = "Prekės, prekyba"
    ADVERTISING = "Reklama, leidyba"
    CONSTRUCTION = "Statyba, remontas, medžiagos, NT"
    EDUCATION = "Švietimas, ugdymas, kultūra"
    PUBLIC = "Valstybinės įstaigos, organizacijos"
    AGRICULTURE = "Žemės ūkis, agrotechnika"


CITIES: Tuple[str, ...] = (
    "Vilnius",
    "Kaunas",
    "Klaipėda",
    "Šiauliai",
    "Panevėžys",
    "Alytus",
    "Marijampolė",
    "Mažeikiai",
    "Jonava",
    "Utena",
)


_RAW_SERVICE_CATALOG: Dict[str, List[str]] = {
    "Automobiliai, transportas": [
        "Akumuliatoriai",
        "Autobusų, mikroautobusų nuoma",
        "Autokosmetika",
        "Automobilių dalys",
        "Automobilių garso ir apsaugos sistemos",
        "Automobilių nuoma",
        "Automobilių parkavimas",
        "Automobilių pervežimas",
        "Automobilių plovyklos",
        "Automobilių prekyba",
        "Automobilių remontas",
        "Automobilių stiklai",
        "Automobilių šaldymo įranga",
        "Automobilių techninė apžiūra",
        "Autosavartynas, naudotos dalys",
        "Autoservisai",
        "Autoservisų, plovyklų, degalinių įranga",
        "Dviračiai",
        "Dviračiai, paspirtukai",
        "Ekspedijavimas",
        "Geležinkelių transportas",
        "Logistikos paslaugos",
        "Motociklai",
        "Oro transportas, aviacija",
        "Padangos, ratlankiai",
        "Pagalba kelyje",
        "Sunkvežimių pardavimas, dalys, remontas",
        "Tepalai, alyvos",
        "Transporto paslaugos",
        "Vandens transportas",
    ],
    "Energetika, žaliavos, kuras": [
        "Antrines žaliavos",
        "Atliekų tvarkymas",
        "Energetika",
        "Gamtos apsauga",
        "Kuras šildymui, malkos, briketai",
        "Kuras, naftos produktai, degalai",
        "Metalų pardavimas, supirkimas",
        "Naudingosios iškasenos",
    ],
    "Finansai, teisė, draudimas": [
        "Antstoliai",
        "Apskaita",
        "Auditas",
        "Bankai, bankinės operacijos",
        "Buhalterinė apskaita",
        "Draudimas",
        "Finansai",
        "Greitieji kreditai, paskolos",
        "Investicinė veikla",
        "Konsultacijų paslaugos",
        "Notarų biurai",
        "Skolų išieškojimas",
        "Tarpininkavimas",
        "Teisinės paslaugos",
        "Teisėtvarka",
        "Turto vertinimas",
    ],
    "Kompiuteriai, IT technologijos": [
        "Interneto paslaugos",
        "Interneto svetainių kūrimas, tvarkymas",
        "Kompiuteriai ir programinė įranga",
        "Kompiuterių remontas, IT paslaugos",
        "Programinės įrangos kūrimas",
        "Telekomunikacijos, ryšio priemonės",
    ],
    "Laisvalaikis, pramogos, turizmas": [
        "Kaimo turizmas",
        "Kavinės, klubai, barai, restoranai",
        "Kelionės",
        "Kino paslaugos",
        "Kultūros centrai",
        "Muziejai",
        "Pirtys ir baseinai",
        "Poilsio namai, sanatorijos",
        "Pramogos ir poilsis",
        "Renginių organizavimas",
        "Sporto paslaugos, sporto klubai",
        "Sveikatingumo, SPA centrai",
        "Teatrai",
        "Viešbučiai, moteliai",
    ],
    "Maisto produktai, gėrimai, prekyba": [
        "Gėrimai (alkoholiniai)",
        "Gėrimai (nealkoholiniai)",
        "Kava, arbata",
        "Kepyklos",
        "Konditerija, saldumynai",
        "Maisto gamyba",
        "Maisto parduotuvės",
        "Maisto produktai",
        "Mėsos perdirbimas, mėsos produktai",
        "Naminiai gyvūnai, maistas, reikmenys",
        "Pienas, pieno produktai",
        "Šaldyti maisto produktai",
        "Švieži produktai",
    ],
    "Medicina, sveikata, farmacija": [
        "Akušeriai, ginekologai",
        "Estetinė medicina",
        "Globos, rūpybos įstaigos, socialiniai darbuotojai",
        "Greitoji medicinos pagalba",
        "Medicininė įranga",
        "Medicininiai tyrimai, laboratorijos",
        "Medicinos įstaigos",
        "Odontologija, paslaugos",
        "Optika, akiniai",
        "Plastinė, estetinė chirurgija",
        "Privačios gydymo įstaigos",
        "Psichologai, psichoterapeutai",
        "Sanatorijos, reabilitacijos centrai",
        "Vaistai, medicinos medžiagos",
        "Veterinarija",
        "Visuomenės sveikatos priežiūra",
    ],
    "Paslaugos": [
        "Valymo paslaugos",
        "Apsaugos paslaugos",
        "Logistikos paslaugos",
        "Konsultacijos",
        "Vertimo paslaugos",
        "Dizaino paslaugos",
        "Reklamos paslaugos",
        "Personalo paslaugos",
    ],
    "Pramonė, gamyba, įranga": [
        "Pramonės įrangos gamyba",
        "Metalo apdirbimas",
        "Medienos apdirbimas",
        "Tekstilės gamyba",
        "Chemijos pramonė",
        "Maisto pramonė",
        "Įrangos remontas",
        "Automatizacijos sprendimai",
    ],
    "Prekės, prekyba": [
        "Mažmeninė prekyba",
        "Didmeninė prekyba",
        "Elektronikos prekyba",
        "Drabužių prekyba",
        "Namų apyvokos prekės",
        "Sporto prekės",
        "Knygų prekyba",
        "E. prekyba",
    ],
    "Reklama, leidyba": [
        "Reklamos kampanijos",
        "Grafikos dizainas",
        "Spausdinimo paslaugos",
        "Leidybos paslaugos",
        "Socialinių tinklų valdymas",
        "Turinio kūrimas",
        "Fotografijos paslaugos",
        "Video gamyba",
    ],
    "Statyba, remontas, medžiagos, NT": [
        "Bendroji statyba",
        "Namų remontas",
        "Santechnikos darbai",
        "Elektros darbai",
        "Stogų darbai",
        "Grindų klojimas",
        "Dažymo darbai",
        "Nekilnojamojo turto paslaugos",
    ],
    "Švietimas, ugdymas, kultūra": [
        "Mokymo paslaugos",
        "Korepetitorių paslaugos",
        "Kalbų kursai",
        "Muzikos pamokos",
        "Meno pamokos",
        "Kultūros renginiai",
        "Bibliotekų paslaugos",
        "Muziejų paslaugos",
    ],
    "Valstybinės įstaigos, organizacijos": [
        "Administracinės paslaugos",
        "Dokumentų tvarkymas",
        "Licencijų išdavimas",
        "Registracijos paslaugos",
        "Mokesčių administravimas",
        "Socialinės paslaugos",
        "Sveikatos administravimas",
        "Švietimo administravimas",
    ],
    "Žemės ūkis, agrotechnika": [
        "Augalininkystė",
        "Gyvulininkystė",
        "Žemės ūkio konsultacijos",
        "Žemės ūkio technikos nuoma",
        "Sėklų prekyba",
        "Trąšų prekyba",
        "Veterinarijos paslaugos",
        "Ekologinis ūkininkavimas",
    ],
}


def load_catalog(raw: Mapping[str, List[str]]) -> Dict[ServiceCategory, Tuple[str, ...]]:
    """
    Build the typed category -> services mapping.

    Raises ValueError when a key is not a known category, a category is
    missing, or a category lists the same service twice.
    """
    catalog: Dict[ServiceCategory, Tuple[str, ...]] = {}

    for label, services in raw.items():
        try:
            category = ServiceCategory(label)
        except ValueError:
            raise ValueError(f"Unknown service category in catalog: {label!r}")

        if len(set(services)) != len(services):
            raise ValueError(f"Duplicate services listed under {label!r}")

        catalog[category] = tuple(services)

    missing = [c.value for c in ServiceCategory if c not in catalog]
    if missing:
        raise ValueError(f"Catalog is missing categories: {missing}")

    return catalog


SERVICE_CATALOG: Dict[ServiceCategory, Tuple[str, ...]] = load_catalog(_RAW_SERVICE_CATALOG)


def services_for(category: ServiceCategory) -> Tuple[str, ...]:
    return SERVICE_CATALOG[category]


def is_known_city(city: str) -> bool:
    return city in CITIES
