"""Static translation tables and lookup"""

from typing import Any, Dict, Mapping, Optional

from intouch.core.config import settings

SUPPORTED_LANGUAGES = ("lt", "en")

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "lt": {
        # Validation
        "pleaseEnterEmail": "Įveskite el. pašto adresą.",
        "pleaseEnterValidEmail": "Įveskite teisingą el. pašto adresą.",
        "pleaseEnterPassword": "Įveskite slaptažodį.",
        "passwordTooWeak": "Slaptažodis per silpnas.",
        "passwordMismatchError": "Slaptažodžiai nesutampa.",
        "pleaseEnterFirstName": "Įveskite vardą.",
        "pleaseEnterLastName": "Įveskite pavardę.",
        "pleaseEnterCompanyName": "Įveskite įmonės pavadinimą.",
        "pleaseEnterCompanyCode": "Įveskite įmonės kodą.",
        "pleaseSelectCategory": "Pasirinkite bent vieną kategoriją.",
        "pleaseSelectServices": "Pasirinkite bent vieną paslaugą.",
        "pleaseEnterMessage": "Įveskite žinutę.",
        "pleaseSelectRecipients": "Pasirinkite bent vieną gavėją.",
        "pleaseEnterSubject": "Įveskite temą.",
        "invalidCategory": "Nežinoma kategorija: {category}.",
        "invalidCity": "Nežinomas miestas: {city}.",
        "invalidServiceFilter": "Netinkamas paslaugos filtras: {value}.",
        "invalidSpecialistType": "Netinkamas specialisto tipas.",
        "unknownSubscriptionPlan": "Nežinomas planas: {plan}.",
        "unsupportedLanguage": "Nepalaikoma kalba: {language}.",
        # Not found / auth
        "userExistsError": "Vartotojas su šiuo el. paštu jau egzistuoja.",
        "invalidCredentialsError": "Neteisingas el. paštas arba slaptažodis.",
        "notAuthenticated": "Prisijunkite norėdami tęsti.",
        "specialistsOnly": "Šis veiksmas galimas tik specialistams.",
        "profileNotFound": "Specialisto profilis nerastas.",
        "specialistNotFound": "Specialistas nerastas.",
        "searchSessionNotFound": "Paieška nepradėta.",
        "suggestionNotFound": "Pasiūlymas nerastas.",
        # Dispatch
        "messageSendFailed": "Nepavyko išsiųsti užklausos.",
        "unexpectedError": "Įvyko netikėta klaida. Bandykite dar kartą.",
        "tooManyRequests": "Per daug užklausų. Bandykite vėliau.",
        "errorFetchingSpecialists": "Nepavyko įkelti specialistų.",
        # Messages
        "inquiryFromInTouch": "Užklausa iš InTouch",
        "contactNotificationSubject": "Nauja užklausa iš {name} - InTouch",
        "contactNotificationBody": (
            "<h2>Gavote naują užklausą!</h2>"
            "<p><strong>Nuo:</strong> {name}</p>"
            "<p><strong>Žinutė:</strong></p>"
            "<p>{message}</p>"
            "<p>Galite atsakyti tiesiogiai į šį el. laišką.</p>"
        ),
        "contactConfirmationSubject": "Užklausa išsiųsta - InTouch",
        "contactConfirmationBody": (
            "<p>Jūsų žinutė buvo išsiųsta specialistui. Jis susisieks su jumis tiesiogiai.</p>"
        ),
        "passwordResetSent": "Jei paskyra egzistuoja, slaptažodžio atkūrimo instrukcijos išsiųstos.",
        "loggedOut": "Atsijungėte.",
        # Listing
        "allLithuania": "Visa Lietuva",
        "foundResult": "Rastas 1 rezultatas",
        "foundResults": "Rasta rezultatų: {count}",
        "freePlan": "Nemokamas",
        "professionalPlan": "Profesionalus",
        "businessPlan": "Verslo",
        "forever": "visam laikui",
        "perMonth": "per mėnesį",
        "basicProfileListing": "Pagrindinis profilio įrašas",
        "receiveInquiries": "Užklausų gavimas",
        "emailSupport": "Pagalba el. paštu",
        "basicAnalytics": "Pagrindinė analitika",
        "priorityListing": "Prioritetinis rodymas",
        "unlimitedInquiries": "Neriboti užklausų kiekiai",
        "advancedAnalytics": "Išplėstinė analitika",
        "customBranding": "Individualus prekės ženklas",
        "prioritySupport": "Prioritetinė pagalba",
        "portfolioGallery": "Darbų galerija",
        "multipleTeamMembers": "Keli komandos nariai",
        "advancedReporting": "Išplėstinės ataskaitos",
        "apiAccess": "API prieiga",
        "whiteLabeling": "Baltos etiketės sprendimas",
        "dedicatedSupport": "Asmeninis vadybininkas",
        "customIntegrations": "Individualios integracijos",
        "showMore": "Rodyti daugiau",
        "showLess": "Rodyti mažiau",
    },
    "en": {
        # Validation
        "pleaseEnterEmail": "Please enter your email.",
        "pleaseEnterValidEmail": "Please enter a valid email address.",
        "pleaseEnterPassword": "Please enter your password.",
        "passwordTooWeak": "Password is too weak.",
        "passwordMismatchError": "Passwords do not match.",
        "pleaseEnterFirstName": "Please enter your first name.",
        "pleaseEnterLastName": "Please enter your last name.",
        "pleaseEnterCompanyName": "Please enter the company name.",
        "pleaseEnterCompanyCode": "Please enter the company code.",
        "pleaseSelectCategory": "Please select at least one category.",
        "pleaseSelectServices": "Please select at least one service.",
        "pleaseEnterMessage": "Please enter a message.",
        "pleaseSelectRecipients": "Please select at least one recipient.",
        "pleaseEnterSubject": "Please enter a subject.",
        "invalidCategory": "Unknown category: {category}.",
        "invalidCity": "Unknown city: {city}.",
        "invalidServiceFilter": "Invalid service filter: {value}.",
        "invalidSpecialistType": "Invalid specialist type.",
        "unknownSubscriptionPlan": "Unknown plan: {plan}.",
        "unsupportedLanguage": "Unsupported language: {language}.",
        # Not found / auth
        "userExistsError": "A user with this email already exists.",
        "invalidCredentialsError": "Invalid email or password.",
        "notAuthenticated": "Please log in to continue.",
        "specialistsOnly": "This action is available to specialists only.",
        "profileNotFound": "Specialist profile not found.",
        "specialistNotFound": "Specialist not found.",
        "searchSessionNotFound": "No search in progress.",
        "suggestionNotFound": "Suggestion not found.",
        # Dispatch
        "messageSendFailed": "Failed to send the inquiry.",
        "unexpectedError": "Something went wrong. Please try again.",
        "tooManyRequests": "Too many requests. Please try again later.",
        "errorFetchingSpecialists": "Failed to load specialists.",
        # Messages
        "inquiryFromInTouch": "Inquiry from InTouch",
        "contactNotificationSubject": "New inquiry from {name} - InTouch",
        "contactNotificationBody": (
            "<h2>You have a new inquiry!</h2>"
            "<p><strong>From:</strong> {name}</p>"
            "<p><strong>Message:</strong></p>"
            "<p>{message}</p>"
            "<p>You can reply directly to this email.</p>"
        ),
        "contactConfirmationSubject": "Inquiry sent - InTouch",
        "contactConfirmationBody": (
            "<p>Your message was sent to the specialist. They will contact you directly.</p>"
        ),
        "passwordResetSent": "If the account exists, password reset instructions have been sent.",
        "loggedOut": "You have been logged out.",
        # Listing
        "allLithuania": "All Lithuania",
        "foundResult": "Found 1 result",
        "foundResults": "Found {count} results",
        "freePlan": "Free",
        "professionalPlan": "Professional",
        "businessPlan": "Business",
        "forever": "forever",
        "perMonth": "per month",
        "basicProfileListing": "Basic profile listing",
        "receiveInquiries": "Receive inquiries",
        "emailSupport": "Email support",
        "basicAnalytics": "Basic analytics",
        "priorityListing": "Priority listing",
        "unlimitedInquiries": "Unlimited inquiries",
        "advancedAnalytics": "Advanced analytics",
        "customBranding": "Custom branding",
        "prioritySupport": "Priority support",
        "portfolioGallery": "Portfolio gallery",
        "multipleTeamMembers": "Multiple team members",
        "advancedReporting": "Advanced reporting",
        "apiAccess": "API access",
        "whiteLabeling": "White labeling",
        "dedicatedSupport": "Dedicated support",
        "customIntegrations": "Custom integrations",
        "showMore": "Show more",
        "showLess": "Show less",
    },
}


def normalize_language(language: Optional[str]) -> str:
    """Map a language tag such as ``en-US,en;q=0.9`` to a supported code."""
    if not language:
        return settings.DEFAULT_LANGUAGE
    code = language.split(",")[0].split(";")[0].strip().lower()[:2]
    return code if code in SUPPORTED_LANGUAGES else settings.DEFAULT_LANGUAGE


def translate(
    key: str,
    params: Optional[Mapping[str, Any]] = None,
    language: Optional[str] = None,
) -> str:
    """
    Look up a UI string.

    The requested language table is tried first, then the fallback language
    table, then the key itself is returned. ``{name}`` placeholders are
    replaced from ``params``.
    """
    language = language or settings.DEFAULT_LANGUAGE
    text = (
        TRANSLATIONS.get(language, {}).get(key)
        or TRANSLATIONS.get(settings.FALLBACK_LANGUAGE, {}).get(key)
        or key
    )

    if params:
        for name, value in params.items():
            text = text.replace(f"{{{name}}}", str(value))

    return text
