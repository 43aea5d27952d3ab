from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from intouch.api.deps import get_session_context
from intouch.core.catalog import CITIES, SERVICE_CATALOG
from intouch.core.config import settings
from intouch.core.i18n import SUPPORTED_LANGUAGES, TRANSLATIONS, normalize_language
from intouch.services.session_store import SessionContext

router = APIRouter()


@router.get("/categories")
def list_categories() -> List[Dict[str, Any]]:
    """
    Every service category with its services, in display order.
    """
    return [
        {"category": category.value, "services": list(services)}
        for category, services in SERVICE_CATALOG.items()
    ]


@router.get("/cities", response_model=List[str])
def list_cities() -> Any:
    return list(CITIES)


@router.get("/translations")
def read_translations(
    language: Optional[str] = Query(None, description=f"One of {', '.join(SUPPORTED_LANGUAGES)}"),
    context: SessionContext = Depends(get_session_context),
) -> Dict[str, Any]:
    """
    The full UI string table, with fallback-language entries filling gaps.
    """
    code = normalize_language(language) if language else context.language
    table = {**TRANSLATIONS[settings.FALLBACK_LANGUAGE], **TRANSLATIONS[code]}
    return {"language": code, "translations": table}
