from typing import Any, List

from fastapi import APIRouter, Depends, Query

from intouch.api.deps import (
    get_current_user,
    get_repository,
    get_session_context,
    require_specialist,
)
from intouch.db.repository import MarketplaceRepository
from intouch.schemas.search import FilterCriteria, Suggestion, TypeFilter
from intouch.schemas.specialist import (
    MyProfileUpdate,
    ServicesUpdate,
    SpecialistListing,
    SpecialistProfile,
)
from intouch.schemas.user import User
from intouch.services.exceptions import ValidationError
from intouch.services.profile_service import ProfileService
from intouch.services.session_store import SessionContext
from intouch.services.specialist_search import filter_specialists, search_suggestions

router = APIRouter()


def _parse_services(values: List[str]) -> dict:
    """``Category::Service`` pairs into a category -> services mapping"""
    services_by_category = {}
    for value in values:
        category, sep, service = value.partition("::")
        if not sep or not service:
            raise ValidationError(
                f"Service filter must look like 'category::service': {value}",
                error_code="invalidServiceFilter",
                details={"value": value},
            )
        services_by_category.setdefault(category, []).append(service)
    return services_by_category


@router.get("", response_model=List[SpecialistListing])
def list_specialists(
    category: List[str] = Query([], description="Repeat for several categories"),
    service: List[str] = Query([], description="'category::service' pairs"),
    city: List[str] = Query([], description="Empty means all of Lithuania"),
    specialist_type: TypeFilter = Query(TypeFilter.INDIVIDUAL, alias="type"),
    q: str = Query("", description="Search in name, e-mail and profession"),
    repo: MarketplaceRepository = Depends(get_repository),
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Filter the roster without keeping any state. Results keep roster order.
    """
    criteria = FilterCriteria(
        categories=category,
        services_by_category=_parse_services(service),
        cities=city,
        specialist_type=specialist_type,
        search_term=q,
    )
    return filter_specialists(repo.get_all(), criteria)


@router.get("/suggestions", response_model=List[Suggestion])
def suggestions(
    q: str = Query(""),
    selected: List[str] = Query([], description="Currently selected e-mails"),
    repo: MarketplaceRepository = Depends(get_repository),
    current_user: User = Depends(get_current_user),
) -> Any:
    return search_suggestions(repo.get_all(), q, selected)


@router.get("/me/profile", response_model=SpecialistProfile)
def read_my_profile(
    repo: MarketplaceRepository = Depends(get_repository),
    current_user: User = Depends(require_specialist),
) -> Any:
    return ProfileService(repo).get_my_profile(current_user)


@router.put("/me/profile", response_model=SpecialistListing)
def update_my_profile(
    data: MyProfileUpdate,
    repo: MarketplaceRepository = Depends(get_repository),
    context: SessionContext = Depends(get_session_context),
    current_user: User = Depends(require_specialist),
) -> Any:
    """
    Update owner fields and listing fields together. The stored session user
    follows the owner changes.
    """
    service = ProfileService(repo)
    user, _ = service.update_my_profile(current_user, data)
    if context.store:
        context.store.update_current_user(user.model_dump(exclude={"display_name"}))
    return service.get_listing(current_user.id)


@router.put("/me/services", response_model=SpecialistProfile)
def update_my_services(
    data: ServicesUpdate,
    repo: MarketplaceRepository = Depends(get_repository),
    current_user: User = Depends(require_specialist),
) -> Any:
    return ProfileService(repo).update_my_services(current_user, data)


@router.get("/{user_id}", response_model=SpecialistListing)
def read_specialist(
    user_id: str,
    repo: MarketplaceRepository = Depends(get_repository),
    current_user: User = Depends(get_current_user),
) -> Any:
    return ProfileService(repo).get_listing(user_id)
