"""
Stateful search page: filters, recipient selection and suggestions.

Handlers that read or change an open search are coroutines, so every change
to a search runs on the event loop and requests for one session never
interleave. Opening a search loads the roster from the database and stays in
the threadpool.
"""

from typing import Any

from fastapi import APIRouter, Depends, Response, status

from intouch.api.deps import get_current_user, get_repository, get_session_context
from intouch.db.repository import MarketplaceRepository
from intouch.schemas.search import (
    CategoryToggle,
    CityToggle,
    MailtoResponse,
    MessageRequest,
    RecipientToggle,
    SearchOpen,
    SearchState,
    SearchTermChange,
    ServiceToggle,
    SuggestionKey,
    TypeChange,
)
from intouch.schemas.user import User
from intouch.services.session_store import SessionContext
from intouch.services.specialist_search import SpecialistSearchSession, search_sessions

router = APIRouter()


def get_search(
    context: SessionContext = Depends(get_session_context),
    current_user: User = Depends(get_current_user),
) -> SpecialistSearchSession:
    return search_sessions.get(context.session_id)


@router.post("", response_model=SearchState, status_code=status.HTTP_201_CREATED)
def open_search(
    data: SearchOpen,
    repo: MarketplaceRepository = Depends(get_repository),
    context: SessionContext = Depends(get_session_context),
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Load the roster and start a search. Any previous search of this session
    is replaced.
    """
    search = search_sessions.open(context.session_id, repo.get_all(), data.variant, user_id=current_user.id)
    return search.state()


@router.get("", response_model=SearchState)
async def read_search(search: SpecialistSearchSession = Depends(get_search)) -> Any:
    return search.state()


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def close_search(
    context: SessionContext = Depends(get_session_context),
    current_user: User = Depends(get_current_user),
) -> Response:
    search_sessions.close(context.session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Filters

@router.post("/categories", response_model=SearchState)
async def toggle_category(data: CategoryToggle, search: SpecialistSearchSession = Depends(get_search)) -> Any:
    search.toggle_category(data.category)
    return search.state()


@router.post("/services", response_model=SearchState)
async def toggle_service(data: ServiceToggle, search: SpecialistSearchSession = Depends(get_search)) -> Any:
    search.toggle_service(data.category, data.service)
    return search.state()


@router.post("/cities", response_model=SearchState)
async def toggle_city(data: CityToggle, search: SpecialistSearchSession = Depends(get_search)) -> Any:
    search.toggle_city(data.city)
    return search.state()


@router.post("/cities/all", response_model=SearchState)
async def select_all_cities(search: SpecialistSearchSession = Depends(get_search)) -> Any:
    search.select_all_cities()
    return search.state()


@router.put("/type", response_model=SearchState)
async def change_type(data: TypeChange, search: SpecialistSearchSession = Depends(get_search)) -> Any:
    search.set_specialist_type(data.specialist_type)
    return search.state()


@router.put("/term", response_model=SearchState)
async def change_search_term(data: SearchTermChange, search: SpecialistSearchSession = Depends(get_search)) -> Any:
    search.set_search_term(data.search_term)
    return search.state()


@router.post("/clear", response_model=SearchState)
async def clear_filters(search: SpecialistSearchSession = Depends(get_search)) -> Any:
    search.clear_filters()
    return search.state()


# Recipients

@router.post("/recipients/toggle", response_model=SearchState)
async def toggle_recipient(data: RecipientToggle, search: SpecialistSearchSession = Depends(get_search)) -> Any:
    search.toggle_recipient(data.email)
    return search.state()


@router.post("/recipients/select-visible", response_model=SearchState)
async def select_visible(search: SpecialistSearchSession = Depends(get_search)) -> Any:
    search.select_visible()
    return search.state()


@router.post("/recipients/deselect-visible", response_model=SearchState)
async def deselect_visible(search: SpecialistSearchSession = Depends(get_search)) -> Any:
    search.deselect_visible()
    return search.state()


# Suggestions

@router.post("/suggestions/focus", response_model=SearchState)
async def focus_search(search: SpecialistSearchSession = Depends(get_search)) -> Any:
    search.focus_search()
    return search.state()


@router.post("/suggestions/dismiss", response_model=SearchState)
async def dismiss_suggestions(search: SpecialistSearchSession = Depends(get_search)) -> Any:
    """The user clicked outside the search box"""
    search.dismiss_suggestions()
    return search.state()


@router.post("/suggestions/key", response_model=SearchState)
async def press_key(data: SuggestionKey, search: SpecialistSearchSession = Depends(get_search)) -> Any:
    search.navigate(data.key)
    return search.state()


@router.post("/suggestions/{index}", response_model=SearchState)
async def choose_suggestion(index: int, search: SpecialistSearchSession = Depends(get_search)) -> Any:
    search.choose_suggestion(index)
    return search.state()


# Paging

@router.post("/show-more", response_model=SearchState)
async def show_more(search: SpecialistSearchSession = Depends(get_search)) -> Any:
    search.show_more()
    return search.state()


@router.post("/show-less", response_model=SearchState)
async def show_less(search: SpecialistSearchSession = Depends(get_search)) -> Any:
    search.show_less()
    return search.state()


@router.post("/message", response_model=MailtoResponse)
async def compose_message(
    data: MessageRequest,
    search: SpecialistSearchSession = Depends(get_search),
    context: SessionContext = Depends(get_session_context),
) -> Any:
    """
    Validate the message and build the ``mailto:`` link for the selected
    recipients. Nothing is sent.
    """
    return search.compose_message(data.message, subject=data.subject, language=context.language)
