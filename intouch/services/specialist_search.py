"""
Specialist search and recipient selection.

The pure functions at the top implement the filtering predicate and the
autocomplete suggestions. ``SpecialistSearchSession`` keeps the state of one
listing (or composition) page: filter criteria, the selection set of
recipient e-mails, the suggestion list with its keyboard highlight and the
"show more" counter.

Selection rules:

* While the search term is empty, every filter change replaces the selection
  with the e-mails of the filtered view (auto-select). An empty view leaves
  the selection alone.
* A non-empty search term suppresses auto-select, so hand-picked recipients
  survive filter changes made during a text search.
* Select-visible only adds, deselect-visible only removes the visible e-mails.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence

import pendulum
from pendulum import DateTime

from intouch.core.catalog import ServiceCategory, is_known_city
from intouch.core.config import settings
from intouch.schemas.search import (
    FilterCriteria,
    MailtoResponse,
    SearchState,
    SearchVariant,
    Suggestion,
    TypeFilter,
)
from intouch.schemas.specialist import SpecialistListing
from intouch.services.exceptions import NotFoundError, ValidationError
from intouch.services.messaging import compose_mailto

logger = logging.getLogger(__name__)


def matches_search_term(specialist: SpecialistListing, term: str) -> bool:
    """Case-insensitive substring match on display name, e-mail or profession"""
    needle = term.lower()
    return (
        needle in specialist.display_name.lower()
        or needle in (specialist.email or "").lower()
        or needle in (specialist.profession or "").lower()
    )


def _matches_services(specialist: SpecialistListing, criteria: FilterCriteria) -> bool:
    selected = criteria.services_by_category
    if not any(selected.get(category) for category in criteria.categories):
        return True

    # Only the selected categories this specialist belongs to govern the gate
    relevant = {
        service
        for category in criteria.categories
        if category in specialist.categories
        for service in selected.get(category, [])
    }
    if not relevant:
        return True
    return not relevant.isdisjoint(specialist.services)


def matches_criteria(specialist: SpecialistListing, criteria: FilterCriteria) -> bool:
    if criteria.search_term.strip() and not matches_search_term(specialist, criteria.search_term):
        return False

    if criteria.categories and set(criteria.categories).isdisjoint(specialist.categories):
        return False

    if criteria.specialist_type != TypeFilter.ALL and specialist.type.value != criteria.specialist_type.value:
        return False

    if criteria.cities and not specialist.coverage.serves_any(frozenset(criteria.cities)):
        return False

    return _matches_services(specialist, criteria)


def filter_specialists(
    roster: Sequence[SpecialistListing], criteria: FilterCriteria
) -> List[SpecialistListing]:
    """Matching profiles in roster order"""
    return [specialist for specialist in roster if matches_criteria(specialist, criteria)]


def search_suggestions(
    roster: Sequence[SpecialistListing],
    term: str,
    selected: Iterable[str] = (),
    limit: Optional[int] = None,
    min_length: Optional[int] = None,
) -> List[Suggestion]:
    """
    First ``limit`` roster entries matching ``term``, ignoring all other filters.

    Empty for terms shorter than ``min_length``.
    """
    limit = settings.SUGGESTION_LIMIT if limit is None else limit
    min_length = settings.SUGGESTION_MIN_LENGTH if min_length is None else min_length
    if len(term) < min_length:
        return []

    selected = set(selected)
    matches = [s for s in roster if matches_search_term(s, term)][:limit]
    return [
        Suggestion(
            id=s.user_id,
            display_name=s.display_name,
            email=s.email or "",
            profession=s.profession or "",
            is_selected=(s.email or "") in selected,
        )
        for s in matches
    ]


class SelectionSet:
    """Recipient e-mails in the order they were picked"""

    def __init__(self, emails: Iterable[str] = ()):
        self._emails: List[str] = []
        self.add_all(emails)

    def __contains__(self, email: str) -> bool:
        return email in self._emails

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._emails))

    def __len__(self) -> int:
        return len(self._emails)

    def toggle(self, email: str) -> bool:
        """Flip membership; returns True when ``email`` is now selected"""
        if email in self._emails:
            self._emails.remove(email)
            return False
        self._emails.append(email)
        return True

    def add_all(self, emails: Iterable[str]) -> None:
        for email in emails:
            if email and email not in self._emails:
                self._emails.append(email)

    def remove_all(self, emails: Iterable[str]) -> None:
        drop = set(emails)
        self._emails = [email for email in self._emails if email not in drop]

    def replace(self, emails: Iterable[str]) -> None:
        self._emails = []
        self.add_all(emails)

    def as_list(self) -> List[str]:
        return list(self._emails)


class SpecialistSearchSession:
    """State of one search page over a fixed roster snapshot"""

    def __init__(
        self,
        roster: Sequence[SpecialistListing],
        variant: SearchVariant = SearchVariant.LISTING,
        page_size: Optional[int] = None,
    ):
        self.roster = list(roster)
        self.variant = variant
        self.page_size = page_size or settings.SEARCH_PAGE_SIZE
        self.criteria = FilterCriteria(
            specialist_type=TypeFilter.ALL if variant == SearchVariant.COMPOSE else TypeFilter.INDIVIDUAL
        )
        self.selection = SelectionSet()
        self.suggestions_open = False
        self.highlighted_index = -1
        self.visible_count = self.page_size
        self._filtered: List[SpecialistListing] = []
        self._filters_changed()

    # Derived views

    @property
    def filtered(self) -> List[SpecialistListing]:
        return list(self._filtered)

    def filtered_emails(self) -> List[str]:
        return [s.email for s in self._filtered if s.email]

    def suggestions(self) -> List[Suggestion]:
        return search_suggestions(self.roster, self.criteria.search_term, self.selection)

    def _filters_changed(self) -> None:
        self._filtered = filter_specialists(self.roster, self.criteria)
        self.visible_count = self.page_size
        if not self.criteria.search_term.strip() and self._filtered:
            self.selection.replace(self.filtered_emails())

    # Filters

    def toggle_category(self, category: str) -> None:
        _ensure_category(category)
        categories = self.criteria.categories
        if category in categories:
            categories.remove(category)
        else:
            categories.append(category)
        self._filters_changed()

    def toggle_service(self, category: str, service: str) -> None:
        _ensure_category(category)
        services = self.criteria.services_by_category.setdefault(category, [])
        if service in services:
            services.remove(service)
        else:
            services.append(service)
        self._filters_changed()

    def toggle_city(self, city: str) -> None:
        if not is_known_city(city):
            raise ValidationError(f"Unknown city: {city}", error_code="invalidCity", details={"city": city})
        cities = self.criteria.cities
        if city in cities:
            cities.remove(city)
        else:
            cities.append(city)
        self._filters_changed()

    def select_all_cities(self) -> None:
        self.criteria.cities = []
        self._filters_changed()

    def set_specialist_type(self, specialist_type: TypeFilter) -> None:
        specialist_type = TypeFilter(specialist_type)
        if specialist_type == TypeFilter.ALL and self.variant != SearchVariant.COMPOSE:
            raise ValidationError("The listing page filters one specialist type", error_code="invalidSpecialistType")
        if specialist_type == self.criteria.specialist_type:
            return

        self.criteria.specialist_type = specialist_type
        self.criteria.categories = []
        self.criteria.services_by_category = {}
        self._filters_changed()

    def set_search_term(self, term: str) -> None:
        self.criteria.search_term = term or ""
        self.suggestions_open = len(self.criteria.search_term) >= settings.SUGGESTION_MIN_LENGTH
        self.highlighted_index = -1
        self._filters_changed()

    def clear_filters(self) -> None:
        self.criteria = FilterCriteria(
            specialist_type=TypeFilter.ALL if self.variant == SearchVariant.COMPOSE else TypeFilter.INDIVIDUAL
        )
        self.dismiss_suggestions()
        self._filters_changed()

    # Selection

    def toggle_recipient(self, email: str) -> bool:
        return self.selection.toggle(email)

    def select_visible(self) -> None:
        self.selection.add_all(self.filtered_emails())

    def deselect_visible(self) -> None:
        self.selection.remove_all(self.filtered_emails())

    # Suggestions

    def focus_search(self) -> None:
        if len(self.criteria.search_term) >= settings.SUGGESTION_MIN_LENGTH:
            self.suggestions_open = True

    def dismiss_suggestions(self) -> None:
        self.suggestions_open = False
        self.highlighted_index = -1

    def choose_suggestion(self, index: int) -> bool:
        suggestions = self.suggestions()
        if not 0 <= index < len(suggestions):
            raise NotFoundError("Suggestion not found", error_code="suggestionNotFound")
        selected = self.selection.toggle(suggestions[index].email)
        self.dismiss_suggestions()
        return selected

    def navigate(self, key: str) -> None:
        """Keyboard handling for the open suggestion list"""
        count = len(self.suggestions())
        if not self.suggestions_open or count == 0:
            return

        if key == "ArrowDown":
            self.highlighted_index = self.highlighted_index + 1 if self.highlighted_index < count - 1 else 0
        elif key == "ArrowUp":
            self.highlighted_index = self.highlighted_index - 1 if self.highlighted_index > 0 else count - 1
        elif key == "Enter":
            if self.highlighted_index >= 0:
                self.choose_suggestion(self.highlighted_index)
        elif key == "Escape":
            self.dismiss_suggestions()

    # Paging

    def show_more(self) -> None:
        self.visible_count = min(self.visible_count + self.page_size, len(self._filtered))

    def show_less(self) -> None:
        self.visible_count = self.page_size

    # Output

    def compose_message(self, message: str, subject: Optional[str] = None, language: Optional[str] = None) -> MailtoResponse:
        return compose_mailto(
            message,
            self.selection.as_list(),
            subject=subject,
            require_subject=self.variant == SearchVariant.COMPOSE,
            language=language,
        )

    def state(self) -> SearchState:
        visible = self._filtered[: self.visible_count]
        return SearchState(
            variant=self.variant,
            criteria=self.criteria.model_copy(deep=True),
            total_results=len(self._filtered),
            results=visible,
            visible_count=len(visible),
            has_more=len(visible) < len(self._filtered),
            selected_emails=self.selection.as_list(),
            suggestions=self.suggestions() if self.suggestions_open else [],
            suggestions_open=self.suggestions_open,
            highlighted_index=self.highlighted_index,
        )


def _ensure_category(category: str) -> ServiceCategory:
    try:
        return ServiceCategory(category)
    except ValueError:
        raise ValidationError(
            f"Unknown category: {category}", error_code="invalidCategory", details={"category": category}
        )


@dataclass
class _OpenSearch:
    search: SpecialistSearchSession
    user_id: Optional[str]
    last_access: DateTime


class SearchSessionRegistry:
    """
    Open searches keyed by session id.

    A user keeps at most one open search: opening a new one drops the searches
    of the user's other sessions. Searches idle for longer than
    ``idle_minutes`` are swept on every lookup, so sessions that end by token
    expiry do not pile up.
    """

    def __init__(self, idle_minutes: Optional[int] = None, clock: Callable[[], DateTime] = pendulum.now):
        self.idle_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES if idle_minutes is None else idle_minutes
        self._clock = clock
        self._sessions: Dict[str, _OpenSearch] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def open(
        self,
        session_id: str,
        roster: Sequence[SpecialistListing],
        variant: SearchVariant = SearchVariant.LISTING,
        user_id: Optional[str] = None,
    ) -> SpecialistSearchSession:
        search = SpecialistSearchSession(roster, variant=variant)
        with self._lock:
            self._sweep()
            if user_id is not None:
                stale = [sid for sid, entry in self._sessions.items() if entry.user_id == user_id]
                for sid in stale:
                    del self._sessions[sid]
            self._sessions[session_id] = _OpenSearch(search, user_id, self._clock())
        logger.info(f"Opened {variant.value} search over {len(search.roster)} specialists")
        return search

    def get(self, session_id: str) -> SpecialistSearchSession:
        with self._lock:
            self._sweep()
            entry = self._sessions.get(session_id)
            if entry is None:
                raise NotFoundError("No search in progress", error_code="searchSessionNotFound")
            entry.last_access = self._clock()
            return entry.search

    def close(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def _sweep(self) -> None:
        cutoff = self._clock().subtract(minutes=self.idle_minutes)
        expired = [sid for sid, entry in self._sessions.items() if entry.last_access < cutoff]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info(f"Evicted {len(expired)} idle searches")


search_sessions = SearchSessionRegistry()
