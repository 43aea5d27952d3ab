"""Schemas for specialist search sessions and message hand-off"""

from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from intouch.schemas.specialist import SpecialistListing


class TypeFilter(str, Enum):
    ALL = "all"  # composition page only
    INDIVIDUAL = "individual"
    BUSINESS = "business"


class SearchVariant(str, Enum):
    LISTING = "listing"
    COMPOSE = "compose"


class FilterCriteria(BaseModel):
    categories: List[str] = Field(default_factory=list, description="Empty means every category")
    services_by_category: Dict[str, List[str]] = Field(default_factory=dict)
    cities: List[str] = Field(default_factory=list, description="Empty means every city")
    specialist_type: TypeFilter = TypeFilter.INDIVIDUAL
    search_term: str = ""


class Suggestion(BaseModel):
    id: str
    display_name: str
    email: str
    profession: str
    is_selected: bool


class SearchState(BaseModel):
    variant: SearchVariant
    criteria: FilterCriteria
    total_results: int
    results: List[SpecialistListing]
    visible_count: int
    has_more: bool
    selected_emails: List[str]
    suggestions: List[Suggestion]
    suggestions_open: bool
    highlighted_index: int


# Request bodies
class SearchOpen(BaseModel):
    variant: SearchVariant = SearchVariant.LISTING

class CategoryToggle(BaseModel):
    category: str

class ServiceToggle(BaseModel):
    category: str
    service: str

class CityToggle(BaseModel):
    city: str

class TypeChange(BaseModel):
    specialist_type: TypeFilter

class SearchTermChange(BaseModel):
    search_term: str = ""

class RecipientToggle(BaseModel):
    email: str

class SuggestionKey(BaseModel):
    key: Literal["ArrowDown", "ArrowUp", "Enter", "Escape"]

class MessageRequest(BaseModel):
    message: str = ""
    subject: Optional[str] = None

class ComposeRequest(BaseModel):
    subject: str = ""
    message: str = ""
    recipients: List[str] = Field(default_factory=list)

class ContactRequest(BaseModel):
    specialist_email: str
    message: str = ""


# Responses
class MailtoResponse(BaseModel):
    mailto: str
    recipients: List[str]
    subject: str

class ContactResponse(BaseModel):
    success: bool
    mailto: Optional[str] = None
