from pydantic import BaseModel, Field, computed_field
from typing import AbstractSet, FrozenSet, Iterable, List, Optional, Union
from datetime import datetime
from dataclasses import dataclass

from intouch.db.models import SpecialistType
from intouch.schemas.user import UserUpdate


@dataclass(frozen=True)
class AllCities:
    """Specialist serves every city in Lithuania"""

    def serves_any(self, cities: AbstractSet[str]) -> bool:
        return True


@dataclass(frozen=True)
class Cities:
    names: FrozenSet[str]

    def serves_any(self, cities: AbstractSet[str]) -> bool:
        return not self.names.isdisjoint(cities)


Coverage = Union[AllCities, Cities]


def coverage_from_locations(locations: Iterable[str]) -> Coverage:
    names = frozenset(locations)
    return Cities(names) if names else AllCities()


def locations_from_coverage(coverage: Coverage) -> List[str]:
    return [] if isinstance(coverage, AllCities) else sorted(coverage.names)


# Shared properties
class SpecialistProfileBase(BaseModel):
    type: SpecialistType
    profession: str = ""
    categories: List[str] = Field(default_factory=list)
    locations: List[str] = Field(default_factory=list, description="Empty means all of Lithuania")
    services: List[str] = Field(default_factory=list)
    phone: str = ""
    description: str = ""

# Properties to receive on creation
class SpecialistProfileCreate(SpecialistProfileBase):
    user_id: str

# Properties to receive on update
class SpecialistProfileUpdate(BaseModel):
    profession: Optional[str] = None
    categories: Optional[List[str]] = None
    locations: Optional[List[str]] = None
    services: Optional[List[str]] = None
    phone: Optional[str] = None
    description: Optional[str] = None
    hourly_rate: Optional[int] = Field(None, ge=0)
    experience: Optional[int] = Field(None, ge=0)

# Profile page: owner fields and listing fields in one form
class MyProfileUpdate(UserUpdate, SpecialistProfileUpdate):
    pass

class ServicesUpdate(BaseModel):
    category: Optional[str] = None
    services: List[str] = Field(default_factory=list)

# Properties to return via API
class SpecialistProfile(SpecialistProfileBase):
    user_id: str
    hourly_rate: int = 25
    experience: int = 1
    verified: bool = False
    image: str = "/placeholder.svg?height=200&width=200"
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @property
    def coverage(self) -> Coverage:
        return coverage_from_locations(self.locations)

# Profile joined with the owner's identity, as shown on the listing page
class SpecialistListing(SpecialistProfile):
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company_name: Optional[str] = None
    company_code: Optional[str] = None

    @computed_field
    @property
    def display_name(self) -> str:
        if self.type == SpecialistType.BUSINESS:
            return self.company_name or ""
        return f"{self.first_name or ''} {self.last_name or ''}"

    @computed_field
    @property
    def serves_all_cities(self) -> bool:
        return isinstance(self.coverage, AllCities)
