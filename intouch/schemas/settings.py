"""Schemas for per-user preferences"""

from enum import Enum
from typing import List, Literal

from pydantic import BaseModel, Field


class WorkingHours(BaseModel):
    start: str = Field("09:00", pattern=r"^\d{2}:\d{2}$")
    end: str = Field("17:00", pattern=r"^\d{2}:\d{2}$")

class UserSettings(BaseModel):
    email_notifications: bool = True
    sms_notifications: bool = False
    marketing_emails: bool = True
    profile_visibility: Literal["public", "private"] = "public"
    auto_respond: bool = False
    auto_respond_message: str = ""
    working_hours: WorkingHours = Field(default_factory=WorkingHours)
    timezone: str = "Europe/Vilnius"


class SubscriptionPlanId(str, Enum):
    FREE = "free"
    PROFESSIONAL = "professional"
    BUSINESS = "business"

class SubscriptionPlan(BaseModel):
    id: SubscriptionPlanId
    name: str
    price: float
    period: str
    features: List[str]
    popular: bool = False
    current: bool = False

class SubscriptionState(BaseModel):
    current_plan: SubscriptionPlanId
    plans: List[SubscriptionPlan]

class SubscriptionChange(BaseModel):
    plan: str

class LanguageChange(BaseModel):
    language: str

class LanguageState(BaseModel):
    language: str
