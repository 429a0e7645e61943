import uuid
from datetime import date, datetime
from pydantic import Field

from .base import APIModel


class ResidentSummary(APIModel):
    id: uuid.UUID
    full_name: str


class HouseholdHeadDetail(ResidentSummary):
    date_of_birth: date | None = None
    gender: str | None = None
    id_card: str | None = None


class HouseholdSummary(APIModel):
    id: uuid.UUID
    household_code: str
    apartment_number: str


class HouseholdBase(APIModel):
    household_code: str = Field(min_length=1)
    apartment_number: str = Field(min_length=1)
    address: str | None = None
    note: str | None = None


class HouseholdCreate(HouseholdBase):
    pass


class HouseholdUpdate(APIModel):
    household_code: str | None = Field(default=None, min_length=1)
    apartment_number: str | None = Field(default=None, min_length=1)
    address: str | None = None
    household_head: uuid.UUID | None = None
    note: str | None = None
    active: bool | None = None


class Household(HouseholdBase):
    id: uuid.UUID
    household_head: ResidentSummary | None = None
    active: bool
    created_at: datetime
    updated_at: datetime


class HouseholdDetail(Household):
    household_head: HouseholdHeadDetail | None = None
