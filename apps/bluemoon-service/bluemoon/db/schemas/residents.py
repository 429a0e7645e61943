import uuid
from datetime import date, datetime
from pydantic import Field

from .base import APIModel
from .households import HouseholdSummary

DIGITS = r"^\d*$"


class ResidentBase(APIModel):
    full_name: str = Field(min_length=1)
    date_of_birth: date | None = None
    gender: str | None = None
    id_card: str | None = None
    id_card_date: date | None = None
    id_card_place: str | None = None
    place_of_birth: str | None = None
    nationality: str | None = "Vietnamese"
    ethnicity: str | None = None
    religion: str | None = None
    occupation: str | None = None
    workplace: str | None = None
    phone: str | None = None
    relationship_to_head: str | None = None
    move_in_date: date | None = None
    note: str | None = None


class ResidentCreate(ResidentBase):
    household: uuid.UUID | None = None
    # Identity card and phone numbers are entered as plain digits
    id_card: str | None = Field(default=None, pattern=DIGITS)
    phone: str | None = Field(default=None, pattern=DIGITS)


class ResidentUpdate(APIModel):
    household: uuid.UUID | None = None
    full_name: str | None = Field(default=None, min_length=1)
    date_of_birth: date | None = None
    gender: str | None = None
    id_card: str | None = Field(default=None, pattern=DIGITS)
    id_card_date: date | None = None
    id_card_place: str | None = None
    place_of_birth: str | None = None
    nationality: str | None = None
    ethnicity: str | None = None
    religion: str | None = None
    occupation: str | None = None
    workplace: str | None = None
    phone: str | None = Field(default=None, pattern=DIGITS)
    relationship_to_head: str | None = None
    move_in_date: date | None = None
    note: str | None = None
    active: bool | None = None


class Resident(ResidentBase):
    id: uuid.UUID
    household: HouseholdSummary | None = None
    active: bool
    created_at: datetime
    updated_at: datetime
