import uuid
from datetime import datetime
from enum import Enum
from pydantic import Field

from .base import APIModel


class FeeType(str, Enum):
    mandatory = "mandatory"
    voluntary = "voluntary"
    contribution = "contribution"
    parking = "parking"
    utilities = "utilities"


class FeeBase(APIModel):
    fee_code: str | None = None
    name: str = Field(min_length=1)
    description: str | None = None
    type: FeeType = FeeType.mandatory
    amount: float = Field(default=0, ge=0)
    due_date: datetime | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    mandatory: bool = False
    applicable_for: str | None = None


class FeeCreate(FeeBase):
    pass


class FeeUpdate(APIModel):
    fee_code: str | None = None
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    type: FeeType | None = None
    amount: float | None = Field(default=None, ge=0)
    due_date: datetime | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    mandatory: bool | None = None
    applicable_for: str | None = None
    active: bool | None = None


class Fee(FeeBase):
    id: uuid.UUID
    active: bool
    created_at: datetime
    updated_at: datetime


class FeeSummary(APIModel):
    id: uuid.UUID
    name: str
    type: str
    amount: float
    start_date: datetime | None = None
    end_date: datetime | None = None
