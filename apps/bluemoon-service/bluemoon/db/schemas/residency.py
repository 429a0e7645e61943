import uuid
from datetime import datetime
from pydantic import model_validator

from bluemoon.utils.periods import as_utc
from .base import APIModel
from .households import ResidentSummary


class _PeriodMixin(APIModel):
    start_date: datetime
    end_date: datetime

    @model_validator(mode="after")
    def _end_after_start(self):
        if as_utc(self.end_date) < as_utc(self.start_date):
            raise ValueError("endDate must not be before startDate")
        return self


class TemporaryResidenceCreate(_PeriodMixin):
    resident: uuid.UUID
    address: str | None = None
    reason: str | None = None


class TemporaryResidence(APIModel):
    id: uuid.UUID
    resident: ResidentSummary | None = None
    address: str | None = None
    reason: str | None = None
    start_date: datetime
    end_date: datetime
    created_at: datetime


class TemporaryAbsenceCreate(_PeriodMixin):
    resident: uuid.UUID
    destination: str | None = None
    reason: str | None = None


class TemporaryAbsence(APIModel):
    id: uuid.UUID
    resident: ResidentSummary | None = None
    destination: str | None = None
    reason: str | None = None
    start_date: datetime
    end_date: datetime
    created_at: datetime
