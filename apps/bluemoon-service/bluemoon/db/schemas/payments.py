import uuid
from datetime import datetime
from pydantic import Field

from .base import APIModel
from .fees import FeeSummary
from .households import HouseholdSummary
from .users import UserSummary


class PaymentCreate(APIModel):
    fee: uuid.UUID
    household: uuid.UUID
    amount: float | None = Field(default=None, ge=0)
    payment_date: datetime | None = None
    payer_name: str | None = None
    payer_id: str | None = None
    payer_phone: str | None = None
    receipt_number: str | None = None
    note: str | None = None


class PaymentUpdate(APIModel):
    amount: float | None = Field(default=None, ge=0)
    payment_date: datetime | None = None
    payer_name: str | None = None
    payer_id: str | None = None
    payer_phone: str | None = None
    receipt_number: str | None = None
    note: str | None = None
    is_refunded: bool | None = None
    refund_reason: str | None = None


class PaymentRefund(APIModel):
    reason: str | None = None


class Payment(APIModel):
    id: uuid.UUID
    fee: FeeSummary | None = None
    household: HouseholdSummary | None = None
    amount: float
    payment_date: datetime
    payer_name: str | None = None
    payer_id: str | None = None
    payer_phone: str | None = None
    receipt_number: str | None = None
    note: str | None = None
    collector: UserSummary | None = None
    is_refunded: bool
    refund_date: datetime | None = None
    refund_reason: str | None = None
    refunded_by: UserSummary | None = None
    created_at: datetime
    updated_at: datetime
