"""
Payments API endpoints.

Admins and accountants record, edit and refund payments. Payments are never
deleted; refunding is one-way and frees the (fee, household) pair.
"""
import logging
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from bluemoon.audit import AuditAction, record as audit_record
from bluemoon.db import models, schemas
from bluemoon.db.database import get_db
from bluemoon.db.repositories import fees as fees_repo
from bluemoon.db.repositories import households as households_repo
from bluemoon.db.repositories import payments as payments_repo
from bluemoon.api.deps import get_current_user, require_roles
from bluemoon.api.fees import load_fee
from bluemoon.api.households import load_household
from bluemoon.utils.ids import parse_id
from bluemoon.utils.periods import as_utc, end_of_day
from bluemoon.utils.role_permissions import PAYMENT_WRITE_ROLES

logger = logging.getLogger("bluemoon.api.payments")

router = APIRouter(prefix="/api/payments", tags=["payments"], dependencies=[Depends(get_current_user)])

DUPLICATE_PAYMENT_MESSAGE = "A payment for this fee already exists for this household"


def _load_payment(db: Session, payment_id: str) -> models.Payment:
    parsed = parse_id(payment_id)
    payment = payments_repo.get_payment(db, parsed) if parsed else None
    if payment is None:
        raise HTTPException(status_code=404, detail="Payment not found")
    return payment


@router.get("", response_model=List[schemas.Payment])
def list_payments(db: Session = Depends(get_db)):
    return payments_repo.get_payments(db)


# Declared before /{payment_id} so "search" is not taken for an id
@router.get("/search", response_model=List[schemas.Payment])
def search_payments(
    household_code: Optional[str] = Query(default=None, alias="householdCode"),
    apartment_number: Optional[str] = Query(default=None, alias="apartmentNumber"),
    fee_name: Optional[str] = Query(default=None, alias="feeName"),
    fee_type: Optional[str] = Query(default=None, alias="feeType"),
    start_date: Optional[datetime] = Query(default=None, alias="startDate"),
    end_date: Optional[datetime] = Query(default=None, alias="endDate"),
    min_amount: Optional[float] = Query(default=None, alias="minAmount"),
    max_amount: Optional[float] = Query(default=None, alias="maxAmount"),
    payer_name: Optional[str] = Query(default=None, alias="payerName"),
    db: Session = Depends(get_db),
):
    household_ids = None
    if household_code or apartment_number:
        household_ids = households_repo.find_household_ids(
            db, household_code=household_code, apartment_number=apartment_number
        )
        if not household_ids:
            return []

    fee_ids = None
    if fee_name or fee_type:
        fee_ids = fees_repo.find_fee_ids(db, name=fee_name, fee_type=fee_type)
        if not fee_ids:
            return []

    return payments_repo.search_payments(
        db,
        household_ids=household_ids,
        fee_ids=fee_ids,
        start_date=as_utc(start_date) if start_date else None,
        end_date=end_of_day(as_utc(end_date)) if end_date else None,
        min_amount=min_amount,
        max_amount=max_amount,
        payer_name=payer_name,
    )


@router.get("/household/{household_id}", response_model=List[schemas.Payment])
def list_household_payments(household_id: str, db: Session = Depends(get_db)):
    household = load_household(db, household_id)
    return payments_repo.get_payments_by_household(db, household.id)


@router.get("/fee/{fee_id}", response_model=List[schemas.Payment])
def list_fee_payments(fee_id: str, db: Session = Depends(get_db)):
    fee = load_fee(db, fee_id)
    return payments_repo.get_payments_by_fee(db, fee.id)


@router.get("/{payment_id}", response_model=schemas.Payment)
def get_payment(payment_id: str, db: Session = Depends(get_db)):
    return _load_payment(db, payment_id)


@router.post("", response_model=schemas.Payment, status_code=status.HTTP_201_CREATED)
def create_payment(
    payment: schemas.PaymentCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_roles(*PAYMENT_WRITE_ROLES)),
):
    fee = fees_repo.get_fee(db, payment.fee)
    if fee is None:
        raise HTTPException(status_code=404, detail="Fee not found")
    household = households_repo.get_household(db, payment.household)
    if household is None:
        raise HTTPException(status_code=404, detail="Household not found")

    if payments_repo.get_live_payment(db, fee.id, household.id):
        raise HTTPException(status_code=400, detail=DUPLICATE_PAYMENT_MESSAGE)

    try:
        created = payments_repo.create_payment(db, payment, fee=fee, collector_id=current_user.id)
    except payments_repo.DuplicatePaymentError:
        # Lost a race with a concurrent insert for the same pair
        raise HTTPException(status_code=400, detail=DUPLICATE_PAYMENT_MESSAGE)

    audit_record(
        db,
        action=AuditAction.PAYMENT_CREATE,
        target_type="payment",
        target_id=created.id,
        actor_user_id=current_user.id,
        metadata={"fee_id": str(fee.id), "household_id": str(household.id), "amount": created.amount},
    )
    return payments_repo.get_payment(db, created.id)


@router.put("/{payment_id}/refund", response_model=schemas.Payment)
def refund_payment(
    payment_id: str,
    refund: Optional[schemas.PaymentRefund] = Body(default=None),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_roles(*PAYMENT_WRITE_ROLES)),
):
    db_payment = _load_payment(db, payment_id)
    if db_payment.is_refunded:
        raise HTTPException(status_code=400, detail="Payment has already been refunded")

    refunded = payments_repo.refund_payment(
        db,
        db_payment,
        reason=refund.reason if refund else None,
        refunded_by_id=current_user.id,
    )
    audit_record(
        db,
        action=AuditAction.PAYMENT_REFUND,
        target_type="payment",
        target_id=refunded.id,
        actor_user_id=current_user.id,
        metadata={"reason": refunded.refund_reason},
    )
    return payments_repo.get_payment(db, refunded.id)


@router.put("/{payment_id}", response_model=schemas.Payment)
def update_payment(
    payment_id: str,
    payment: schemas.PaymentUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_roles(*PAYMENT_WRITE_ROLES)),
):
    db_payment = _load_payment(db, payment_id)
    if payment.is_refunded is False and db_payment.is_refunded:
        raise HTTPException(status_code=400, detail="A refunded payment cannot be restored")

    was_refunded = db_payment.is_refunded
    updated = payments_repo.update_payment(db, db_payment, payment, actor_id=current_user.id)
    action = AuditAction.PAYMENT_REFUND if updated.is_refunded and not was_refunded else AuditAction.PAYMENT_UPDATE
    audit_record(
        db,
        action=action,
        target_type="payment",
        target_id=updated.id,
        actor_user_id=current_user.id,
        metadata={"fields": sorted(payment.model_dump(exclude_unset=True, exclude_none=True))},
    )
    return payments_repo.get_payment(db, updated.id)
