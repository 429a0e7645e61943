"""
Payment repository functions.

Payments are never deleted. A refund flips ``is_refunded`` and stamps who
refunded and when, which frees the (fee, household) pair for a new payment.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Iterable, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from bluemoon.db import models, schemas
from bluemoon.db.models import now_utc
from bluemoon.utils.search import LIKE_ESCAPE, contains_pattern

logger = logging.getLogger("bluemoon.repositories.payments")

DEFAULT_REFUND_REASON = "No reason provided"


class DuplicatePaymentError(Exception):
    """A live payment already exists for this fee and household."""


def _query(db: Session):
    return db.query(models.Payment).options(
        joinedload(models.Payment.fee),
        joinedload(models.Payment.household),
        joinedload(models.Payment.collector),
        joinedload(models.Payment.refunded_by),
    )


def get_payment(db: Session, payment_id: uuid.UUID) -> Optional[models.Payment]:
    return _query(db).filter(models.Payment.id == payment_id).first()


def get_payments(db: Session):
    return _query(db).order_by(models.Payment.payment_date.desc()).all()


def get_payments_by_household(db: Session, household_id: uuid.UUID):
    return (
        _query(db)
        .filter(models.Payment.household_id == household_id)
        .order_by(models.Payment.payment_date.desc())
        .all()
    )


def get_payments_by_fee(db: Session, fee_id: uuid.UUID):
    return (
        _query(db)
        .filter(models.Payment.fee_id == fee_id)
        .order_by(models.Payment.payment_date.desc())
        .all()
    )


def get_live_payment(db: Session, fee_id: uuid.UUID, household_id: uuid.UUID) -> Optional[models.Payment]:
    return (
        db.query(models.Payment)
        .filter(
            models.Payment.fee_id == fee_id,
            models.Payment.household_id == household_id,
            models.Payment.is_refunded.is_(False),
        )
        .first()
    )


def create_payment(
    db: Session,
    payment: schemas.PaymentCreate,
    *,
    fee: models.Fee,
    collector_id: Optional[uuid.UUID],
) -> models.Payment:
    """Insert a payment; amount and date fall back to the fee amount and now.

    Raises:
        DuplicatePaymentError: the partial unique index rejected the insert
    """
    data = payment.model_dump(exclude={'fee', 'household'})
    if data.get('amount') is None:
        data['amount'] = fee.amount
    if data.get('payment_date') is None:
        data['payment_date'] = now_utc()
    db_payment = models.Payment(
        **data,
        fee_id=payment.fee,
        household_id=payment.household,
        collector_id=collector_id,
        is_refunded=False,
    )
    db.add(db_payment)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.info("Live payment already exists for fee=%s household=%s", payment.fee, payment.household)
        raise DuplicatePaymentError(str(exc.orig)) from exc
    except Exception:
        db.rollback()
        raise
    return get_payment(db, db_payment.id)


def _stamp_refund(db_payment: models.Payment, *, reason: Optional[str], refunded_by_id: Optional[uuid.UUID]) -> None:
    db_payment.is_refunded = True
    db_payment.refund_date = now_utc()
    db_payment.refund_reason = reason or DEFAULT_REFUND_REASON
    db_payment.refunded_by_id = refunded_by_id


def update_payment(
    db: Session,
    db_payment: models.Payment,
    payment: schemas.PaymentUpdate,
    *,
    actor_id: Optional[uuid.UUID],
) -> models.Payment:
    """Partial merge; ``isRefunded: true`` on a live payment stamps the refund.

    Callers reject un-refunding before calling this.
    """
    update_data = payment.model_dump(exclude_unset=True, exclude_none=True)
    refund_requested = update_data.pop('is_refunded', None)
    refund_reason = update_data.pop('refund_reason', None)
    for key, value in update_data.items():
        setattr(db_payment, key, value)
    if refund_requested and not db_payment.is_refunded:
        _stamp_refund(db_payment, reason=refund_reason, refunded_by_id=actor_id)
    elif refund_reason and db_payment.is_refunded:
        db_payment.refund_reason = refund_reason
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    return get_payment(db, db_payment.id)


def refund_payment(
    db: Session,
    db_payment: models.Payment,
    *,
    reason: Optional[str],
    refunded_by_id: Optional[uuid.UUID],
) -> models.Payment:
    _stamp_refund(db_payment, reason=reason, refunded_by_id=refunded_by_id)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    return get_payment(db, db_payment.id)


def search_payments(
    db: Session,
    *,
    household_ids: Optional[Iterable[uuid.UUID]] = None,
    fee_ids: Optional[Iterable[uuid.UUID]] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    min_amount: Optional[float] = None,
    max_amount: Optional[float] = None,
    payer_name: Optional[str] = None,
):
    """Filter payments; ``None`` means no constraint on that criterion.

    ``household_ids``/``fee_ids`` are pre-resolved id lists. ``end_date`` is
    inclusive and expected to already sit at the end of its day.
    """
    q = _query(db)
    if household_ids is not None:
        q = q.filter(models.Payment.household_id.in_(list(household_ids)))
    if fee_ids is not None:
        q = q.filter(models.Payment.fee_id.in_(list(fee_ids)))
    if start_date is not None:
        q = q.filter(models.Payment.payment_date >= start_date)
    if end_date is not None:
        q = q.filter(models.Payment.payment_date <= end_date)
    if min_amount is not None:
        q = q.filter(models.Payment.amount >= min_amount)
    if max_amount is not None:
        q = q.filter(models.Payment.amount <= max_amount)
    if payer_name:
        q = q.filter(models.Payment.payer_name.ilike(contains_pattern(payer_name), escape=LIKE_ESCAPE))
    return q.order_by(models.Payment.payment_date.desc()).all()


def get_live_payments(db: Session, start: Optional[datetime] = None, end: Optional[datetime] = None):
    """Non-refunded payments, optionally limited to an inclusive date window, oldest first."""
    q = _query(db).filter(models.Payment.is_refunded.is_(False))
    if start is not None:
        q = q.filter(models.Payment.payment_date >= start)
    if end is not None:
        q = q.filter(models.Payment.payment_date <= end)
    return q.order_by(models.Payment.payment_date.asc()).all()


def get_recent_payments(db: Session, limit: int = 5):
    return _query(db).order_by(models.Payment.payment_date.desc()).limit(limit).all()


def get_live_payments_for_fees(db: Session, fee_ids: Iterable[uuid.UUID]):
    fee_ids = list(fee_ids)
    if not fee_ids:
        return []
    return (
        db.query(models.Payment)
        .filter(models.Payment.is_refunded.is_(False), models.Payment.fee_id.in_(fee_ids))
        .all()
    )
