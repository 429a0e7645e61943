import uuid
from sqlalchemy import Column, String, DateTime, Boolean, Float, ForeignKey, Index, Text, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Payment(Base):
    __tablename__ = 'payments'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    fee_id = Column(UUID(as_uuid=True), ForeignKey('fees.id'), nullable=False)
    household_id = Column(UUID(as_uuid=True), ForeignKey('households.id'), nullable=False)
    amount = Column(Float, nullable=False, default=0)
    payment_date = Column(DateTime(timezone=True), nullable=False, default=now_utc)
    payer_name = Column(String(255), nullable=True)
    payer_id = Column(String(50), nullable=True)
    payer_phone = Column(String(30), nullable=True)
    receipt_number = Column(String(100), nullable=True)
    note = Column(Text, nullable=True)
    collector_id = Column(UUID(as_uuid=True), ForeignKey('users.id'), nullable=True)
    is_refunded = Column(Boolean, nullable=False, default=False)
    refund_date = Column(DateTime(timezone=True), nullable=True)
    refund_reason = Column(Text, nullable=True)
    refunded_by_id = Column(UUID(as_uuid=True), ForeignKey('users.id'), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    fee = relationship("Fee", back_populates="payments")
    household = relationship("Household", back_populates="payments")
    collector = relationship("User", foreign_keys=[collector_id])
    refunded_by = relationship("User", foreign_keys=[refunded_by_id])

    __table_args__ = (
        # At most one live (non-refunded) payment per fee and household
        Index(
            'uq_payments_fee_household_live',
            'fee_id',
            'household_id',
            unique=True,
            postgresql_where=text('NOT is_refunded'),
            sqlite_where=text('NOT is_refunded'),
        ),
        Index('idx_payments_payment_date', 'payment_date'),
        Index('idx_payments_household_id', 'household_id'),
    )
