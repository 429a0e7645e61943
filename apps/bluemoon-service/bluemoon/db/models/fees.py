import uuid
from sqlalchemy import Column, String, DateTime, Boolean, Float, Index, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Fee(Base):
    __tablename__ = 'fees'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    fee_code = Column(String(50), nullable=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    # 'mandatory'|'voluntary'|'contribution'|'parking'|'utilities'
    type = Column(String(30), nullable=False, default='mandatory')
    amount = Column(Float, nullable=False, default=0)
    due_date = Column(DateTime(timezone=True), nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)
    mandatory = Column(Boolean, nullable=False, default=False)
    applicable_for = Column(String(255), nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    payments = relationship("Payment", back_populates="fee")

    __table_args__ = (
        Index('idx_fees_type_active', 'type', 'active'),
    )
