import uuid
from sqlalchemy import Column, String, DateTime, Date, Boolean, ForeignKey, Index, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Household(Base):
    __tablename__ = 'households'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    household_code = Column(String(50), nullable=False, unique=True, index=True)
    apartment_number = Column(String(50), nullable=False)
    address = Column(String(255), nullable=True)
    # households <-> residents is a cycle; the head reference is added after both tables exist
    household_head_id = Column(
        UUID(as_uuid=True),
        ForeignKey('residents.id', use_alter=True, name='fk_households_household_head_id', ondelete='SET NULL'),
        nullable=True,
    )
    active = Column(Boolean, nullable=False, default=True)
    note = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    household_head = relationship("Resident", foreign_keys=[household_head_id], post_update=True)
    residents = relationship("Resident", back_populates="household", foreign_keys="Resident.household_id")
    payments = relationship("Payment", back_populates="household")


class Resident(Base):
    __tablename__ = 'residents'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    household_id = Column(UUID(as_uuid=True), ForeignKey('households.id'), nullable=True)
    full_name = Column(String(255), nullable=False)
    date_of_birth = Column(Date, nullable=True)
    gender = Column(String(20), nullable=True)
    id_card = Column(String(50), nullable=True)
    id_card_date = Column(Date, nullable=True)
    id_card_place = Column(String(255), nullable=True)
    place_of_birth = Column(String(255), nullable=True)
    nationality = Column(String(100), nullable=True, default='Vietnamese')
    ethnicity = Column(String(100), nullable=True)
    religion = Column(String(100), nullable=True)
    occupation = Column(String(255), nullable=True)
    workplace = Column(String(255), nullable=True)
    phone = Column(String(30), nullable=True)
    relationship_to_head = Column(String(100), nullable=True)
    move_in_date = Column(Date, nullable=True)
    note = Column(Text, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    household = relationship("Household", back_populates="residents", foreign_keys=[household_id])

    __table_args__ = (
        Index('idx_residents_household_id', 'household_id'),
    )
