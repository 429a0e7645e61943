import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, Index, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class TemporaryResidence(Base):
    """A person registered as temporarily staying in the building."""
    __tablename__ = 'temporary_residences'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    resident_id = Column(UUID(as_uuid=True), ForeignKey('residents.id'), nullable=False)
    address = Column(String(255), nullable=True)
    reason = Column(Text, nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    resident = relationship("Resident")

    __table_args__ = (
        Index('idx_temporary_residences_period', 'start_date', 'end_date'),
    )


class TemporaryAbsence(Base):
    """A registered resident away from the building for a period."""
    __tablename__ = 'temporary_absences'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    resident_id = Column(UUID(as_uuid=True), ForeignKey('residents.id'), nullable=False)
    destination = Column(String(255), nullable=True)
    reason = Column(Text, nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    resident = relationship("Resident")

    __table_args__ = (
        Index('idx_temporary_absences_period', 'start_date', 'end_date'),
    )
