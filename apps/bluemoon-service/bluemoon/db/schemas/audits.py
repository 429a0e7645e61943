import uuid
from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import Field

from .base import APIModel


class AuditLogBase(APIModel):
    action_type: str
    status: str
    target_type: Optional[str] = None
    target_id: Optional[uuid.UUID] = None


class AuditLogCreate(AuditLogBase):
    metadata: Optional[Dict[str, Any]] = None


class AuditLog(AuditLogBase):
    id: uuid.UUID
    actor_user_id: Optional[uuid.UUID] = None
    # ORM attribute is metadata_json; the column and the wire name are 'metadata'
    metadata: Optional[Dict[str, Any]] = Field(default=None, validation_alias="metadata_json", serialization_alias="metadata")
    created_at: datetime
