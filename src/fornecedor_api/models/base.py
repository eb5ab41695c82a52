from datetime import datetime
from uuid import uuid4

from sqlalchemy import Column, DateTime, Uuid


class BaseModelMixin:
    """Common fields for all models."""

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    created_at = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )
