"""Columns shared by every soft-deletable entity."""
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime
from sqlalchemy.sql import func


class SoftDeleteMixin:
    """created_at / updated_at timestamps plus the deleted_at soft-delete marker."""

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    def mark_deleted(self):
        """Stamp the soft-delete marker; the row stays in storage."""
        self.deleted_at = datetime.now(timezone.utc)
