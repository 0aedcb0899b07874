"""Audit log database model (append-only)."""

from typing import Any
from uuid import UUID

from sqlalchemy import JSON, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from authcore.infrastructure.persistence.base import BaseModel


class AuditLogModel(BaseModel):
    """Security audit entry - append-only.

    Inherits from BaseModel (NOT BaseMutableModel): entries are never
    updated, so there is no updated_at column. The adapter exposes no
    update or delete path.

    Fields:
        id: UUID primary key (from BaseModel)
        created_at: When the event was logged (from BaseModel)
        action: Dotted event name (auth.login.success, auth.refresh, ...)
        user_id: User the event concerns (None when unknown)
        resource_type: What was affected (user, session, refresh_token)
        resource_id: Specific resource identifier (refresh token record id)
        ip_address: Client IP address
        user_agent: Client user agent
        context: Non-secret event context (JSON)

    Indexes:
        - idx_audit_user_action: (user_id, action) for user activity queries
        - idx_audit_resource: (resource_type, resource_id) for resource audits
    """

    __tablename__ = "audit_logs"

    action: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
        comment="Audit event type (e.g., auth.login.failure)",
    )

    user_id: Mapped[UUID | None] = mapped_column(
        index=True,
        nullable=True,
    )

    resource_type: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
    )

    resource_id: Mapped[UUID | None] = mapped_column(
        index=True,
        nullable=True,
    )

    ip_address: Mapped[str | None] = mapped_column(
        String(45),  # IPv6 max length
        nullable=True,
    )

    user_agent: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
    )

    context: Mapped[dict[str, Any] | None] = mapped_column(
        JSON,
        nullable=True,
        default=None,
    )

    __table_args__ = (
        Index("idx_audit_user_action", "user_id", "action"),
        Index("idx_audit_resource", "resource_type", "resource_id"),
    )
