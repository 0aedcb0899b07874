"""Database models.

Importing this package registers every table on BaseModel.metadata.
"""

from authcore.infrastructure.persistence.models.audit_log import AuditLogModel
from authcore.infrastructure.persistence.models.refresh_token import RefreshTokenModel
from authcore.infrastructure.persistence.models.user import UserModel

__all__ = ["AuditLogModel", "RefreshTokenModel", "UserModel"]
