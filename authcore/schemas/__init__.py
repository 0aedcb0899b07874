"""Request schemas validated before reaching the session facade."""

from authcore.schemas.auth_schemas import LoginRequest, RegisterRequest

__all__ = ["LoginRequest", "RegisterRequest"]
