"""Core errors package.

Usage:
    from authcore.core.errors import DomainError, ConflictError, AuthenticationError
"""

from authcore.core.errors.common_errors import AuthenticationError, ConflictError
from authcore.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "ConflictError",
    "AuthenticationError",
]
