"""User roles carried in the access token role claim.

Role Hierarchy:
    admin > user > observer
"""

from enum import Enum


class UserRole(str, Enum):
    """Account roles."""

    OBSERVER = "observer"
    USER = "user"
    ADMIN = "admin"
