"""Reasons stored on revoked refresh token records."""

from enum import Enum


class RevocationReason(str, Enum):
    """Why a refresh token record was revoked."""

    ROTATED = "rotated"
    LOGOUT = "logout"
    LOGOUT_ALL = "logout_all"
    REUSE_DETECTED = "reuse_detected"
