"""Core enums package.

Usage:
    from authcore.core.enums import ErrorCode, Environment
"""

from authcore.core.enums.environment import Environment
from authcore.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
