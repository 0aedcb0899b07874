"""Login throttling states for a single identity."""

from enum import Enum


class LoginAttemptStatus(str, Enum):
    """Throttling state machine.

    NORMAL -> WARNING on the first failure, WARNING -> LOCKED when the
    failure threshold is reached inside the window. A successful login or
    window expiry returns to NORMAL.
    """

    NORMAL = "normal"
    WARNING = "warning"
    LOCKED = "locked"
