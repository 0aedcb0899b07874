"""Password hashing protocol.

The hashing algorithm is an opaque primitive to this package; the bcrypt
adapter lives in infrastructure.
"""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Password hashing and verification interface.

    Implementations:
        - BcryptPasswordService: bcrypt with configurable cost factor
    """

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password.

        Args:
            password: Plaintext password to hash.

        Returns:
            Hash string safe to persist.
        """
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a stored hash.

        Args:
            password: Plaintext password from the login request.
            password_hash: Stored hash.

        Returns:
            True if the password matches, False otherwise (never raises).
        """
        ...
