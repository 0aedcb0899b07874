"""User database model."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from authcore.infrastructure.persistence.base import BaseMutableModel


class UserModel(BaseMutableModel):
    """Users table.

    Fields:
        username: Unique login name
        email: Unique email, stored lowercase
        password_hash: Bcrypt hash (NEVER plaintext)
        role: observer, user or admin
        is_active: Deactivated accounts cannot authenticate
        first_name, last_name, theme_color: Profile fields for the public view
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        index=True,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Stored lowercase",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hash (NEVER plaintext)",
    )
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="user",
        server_default="user",
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    theme_color: Mapped[str] = mapped_column(
        String(7),
        nullable=False,
        default="#3b82f6",
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, username={self.username})>"
