"""UserRepository - SQLAlchemy implementation of the user persistence port."""

from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from authcore.domain.entities.user import User
from authcore.domain.enums import UserRole
from authcore.infrastructure.persistence.models.user import UserModel


def _to_entity(model: UserModel) -> User:
    """Convert database model to domain entity."""
    return User(
        id=model.id,
        username=model.username,
        email=model.email,
        password_hash=model.password_hash,
        role=UserRole(model.role),
        is_active=model.is_active,
        first_name=model.first_name,
        last_name=model.last_name,
        theme_color=model.theme_color,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class UserRepository:
    """SQLAlchemy implementation for user persistence.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with db.get_session() as session:
        ...     repo = UserRepository(session)
        ...     user = await repo.find_by_identity("alice")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID.

        Args:
            user_id: User's unique identifier.

        Returns:
            User if found, None otherwise.
        """
        model = await self.session.get(UserModel, user_id)
        return _to_entity(model) if model else None

    async def find_by_identity(self, identity: str) -> User | None:
        """Find user by username or (case-insensitive) email.

        An exact username match wins over an email match.

        Args:
            identity: Username or email address.

        Returns:
            User if found, None otherwise.
        """
        stmt = select(UserModel).where(
            or_(
                UserModel.username == identity,
                func.lower(UserModel.email) == identity.strip().lower(),
            )
        )
        result = await self.session.execute(stmt)
        models = result.scalars().all()
        if not models:
            return None
        for model in models:
            if model.username == identity:
                return _to_entity(model)
        return _to_entity(models[0])

    async def exists(self, *, username: str, email: str) -> bool:
        """Check whether the username or the email is already taken.

        Args:
            username: Candidate username.
            email: Candidate email.

        Returns:
            True if either is in use.
        """
        stmt = (
            select(UserModel.id)
            .where(
                or_(
                    UserModel.username == username,
                    func.lower(UserModel.email) == email.lower(),
                )
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def save(self, user: User) -> User | None:
        """Create new user in database.

        Args:
            user: User entity to persist.

        Returns:
            Stored User with database timestamps, or None if the unique
            username/email constraint rejected the insert.
        """
        model = UserModel(
            id=user.id,
            username=user.username,
            email=user.email.lower(),
            password_hash=user.password_hash,
            role=user.role.value,
            is_active=user.is_active,
            first_name=user.first_name,
            last_name=user.last_name,
            theme_color=user.theme_color,
        )
        self.session.add(model)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            return None
        await self.session.refresh(model)
        return _to_entity(model)
