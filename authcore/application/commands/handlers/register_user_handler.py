"""Register user handler.

Flow:
1. Reject a taken username or email
2. Hash the password
3. Resolve the role (configured admin email always gets ADMIN)
4. Persist the user
5. Run the user bootstrap hook
6. Issue the first token pair
7. Audit auth.register
8. Return Success(SessionResult)

On failure:
- Duplicate identity returns Failure(ConflictError), nothing is written

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols)
- NO infrastructure imports (repositories are injected via protocols)
"""

from uuid_extensions import uuid7

from authcore.application.commands.auth_commands import RegisterUser
from authcore.application.dtos import SessionResult
from authcore.application.errors import identity_conflict
from authcore.application.services.security_audit_log import SecurityAuditLog
from authcore.application.services.token_issuer import TokenIssuer
from authcore.core.errors import AuthenticationError, ConflictError
from authcore.core.result import Failure, Result, Success
from authcore.domain.entities.user import User
from authcore.domain.enums import AuditAction, UserRole
from authcore.domain.protocols import (
    LoggerProtocol,
    PasswordHashingProtocol,
    UserBootstrapProtocol,
    UserRepository,
)


class RegisterUserHandler:
    """Handler for user registration command."""

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        token_issuer: TokenIssuer,
        user_bootstrap: UserBootstrapProtocol,
        audit_log: SecurityAuditLog,
        logger: LoggerProtocol,
        admin_email: str | None = None,
    ) -> None:
        """Initialize registration handler with dependencies.

        Args:
            user_repo: User repository for persistence.
            password_service: Password hashing service.
            token_issuer: Issues the first token pair.
            user_bootstrap: Creates per-user defaults after registration.
            audit_log: Security audit trail.
            logger: Structured logger.
            admin_email: Email that is always registered as ADMIN.
        """
        self._user_repo = user_repo
        self._password_service = password_service
        self._token_issuer = token_issuer
        self._user_bootstrap = user_bootstrap
        self._audit_log = audit_log
        self._logger = logger
        self._admin_email = admin_email.lower() if admin_email else None

    async def handle(
        self, cmd: RegisterUser
    ) -> Result[SessionResult, ConflictError | AuthenticationError]:
        """Handle user registration command.

        Args:
            cmd: RegisterUser command.

        Returns:
            Success(SessionResult) on registration.
            Failure(ConflictError) when the username or email is taken.
        """
        email = cmd.email.strip().lower()

        # Step 1: Uniqueness
        if await self._user_repo.exists(username=cmd.username, email=email):
            self._logger.info(
                "Registration rejected: identity taken", username=cmd.username
            )
            return Failure(error=identity_conflict())

        # Step 2: Hash password
        password_hash = self._password_service.hash_password(cmd.password)

        # Step 3: Role
        role = self._resolve_role(email, cmd.role)

        # Step 4: Persist (unique constraint catches concurrent registrations)
        user = await self._user_repo.save(
            User(
                id=uuid7(),
                username=cmd.username,
                email=email,
                password_hash=password_hash,
                role=role,
                first_name=cmd.first_name,
                last_name=cmd.last_name,
            )
        )
        if user is None:
            self._logger.info(
                "Registration rejected: identity taken concurrently",
                username=cmd.username,
            )
            return Failure(error=identity_conflict())

        # Step 5: Per-user defaults
        await self._user_bootstrap.ensure_user_defaults(user)

        # Step 6: First token pair
        issued = await self._token_issuer.issue_tokens(user, cmd.metadata)
        if isinstance(issued, Failure):
            return Failure(error=issued.error)
        tokens = issued.value

        # Step 7: Audit
        await self._audit_log.log(
            AuditAction.AUTH_REGISTER,
            user_id=user.id,
            resource_id=tokens.refresh_token_id,
            metadata=cmd.metadata,
            context={"username": user.username, "role": user.role.value},
        )
        self._logger.info(
            "User registered", user_id=str(user.id), role=user.role.value
        )

        # Step 8: Session
        return Success(value=SessionResult.build(user, tokens))

    def _resolve_role(self, email: str, requested: UserRole | None) -> UserRole:
        if self._admin_email and email == self._admin_email:
            return UserRole.ADMIN
        return requested or UserRole.USER
