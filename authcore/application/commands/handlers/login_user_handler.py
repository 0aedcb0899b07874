"""Login user handler.

Flow:
1. Resolve user by username or email
2. Refuse a locked account (or unknown identity) before verifying the password
3. Verify password
4. Check account active
5. Reset the failure counter
6. Issue a token pair
7. Audit auth.login.success
8. Return Success(SessionResult)

On failure:
- Unknown identity and wrong password count toward the lockout
- Counters are keyed by user id once the identity resolves, so username
  and email logins of one account share a single counter
- Every failure is audited as auth.login.failure with its reason
- The caller only ever sees "Invalid credentials" (or the lockout message)

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols)
- NO infrastructure imports (repositories are injected via protocols)
"""

from uuid import UUID

from authcore.application.commands.auth_commands import LoginUser
from authcore.application.dtos import SessionResult
from authcore.application.errors import account_locked, invalid_credentials
from authcore.application.services.security_audit_log import SecurityAuditLog
from authcore.application.services.token_issuer import TokenIssuer
from authcore.core.errors import AuthenticationError
from authcore.core.result import Failure, Result, Success
from authcore.domain.entities.user import User
from authcore.domain.enums import AuditAction
from authcore.domain.protocols import (
    LoggerProtocol,
    LoginAttemptTrackerProtocol,
    PasswordHashingProtocol,
    UserRepository,
)


class LoginFailureReason:
    """Login failure reasons (audit and logs only, never shown to callers)."""

    USER_NOT_FOUND = "user_not_found"
    BAD_PASSWORD = "bad_password"
    ACCOUNT_INACTIVE = "account_inactive"
    LOCKED = "locked"


def attempt_subject(identity: str, user: User | None) -> str:
    """Key failed logins by account when the identity resolves.

    Username and email of one account share a counter, and two accounts
    whose usernames differ only by case never do. Unknown identities are
    counted by the identity as typed.
    """
    return str(user.id) if user is not None else identity


class LoginUserHandler:
    """Handler for login command."""

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        token_issuer: TokenIssuer,
        login_attempts: LoginAttemptTrackerProtocol,
        audit_log: SecurityAuditLog,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize login handler with dependencies.

        Args:
            user_repo: User repository.
            password_service: Password verification service.
            token_issuer: Issues the token pair.
            login_attempts: Failed-login tracker.
            audit_log: Security audit trail.
            logger: Structured logger.
        """
        self._user_repo = user_repo
        self._password_service = password_service
        self._token_issuer = token_issuer
        self._login_attempts = login_attempts
        self._audit_log = audit_log
        self._logger = logger

    async def handle(
        self, cmd: LoginUser
    ) -> Result[SessionResult, AuthenticationError]:
        """Handle login command.

        Args:
            cmd: LoginUser command (identity and password).

        Returns:
            Success(SessionResult) on successful login.
            Failure(AuthenticationError) otherwise.
        """
        origin = cmd.metadata.ip_address

        # Step 1: Resolve user
        user = await self._user_repo.find_by_identity(cmd.identity)
        subject = attempt_subject(cmd.identity, user)

        # Step 2: Lockout
        state = await self._login_attempts.get_state(subject, origin)
        if state.is_locked():
            await self._audit_failure(
                cmd,
                reason=LoginFailureReason.LOCKED,
                user_id=user.id if user else None,
                failure_count=state.failure_count,
            )
            return Failure(error=account_locked())

        if user is None:
            # Same bcrypt cost as a real verification
            self._password_service.hash_password(cmd.password)
            return await self._fail(
                cmd, subject, reason=LoginFailureReason.USER_NOT_FOUND, user_id=None
            )

        # Step 3: Verify password
        if not self._password_service.verify_password(
            cmd.password, user.password_hash
        ):
            return await self._fail(
                cmd, subject, reason=LoginFailureReason.BAD_PASSWORD, user_id=user.id
            )

        # Step 4: Active account
        if not user.can_authenticate():
            await self._audit_failure(
                cmd, reason=LoginFailureReason.ACCOUNT_INACTIVE, user_id=user.id
            )
            return Failure(
                error=invalid_credentials(LoginFailureReason.ACCOUNT_INACTIVE)
            )

        # Step 5: Reset failures
        await self._login_attempts.reset(subject, origin)

        # Step 6: Token pair
        issued = await self._token_issuer.issue_tokens(user, cmd.metadata)
        if isinstance(issued, Failure):
            return Failure(error=issued.error)
        tokens = issued.value

        # Step 7: Audit
        await self._audit_log.log(
            AuditAction.AUTH_LOGIN_SUCCESS,
            user_id=user.id,
            resource_id=tokens.refresh_token_id,
            metadata=cmd.metadata,
            context={"jti": tokens.jti},
        )
        self._logger.info("User logged in", user_id=str(user.id), jti=tokens.jti)

        # Step 8: Session
        return Success(value=SessionResult.build(user, tokens))

    async def _fail(
        self,
        cmd: LoginUser,
        subject: str,
        *,
        reason: str,
        user_id: UUID | None,
    ) -> Failure[AuthenticationError]:
        """Count the failure, audit it and return the uniform error."""
        state = await self._login_attempts.register_failure(
            subject, cmd.metadata.ip_address
        )
        await self._audit_failure(
            cmd, reason=reason, user_id=user_id, failure_count=state.failure_count
        )
        if state.is_locked():
            self._logger.warning(
                "Login identity locked",
                identity=cmd.identity,
                failure_count=state.failure_count,
            )
        return Failure(error=invalid_credentials(reason))

    async def _audit_failure(
        self,
        cmd: LoginUser,
        *,
        reason: str,
        user_id: UUID | None,
        failure_count: int | None = None,
    ) -> None:
        self._logger.info(
            "Login failed",
            reason=reason,
            user_id=str(user_id) if user_id else None,
        )
        context: dict[str, str | int] = {"identity": cmd.identity, "reason": reason}
        if failure_count is not None:
            context["failure_count"] = failure_count
        await self._audit_log.log(
            AuditAction.AUTH_LOGIN_FAILURE,
            user_id=user_id,
            metadata=cmd.metadata,
            context=context,
        )
