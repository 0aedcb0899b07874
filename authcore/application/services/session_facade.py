"""SessionFacade - the public surface of the session lifecycle manager.

Each write operation builds a command and delegates to its handler. Reads
(validate_user, verify_access_token) and widget token issue are served
directly.

Usage:
    facade = build_session_facade(session)
    result = await facade.login(
        LoginRequest(username="alice", password="s3cret!"),
        RequestMetadata(ip_address="10.0.0.1"),
    )
    match result:
        case Success(value=session_result):
            body = session_result.to_response()
        case Failure(error=error):
            ...
"""

from uuid import UUID

from authcore.application.commands.auth_commands import (
    LoginUser,
    LogoutAllSessions,
    LogoutUser,
    RefreshSession,
    RegisterUser,
    RequestMetadata,
)
from authcore.application.commands.handlers import (
    LoginUserHandler,
    LogoutAllSessionsHandler,
    LogoutUserHandler,
    RefreshSessionHandler,
    RegisterUserHandler,
)
from authcore.application.dtos import PublicUserView, SessionResult, WidgetToken
from authcore.application.errors import user_unavailable
from authcore.application.services.token_issuer import TokenIssuer
from authcore.core.errors import AuthenticationError, ConflictError, DomainError
from authcore.core.result import Failure, Result, Success
from authcore.domain.entities.user import User
from authcore.domain.protocols import (
    AccessTokenClaims,
    AccessTokenServiceProtocol,
    UserRepository,
)
from authcore.schemas.auth_schemas import LoginRequest, RegisterRequest


class SessionFacade:
    """Register, login, refresh and logout, plus session helpers."""

    def __init__(
        self,
        *,
        register_handler: RegisterUserHandler,
        login_handler: LoginUserHandler,
        refresh_handler: RefreshSessionHandler,
        logout_handler: LogoutUserHandler,
        logout_all_handler: LogoutAllSessionsHandler,
        user_repo: UserRepository,
        token_issuer: TokenIssuer,
        token_service: AccessTokenServiceProtocol,
    ) -> None:
        self._register_handler = register_handler
        self._login_handler = login_handler
        self._refresh_handler = refresh_handler
        self._logout_handler = logout_handler
        self._logout_all_handler = logout_all_handler
        self._user_repo = user_repo
        self._token_issuer = token_issuer
        self._token_service = token_service

    async def register(
        self,
        request: RegisterRequest,
        metadata: RequestMetadata | None = None,
    ) -> Result[SessionResult, ConflictError | AuthenticationError]:
        """Create an account and its first session."""
        return await self._register_handler.handle(
            RegisterUser(
                username=request.username,
                email=str(request.email),
                password=request.password,
                first_name=request.first_name,
                last_name=request.last_name,
                role=request.role,
                metadata=metadata or RequestMetadata(),
            )
        )

    async def login(
        self,
        request: LoginRequest,
        metadata: RequestMetadata | None = None,
    ) -> Result[SessionResult, AuthenticationError]:
        """Start a session by username or email."""
        return await self._login_handler.handle(
            LoginUser(
                identity=request.username,
                password=request.password,
                metadata=metadata or RequestMetadata(),
            )
        )

    async def refresh_session(
        self,
        refresh_token: str | None,
        metadata: RequestMetadata | None = None,
    ) -> Result[SessionResult, AuthenticationError]:
        """Rotate a refresh token into a new token pair."""
        return await self._refresh_handler.handle(
            RefreshSession(
                refresh_token=refresh_token,
                metadata=metadata or RequestMetadata(),
            )
        )

    async def logout(
        self,
        user_id: UUID | None,
        refresh_token: str | None,
        metadata: RequestMetadata | None = None,
    ) -> Result[None, DomainError]:
        """End one session. Succeeds even when there is nothing to revoke."""
        return await self._logout_handler.handle(
            LogoutUser(
                user_id=user_id,
                refresh_token=refresh_token,
                metadata=metadata or RequestMetadata(),
            )
        )

    async def logout_all(
        self,
        user_id: UUID,
        metadata: RequestMetadata | None = None,
    ) -> Result[int, DomainError]:
        """End every session of a user; returns how many were revoked."""
        return await self._logout_all_handler.handle(
            LogoutAllSessions(user_id=user_id, metadata=metadata or RequestMetadata())
        )

    async def validate_user(
        self, user_id: UUID
    ) -> Result[PublicUserView, AuthenticationError]:
        """Return the public view of an active user."""
        user = await self._active_user(user_id)
        if user is None:
            return Failure(error=user_unavailable())
        return Success(value=PublicUserView.from_user(user))

    def verify_access_token(
        self, token: str
    ) -> Result[AccessTokenClaims, AuthenticationError]:
        """Check signature, expiry, issuer and audience of an access token."""
        return self._token_service.validate_access_token(token)

    async def issue_widget_token(
        self, user_id: UUID
    ) -> Result[WidgetToken, AuthenticationError]:
        """Issue a widget-scoped access token for an active user."""
        user = await self._active_user(user_id)
        if user is None:
            return Failure(error=user_unavailable())
        return Success(value=self._token_issuer.issue_widget_token(user))

    async def _active_user(self, user_id: UUID) -> User | None:
        user = await self._user_repo.find_by_id(user_id)
        if user is None or not user.can_authenticate():
            return None
        return user
