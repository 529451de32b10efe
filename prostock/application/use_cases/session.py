"""Session use cases: login, logout and restoring a persisted session."""

from dataclasses import dataclass

from pydantic import ValidationError as PydanticValidationError

from prostock.application.context import AppContext
from prostock.application.dto.requests import LoginRequest
from prostock.config import get_logger
from prostock.core.entities import User
from prostock.core.exceptions import InvalidCredentialsError, MissingFieldError
from prostock.core.services import RefreshOutcome

logger = get_logger(__name__)


@dataclass
class SessionResult:
    """User now signed in and how the follow-up refresh went."""

    user: User | None
    refresh: RefreshOutcome | None = None


class LoginUseCase:
    """Check credentials with the backend, persist the session, load data."""

    def __init__(self, context: AppContext):
        self._ctx = context

    async def execute(self, request: LoginRequest) -> SessionResult:
        username = request.username.strip()
        if not username:
            raise MissingFieldError("username")
        if not request.password:
            raise MissingFieldError("password")

        logger.info("login_started", username=username)

        user = await self._ctx.backend.login(username, request.password)
        if user is None:
            logger.info("login_rejected", username=username)
            raise InvalidCredentialsError(username)

        user = user.without_secret()
        await self._ctx.state_store.set(
            self._ctx.settings.storage.session_key,
            user.model_dump_json(),
        )
        self._ctx.sign_in(user)
        self._ctx.notifier.success(f"Welcome back, {user.name or user.username}")

        outcome = await self._ctx.cache.refresh()
        logger.info("login_complete", username=username, refresh=outcome.value)
        return SessionResult(user=user, refresh=outcome)


class LogoutUseCase:
    """Drop the persisted session and all session state."""

    def __init__(self, context: AppContext):
        self._ctx = context

    async def execute(self) -> None:
        await self._ctx.cache.wait_idle()
        await self._ctx.state_store.delete(self._ctx.settings.storage.session_key)
        self._ctx.sign_out()


class RestoreSessionUseCase:
    """Resume a session saved by an earlier login, if any."""

    def __init__(self, context: AppContext):
        self._ctx = context

    async def execute(self) -> SessionResult:
        key = self._ctx.settings.storage.session_key
        raw = await self._ctx.state_store.get(key)
        if raw is None:
            return SessionResult(user=None)

        try:
            user = User.model_validate_json(raw)
        except PydanticValidationError:
            logger.warning("stored_session_invalid", key=key)
            await self._ctx.state_store.delete(key)
            return SessionResult(user=None)

        self._ctx.sign_in(user)
        outcome = await self._ctx.cache.refresh()
        logger.info("session_restored", username=user.username, refresh=outcome.value)
        return SessionResult(user=user, refresh=outcome)
