"""
Authentication and the in-memory session it maintains.

The session lives in a ``SessionHolder`` owned by one ``AuthClient``. Only this
module mutates it. Concurrent auth calls are last-writer-wins: the holder ends
up with whichever response resolved last.
"""

from __future__ import annotations
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

from loguru import logger
from pydantic import BaseModel, ValidationError

from .errors import ApiError, INVALID_RESPONSE, InvalidSessionError, NO_SESSION
from .result import Err, Ok, Result, and_then
from .transport import HttpClient, drop_none
from .types import Session, User

M = TypeVar("M", bound=BaseModel)


class SessionHolder:
    """Single slot holding the current session, if any."""

    def __init__(self) -> None:
        self._session: Optional[Session] = None

    @property
    def session(self) -> Optional[Session]:
        return self._session

    def replace(self, session: Session) -> None:
        self._session = session
        logger.debug("Session adopted", user_id=session.user.id)

    def clear(self) -> None:
        if self._session is not None:
            logger.debug("Session cleared", user_id=self._session.user.id)
        self._session = None


def _validated(result: Result[Any], model: Type[M]) -> Result[M]:
    def parse(payload: Any) -> Result[M]:
        try:
            return Ok(model.model_validate(payload))
        except ValidationError as e:
            logger.warning("Unexpected response shape", model=model.__name__, errors=e.error_count())
            return Err(ApiError(message=f"Invalid {model.__name__.lower()} payload", code=INVALID_RESPONSE))

    return and_then(result, parse)


def _no_session(message: str) -> Err:
    return Err(ApiError(message=message, code=NO_SESSION))


class AuthClient:
    """Sign-up, sign-in and account operations for a project's users."""

    def __init__(self, client: HttpClient):
        self._client = client
        self._holder = SessionHolder()

    @property
    def _base_path(self) -> str:
        return self._client.project_path("auth")

    def _bearer(self, session: Session) -> Dict[str, str]:
        return {"Authorization": f"Bearer {session.access_token}"}

    def _adopt(self, result: Result[Any]) -> Result[Session]:
        validated = _validated(result, Session)
        if isinstance(validated, Ok):
            self._holder.replace(validated.data)
        return validated

    # =========================================================================
    # Session state
    # =========================================================================

    def get_session(self) -> Optional[Session]:
        """Get the current session."""
        return self._holder.session

    def get_user(self) -> Optional[User]:
        """Get the current user."""
        session = self._holder.session
        return session.user if session else None

    def set_session(self, session: Union[Session, Mapping[str, Any], None]) -> None:
        """Replace the session outright, e.g. with tokens restored from storage.

        Passing ``None`` clears it.

        Raises:
            InvalidSessionError: ``session`` is a mapping that is not a valid session.
        """
        if session is None:
            self._holder.clear()
        elif isinstance(session, Session):
            self._holder.replace(session)
        else:
            try:
                parsed = Session.model_validate(session)
            except ValidationError as e:
                raise InvalidSessionError(f"{e.error_count()} invalid field(s)") from e
            self._holder.replace(parsed)

    # =========================================================================
    # Sign-up / sign-in
    # =========================================================================

    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Result[Dict[str, Any]]:
        """
        Start registration: the service emails a one-time code.

        No session is issued here; complete the flow with ``verify_sign_up``.
        """
        return await self._client.request(
            f"{self._base_path}/signup",
            method="POST",
            body=drop_none({"email": email, "password": password, "user_metadata": metadata}),
        )

    async def verify_sign_up(self, email: str, code: str) -> Result[Session]:
        """Finish registration with the emailed code and sign the user in."""
        result = await self._client.request(
            f"{self._base_path}/verify-signup",
            method="POST",
            body={"email": email, "code": code},
        )
        return self._adopt(result)

    async def sign_in(self, email: str, password: str) -> Result[Session]:
        """Sign in with email and password."""
        result = await self._client.request(
            f"{self._base_path}/signin",
            method="POST",
            body={"email": email, "password": password},
        )
        return self._adopt(result)

    async def sign_out(self) -> Result[Dict[str, Any]]:
        """Sign out the current user.

        The local session is cleared even if the remote call fails.
        """
        session = self._holder.session
        if session is None:
            return Ok({"success": True})

        result = await self._client.request(
            f"{self._base_path}/signout",
            method="POST",
            headers=self._bearer(session),
        )
        self._holder.clear()
        return result

    async def refresh_session(self) -> Result[Session]:
        """Exchange the held refresh token for a new session."""
        session = self._holder.session
        if session is None or not session.refresh_token:
            return _no_session("No refresh token available")

        result = await self._client.request(
            f"{self._base_path}/refresh",
            method="POST",
            body={"refresh_token": session.refresh_token},
        )
        return self._adopt(result)

    # =========================================================================
    # Password recovery (stateless)
    # =========================================================================

    async def reset_password_for_email(self, email: str) -> Result[Dict[str, Any]]:
        """Send a password recovery email."""
        return await self._client.request(
            f"{self._base_path}/recover-password",
            method="POST",
            body={"email": email},
        )

    async def update_password(self, token: str, password: str) -> Result[Dict[str, Any]]:
        """Set a new password using a recovery token."""
        return await self._client.request(
            f"{self._base_path}/reset-password",
            method="POST",
            body={"token": token, "password": password},
        )

    # =========================================================================
    # Current user
    # =========================================================================

    async def get_profile(self) -> Result[User]:
        session = self._holder.session
        if session is None or not session.access_token:
            return _no_session("No active session")

        result = await self._client.request(
            f"{self._base_path}/user",
            headers=self._bearer(session),
        )
        return _validated(result, User)

    async def update_user(
        self,
        email: Optional[str] = None,
        password: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Result[User]:
        session = self._holder.session
        if session is None or not session.access_token:
            return _no_session("No active session")

        result = await self._client.request(
            f"{self._base_path}/user",
            method="PUT",
            body=drop_none({"email": email, "password": password, "metadata": metadata}),
            headers=self._bearer(session),
        )
        return _validated(result, User)

    async def delete_user(self) -> Result[Dict[str, Any]]:
        """Delete the signed-in account; on success the session is cleared."""
        session = self._holder.session
        if session is None or not session.access_token:
            return _no_session("No active session")

        result = await self._client.request(
            f"{self._base_path}/user",
            method="DELETE",
            headers=self._bearer(session),
        )
        if isinstance(result, Ok):
            self._holder.clear()
        return result
