"""Email/password identity backed by Supabase auth."""

from __future__ import annotations

import logging
from typing import Any, Callable

from supabase import Client

from fittrack.services.errors import AuthenticationError


logger = logging.getLogger(__name__)

AuthStateHandler = Callable[[str, Any], None]

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"
TOKEN_REFRESHED = "TOKEN_REFRESHED"


class AuthService:
    def __init__(self, client: Client) -> None:
        self._client = client

    def sign_up(self, email: str, password: str) -> Any:
        logger.info("Attempting sign-up for %s", email)
        try:
            response = self._client.auth.sign_up({"email": email, "password": password})
        except Exception as exc:
            logger.error("Sign-up failed for %s: %s", email, exc)
            raise AuthenticationError(f"Sign-up failed: {exc}") from exc
        logger.info("Sign-up successful for %s", email)
        return response

    def sign_in(self, email: str, password: str) -> Any:
        logger.info("Attempting sign-in for %s", email)
        try:
            response = self._client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as exc:
            logger.error("Sign-in failed for %s: %s", email, exc)
            raise AuthenticationError(f"Sign-in failed: {exc}") from exc
        logger.info("Sign-in successful for %s", email)
        return response

    def sign_out(self) -> None:
        try:
            self._client.auth.sign_out()
        except Exception as exc:
            logger.error("Sign-out failed: %s", exc)
            raise AuthenticationError(f"Sign-out failed: {exc}") from exc
        logger.info("Sign-out successful")

    def get_session(self) -> Any | None:
        """Return the active session, or ``None`` when signed out or unreachable."""
        try:
            session = self._client.auth.get_session()
        except Exception as exc:
            logger.error("Get session failed: %s", exc)
            return None
        if session is None:
            logger.debug("No active session")
        return session

    def get_current_user(self) -> Any | None:
        try:
            response = self._client.auth.get_user()
        except Exception as exc:
            logger.error("Get user failed: %s", exc)
            return None
        if response is None:
            return None
        return response.user

    def on_auth_state_change(self, handler: AuthStateHandler) -> Any:
        """Register ``handler(event, session)``; returns a subscription with ``unsubscribe()``."""

        def _relay(event: Any, session: Any) -> None:
            name = getattr(event, "value", event)
            logger.info("Auth state changed: %s", name)
            handler(str(name), session)

        return self._client.auth.on_auth_state_change(_relay)
