"""Bearer-token verification backends."""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol

import firebase_admin
from firebase_admin import auth as firebase_auth
from firebase_admin import exceptions as firebase_exceptions
from starlette.concurrency import run_in_threadpool

from leaguepanel.errors import AuthenticationError


logger = logging.getLogger("uvicorn.error")

MISSING_TOKEN_MESSAGE = "Unauthorized: No token provided."
INVALID_TOKEN_MESSAGE = "Unauthorized: Invalid or expired token."
NOT_ADMIN_MESSAGE = "Forbidden: User is not an admin."


@dataclass(frozen=True)
class Identity:
    uid: str
    claims: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_admin(self) -> bool:
        return bool(self.claims.get("admin"))


class AuthGateway(Protocol):
    async def verify(self, token: str) -> Identity: ...


class FirebaseAuthGateway:
    """Verify Firebase ID tokens with the Admin SDK."""

    def __init__(self, app: firebase_admin.App):
        self._app = app

    async def verify(self, token: str) -> Identity:
        try:
            decoded = await run_in_threadpool(firebase_auth.verify_id_token, token, app=self._app)
        except (ValueError, firebase_exceptions.FirebaseError) as exc:
            logger.warning("Error verifying Firebase ID token: %s", exc)
            raise AuthenticationError(INVALID_TOKEN_MESSAGE, status_code=403) from exc
        return Identity(uid=decoded["uid"], claims=decoded)


class StaticTokenGateway:
    """Shared-secret tokens for local development and tests."""

    def __init__(self, tokens: Mapping[str, str]):
        self._tokens = dict(tokens)

    async def verify(self, token: str) -> Identity:
        for candidate, uid in self._tokens.items():
            if hmac.compare_digest(candidate.encode(), token.encode()):
                return Identity(uid=uid, claims={"uid": uid, "admin": True})
        raise AuthenticationError(INVALID_TOKEN_MESSAGE, status_code=403)


async def authenticate(
    gateway: AuthGateway,
    token: str | None,
    *,
    require_admin: bool = False,
) -> Identity:
    """Resolve ``token`` to an identity or raise ``AuthenticationError``."""
    if not token:
        raise AuthenticationError(MISSING_TOKEN_MESSAGE, status_code=401)
    identity = await gateway.verify(token)
    if require_admin and not identity.is_admin:
        raise AuthenticationError(NOT_ADMIN_MESSAGE, status_code=403)
    logger.info("User authenticated: %s", identity.uid)
    return identity
