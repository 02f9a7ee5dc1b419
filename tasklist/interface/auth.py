"""Bearer token verification and owner resolution for the tasks API."""

import logging
from typing import Any

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.concurrency import run_in_threadpool

from tasklist.core.config import Settings, constants
from tasklist.core.errors import UnauthorizedError
from tasklist.domain.user import User
from tasklist.interface.dependencies import get_user_service
from tasklist.services.user_service import UserService


logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class TokenVerifier:
    """Verify identity provider JWTs.

    Uses the issuer's JWKS endpoint (RS256) when ``auth_jwks_url`` is configured,
    otherwise the shared ``auth_secret`` (HS256). Only the algorithm of the
    active mode is accepted.
    """

    def __init__(self, settings: Settings) -> None:
        self._secret = settings.auth_secret
        self._audience = settings.auth_audience
        self._issuer = settings.auth_issuer
        self._jwks_client = jwt.PyJWKClient(settings.auth_jwks_url) if settings.auth_jwks_url else None
        self._algorithms = ["RS256"] if self._jwks_client is not None else ["HS256"]

    async def _signing_key(self, token: str) -> Any:
        if self._jwks_client is not None:
            signing_key = await run_in_threadpool(self._jwks_client.get_signing_key_from_jwt, token)
            return signing_key.key
        if self._secret:
            return self._secret
        raise UnauthorizedError("Token verification is not configured")

    async def verify(self, token: str) -> dict[str, Any]:
        """Decode and validate a token, returning its claims.

        Raises:
            UnauthorizedError: If the token is malformed, expired, or fails signature,
                audience or issuer checks
        """
        try:
            key = await self._signing_key(token)
            return jwt.decode(
                token,
                key,
                algorithms=self._algorithms,
                audience=self._audience,
                issuer=self._issuer,
                options={"verify_aud": self._audience is not None},
            )
        except jwt.PyJWTError as e:
            logger.warning("token_verification_failed", extra={"error": str(e)})
            raise UnauthorizedError from e


async def get_token_claims(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict[str, Any]:
    """Return the verified claim set of the request's bearer token."""
    if credentials is None:
        logger.warning("auth_missing_bearer", extra={"path": request.url.path})
        raise UnauthorizedError

    verifier: TokenVerifier = request.app.state.token_verifier
    return await verifier.verify(credentials.credentials)


def _claim_text(claims: dict[str, Any], key: str, default: str) -> str:
    """String claim value, or ``default`` when absent, blank or not a string."""
    value = claims.get(key)
    if isinstance(value, str) and value.strip():
        return value
    return default


async def get_current_user(
    claims: dict[str, Any] = Depends(get_token_claims),
    user_service: UserService = Depends(get_user_service),
) -> User:
    """Map the token subject to a user row, creating it on first login.

    Missing or non-string email and name claims fall back to placeholders; they only matter
    for the very first request of a subject.
    """
    auth0_id = claims.get("sub")
    if not isinstance(auth0_id, str) or not auth0_id:
        logger.warning("auth_missing_subject")
        raise UnauthorizedError

    email = _claim_text(claims, "email", constants.DEFAULT_USER_EMAIL)
    name = _claim_text(claims, "name", constants.DEFAULT_USER_NAME)
    return await user_service.find_or_create_user(auth0_id, email, name)


async def get_current_user_id(user: User = Depends(get_current_user)) -> str:
    """Owner id used to scope every task query."""
    return user.id
