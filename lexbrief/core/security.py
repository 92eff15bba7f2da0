"""Security utilities - bearer token authentication."""

import logging
from typing import Annotated, Any, Dict, Optional, Sequence

import jwt
from fastapi import Depends, Request

from lexbrief.core.config import Settings, get_settings
from lexbrief.core.exceptions import AuthError, AuthFailureKind

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class BearerAuthGuard:
    """Validates `Authorization: Bearer <jwt>` headers against a shared secret."""

    def __init__(
        self,
        secret: Optional[str],
        algorithms: Sequence[str] = ("HS256",),
        enabled: bool = True,
    ):
        self.secret = secret
        self.algorithms = list(algorithms)
        self.enabled = enabled

    @classmethod
    def from_settings(cls, settings: Settings) -> "BearerAuthGuard":
        return cls(
            secret=settings.jwt_secret,
            algorithms=settings.jwt_algorithms,
            enabled=settings.require_auth,
        )

    def authenticate(self, authorization: Optional[str]) -> Dict[str, Any]:
        """Verify an Authorization header value.

        Args:
            authorization: Raw header value, or None when the header is absent.

        Returns:
            Decoded token claims.

        Raises:
            AuthError: NO_TOKEN, INVALID_TOKEN, or INTERNAL_ERROR.
        """
        try:
            if not authorization or not authorization.startswith(BEARER_PREFIX):
                logger.warning("Request without bearer token")
                raise AuthError(AuthFailureKind.NO_TOKEN)

            token = authorization[len(BEARER_PREFIX):]

            if not self.secret:
                raise RuntimeError("JWT secret is not configured")

            try:
                claims = jwt.decode(token, self.secret, algorithms=self.algorithms)
            except jwt.InvalidTokenError as e:
                logger.warning(f"Invalid token rejected: {e}")
                raise AuthError(AuthFailureKind.INVALID_TOKEN)

            return claims

        except AuthError:
            raise
        except Exception as e:
            logger.exception(f"Auth guard error: {e}")
            raise AuthError(AuthFailureKind.INTERNAL_ERROR)

    async def __call__(self, request: Request) -> Dict[str, Any]:
        if not self.enabled:
            logger.debug("Authentication is disabled - allowing anonymous access")
            request.state.user = {}
            return {}

        claims = self.authenticate(request.headers.get("Authorization"))
        request.state.user = claims
        return claims


def get_auth_guard(
    settings: Annotated[Settings, Depends(get_settings)],
) -> BearerAuthGuard:
    """Build the guard from application settings."""
    return BearerAuthGuard.from_settings(settings)


async def require_principal(
    request: Request,
    guard: Annotated[BearerAuthGuard, Depends(get_auth_guard)],
) -> Dict[str, Any]:
    """Dependency that authenticates the request and returns its claims."""
    return await guard(request)


# Type alias for dependency injection
PrincipalDep = Annotated[Dict[str, Any], Depends(require_principal)]
