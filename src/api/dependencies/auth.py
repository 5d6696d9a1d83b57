"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies.services import get_admin_resolution_service
from core.exceptions import AuthenticationError, AuthorizationError, ErrorCode
from domain.services.admin_resolution_service import AdminResolution, AdminResolutionService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser

# Security scheme for OpenAPI docs
security = HTTPBearer(auto_error=False)

# Singleton auth provider
_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> JWTAuthProvider:
    """Get or create the auth provider singleton."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """
    Dependency to get the current authenticated user.

    Raises:
        AuthenticationError: If no token provided or token is invalid
    """
    if not credentials:
        raise AuthenticationError(
            message="Authorization header required",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    user = await auth_provider.validate_token(credentials.credentials)

    if not user:
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    return user


async def get_admin_resolution(
    user: Annotated[TokenUser, Depends(get_current_user)],
    resolver: AdminResolutionService = Depends(get_admin_resolution_service),
) -> AdminResolution:
    """Resolve the caller's role from the allow-list and stored profile."""
    return await resolver.resolve(user.id, user.email, user.display_name)


async def require_admin(
    user: Annotated[TokenUser, Depends(get_current_user)],
    resolution: Annotated[AdminResolution, Depends(get_admin_resolution)],
) -> TokenUser:
    """
    Dependency for admin console routes.

    Raises:
        AuthorizationError: If the caller is not an administrator
    """
    if not resolution.is_admin:
        raise AuthorizationError("Administrator access required")
    return user


# Type aliases for convenience in route handlers
CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
AdminUser = Annotated[TokenUser, Depends(require_admin)]
