"""Request-scoped dependencies: settings and the authenticated caller."""

from typing import Annotated, Optional

import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from mooza.core.config import Settings, get_settings
from mooza.utils.security import TokenManager

logger = structlog.get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class CurrentUser(BaseModel):
    """Caller resolved from the bearer token."""

    user_id: str


def get_settings_dependency() -> Settings:
    return get_settings()


def get_token_manager(settings: Annotated[Settings, Depends(get_settings_dependency)]) -> TokenManager:
    return TokenManager(settings)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    token_manager: TokenManager = Depends(get_token_manager),
) -> CurrentUser:
    """Every search endpoint requires a valid session token."""
    if credentials is None:
        raise _unauthorized("Authentication required")

    claims = token_manager.verify_token(credentials.credentials)
    subject = claims.get("sub") if claims else None
    if not subject:
        logger.info("Rejected bearer token")
        raise _unauthorized("Invalid or expired token")

    return CurrentUser(user_id=str(subject))


CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]

__all__ = [
    "CurrentUser",
    "CurrentUserDep",
    "SettingsDep",
    "get_current_user",
    "get_settings_dependency",
    "get_token_manager",
]
