"""Session token issue and verification (HS256 JWT)."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

import jwt
import structlog

from mooza.core.config import Settings, get_settings

logger = structlog.get_logger(__name__)

ACCESS_TOKEN_TYPE = "access"


class TokenManager:
    """Signs and checks caller tokens; the subject is the user id."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def create_access_token(
        self,
        user_id: str,
        extra_claims: Optional[Dict[str, Any]] = None,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        issued_at = datetime.now(timezone.utc)
        lifetime = expires_delta or timedelta(minutes=self.settings.ACCESS_TOKEN_EXPIRE_MINUTES)

        claims: Dict[str, Any] = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + lifetime,
            "jti": uuid4().hex,
            "token_type": ACCESS_TOKEN_TYPE,
        }
        claims.update(extra_claims or {})
        return jwt.encode(claims, self.settings.SECRET_KEY, algorithm=self.settings.JWT_ALGORITHM)

    def verify_token(self, token: str) -> Optional[Dict[str, Any]]:
        """Decoded claims, or None for an expired, forged or non-access token."""
        try:
            claims = jwt.decode(
                token,
                self.settings.SECRET_KEY,
                algorithms=[self.settings.JWT_ALGORITHM],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Expired token presented")
            return None
        except jwt.PyJWTError as e:
            logger.warning("Token rejected", reason=str(e))
            return None

        token_type = claims.get("token_type", ACCESS_TOKEN_TYPE)
        if token_type != ACCESS_TOKEN_TYPE:
            logger.warning("Token rejected", reason="wrong type", token_type=token_type)
            return None
        return claims


__all__ = ["TokenManager"]
