"""
JWT issuance and validation.

Access tokens carry the user's username as subject and live for 30
minutes. Refresh tokens carry a random UUID subject, live for 14 days
and are paired with the owning user id in a ``RefreshToken`` record the
caller persists. Both are signed HS256 with the key held by a
``JwtConfig`` that is built once at startup and never changes.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Protocol
import base64
import uuid

from jose import jwt, JWTError
from jose.exceptions import JWTClaimsError
from pydantic import BaseModel, ConfigDict, SecretStr, ValidationError

from ..core.errors import (
    ConfigurationError,
    ExpiredTokenError,
    InvalidSignatureError,
    MalformedTokenError,
    UnknownIdentityError,
)
from ..core.logging import get_logger
from ..core.settings import Settings
from ..models.RefreshToken import RefreshToken, TokenPayload
from .identity import AuthenticatedIdentity, IdentityLookup

logger = get_logger("carpool.auth.jwt")

# HS256 needs at least a 256-bit key
MIN_HMAC_KEY_BYTES = 32

REQUIRED_CLAIMS = ("sub", "iat", "exp")


class JwtConfig(BaseModel):
    """Signing key plus the header/prefix and validity windows. Immutable."""
    model_config = ConfigDict(frozen=True)

    key: SecretStr
    header: str = "Authorization"
    prefix: str = "Bearer "
    algorithm: str = "HS256"
    access_token_validity: timedelta = timedelta(minutes=30)
    refresh_token_validity: timedelta = timedelta(days=14)

    @classmethod
    def from_secret(cls, secret: str | None, **kwargs) -> "JwtConfig":
        """
        Encodes the raw secret to base64 once; the encoded text is the
        HMAC key.
        """
        if not secret:
            raise ConfigurationError("jwt.secret is not configured")

        encoded = base64.b64encode(secret.encode("utf-8")).decode("ascii")
        if len(encoded.encode("utf-8")) < MIN_HMAC_KEY_BYTES:
            raise ConfigurationError(
                "jwt.secret is too short for HS256",
                details={"min_key_bytes": MIN_HMAC_KEY_BYTES},
            )
        return cls(key=SecretStr(encoded), **kwargs)

    @classmethod
    def from_settings(cls, settings: Settings) -> "JwtConfig":
        return cls.from_secret(
            settings.JWT_SECRET,
            header=settings.JWT_RESPONSE_HEADER,
            prefix=settings.JWT_TOKEN_PREFIX,
            access_token_validity=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            refresh_token_validity=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        )


class HasHeaders(Protocol):
    headers: Any


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class JwtTokenProvider:
    """
    Mints and validates tokens against one JwtConfig. The clock is used
    both for issuing and for the expiry check on validation.
    """

    def __init__(
        self,
        config: JwtConfig,
        identity_lookup: IdentityLookup | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.config = config
        self.identity_lookup = identity_lookup
        self.clock = clock

    def _now(self) -> datetime:
        # NumericDate has second precision
        return self.clock().replace(microsecond=0)

    def _sign(self, subject: str, validity: timedelta) -> str:
        now = self._now()
        claims = {
            "sub": subject,
            "iat": int(now.timestamp()),
            "exp": int((now + validity).timestamp()),
        }
        return jwt.encode(claims, self.config.key.get_secret_value(), algorithm=self.config.algorithm)

    def create_access_token(self, user) -> str:
        token = self._sign(user.username, self.config.access_token_validity)
        logger.debug("Issued access token", user_id=getattr(user, "id", None))
        return token

    def create_refresh_token(self, user) -> RefreshToken:
        """
        The signed key carries a random subject; only the stored record
        links it to the user.
        """
        key = self._sign(str(uuid.uuid4()), self.config.refresh_token_validity)
        logger.debug("Issued refresh token", user_id=user.id)
        return RefreshToken(key=key, value=user.id)

    def _decode(self, token: str) -> TokenPayload:
        """
        Verifies the signature first, then that sub/iat/exp are present and
        well typed, then expiry against the provider's clock.
        """
        if not token:
            raise MalformedTokenError("Empty token")

        try:
            jwt.get_unverified_claims(token)
        except JWTError as e:
            logger.warning("Rejected malformed token", reason=str(e))
            raise MalformedTokenError(details={"reason": str(e)})

        try:
            claims = jwt.decode(
                token,
                self.config.key.get_secret_value(),
                algorithms=[self.config.algorithm],
                # Expiry is checked below so it follows the injected clock
                options={"verify_exp": False},
            )
        except JWTClaimsError as e:
            logger.warning("Rejected token with invalid claims", reason=str(e))
            raise MalformedTokenError(details={"reason": str(e)})
        except JWTError as e:
            logger.warning("Rejected token with invalid signature", reason=str(e))
            raise InvalidSignatureError(details={"reason": str(e)})

        missing = [claim for claim in REQUIRED_CLAIMS if claims.get(claim) in (None, "")]
        if missing:
            logger.warning("Rejected token with missing claims", missing=missing)
            raise MalformedTokenError("Token is missing required claims", details={"missing": missing})

        try:
            token_data = TokenPayload(**claims)
        except ValidationError as e:
            logger.warning("Rejected token with invalid claim types", errors=e.error_count())
            raise MalformedTokenError(
                "Token claims have invalid types",
                details={"errors": e.errors(include_url=False, include_context=False, include_input=False)},
            )

        if token_data.exp < int(self._now().timestamp()):
            logger.info("Rejected expired token")
            raise ExpiredTokenError()
        return token_data

    def get_username(self, token: str) -> str:
        return self._decode(token).sub

    def validate_refresh_token(self, key: str) -> TokenPayload:
        return self._decode(key)

    def get_authentication(self, token: str) -> AuthenticatedIdentity:
        username = self.get_username(token)
        if self.identity_lookup is None:
            raise ConfigurationError("No identity lookup configured")

        details = self.identity_lookup.load_by_username(username)
        if details is None:
            raise UnknownIdentityError(details={"subject": username})
        return AuthenticatedIdentity(principal=details, credentials="", authorities=details.authorities)

    def resolve_token(self, request: HasHeaders) -> str | None:
        """
        Returns the raw token from the configured header, or None when the
        request carries no bearer token.
        """
        bearer_token = request.headers.get(self.config.header)
        if bearer_token and bearer_token.strip() and bearer_token.startswith(self.config.prefix):
            return bearer_token[len(self.config.prefix):]
        return None
