from __future__ import annotations

from datetime import UTC, datetime, timedelta

import bcrypt
from jose import JWTError, jwt

from notekeeper.core.schemas.auth import TokenClaims
from notekeeper.utils.logging import get_logger

logger = get_logger(__name__)

BEARER_SCHEME = "Bearer"

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class InvalidTokenError(Exception):
    """Raised when a token has a bad signature, is expired, or carries malformed claims."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)
        self.message = message


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a plaintext password with a fresh bcrypt salt.

    Passwords longer than 72 bytes are truncated, so only their first 72
    bytes take part in verification.
    """
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored hash is not a valid bcrypt string
        logger.warning("Password hash could not be parsed")
        return False


def extract_bearer_token(auth_header: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header.

    Any other shape (missing header, other scheme, extra parts) yields None.
    """
    if not auth_header:
        return None
    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0] != BEARER_SCHEME or not parts[1]:
        return None
    return parts[1]


class TokenCodec:
    """Issues and verifies signed, expiring session tokens (JWT)."""

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        lifetime: timedelta = timedelta(days=7),
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._lifetime = lifetime

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def issue(self, claims: TokenClaims, *, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(UTC)
        payload = {
            **claims.model_dump(by_alias=True),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._lifetime).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Verify signature and expiry, then return the identity claims."""
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError as err:
            raise InvalidTokenError() from err
        try:
            return TokenClaims.model_validate(payload)
        except ValueError as err:
            raise InvalidTokenError() from err
