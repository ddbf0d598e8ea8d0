from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from notekeeper.api.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserPublic
from notekeeper.core.exceptions import AuthenticationError, ConflictError
from notekeeper.core.schemas.auth import TokenClaims
from notekeeper.utils.logging import get_logger
from notekeeper.utils.security import hash_password, verify_password
from notekeeper.utils.validation import normalize_email, validate_password_strength

if TYPE_CHECKING:
    from notekeeper.core.models.user import User
    from notekeeper.core.repositories.user_repository import UserRepository
    from notekeeper.utils.security import TokenCodec


logger = get_logger(__name__)


class AuthService:
    """Authentication service handling business logic for auth operations."""

    def __init__(self, users: UserRepository, tokens: TokenCodec):
        self._users = users
        self._tokens = tokens

    async def register(self, payload: RegisterRequest) -> AuthResponse:
        """Create an account and return a session token for it.

        The existence check and the insert are separate statements; a
        concurrent duplicate that slips between them is stopped by the
        database uniqueness constraint and reported the same way.
        """
        username = payload.username.strip()
        email = normalize_email(payload.email)
        password = payload.password

        if not username or not email or not password:
            raise ValueError("Username, email, and password are required")

        is_valid_password, password_error = validate_password_strength(password)
        if not is_valid_password:
            raise ValueError(password_error)

        if await self._users.exists(username=username, email=email):
            logger.info("Registration rejected, account exists", extra={"username": username})
            raise ConflictError("Username or email already exists")

        password_hash = await asyncio.to_thread(hash_password, password)
        user = await self._users.create(
            username=username,
            email=email,
            password_hash=password_hash,
        )

        logger.info("User registered successfully", extra={"user_id": user.id})

        return self._auth_response(user, "User registered successfully")

    async def login(self, payload: LoginRequest) -> AuthResponse:
        email = normalize_email(payload.email)
        password = payload.password

        if not email or not password:
            raise ValueError("Email and password are required")

        user = await self._users.get_by_email(email)

        # Same answer for unknown email and wrong password
        if user is None or not await asyncio.to_thread(verify_password, password, user.password_hash):
            logger.warning("Login failed", extra={"email": email})
            raise AuthenticationError("Invalid email or password")

        logger.info("User logged in successfully", extra={"user_id": user.id})

        return self._auth_response(user, "Login successful")

    def _auth_response(self, user: User, message: str) -> AuthResponse:
        token = self._tokens.issue(
            TokenClaims(user_id=user.id, username=user.username, email=user.email)
        )
        return AuthResponse(
            success=True,
            message=message,
            token=token,
            user=UserPublic(id=user.id, username=user.username, email=user.email),
        )
