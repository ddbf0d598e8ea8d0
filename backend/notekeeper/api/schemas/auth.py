from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Request to register with username, email and password."""

    username: str = Field(..., min_length=1, max_length=255, description="Unique display name")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., description="User's password (at least 6 characters)")


class LoginRequest(BaseModel):
    """Request to log in with email and password."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class UserPublic(BaseModel):
    """User fields safe to return to clients."""

    id: int
    username: str
    email: str


class AuthResponse(BaseModel):
    """Response containing the session token and the user."""

    success: bool = True
    message: str
    token: str = Field(..., description="JWT for the Authorization: Bearer header")
    user: UserPublic
