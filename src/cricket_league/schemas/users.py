"""Pydantic schemas for user authentication."""

from typing import Optional

from .common import CamelModel


class LoginRequest(CamelModel):
    """Missing credentials simply fail the check."""

    username: str = ""
    password: str = ""


class UserResponse(CamelModel):
    """User projection; the password is never included."""

    id: str
    username: str
    email: Optional[str] = None
    role: str
    profile_picture_url: Optional[str] = None
