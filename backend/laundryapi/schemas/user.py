"""
Laundry API Backend: User Schemas
===================================

Request bodies for registration, login and the two update flavours, and
the public user projections. No response model carries the password hash.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from laundryapi.schemas.common import CamelModel


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class RegisterRequest(CamelModel):
    """
    What:  Body of POST /auth/register.
    Why no role field: registration always creates a 'user'; a role sent
           by the client is ignored.
    """

    name: str = Field(min_length=1, max_length=100)
    username: str = Field(min_length=1, max_length=50)
    email: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1)


class LoginRequest(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ProfileUpdateRequest(CamelModel):
    """Body of PUT /profile. The caller's role is never changed here."""

    name: str = Field(min_length=1, max_length=100)
    username: str = Field(min_length=1, max_length=50)
    email: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1)


class OwnerUserUpdateRequest(ProfileUpdateRequest):
    """
    Body of PUT /owner/users/{id}.

    role is validated by the service rather than by an enum here so that an
    unknown role gets the specific "invalid role" message.
    """

    role: str = Field(min_length=1)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserOut(CamelModel):
    """Public projection of a users row."""

    id: int
    name: str
    username: str
    email: str
    role: str
    created_at: Optional[datetime] = None


class RegisteredUserOut(CamelModel):
    name: str
    username: str
    email: str
    role: str


class LoginProfileOut(CamelModel):
    name: str
    username: str
    email: str
    role: str
    created_at: Optional[datetime] = None


class LoginResponse(CamelModel):
    """
    What:  Successful login.
    Shape: {"auth": true, "token": "<jwt>", "data": {...profile}}
    """

    auth: bool = True
    token: str
    data: LoginProfileOut
