"""
MindfulSpace Backend — Auth & Profile Schemas
===============================================

What:  Request bodies for register/login/profile update and the user
       representations returned by the API.

Request fields are optional at the schema level: presence and format rules
(email/password required, minimum password length, name+age+gender for a
profile) are business rules enforced by the services, which report them as
ValidationError (400) before touching the store.

No response model has a password field. The User ORM object can be passed
to any of them without leaking the hash.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class RegisterRequest(BaseModel):
    email: Optional[str] = Field(default=None, description="Login email (unique)")
    password: Optional[str] = Field(default=None, description="Plaintext password, min 6 chars")
    name: Optional[str] = Field(default=None, description="Display name")


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileUpdateRequest(BaseModel):
    """
    What:  Profile completion / edit body for PUT /api/profile.
    Rules: name, age and gender are required; bio is optional. A successful
           update always marks the profile complete.
    """
    name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    bio: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserResponse(BaseModel):
    """The caller's own account, as returned by register/login/profile."""
    id: int
    email: str
    name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    bio: Optional[str] = None
    profile_complete: bool = False
    join_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PublicUserResponse(BaseModel):
    """Another user as seen in the connect list and friends list (no email)."""
    id: int
    name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    bio: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    """Returned by register (201) and login (200)."""
    message: str
    token: str = Field(description="Bearer session token")
    user: UserResponse


class ProfileUpdateResponse(BaseModel):
    message: str = "Profile updated successfully"
    user: UserResponse
