"""
Pydantic models for user data.

``User`` is the stored record, password included.  ``Profile`` is the
public projection returned by the API; it never carries the password.
Request bodies declare every field optional so that the account
service, not the schema, decides which values are missing.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .playlist import Playlist


class Profile(BaseModel):
    """Public view of a user."""

    username: str = Field(..., examples=["alice"])
    email: str = Field(..., examples=["alice@example.com"])
    firstName: str = Field(..., examples=["Alice"])
    lastName: str = Field(..., examples=["Liddell"])
    imageUrl: str = Field(..., examples=["https://example.com/alice.png"])


class User(Profile):
    """A user as stored in the JSON document."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    password: str
    playlists: List[Playlist] = Field(default_factory=list)

    def to_profile(self) -> Profile:
        return Profile(
            username=self.username,
            email=self.email,
            firstName=self.firstName,
            lastName=self.lastName,
            imageUrl=self.imageUrl,
        )


class RegisterRequest(BaseModel):
    """Body of ``POST /api/register``."""

    username: Optional[str] = Field(None, examples=["alice"])
    password: Optional[str] = Field(None, examples=["abc123"])
    email: Optional[str] = Field(None, examples=["alice@example.com"])
    firstName: Optional[str] = Field(None, examples=["Alice"])
    lastName: Optional[str] = Field(None, examples=["Liddell"])
    imageUrl: Optional[str] = Field(None, examples=["https://example.com/alice.png"])


class LoginRequest(BaseModel):
    """Body of ``POST /api/login``."""

    username: Optional[str] = Field(None, examples=["alice"])
    password: Optional[str] = Field(None, examples=["abc123"])


class LoginResponse(BaseModel):
    ok: bool = True
    user: Profile
