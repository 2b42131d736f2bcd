"""Pydantic schemas for User and Auth."""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class UserRead(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str
    active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UserWrite(BaseModel):
    """Inbound user payload. `id == 0` creates, anything else edits.

    On edit an empty password leaves the stored credential untouched.
    """
    id: int = 0
    email: str = Field(min_length=3)
    first_name: str = ""
    last_name: str = ""
    active: bool = True
    password: str = ""


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenRequest(BaseModel):
    token: str


class IdRequest(BaseModel):
    id: int


class TokenRead(BaseModel):
    """A freshly issued session token. The plaintext is never retrievable again."""
    token: str
    user_id: int
    expiry: datetime


class LoginData(BaseModel):
    token: TokenRead
    user: UserRead
