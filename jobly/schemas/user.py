"""
Pydantic schemas for users and their job applications.
"""

from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import List, Optional

from jobly.schemas.base import CamelModel, CamelRequest, reject_nulls


class UserCreateRequest(CamelRequest):
    """Self-registration payload. New users are never admins."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(
        ...,
        min_length=5,
        max_length=72,  # bcrypt limit
    )
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr


class UserAdminCreateRequest(UserCreateRequest):
    """Admin-created user; the admin decides on is_admin."""
    is_admin: bool = False


class UserUpdateRequest(CamelRequest):
    """Partial update; username and admin flag cannot be changed here."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=30)
    last_name: Optional[str] = Field(None, min_length=1, max_length=30)
    password: Optional[str] = Field(None, min_length=5, max_length=72)
    email: Optional[EmailStr] = None

    @model_validator(mode="after")
    def fields_not_null(self):
        reject_nulls(self, ("first_name", "last_name", "password", "email"))
        return self


class UserResponse(CamelModel):
    """User profile response (no password)."""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserDetailResponse(UserResponse):
    jobs: List[int] = []


class UserCreateResponse(BaseModel):
    user: UserResponse
    access_token: str
    token_type: str = "bearer"


class ApplicationResponse(BaseModel):
    applied: int
