# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Pydantic request/response schemas."""
import math
import re
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, computed_field, field_validator, model_validator

VALID_ROLES = ("User", "Admin")

_USERNAME_RE = re.compile(r"^[a-zA-Z0-9_]+$")
_PASSWORD_RE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")


# ── People ────────────────────────────────────────────────────────────────

class PersonIn(BaseModel):
    """Payload for create and full update; ``id`` is never read from it."""
    name: str = Field(..., min_length=1, max_length=100, examples=["Alice"])
    age: int = Field(..., ge=0, le=150, examples=[25])
    email: EmailStr = Field(..., examples=["alice@gmail.com"])

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def check_email_length(cls, v: str) -> str:
        if len(v) > 100:
            raise ValueError("email must be at most 100 characters")
        return v


class PersonOut(BaseModel):
    id: int
    name: str
    age: int
    email: str


class PersonSearch(BaseModel):
    """Search criteria. Age bounds are not cross-checked; callers validate them."""
    name: Optional[str] = None
    min_age: Optional[int] = None
    max_age: Optional[int] = None
    email_domain: Optional[str] = None
    sort_by: str = "Name"
    sort_direction: str = "asc"
    page_number: int = 1
    page_size: int = 10


class PagedPeople(BaseModel):
    items: List[PersonOut]
    total_count: int
    page_number: int
    page_size: int

    @computed_field
    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @computed_field
    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @computed_field
    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages


class DomainCount(BaseModel):
    email_domain: str
    count: int


class ExistsOut(BaseModel):
    id: int
    exists: bool


# ── Auth ──────────────────────────────────────────────────────────────────

class LoginRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)
    confirm_password: str = Field(..., min_length=1)
    role: str = "User"

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        if not _USERNAME_RE.match(v):
            raise ValueError("Username can only contain letters, numbers, and underscores.")
        return v

    @field_validator("password")
    @classmethod
    def check_password_strength(cls, v: str) -> str:
        if not _PASSWORD_RE.match(v):
            raise ValueError(
                "Password must contain at least one lowercase letter, "
                "one uppercase letter, and one digit."
            )
        return v

    @field_validator("role")
    @classmethod
    def check_role(cls, v: str) -> str:
        if v not in VALID_ROLES:
            raise ValueError(f"role must be one of {VALID_ROLES}")
        return v

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Password and confirmation password do not match.")
        return self


class UserOut(BaseModel):
    id: int
    username: str
    role: str


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
    request_id: Optional[str] = None
