"""Auth Schemas — login/logout request and response shapes.

Invariants:
    - LoginRequest fields optional at the schema level: a missing field is an
      InvalidCredentials outcome (400, login envelope), not a generic validation error
    - LoginRequest never fails validation: empty values become None, other
      non-string values become strings that match no credential (401)

Design Decisions:
    - success/redirect envelope kept stable for the login page script
"""

from typing import Any

from pydantic import BaseModel, field_validator


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None

    @field_validator("username", "password", mode="before")
    @classmethod
    def coerce_credential(cls, v: Any) -> str | None:
        if v is None or isinstance(v, str):
            return v
        if not v:
            return None
        return str(v)


class LoginResponse(BaseModel):
    success: bool = True
    redirect: str


class LogoutResponse(BaseModel):
    ok: bool = True
    redirect: str
