"""Account Schemas — sign-up, login, profile and preference payloads.

Invariants:
    - Emails are stripped and lower-cased before reaching SessionGuard
    - Passwords are never echoed back in any response model
"""

from pydantic import BaseModel, Field, field_validator


class SignUp(BaseModel):
    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=1, max_length=200)
    name: str = Field(min_length=1, max_length=200)
    phone: str = Field(min_length=1, max_length=40)
    location: str = Field("", max_length=200)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class Login(BaseModel):
    email: str = Field(min_length=1, max_length=320)
    password: str = Field(min_length=1, max_length=200)


class ProfileUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    phone: str = Field(min_length=1, max_length=40)
    location: str = Field("", max_length=200)
    image_url: str | None = Field(None, max_length=2000)


class PreferencesUpdate(BaseModel):
    theme: str | None = None
    distance_unit: str | None = None
