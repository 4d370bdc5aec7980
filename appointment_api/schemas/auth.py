from pydantic import BaseModel, ConfigDict, EmailStr, field_serializer, field_validator
from datetime import datetime
from typing import Optional

from ..core.security import UserRole
from ..utils.timezone import isoformat_z


class UserRegister(BaseModel):
    email: EmailStr
    password: str
    name: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def email_strip(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def email_lower(cls, v: str):
        return v.lower()

    @field_validator("password")
    @classmethod
    def password_min(cls, v: str):
        if len(v) < 6:
            raise ValueError("password must be at least 6 characters")
        return v

    @field_validator("name")
    @classmethod
    def name_trim(cls, v: Optional[str]):
        if v is None:
            return None
        return v.strip() or None


class UserLogin(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def email_normalize(cls, v: str):
        return str(v).strip().lower()


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: Optional[str] = None
    role: UserRole
    created_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def id_to_str(cls, v):
        return str(v)

    @field_serializer("created_at")
    def created_at_z(self, v: Optional[datetime]):
        return isoformat_z(v)


class AuthResponse(BaseModel):
    token: str
    user: UserResponse
