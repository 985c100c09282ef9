"""
Pydantic schemas for authentication and profile endpoints.
"""
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

from app.db.models.user import UserRole


def check_password_bytes(v: str) -> str:
    """Validate password length in bytes (bcrypt limit is 72 bytes)."""
    password_bytes = v.encode("utf-8")
    if len(password_bytes) > 72:
        raise ValueError("Password must be 72 characters or fewer")
    if len(password_bytes) < 6:
        raise ValueError("Password must be at least 6 characters")
    return v


class MessageResponse(BaseModel):
    message: str


class RegisterRequest(BaseModel):
    """Request schema for self-registration."""
    name: str = Field(..., min_length=1, max_length=200, description="Display name")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., description="User's password (6-72 bytes)")
    role: UserRole = Field(default=UserRole.JOB_SEEKER, description="job_seeker or employer")
    skills: Optional[str] = None
    resume: Optional[str] = None
    company_name: Optional[str] = None
    company_description: Optional[str] = None

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        return check_password_bytes(v)

    @field_validator("role")
    @classmethod
    def validate_public_role(cls, v: UserRole) -> UserRole:
        # Admin accounts are created by another admin or the create_admin script
        if v == UserRole.ADMIN:
            raise ValueError("Role must be job_seeker or employer")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Jane Doe",
                "email": "jane.doe@example.com",
                "password": "SecurePass123",
                "role": "employer",
                "company_name": "Acme Corp",
                "company_description": "We make everything"
            }
        }


class RegisterResponse(MessageResponse):
    user_id: int


class LoginRequest(BaseModel):
    """Request schema for user login."""
    email: str = Field(..., min_length=1, description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        # Stored addresses went through EmailStr; anything unparseable just fails the lookup
        try:
            return validate_email(v)[1]
        except PydanticCustomError:
            return v

    class Config:
        json_schema_extra = {
            "example": {
                "email": "jane.doe@example.com",
                "password": "SecurePass123"
            }
        }


class LoginUser(BaseModel):
    id: int
    name: str
    email: str
    role: str

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: LoginUser


class ProfileResponse(BaseModel):
    """A user as shown to itself or an admin; never carries the password hash."""
    id: int
    name: str
    email: str
    role: str
    skills: Optional[str] = None
    resume: Optional[str] = None
    company_name: Optional[str] = None
    company_description: Optional[str] = None

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    """Fields a user may change on its own profile. Only fields sent are updated."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    skills: Optional[str] = None
    resume: Optional[str] = None
    company_name: Optional[str] = None
    company_description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def reject_null_name(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("Name cannot be null")
        return v
