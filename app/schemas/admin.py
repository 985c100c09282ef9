"""
Pydantic schemas for admin endpoints.
"""
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from app.db.models.user import UserRole
from app.schemas.auth import check_password_bytes


class AdminUserSummary(BaseModel):
    id: int
    name: str
    email: str
    role: str

    class Config:
        from_attributes = True


class AdminUserCreate(BaseModel):
    """Admins may create users of any role, including other admins."""
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str
    role: UserRole
    skills: Optional[str] = None
    resume: Optional[str] = None
    company_name: Optional[str] = None
    company_description: Optional[str] = None

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        return check_password_bytes(v)


class AdminUserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    skills: Optional[str] = None
    resume: Optional[str] = None
    company_name: Optional[str] = None
    company_description: Optional[str] = None

    @field_validator("name", "email", "role")
    @classmethod
    def reject_null_required(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class RoleCount(BaseModel):
    role: str
    count: int


class StatusCount(BaseModel):
    status: str
    count: int


class AnalyticsResponse(BaseModel):
    total_users: int
    total_jobs: int
    total_applications: int
    users_by_role: List[RoleCount]
    applications_by_status: List[StatusCount]

    class Config:
        json_schema_extra = {
            "example": {
                "total_users": 12,
                "total_jobs": 5,
                "total_applications": 9,
                "users_by_role": [{"role": "employer", "count": 3}],
                "applications_by_status": [{"status": "applied", "count": 9}]
            }
        }
