"""
Pydantic schemas for job and application endpoints.
"""
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from app.db.models.application import ApplicationStatus


class JobBase(BaseModel):
    """Base job schema with common fields."""
    title: str = Field(..., description="Job title", min_length=1, max_length=255)
    description: Optional[str] = Field(None, description="Job description")
    requirements: Optional[str] = Field(None, description="Requirements for candidates")
    salary: Optional[float] = Field(None, ge=0, description="Salary as a number")
    location: Optional[str] = Field(None, description="Job location")
    company_name: Optional[str] = Field(None, description="Company name (defaults to the employer's)")


class JobCreate(JobBase):
    """Schema for creating a new job."""
    pass


class JobUpdate(BaseModel):
    """Schema for updating an existing job. Only provided fields are changed."""
    title: Optional[str] = Field(None, description="Job title", min_length=1, max_length=255)
    description: Optional[str] = None
    requirements: Optional[str] = None
    salary: Optional[float] = Field(None, ge=0)
    location: Optional[str] = None
    company_name: Optional[str] = None

    @field_validator("title")
    @classmethod
    def reject_null_title(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("Title cannot be null")
        return v


class JobResponse(JobBase):
    """Schema for job response."""
    id: int = Field(..., description="Job ID")
    employer_id: int = Field(..., description="Employer who owns this job")
    employer_name: Optional[str] = Field(None, description="Employer display name")

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "employer_id": 2,
                "employer_name": "Jane Doe",
                "title": "Senior Software Engineer",
                "description": "Build the platform",
                "requirements": "Python, SQL",
                "salary": 120000,
                "location": "Remote",
                "company_name": "Acme Corp"
            }
        }


class JobCreatedResponse(BaseModel):
    message: str
    job_id: int


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus = Field(..., description="New application status")


class AppliedJobResponse(BaseModel):
    """An application as seen by the seeker who made it."""
    app_id: int
    job_id: int
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    company_name: Optional[str] = None
    status: str


class ApplicantResponse(BaseModel):
    """An application to one job as seen by its employer."""
    id: int
    status: str
    seeker_id: int
    name: str
    email: str
    skills: Optional[str] = None
    resume: Optional[str] = None


class EmployerApplicantResponse(ApplicantResponse):
    """An application across all of an employer's jobs."""
    job_id: int
    job_title: str
