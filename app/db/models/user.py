import enum

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base


class UserRole(str, enum.Enum):
    """Roles a caller can hold; each route admits a subset of them."""
    JOB_SEEKER = "job_seeker"
    EMPLOYER = "employer"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String(20), nullable=False, default=UserRole.JOB_SEEKER.value, index=True)

    # Seeker profile
    skills = Column(Text, nullable=True)
    resume = Column(String, nullable=True)  # URL or free text

    # Employer profile
    company_name = Column(String, nullable=True)
    company_description = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    jobs = relationship(
        "Job",
        back_populates="employer",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    applications = relationship(
        "Application",
        back_populates="seeker",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
