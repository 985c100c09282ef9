"""
Job model: a posting owned by exactly one employer.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Numeric
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    employer_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    requirements = Column(Text, nullable=True)
    salary = Column(Numeric(12, 2, asdecimal=False), nullable=True, index=True)
    location = Column(String, nullable=True, index=True)
    company_name = Column(String, nullable=True)  # copied from the employer when not given

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    employer = relationship("User", back_populates="jobs")
    applications = relationship(
        "Application",
        back_populates="job",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def employer_name(self):
        return self.employer.name if self.employer else None

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', employer_id={self.employer_id})>"
