"""
Job endpoints.

Public search and lookup, employer job management and applicant review,
and job seeker applications.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.auth_dependency import Identity, require_roles
from app.db.models.user import User, UserRole
from app.db.models.job import Job
from app.db.models.application import Application, ApplicationStatus
from app.db.session import get_db
from app.schemas.auth import MessageResponse
from app.schemas.job import (
    JobCreate,
    JobUpdate,
    JobResponse,
    JobCreatedResponse,
    ApplicationStatusUpdate,
    AppliedJobResponse,
    ApplicantResponse,
    EmployerApplicantResponse,
)
from app.services.job_search import parse_search_params, search_jobs

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["Jobs"])

require_employer = require_roles(UserRole.EMPLOYER)
require_job_seeker = require_roles(UserRole.JOB_SEEKER)


def get_owned_job(job_id: int, identity: Identity, db: Session) -> Job:
    """
    Load a job and check the caller owns it.

    Raises:
        HTTPException 404: Job not found
        HTTPException 403: Job belongs to another employer
    """
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    if job.employer_id != identity.id:
        logger.warning(f"Ownership check failed: job_id={job_id}, caller_id={identity.id}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return job


# Static paths are registered before /{job_id} so they are not read as ids

@router.get("/my-jobs", response_model=List[JobResponse])
def list_my_jobs(
    identity: Identity = Depends(require_employer),
    db: Session = Depends(get_db)
):
    jobs = (
        db.query(Job)
        .options(joinedload(Job.employer))
        .filter(Job.employer_id == identity.id)
        .order_by(Job.id.desc())
        .all()
    )
    return [JobResponse.model_validate(job) for job in jobs]


@router.get("/applied", response_model=List[AppliedJobResponse])
def list_applied_jobs(
    identity: Identity = Depends(require_job_seeker),
    db: Session = Depends(get_db)
):
    """List the caller's applications together with the jobs they target."""
    applications = (
        db.query(Application)
        .options(joinedload(Application.job))
        .filter(Application.seeker_id == identity.id)
        .order_by(Application.id.desc())
        .all()
    )
    return [
        AppliedJobResponse(
            app_id=application.id,
            job_id=application.job_id,
            title=application.job.title,
            description=application.job.description,
            location=application.job.location,
            company_name=application.job.company_name,
            status=application.status,
        )
        for application in applications
    ]


@router.get("/applicants", response_model=List[EmployerApplicantResponse])
def list_all_applicants(
    identity: Identity = Depends(require_employer),
    db: Session = Depends(get_db)
):
    """List applications to every job the caller owns, newest first."""
    applications = (
        db.query(Application)
        .join(Job, Application.job_id == Job.id)
        .options(joinedload(Application.job), joinedload(Application.seeker))
        .filter(Job.employer_id == identity.id)
        .order_by(Application.id.desc())
        .all()
    )
    return [
        EmployerApplicantResponse(
            id=application.id,
            status=application.status,
            seeker_id=application.seeker_id,
            name=application.seeker.name,
            email=application.seeker.email,
            skills=application.seeker.skills,
            resume=application.seeker.resume,
            job_id=application.job_id,
            job_title=application.job.title,
        )
        for application in applications
    ]


@router.get("", response_model=List[JobResponse])
def list_jobs(
    keyword: Optional[str] = Query(None, description="Substring of title, description or requirements"),
    location: Optional[str] = Query(None, description="Substring of location"),
    salary_min: Optional[str] = Query(None, description="Minimum salary (inclusive)"),
    salary_max: Optional[str] = Query(None, description="Maximum salary (inclusive)"),
    limit: Optional[str] = Query(None, description="Page size (default 10)"),
    offset: Optional[str] = Query(None, description="Rows to skip (default 0)"),
    db: Session = Depends(get_db)
):
    """
    Search jobs.

    All given filters must match. Results are newest first and paginated by
    limit/offset; a non-numeric limit or offset is rejected with 400.
    """
    filters = parse_search_params(keyword, location, salary_min, salary_max, limit, offset)

    try:
        jobs = search_jobs(db, filters)
    except Exception as e:
        logger.error(f"Failed to search jobs: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return [JobResponse.model_validate(job) for job in jobs]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=JobCreatedResponse)
def create_job(
    job_data: JobCreate,
    identity: Identity = Depends(require_employer),
    db: Session = Depends(get_db)
):
    """
    Post a new job owned by the calling employer.

    The company name defaults to the one on the employer's profile.
    """
    try:
        company_name = job_data.company_name
        if company_name is None:
            employer = db.query(User).filter(User.id == identity.id).first()
            company_name = employer.company_name if employer else None

        job = Job(
            employer_id=identity.id,
            title=job_data.title,
            description=job_data.description,
            requirements=job_data.requirements,
            salary=job_data.salary,
            location=job_data.location,
            company_name=company_name,
        )

        db.add(job)
        db.commit()
        db.refresh(job)

        logger.info(f"Job created: job_id={job.id}, employer_id={identity.id}")

        return JobCreatedResponse(message="Job posted successfully", job_id=job.id)

    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create job: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    job = db.query(Job).options(joinedload(Job.employer)).filter(Job.id == job_id).first()
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return JobResponse.model_validate(job)


@router.put("/{job_id}", response_model=MessageResponse)
def update_job(
    job_id: int,
    job_data: JobUpdate,
    identity: Identity = Depends(require_employer),
    db: Session = Depends(get_db)
):
    """
    Update one of the caller's jobs.

    Only updates provided fields.
    """
    try:
        job = get_owned_job(job_id, identity, db)

        update_data = job_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(job, field, value)

        db.commit()

        logger.info(f"Job updated: job_id={job.id}, employer_id={identity.id}")

        return MessageResponse(message="Job updated successfully")

    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update job: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.delete("/{job_id}", response_model=MessageResponse)
def delete_job(
    job_id: int,
    identity: Identity = Depends(require_employer),
    db: Session = Depends(get_db)
):
    """Delete one of the caller's jobs along with its applications."""
    try:
        job = get_owned_job(job_id, identity, db)

        db.delete(job)
        db.commit()

        logger.info(f"Job deleted: job_id={job_id}, employer_id={identity.id}")

        return MessageResponse(message="Job deleted successfully")

    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete job: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.post("/{job_id}/apply", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
def apply_to_job(
    job_id: int,
    identity: Identity = Depends(require_job_seeker),
    db: Session = Depends(get_db)
):
    """
    Apply to a job as the calling job seeker.

    A second application to the same job is rejected with 400, including when
    two requests race past the existence check.
    """
    try:
        job = db.query(Job).filter(Job.id == job_id).first()
        if not job:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")

        existing = db.query(Application).filter(
            Application.job_id == job_id,
            Application.seeker_id == identity.id
        ).first()
        if existing:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Already applied")

        application = Application(
            job_id=job_id,
            seeker_id=identity.id,
            status=ApplicationStatus.APPLIED.value,
        )
        db.add(application)
        db.commit()

        logger.info(f"Application created: job_id={job_id}, seeker_id={identity.id}")

        return MessageResponse(message="Applied successfully")

    except HTTPException:
        db.rollback()
        raise
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Already applied")
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to apply to job: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("/{job_id}/applicants", response_model=List[ApplicantResponse])
def list_job_applicants(
    job_id: int,
    identity: Identity = Depends(require_employer),
    db: Session = Depends(get_db)
):
    get_owned_job(job_id, identity, db)

    applications = (
        db.query(Application)
        .options(joinedload(Application.seeker))
        .filter(Application.job_id == job_id)
        .order_by(Application.id.desc())
        .all()
    )
    return [
        ApplicantResponse(
            id=application.id,
            status=application.status,
            seeker_id=application.seeker_id,
            name=application.seeker.name,
            email=application.seeker.email,
            skills=application.seeker.skills,
            resume=application.seeker.resume,
        )
        for application in applications
    ]


@router.put("/{job_id}/applications/{app_id}/status", response_model=MessageResponse)
def update_application_status(
    job_id: int,
    app_id: int,
    payload: ApplicationStatusUpdate,
    identity: Identity = Depends(require_employer),
    db: Session = Depends(get_db)
):
    """Move an application to a new status. Only the employer owning the job may do this."""
    try:
        get_owned_job(job_id, identity, db)

        application = db.query(Application).filter(
            Application.id == app_id,
            Application.job_id == job_id
        ).first()
        if not application:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")

        application.status = payload.status.value
        db.commit()

        logger.info(f"Application status updated: app_id={app_id}, job_id={job_id}, status={application.status}")

        return MessageResponse(message="Status updated")

    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update application status: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
