"""
Admin endpoints.

Unrestricted management of users and jobs, aggregate analytics, and
CSV/JSON report exports. Every route requires the admin role.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse, Response
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.auth_dependency import Identity, require_roles
from app.core.logging_config import sanitize_log_data
from app.core.security import hash_password
from app.db.models.user import User, UserRole
from app.db.models.job import Job
from app.db.session import get_db
from app.schemas.admin import (
    AdminUserSummary,
    AdminUserCreate,
    AdminUserUpdate,
    AnalyticsResponse,
)
from app.schemas.auth import MessageResponse, ProfileResponse, RegisterResponse
from app.schemas.job import JobResponse, JobUpdate
from app.services.report_service import REPORT_FORMATS, REPORT_TYPES, get_analytics, get_report_rows, to_csv

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])

require_admin = require_roles(UserRole.ADMIN)


def get_user_or_404(user_id: int, db: Session) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def get_job_or_404(job_id: int, db: Session) -> Job:
    job = db.query(Job).options(joinedload(Job.employer)).filter(Job.id == job_id).first()
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return job


# ============================================
# Users
# ============================================

@router.get("/users", response_model=List[AdminUserSummary])
def list_users(
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db)
):
    users = db.query(User).order_by(User.id).all()
    return [AdminUserSummary.model_validate(user) for user in users]


@router.post("/users", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse)
def create_user(
    payload: AdminUserCreate,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db)
):
    logger.info(f"Admin user creation: admin_id={identity.id}, data={sanitize_log_data(payload.model_dump(mode='json'))}")

    if db.query(User).filter(User.email == payload.email).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")

    try:
        user = User(
            name=payload.name,
            email=payload.email,
            password_hash=hash_password(payload.password),
            role=payload.role.value,
            skills=payload.skills,
            resume=payload.resume,
            company_name=payload.company_name,
            company_description=payload.company_description,
        )
        db.add(user)
        db.commit()
        db.refresh(user)

    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create user: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    logger.info(f"User created by admin: user_id={user.id}, role={user.role}, admin_id={identity.id}")

    return RegisterResponse(message="User created successfully", user_id=user.id)


@router.get("/users/{user_id}", response_model=ProfileResponse)
def get_user(
    user_id: int,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return ProfileResponse.model_validate(get_user_or_404(user_id, db))


@router.put("/users/{user_id}", response_model=MessageResponse)
def update_user(
    user_id: int,
    payload: AdminUserUpdate,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """
    Update any user, including its email and role.

    Only updates provided fields. A new email must not belong to another user.
    """
    try:
        user = get_user_or_404(user_id, db)

        update_data = payload.model_dump(exclude_unset=True)
        if "email" in update_data:
            taken = db.query(User).filter(User.email == update_data["email"], User.id != user_id).first()
            if taken:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")
        if "role" in update_data:
            update_data["role"] = update_data["role"].value

        for field, value in update_data.items():
            setattr(user, field, value)

        db.commit()

        logger.info(f"User updated by admin: user_id={user_id}, fields={sorted(update_data)}, admin_id={identity.id}")

        return MessageResponse(message="User updated successfully")

    except HTTPException:
        db.rollback()
        raise
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update user: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Delete a user with the jobs it owns and the applications it made or received."""
    try:
        user = get_user_or_404(user_id, db)

        db.delete(user)
        db.commit()

        logger.info(f"User deleted by admin: user_id={user_id}, admin_id={identity.id}")

        return MessageResponse(message="User deleted")

    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete user: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


# ============================================
# Jobs
# ============================================

@router.get("/jobs", response_model=List[JobResponse])
def list_all_jobs(
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db)
):
    jobs = db.query(Job).options(joinedload(Job.employer)).order_by(Job.id.desc()).all()
    return [JobResponse.model_validate(job) for job in jobs]


@router.get("/jobs/{job_id}", response_model=JobResponse)
def get_any_job(
    job_id: int,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return JobResponse.model_validate(get_job_or_404(job_id, db))


@router.put("/jobs/{job_id}", response_model=MessageResponse)
def update_any_job(
    job_id: int,
    job_data: JobUpdate,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db)
):
    try:
        job = get_job_or_404(job_id, db)

        update_data = job_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(job, field, value)

        db.commit()

        logger.info(f"Job updated by admin: job_id={job_id}, admin_id={identity.id}")

        return MessageResponse(message="Job updated successfully")

    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update job: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.delete("/jobs/{job_id}", response_model=MessageResponse)
def delete_any_job(
    job_id: int,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db)
):
    try:
        job = get_job_or_404(job_id, db)

        db.delete(job)
        db.commit()

        logger.info(f"Job deleted by admin: job_id={job_id}, admin_id={identity.id}")

        return MessageResponse(message="Job deleted")

    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete job: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


# ============================================
# Analytics & reports
# ============================================

@router.get("/analytics", response_model=AnalyticsResponse)
def analytics(
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db)
):
    try:
        return AnalyticsResponse(**get_analytics(db))
    except Exception as e:
        logger.error(f"Failed to compute analytics: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("/reports/{report_type}")
def export_report(
    report_type: str,
    format: str = Query("csv", description="csv or json"),
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """
    Export users, jobs or applications.

    CSV is sent as an attachment named <type>-report.csv; json returns the
    rows as a JSON array.
    """
    if report_type not in REPORT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid report type. Use users|jobs|applications"
        )

    report_format = format.lower()
    if report_format not in REPORT_FORMATS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid report format. Use csv|json"
        )

    try:
        rows = get_report_rows(db, report_type)
    except Exception as e:
        logger.error(f"Failed to build {report_type} report: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    if report_format == "csv":
        return Response(
            content=to_csv(rows),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{report_type}-report.csv"'},
        )

    return JSONResponse(content=jsonable_encoder(rows))
