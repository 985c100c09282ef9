"""
Admin reporting: analytics counts, report row sources, and CSV formatting.
"""
import csv
import io
import logging
from typing import Any, Dict, List, Mapping, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session, aliased

from app.db.models.user import User
from app.db.models.job import Job
from app.db.models.application import Application

logger = logging.getLogger(__name__)

REPORT_TYPES = ("users", "jobs", "applications")
REPORT_FORMATS = ("csv", "json")


def to_csv(rows: Sequence[Mapping[str, Any]]) -> str:
    """
    Render flat records as CSV text.

    The header is the keys of the first record in order. None becomes an empty
    field; fields holding a comma, quote or newline are quoted with inner
    quotes doubled. Every line ends with a newline. No rows yields "".
    """
    if not rows:
        return ""

    headers = list(rows[0].keys())
    buffer = io.StringIO()
    writer = csv.DictWriter(
        buffer,
        fieldnames=headers,
        restval="",
        extrasaction="ignore",
        lineterminator="\n",
    )
    writer.writeheader()
    for row in rows:
        writer.writerow({key: "" if row.get(key) is None else row.get(key) for key in headers})
    return buffer.getvalue()


def get_analytics(db: Session) -> Dict[str, Any]:
    """Totals per table plus users grouped by role and applications grouped by status."""
    users_by_role = (
        db.query(User.role, func.count(User.id))
        .group_by(User.role)
        .order_by(User.role)
        .all()
    )
    applications_by_status = (
        db.query(Application.status, func.count(Application.id))
        .group_by(Application.status)
        .order_by(Application.status)
        .all()
    )

    return {
        "total_users": db.query(func.count(User.id)).scalar() or 0,
        "total_jobs": db.query(func.count(Job.id)).scalar() or 0,
        "total_applications": db.query(func.count(Application.id)).scalar() or 0,
        "users_by_role": [{"role": role, "count": count} for role, count in users_by_role],
        "applications_by_status": [
            {"status": app_status, "count": count} for app_status, count in applications_by_status
        ],
    }


def _users_report(db: Session) -> List[Dict[str, Any]]:
    users = db.query(User).order_by(User.id.desc()).all()
    return [
        {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "role": user.role,
            "skills": user.skills,
            "resume": user.resume,
            "company_name": user.company_name,
            "company_description": user.company_description,
        }
        for user in users
    ]


def _jobs_report(db: Session) -> List[Dict[str, Any]]:
    rows = (
        db.query(Job.id, Job.title, Job.location, Job.salary, Job.company_name, User.name)
        .join(User, Job.employer_id == User.id)
        .order_by(Job.id.desc())
        .all()
    )
    return [
        {
            "id": job_id,
            "title": title,
            "location": location,
            "salary": salary,
            "company_name": company_name,
            "employer_name": employer_name,
        }
        for job_id, title, location, salary, company_name, employer_name in rows
    ]


def _applications_report(db: Session) -> List[Dict[str, Any]]:
    seeker = aliased(User)
    rows = (
        db.query(
            Application.id,
            Application.job_id,
            Application.seeker_id,
            Application.status,
            Job.title,
            seeker.name,
            seeker.email,
        )
        .join(Job, Application.job_id == Job.id)
        .join(seeker, Application.seeker_id == seeker.id)
        .order_by(Application.id.desc())
        .all()
    )
    return [
        {
            "id": app_id,
            "job_id": job_id,
            "seeker_id": seeker_id,
            "status": app_status,
            "job_title": job_title,
            "seeker_name": seeker_name,
            "seeker_email": seeker_email,
        }
        for app_id, job_id, seeker_id, app_status, job_title, seeker_name, seeker_email in rows
    ]


_REPORT_SOURCES = {
    "users": _users_report,
    "jobs": _jobs_report,
    "applications": _applications_report,
}


def get_report_rows(db: Session, report_type: str) -> List[Dict[str, Any]]:
    """
    Fetch the rows of a report, newest first.

    Raises:
        ValueError: Unknown report type
    """
    source = _REPORT_SOURCES.get(report_type)
    if source is None:
        raise ValueError(f"Unknown report type: {report_type}")
    rows = source(db)
    logger.info(f"Report generated: type={report_type}, rows={len(rows)}")
    return rows
