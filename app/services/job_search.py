"""
Job search: query-string parsing and the filtered, paginated jobs query.
"""
import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session, joinedload

from app.db.models.job import Job

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0
# Largest value a 64-bit INTEGER column or LIMIT clause accepts
MAX_PAGINATION_VALUE = 2 ** 63 - 1


@dataclass
class JobSearchFilters:
    keyword: Optional[str] = None
    location: Optional[str] = None
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    limit: int = DEFAULT_LIMIT
    offset: int = DEFAULT_OFFSET


def _parse_count(value: Optional[str], default: int) -> int:
    if value is None or value == "":
        return default
    number = int(value.strip())
    if number < 0 or number > MAX_PAGINATION_VALUE:
        raise ValueError(f"out of range: {value}")
    return number


def _parse_salary(name: str, value: Optional[str]) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    try:
        number = float(value)
        if not math.isfinite(number):
            raise ValueError(f"not a finite number: {value}")
        return number
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{name} must be a valid number"
        )


def parse_search_params(
    keyword: Optional[str] = None,
    location: Optional[str] = None,
    salary_min: Optional[str] = None,
    salary_max: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
) -> JobSearchFilters:
    """
    Turn raw query-string values into search filters.

    Empty strings are treated as absent.

    Raises:
        HTTPException 400: limit/offset not a non-negative integer, or a
            salary bound that is not a number
    """
    try:
        parsed_limit = _parse_count(limit, DEFAULT_LIMIT)
        parsed_offset = _parse_count(offset, DEFAULT_OFFSET)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid limit or offset"
        )

    return JobSearchFilters(
        keyword=keyword or None,
        location=location or None,
        salary_min=_parse_salary("salary_min", salary_min),
        salary_max=_parse_salary("salary_max", salary_max),
        limit=parsed_limit,
        offset=parsed_offset,
    )


def search_jobs(db: Session, filters: JobSearchFilters) -> List[Job]:
    """
    Run the job search.

    Keyword matches title, description or requirements; every given filter
    must hold. Results are newest first (highest id first).
    """
    conditions = []

    if filters.keyword:
        conditions.append(
            or_(
                Job.title.contains(filters.keyword, autoescape=True),
                Job.description.contains(filters.keyword, autoescape=True),
                Job.requirements.contains(filters.keyword, autoescape=True),
            )
        )

    if filters.location:
        conditions.append(Job.location.contains(filters.location, autoescape=True))

    if filters.salary_min is not None:
        conditions.append(Job.salary >= filters.salary_min)

    if filters.salary_max is not None:
        conditions.append(Job.salary <= filters.salary_max)

    query = db.query(Job).options(joinedload(Job.employer))
    if conditions:
        query = query.filter(and_(*conditions))

    jobs = query.order_by(Job.id.desc()).offset(filters.offset).limit(filters.limit).all()

    logger.debug(f"Job search: filters={filters}, returned={len(jobs)}")
    return jobs
