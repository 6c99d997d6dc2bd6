import math

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from talentboard.database import get_db
from talentboard.dependencies import valid_job_id
from talentboard.errors import NotFoundError
from talentboard.models.job import Job
from talentboard.schemas.common import Envelope
from talentboard.schemas.job import Company, JobCreate, JobPage, JobResponse, Pagination, Salary
from talentboard.services.filters import JobFilters, build_job_predicate
from talentboard.services.store import (
    JOB_FIELDS,
    compile_predicate,
    increment_counter,
    now_utc,
    translate_errors,
)
from talentboard.utils.ids import new_id

router = APIRouter(prefix="/jobs", tags=["jobs"])


def _job_to_response(job: Job) -> JobResponse:
    return JobResponse(
        id=job.id,
        title=job.title,
        company=Company(name=job.company_name, website=job.company_website, logo=job.company_logo),
        description=job.description,
        requirements=job.requirements or [],
        responsibilities=job.responsibilities or [],
        job_type=job.job_type,
        experience_level=job.experience_level,
        location=job.location,
        remote=job.remote,
        salary=Salary(
            min=job.salary_min,
            max=job.salary_max,
            currency=job.salary_currency,
            period=job.salary_period,
        ),
        primary_technology=job.primary_technology,
        required_skills=job.required_skills,
        benefits=job.benefits or [],
        status=job.status,
        application_deadline=job.application_deadline,
        posted_date=job.posted_date,
        updated_at=job.updated_at,
        views=job.views,
        applications=job.applications,
    )


def _apply_fields(job: Job, req: JobCreate):
    job.title = req.title
    job.company_name = req.company.name
    job.company_website = req.company.website
    job.company_logo = req.company.logo
    job.description = req.description
    job.requirements = req.requirements
    job.responsibilities = req.responsibilities
    job.job_type = req.job_type
    job.experience_level = req.experience_level
    job.location = req.location
    job.remote = req.remote
    job.salary_min = req.salary.min
    job.salary_max = req.salary.max
    job.salary_currency = req.salary.currency
    job.salary_period = req.salary.period
    job.primary_technology = req.primary_technology
    job.required_skills = req.required_skills
    job.benefits = req.benefits
    job.status = req.status
    job.application_deadline = req.application_deadline


@router.get("", response_model=Envelope[JobPage])
async def list_jobs(
    status: str | None = None,
    job_type: str | None = Query(None, alias="jobType"),
    experience_level: str | None = Query(None, alias="experienceLevel"),
    primary_technology: str | None = Query(None, alias="primaryTechnology"),
    remote: str | None = None,
    required_skills: str | None = Query(None, alias="requiredSkills"),
    location: str | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    predicate = build_job_predicate(JobFilters(
        status=status,
        job_type=job_type,
        experience_level=experience_level,
        primary_technology=primary_technology,
        remote=remote,
        location=location,
        search=search,
        required_skills=required_skills,
    ))

    with translate_errors(db, "Error fetching jobs"):
        query = db.query(Job).filter(*compile_predicate(predicate, JOB_FIELDS))
        total = query.count()
        jobs = (
            query.order_by(Job.posted_date.desc(), Job.id)
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        items = [_job_to_response(j) for j in jobs]

    return Envelope(data=JobPage(
        jobs=items,
        pagination=Pagination(total=total, page=page, pages=math.ceil(total / limit), limit=limit),
    ))


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(req: JobCreate, db: Session = Depends(get_db)):
    now = now_utc()
    job = Job(id=new_id(), posted_date=now, updated_at=now, views=0, applications=0)
    _apply_fields(job, req)

    with translate_errors(db, "Error creating job"):
        db.add(job)
        db.commit()
        db.refresh(job)
        return _job_to_response(job)


@router.get("/{job_id}", response_model=Envelope[JobResponse])
async def get_job(job_id: str = Depends(valid_job_id), db: Session = Depends(get_db)):
    """Fetch one job, counting the fetch as a view."""
    with translate_errors(db, "Error fetching job details"):
        if not increment_counter(db, job_id, "views"):
            raise NotFoundError("Job")
        job = db.get(Job, job_id)
        if job is None:
            raise NotFoundError("Job")
        return Envelope(data=_job_to_response(job))


@router.put("/{job_id}", response_model=JobResponse)
async def replace_job(req: JobCreate, job_id: str = Depends(valid_job_id), db: Session = Depends(get_db)):
    """Replace every editable field. Concurrent replacements: last write wins."""
    with translate_errors(db, "Error updating job"):
        job = db.get(Job, job_id)
        if job is None:
            raise NotFoundError("Job")
        _apply_fields(job, req)
        job.updated_at = now_utc()
        db.commit()
        db.refresh(job)
        return _job_to_response(job)


@router.post("/{job_id}/apply", response_model=JobResponse)
async def apply_to_job(job_id: str = Depends(valid_job_id), db: Session = Depends(get_db)):
    with translate_errors(db, "Error recording application"):
        if not increment_counter(db, job_id, "applications"):
            raise NotFoundError("Job")
        job = db.get(Job, job_id)
        if job is None:
            raise NotFoundError("Job")
        return _job_to_response(job)
