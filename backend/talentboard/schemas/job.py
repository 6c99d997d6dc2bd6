from datetime import date, datetime, time, timezone
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from talentboard.schemas.common import CamelModel, coerce_str_list

JobType = Literal["Full-time", "Part-time", "Contract", "Freelance"]
ExperienceLevel = Literal["Entry Level", "Mid Level", "Senior Level", "Lead", "Manager"]
JobStatus = Literal["active", "closed", "draft"]
SalaryPeriod = Literal["yearly", "monthly", "weekly", "hourly"]


class Company(CamelModel):
    name: str = Field(min_length=1)
    website: str | None = None
    logo: str | None = None


class Salary(CamelModel):
    min: float
    max: float
    currency: str = "USD"
    period: SalaryPeriod = "yearly"


class JobCreate(CamelModel):
    title: str = Field(min_length=1)
    company: Company
    description: str = Field(min_length=1)
    requirements: list[str] = []
    responsibilities: list[str] = []
    job_type: JobType
    experience_level: ExperienceLevel
    location: str = Field(min_length=1)
    remote: bool = False
    salary: Salary
    primary_technology: str = Field(min_length=1)
    required_skills: list[str] = []
    benefits: list[str] = []
    status: JobStatus = "draft"
    application_deadline: datetime

    @field_validator("requirements", "responsibilities", "required_skills", "benefits", mode="before")
    @classmethod
    def _split_lists(cls, value):
        return coerce_str_list(value)

    @field_validator("application_deadline", mode="before")
    @classmethod
    def _date_only_deadline(cls, value):
        # "2030-01-31" means midnight UTC of that day.
        if isinstance(value, str) and len(value) == 10:
            return datetime.combine(date.fromisoformat(value), time(), tzinfo=timezone.utc)
        return value


class JobResponse(CamelModel):
    id: str
    title: str
    company: Company
    description: str
    requirements: list[str]
    responsibilities: list[str]
    job_type: str
    experience_level: str
    location: str
    remote: bool
    salary: Salary
    primary_technology: str
    required_skills: list[str]
    benefits: list[str]
    status: str
    application_deadline: datetime
    posted_date: datetime
    updated_at: datetime
    views: int
    applications: int


class Pagination(BaseModel):
    total: int
    page: int
    pages: int
    limit: int


class JobPage(BaseModel):
    jobs: list[JobResponse]
    pagination: Pagination
