from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from talentboard.models.candidate import DEFAULT_AVATAR
from talentboard.schemas.common import CamelModel, coerce_str_list

CandidateStatus = Literal["active", "inactive", "pending"]


class CandidateCreate(CamelModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    years_of_exp: float = 0
    technology: str = "Not Specified"
    skills: list[str] = []
    experience: float = 0
    avatar: str = DEFAULT_AVATAR
    status: CandidateStatus = "pending"

    @field_validator("skills", mode="before")
    @classmethod
    def _split_skills(cls, value):
        return coerce_str_list(value)

    @field_validator("email", mode="before")
    @classmethod
    def _strip_email(cls, value):
        return value.strip() if isinstance(value, str) else value


class ResumeFile(CamelModel):
    filename: str | None = None
    path: str | None = None
    mimetype: str | None = None
    url: str | None = None


class CandidateSummary(CamelModel):
    id: str
    name: str
    email: str
    years_of_exp: float
    technology: str
    skills: list[str]
    experience: float
    avatar: str
    status: str
    created_at: datetime
    updated_at: datetime


class CandidateResponse(CandidateSummary):
    resume_file: ResumeFile
