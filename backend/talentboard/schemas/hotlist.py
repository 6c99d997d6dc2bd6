from datetime import datetime

from pydantic import Field, field_validator

from talentboard.schemas.candidate import CandidateResponse
from talentboard.schemas.common import CamelModel
from talentboard.utils.ids import normalize_id


class HotlistCreate(CamelModel):
    name: str = Field(min_length=1)
    description: str | None = None
    candidates: list[str] = []

    @field_validator("candidates")
    @classmethod
    def _valid_candidate_ids(cls, value: list[str]) -> list[str]:
        ids = []
        for raw in value:
            candidate_id = normalize_id(raw)
            if candidate_id is None:
                raise ValueError(f"Invalid candidate ID format: {raw}")
            ids.append(candidate_id)
        return ids


class HotlistResponse(CamelModel):
    id: str
    name: str
    description: str | None
    candidates: list[CandidateResponse]
    created_at: datetime


class HotlistCandidate(CamelModel):
    id: str
    name: str
    email: str
    technology: str


class HotlistSearchResult(CamelModel):
    id: str
    name: str
    description: str | None
    candidates: list[HotlistCandidate]
    created_at: datetime
