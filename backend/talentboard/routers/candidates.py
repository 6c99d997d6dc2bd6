from pathlib import Path

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from pydantic import ValidationError
from sqlalchemy.orm import Session

from talentboard.config import settings
from talentboard.database import get_db
from talentboard.dependencies import valid_candidate_id
from talentboard.errors import BadRequestError, NotFoundError, describe_validation_errors
from talentboard.models.candidate import Candidate
from talentboard.schemas.candidate import (
    CandidateCreate,
    CandidateResponse,
    CandidateSummary,
    ResumeFile,
)
from talentboard.schemas.common import Envelope
from talentboard.services.filters import (
    CandidateFilters,
    build_candidate_predicate,
    candidate_search_predicate,
    split_csv,
)
from talentboard.services.store import CANDIDATE_FIELDS, compile_predicate, now_utc, translate_errors
from talentboard.services.uploads import StoredResume, discard_file, read_resume, resume_on_disk
from talentboard.utils.ids import new_id

router = APIRouter(tags=["candidates"])

SEARCH_LIMIT = 10
DUPLICATE_EMAIL = "A candidate with this email already exists"


def _summary_fields(candidate: Candidate) -> dict:
    return dict(
        id=candidate.id,
        name=candidate.name,
        email=candidate.email,
        years_of_exp=candidate.years_of_exp,
        technology=candidate.technology,
        skills=candidate.skills,
        experience=candidate.experience,
        avatar=candidate.avatar,
        status=candidate.status,
        created_at=candidate.created_at,
        updated_at=candidate.updated_at,
    )


def candidate_to_response(candidate: Candidate) -> CandidateResponse:
    resume = ResumeFile(
        filename=candidate.resume_filename,
        path=candidate.resume_path,
        mimetype=candidate.resume_mimetype,
        url=f"{settings.uploads_url_prefix}/{candidate.resume_filename}" if candidate.resume_filename else None,
    )
    return CandidateResponse(**_summary_fields(candidate), resume_file=resume)


def _apply_fields(candidate: Candidate, req: CandidateCreate):
    candidate.name = req.name
    candidate.email = req.email
    candidate.years_of_exp = req.years_of_exp
    candidate.technology = req.technology
    candidate.skills = req.skills
    candidate.experience = req.experience
    candidate.avatar = req.avatar
    candidate.status = req.status


def _attach_resume(candidate: Candidate, stored: StoredResume | None):
    if stored is None:
        return
    candidate.resume_filename = stored.filename
    candidate.resume_path = str(stored.path)
    candidate.resume_mimetype = stored.mimetype


def _new_candidate(req: CandidateCreate, stored: StoredResume | None = None) -> Candidate:
    now = now_utc()
    candidate = Candidate(id=new_id(), created_at=now, updated_at=now)
    _apply_fields(candidate, req)
    _attach_resume(candidate, stored)
    return candidate


def _get_or_404(db: Session, candidate_id: str) -> Candidate:
    candidate = db.get(Candidate, candidate_id)
    if candidate is None:
        raise NotFoundError("Candidate")
    return candidate


@router.get("/candidates", response_model=list[CandidateResponse])
async def list_candidates(
    status: str | None = None,
    technology: str | None = None,
    skills: str | None = None,
    db: Session = Depends(get_db),
):
    predicate = build_candidate_predicate(CandidateFilters(status=status, technology=technology, skills=skills))
    with translate_errors(db, "Error fetching candidates"):
        candidates = (
            db.query(Candidate)
            .filter(*compile_predicate(predicate, CANDIDATE_FIELDS))
            .order_by(Candidate.created_at)
            .all()
        )
        return [candidate_to_response(c) for c in candidates]


@router.get("/candidates/search", response_model=Envelope[list[CandidateSummary]])
async def search_candidates(q: str | None = Query(None), db: Session = Depends(get_db)):
    """Match ``q`` against name, email, technology or any skill. Resume metadata is left out."""
    try:
        predicate = candidate_search_predicate(q or "")
    except ValueError as exc:
        raise BadRequestError(str(exc)) from exc

    with translate_errors(db, "Error searching candidates"):
        candidates = (
            db.query(Candidate)
            .filter(*compile_predicate(predicate, CANDIDATE_FIELDS))
            .order_by(Candidate.updated_at.desc())
            .limit(SEARCH_LIMIT)
            .all()
        )
        return Envelope(data=[CandidateSummary(**_summary_fields(c)) for c in candidates])


@router.get("/candidates/{candidate_id}", response_model=CandidateResponse)
async def get_candidate(candidate_id: str = Depends(valid_candidate_id), db: Session = Depends(get_db)):
    with translate_errors(db, "Error fetching candidate"):
        return candidate_to_response(_get_or_404(db, candidate_id))


@router.post("/candidate", response_model=CandidateResponse, status_code=201)
async def create_candidate(req: CandidateCreate, db: Session = Depends(get_db)):
    candidate = _new_candidate(req)
    with translate_errors(db, "Error creating candidate", conflict=DUPLICATE_EMAIL):
        db.add(candidate)
        db.commit()
        db.refresh(candidate)
        return candidate_to_response(candidate)


@router.post("/candidate/with-resume", response_model=CandidateResponse, status_code=201)
async def create_candidate_with_resume(
    name: str | None = Form(None),
    email: str | None = Form(None),
    years_of_exp: str | None = Form(None, alias="yearsOfExp"),
    technology: str | None = Form(None),
    skills: str | None = Form(None),
    experience: str | None = Form(None),
    avatar: str | None = Form(None),
    status: str | None = Form(None),
    resume_file: UploadFile | None = File(None, alias="resumeFile"),
    db: Session = Depends(get_db),
):
    """Create a candidate from a multipart form with an optional resume.

    The stored resume is removed again if the candidate cannot be saved.
    """
    raw = {
        "name": name,
        "email": email,
        "yearsOfExp": years_of_exp,
        "technology": technology,
        "experience": experience,
        "avatar": avatar,
        "status": status,
    }
    # Blank form fields fall back to the schema defaults.
    fields = {key: value for key, value in raw.items() if value is not None and value.strip()}
    if skills is not None:
        fields["skills"] = split_csv(skills)

    resume = await read_resume(resume_file)
    try:
        with resume_on_disk(resume) as stored:
            req = CandidateCreate.model_validate(fields)
            candidate = _new_candidate(req, stored)
            with translate_errors(db, "Error creating candidate", conflict=DUPLICATE_EMAIL):
                db.add(candidate)
                db.commit()
                db.refresh(candidate)
    except ValidationError as exc:
        raise BadRequestError(describe_validation_errors(exc.errors())) from exc

    return candidate_to_response(candidate)


@router.put("/candidates/{candidate_id}", response_model=CandidateResponse)
async def replace_candidate(
    req: CandidateCreate,
    candidate_id: str = Depends(valid_candidate_id),
    db: Session = Depends(get_db),
):
    """Replace the profile fields; the resume is kept. Last write wins."""
    with translate_errors(db, "Error updating candidate", conflict=DUPLICATE_EMAIL):
        candidate = _get_or_404(db, candidate_id)
        _apply_fields(candidate, req)
        candidate.updated_at = now_utc()
        db.commit()
        db.refresh(candidate)
        return candidate_to_response(candidate)


@router.post("/candidates/{candidate_id}/resume", response_model=CandidateResponse)
async def attach_resume(
    candidate_id: str = Depends(valid_candidate_id),
    resume_file: UploadFile | None = File(None, alias="resumeFile"),
    db: Session = Depends(get_db),
):
    """Attach or replace a candidate's resume; the previous file is removed after commit."""
    with translate_errors(db, "Error fetching candidate"):
        candidate = _get_or_404(db, candidate_id)
        previous = candidate.resume_path

    resume = await read_resume(resume_file)
    if resume is None:
        raise BadRequestError("Resume file is required")

    with resume_on_disk(resume) as stored:
        _attach_resume(candidate, stored)
        candidate.updated_at = now_utc()
        with translate_errors(db, "Error saving resume"):
            db.commit()
            db.refresh(candidate)

    if previous:
        discard_file(Path(previous))
    return candidate_to_response(candidate)


@router.delete("/candidates/{candidate_id}")
async def delete_candidate(candidate_id: str = Depends(valid_candidate_id), db: Session = Depends(get_db)):
    """Delete a candidate. Hotlists that reference it are left untouched."""
    with translate_errors(db, "Error deleting candidate"):
        candidate = _get_or_404(db, candidate_id)
        resume_path = candidate.resume_path
        db.delete(candidate)
        db.commit()

    if resume_path:
        discard_file(Path(resume_path))
    return {"success": True, "message": "Candidate deleted"}
