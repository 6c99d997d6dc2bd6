"""Store access shared by the routers: predicate compilation, atomic
counters, and translation of driver errors into API errors."""
import logging
from contextlib import contextmanager
from datetime import datetime, timezone

from sqlalchemy import String, literal, or_, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from talentboard.database import fold
from talentboard.errors import BadRequestError, StorageError
from talentboard.models import Candidate, CandidateSkill, Hotlist, Job, JobSkill
from talentboard.services.filters import AnyContains, AnyOf, Contains, Equals, Predicate

logger = logging.getLogger("talentboard.store")

# Logical field name -> column, or (relationship, element column) for list fields.
JOB_FIELDS = {
    "title": Job.title,
    "description": Job.description,
    "company.name": Job.company_name,
    "status": Job.status,
    "jobType": Job.job_type,
    "experienceLevel": Job.experience_level,
    "primaryTechnology": Job.primary_technology,
    "remote": Job.remote,
    "location": Job.location,
    "requiredSkills": (Job.skill_rows, JobSkill.name),
}

CANDIDATE_FIELDS = {
    "name": Candidate.name,
    "email": Candidate.email,
    "technology": Candidate.technology,
    "status": Candidate.status,
    "skills": (Candidate.skill_rows, CandidateSkill.name),
}

HOTLIST_FIELDS = {
    "name": Hotlist.name,
    "description": Hotlist.description,
}

COUNTERS = {"views", "applications"}

LIKE_ESCAPE = "/"


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _contains(column, term: str):
    """Case-insensitive substring match with LIKE wildcards in ``term`` escaped."""
    for char in (LIKE_ESCAPE, "%", "_"):
        term = term.replace(char, LIKE_ESCAPE + char)
    pattern = literal(f"%{term}%", String)
    return fold(column).like(fold(pattern), escape=LIKE_ESCAPE)


def _compile_clause(clause, fields: dict):
    if isinstance(clause, AnyOf):
        return or_(*(_compile_clause(c, fields) for c in clause.clauses))

    target = fields[clause.field]
    if isinstance(clause, Equals):
        return target == clause.value
    if isinstance(clause, Contains):
        return _contains(target, clause.term)
    if isinstance(clause, AnyContains):
        relation, element = target
        return relation.any(or_(*(_contains(element, t) for t in clause.terms)))
    raise TypeError(f"Unsupported clause: {clause!r}")


def compile_predicate(predicate: Predicate, fields: dict) -> list:
    """SQLAlchemy conditions for ``Query.filter(*conditions)``."""
    return [_compile_clause(clause, fields) for clause in predicate.clauses]


def increment_counter(db: Session, job_id: str, counter: str) -> bool:
    """Add one to a job counter in a single UPDATE. False when no row matched."""
    if counter not in COUNTERS:
        raise ValueError(f"Unknown counter: {counter}")
    column = getattr(Job, counter)
    result = db.execute(
        update(Job)
        .where(Job.id == job_id)
        .values({column: column + 1})
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return result.rowcount == 1


@contextmanager
def translate_errors(db: Session, message: str, conflict: str | None = None):
    """Roll back and re-raise driver errors as API errors.

    ``conflict`` turns an integrity violation (duplicate unique value) into a
    400 with that message; otherwise it is a storage error like any other.
    """
    try:
        yield
    except IntegrityError as exc:
        db.rollback()
        if conflict is None:
            logger.exception(message)
            raise StorageError(message, detail=str(exc.orig)) from exc
        raise BadRequestError(conflict, detail=str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(message)
        raise StorageError(message, detail=str(exc)) from exc
