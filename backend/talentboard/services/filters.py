"""Translate optional query parameters into store-independent predicates.

A ``Predicate`` is a conjunction of clauses. Each clause names a logical
record field (``"company.name"``, ``"requiredSkills"``) rather than a column;
``talentboard.services.store`` maps those names onto the schema. Keeping the
two apart lets the filter rules be tested without a database.

All text clauses are case-insensitive substring matches on the literal term.
That is deliberately loose: ``go`` matches ``Golang`` but also ``Diego``.
Terms are not regular expressions: ``.*`` or ``c++`` match only those
characters.
"""
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Equals:
    field: str
    value: Any


@dataclass(frozen=True)
class Contains:
    field: str
    term: str


@dataclass(frozen=True)
class AnyContains:
    """List field matches when any element contains any of the terms."""

    field: str
    terms: tuple[str, ...]


@dataclass(frozen=True)
class AnyOf:
    clauses: tuple["Clause", ...]


Clause = Union[Equals, Contains, AnyContains, AnyOf]


@dataclass(frozen=True)
class Predicate:
    clauses: tuple[Clause, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.clauses)


def clean(value: str | None) -> str | None:
    """Strip a raw parameter; blank counts as absent."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def split_csv(value: str | None) -> list[str]:
    """Split a comma-separated parameter into trimmed, non-empty tokens."""
    if not value:
        return []
    return [token.strip() for token in value.split(",") if token.strip()]


def parse_bool(value: str | None) -> bool | None:
    value = clean(value)
    if value is None:
        return None
    return value == "true"


@dataclass
class JobFilters:
    status: str | None = None
    job_type: str | None = None
    experience_level: str | None = None
    primary_technology: str | None = None
    remote: str | None = None
    location: str | None = None
    search: str | None = None
    required_skills: str | None = None


@dataclass
class CandidateFilters:
    status: str | None = None
    technology: str | None = None
    skills: str | None = None


JOB_SEARCH_FIELDS = ("title", "description", "company.name")
CANDIDATE_SEARCH_FIELDS = ("name", "email", "technology")
HOTLIST_SEARCH_FIELDS = ("name", "description")


def _search_clause(term: str, fields: tuple[str, ...], list_fields: tuple[str, ...] = ()) -> AnyOf:
    clauses: list[Clause] = [Contains(name, term) for name in fields]
    clauses.extend(AnyContains(name, (term,)) for name in list_fields)
    return AnyOf(tuple(clauses))


def build_job_predicate(filters: JobFilters) -> Predicate:
    clauses: list[Clause] = []

    for name, raw in (
        ("status", filters.status),
        ("jobType", filters.job_type),
        ("experienceLevel", filters.experience_level),
        ("primaryTechnology", filters.primary_technology),
    ):
        value = clean(raw)
        if value is not None:
            clauses.append(Equals(name, value))

    remote = parse_bool(filters.remote)
    if remote is not None:
        clauses.append(Equals("remote", remote))

    location = clean(filters.location)
    if location is not None:
        clauses.append(Contains("location", location))

    search = clean(filters.search)
    if search is not None:
        clauses.append(_search_clause(search, JOB_SEARCH_FIELDS))

    skills = split_csv(filters.required_skills)
    if skills:
        clauses.append(AnyContains("requiredSkills", tuple(skills)))

    return Predicate(tuple(clauses))


def build_candidate_predicate(filters: CandidateFilters) -> Predicate:
    clauses: list[Clause] = []
    for name, raw in (("status", filters.status), ("technology", filters.technology)):
        value = clean(raw)
        if value is not None:
            clauses.append(Equals(name, value))

    skills = split_csv(filters.skills)
    if skills:
        clauses.append(AnyContains("skills", tuple(skills)))
    return Predicate(tuple(clauses))


def candidate_search_predicate(q: str) -> Predicate:
    term = clean(q)
    if term is None:
        raise ValueError("Search query is required")
    return Predicate((_search_clause(term, CANDIDATE_SEARCH_FIELDS, ("skills",)),))


def hotlist_search_predicate(q: str) -> Predicate:
    term = clean(q)
    if term is None:
        raise ValueError("Search query is required")
    return Predicate((_search_clause(term, HOTLIST_SEARCH_FIELDS),))
