from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from talentboard.database import get_db
from talentboard.dependencies import valid_hotlist_id
from talentboard.errors import BadRequestError, NotFoundError
from talentboard.models.candidate import Candidate
from talentboard.models.hotlist import Hotlist
from talentboard.routers.candidates import candidate_to_response
from talentboard.schemas.common import Envelope
from talentboard.schemas.hotlist import (
    HotlistCandidate,
    HotlistCreate,
    HotlistResponse,
    HotlistSearchResult,
)
from talentboard.services.filters import hotlist_search_predicate
from talentboard.services.store import HOTLIST_FIELDS, compile_predicate, now_utc, translate_errors
from talentboard.utils.ids import new_id

router = APIRouter(tags=["hotlists"])

SEARCH_LIMIT = 10


def _load_members(db: Session, hotlists: list[Hotlist]) -> dict[str, Candidate]:
    """Fetch every referenced candidate in one query. Deleted ones are simply absent."""
    ids = {cid for hotlist in hotlists for cid in hotlist.candidate_ids}
    if not ids:
        return {}
    return {c.id: c for c in db.query(Candidate).filter(Candidate.id.in_(ids)).all()}


def _members(hotlist: Hotlist, lookup: dict[str, Candidate]) -> list[Candidate]:
    return [lookup[cid] for cid in hotlist.candidate_ids if cid in lookup]


def _hotlist_to_response(hotlist: Hotlist, lookup: dict[str, Candidate]) -> HotlistResponse:
    return HotlistResponse(
        id=hotlist.id,
        name=hotlist.name,
        description=hotlist.description,
        candidates=[candidate_to_response(c) for c in _members(hotlist, lookup)],
        created_at=hotlist.created_at,
    )


def _hotlist_to_search_result(hotlist: Hotlist, lookup: dict[str, Candidate]) -> HotlistSearchResult:
    return HotlistSearchResult(
        id=hotlist.id,
        name=hotlist.name,
        description=hotlist.description,
        candidates=[
            HotlistCandidate(id=c.id, name=c.name, email=c.email, technology=c.technology)
            for c in _members(hotlist, lookup)
        ],
        created_at=hotlist.created_at,
    )


@router.get("/hotlists", response_model=list[HotlistResponse])
async def list_hotlists(db: Session = Depends(get_db)):
    with translate_errors(db, "Error fetching hotlists"):
        hotlists = db.query(Hotlist).order_by(Hotlist.created_at).all()
        lookup = _load_members(db, hotlists)
        return [_hotlist_to_response(h, lookup) for h in hotlists]


@router.get("/hotlists/search", response_model=Envelope[list[HotlistSearchResult]])
async def search_hotlists(q: str | None = Query(None), db: Session = Depends(get_db)):
    try:
        predicate = hotlist_search_predicate(q or "")
    except ValueError as exc:
        raise BadRequestError(str(exc)) from exc

    with translate_errors(db, "Error searching hotlists"):
        hotlists = (
            db.query(Hotlist)
            .filter(*compile_predicate(predicate, HOTLIST_FIELDS))
            .order_by(Hotlist.created_at.desc())
            .limit(SEARCH_LIMIT)
            .all()
        )
        lookup = _load_members(db, hotlists)
        return Envelope(data=[_hotlist_to_search_result(h, lookup) for h in hotlists])


@router.get("/hotlist/{hotlist_id}", response_model=HotlistResponse)
async def get_hotlist(hotlist_id: str = Depends(valid_hotlist_id), db: Session = Depends(get_db)):
    with translate_errors(db, "Error fetching hotlist"):
        hotlist = db.get(Hotlist, hotlist_id)
        if hotlist is None:
            raise NotFoundError("Hotlist")
        return _hotlist_to_response(hotlist, _load_members(db, [hotlist]))


@router.post("/hotlists", response_model=HotlistResponse, status_code=201)
async def create_hotlist(req: HotlistCreate, db: Session = Depends(get_db)):
    hotlist = Hotlist(id=new_id(), name=req.name, description=req.description, created_at=now_utc())
    hotlist.candidate_ids = req.candidates

    with translate_errors(db, "Error creating hotlist"):
        db.add(hotlist)
        db.commit()
        db.refresh(hotlist)
        return _hotlist_to_response(hotlist, _load_members(db, [hotlist]))
