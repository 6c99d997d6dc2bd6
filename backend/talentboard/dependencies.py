from talentboard.errors import InvalidIdError
from talentboard.utils.ids import normalize_id


def parse_record_id(value: str, entity: str) -> str:
    record_id = normalize_id(value)
    if record_id is None:
        raise InvalidIdError(entity)
    return record_id


async def valid_job_id(job_id: str) -> str:
    return parse_record_id(job_id, "Job")


async def valid_candidate_id(candidate_id: str) -> str:
    return parse_record_id(candidate_id, "Candidate")


async def valid_hotlist_id(hotlist_id: str) -> str:
    return parse_record_id(hotlist_id, "Hotlist")
