from talentboard.models.job import Job, JobSkill
from talentboard.models.candidate import Candidate, CandidateSkill
from talentboard.models.hotlist import Hotlist, HotlistMember

__all__ = ["Job", "JobSkill", "Candidate", "CandidateSkill", "Hotlist", "HotlistMember"]
