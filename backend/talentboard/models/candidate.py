from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from talentboard.database import Base

DEFAULT_AVATAR = "https://example.com/default-avatar.jpg"


class Candidate(Base):
    __tablename__ = "candidates"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    years_of_exp = Column(Float, nullable=False, default=0)
    technology = Column(Text, nullable=False, default="Not Specified")
    # Legacy counterpart of years_of_exp, still accepted on create.
    experience = Column(Float, nullable=False, default=0)
    avatar = Column(Text, nullable=False, default=DEFAULT_AVATAR)
    resume_filename = Column(Text)
    resume_path = Column(Text)
    resume_mimetype = Column(Text)
    status = Column(Text, nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    skill_rows = relationship(
        "CandidateSkill",
        order_by="CandidateSkill.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def skills(self) -> list[str]:
        return [row.name for row in self.skill_rows]

    @skills.setter
    def skills(self, names: list[str]):
        self.skill_rows = [CandidateSkill(position=i, name=name) for i, name in enumerate(names)]


class CandidateSkill(Base):
    __tablename__ = "candidate_skills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    candidate_id = Column(
        Text, ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False)
    name = Column(Text, nullable=False)
