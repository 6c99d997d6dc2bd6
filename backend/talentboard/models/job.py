from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from talentboard.database import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Text, primary_key=True)
    title = Column(Text, nullable=False)
    company_name = Column(Text, nullable=False)
    company_website = Column(Text)
    company_logo = Column(Text)
    description = Column(Text, nullable=False)
    requirements = Column(JSON, nullable=False, default=list)
    responsibilities = Column(JSON, nullable=False, default=list)
    job_type = Column(Text, nullable=False)
    experience_level = Column(Text, nullable=False)
    location = Column(Text, nullable=False)
    remote = Column(Boolean, nullable=False, default=False)
    salary_min = Column(Float, nullable=False)
    salary_max = Column(Float, nullable=False)
    salary_currency = Column(Text, nullable=False, default="USD")
    salary_period = Column(Text, nullable=False, default="yearly")
    primary_technology = Column(Text, nullable=False)
    benefits = Column(JSON, nullable=False, default=list)
    status = Column(Text, nullable=False, default="draft")
    application_deadline = Column(DateTime(timezone=True), nullable=False)
    posted_date = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
    views = Column(Integer, nullable=False, default=0)
    applications = Column(Integer, nullable=False, default=0)

    skill_rows = relationship(
        "JobSkill",
        order_by="JobSkill.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def required_skills(self) -> list[str]:
        return [row.name for row in self.skill_rows]

    @required_skills.setter
    def required_skills(self, names: list[str]):
        self.skill_rows = [JobSkill(position=i, name=name) for i, name in enumerate(names)]


class JobSkill(Base):
    __tablename__ = "job_skills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    job_id = Column(Text, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    name = Column(Text, nullable=False)
