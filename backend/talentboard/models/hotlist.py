from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from talentboard.database import Base


class Hotlist(Base):
    __tablename__ = "hotlists"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    description = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False)

    member_rows = relationship(
        "HotlistMember",
        order_by="HotlistMember.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def candidate_ids(self) -> list[str]:
        return [row.candidate_id for row in self.member_rows]

    @candidate_ids.setter
    def candidate_ids(self, ids: list[str]):
        self.member_rows = [HotlistMember(position=i, candidate_id=cid) for i, cid in enumerate(ids)]


class HotlistMember(Base):
    __tablename__ = "hotlist_members"

    id = Column(Integer, primary_key=True, autoincrement=True)
    hotlist_id = Column(Text, ForeignKey("hotlists.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    # No foreign key: deleting a candidate leaves this reference dangling.
    candidate_id = Column(Text, nullable=False)
