"""League model for cricket league database."""

from sqlalchemy import Column, Text, Index
from sqlalchemy.orm import relationship

from .base import Base, IdentifiedMixin, UTCDateTime


class League(IdentifiedMixin, Base):
    """A named competition with a date range, owning teams and matches."""

    __tablename__ = "leagues"

    name = Column(Text, nullable=False, unique=True)
    location = Column(Text, nullable=True)
    # No ordering is enforced between the two dates
    start_date = Column(UTCDateTime, nullable=False)
    end_date = Column(UTCDateTime, nullable=False)

    # Relationships
    teams = relationship(
        "Team",
        back_populates="league",
        order_by="Team.name",
        passive_deletes=True,
    )
    matches = relationship("Match", back_populates="league", passive_deletes=True)

    __table_args__ = (
        Index("idx_league_start_date", "start_date"),
    )

    def __repr__(self) -> str:
        return f"<League(name='{self.name}', location='{self.location}')>"
