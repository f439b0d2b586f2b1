"""Match model for cricket league database."""

from enum import Enum

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship

from .base import Base, IdentifiedMixin, UTCDateTime


class MatchStatus(str, Enum):
    """Enumeration of match statuses. Any value may replace any other."""
    SCHEDULED = "Scheduled"
    LIVE = "Live"
    COMPLETED = "Completed"
    ABANDONED = "Abandoned"
    POSTPONED = "Postponed"


class TossDecision(str, Enum):
    """What the toss winner chose to do first."""
    BAT = "Bat"
    BOWL = "Bowl"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Match(IdentifiedMixin, Base):
    """A scheduled or completed game between two teams within a league."""

    __tablename__ = "matches"

    league_id = Column(String(255), ForeignKey("leagues.id", ondelete="CASCADE"), nullable=False, index=True)
    team_a_id = Column(String(255), ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    team_b_id = Column(String(255), ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)

    date_time = Column(UTCDateTime, nullable=False)
    venue = Column(Text, nullable=True)
    overs = Column(Integer, nullable=False, default=15, server_default="15")
    status = Column(
        SQLEnum(MatchStatus, native_enum=False, length=20, values_callable=_enum_values),
        nullable=False,
        default=MatchStatus.SCHEDULED,
        server_default=MatchStatus.SCHEDULED.value,
    )

    # Toss winner is not constrained to be team A or team B
    toss_won_by_team_id = Column(String(255), ForeignKey("teams.id", ondelete="SET NULL"), nullable=True)
    chose_to = Column(SQLEnum(TossDecision, native_enum=False, length=10, values_callable=_enum_values), nullable=True)

    umpire1 = Column(Text, nullable=True)
    umpire2 = Column(Text, nullable=True)
    result = Column(Text, nullable=True)

    # Back-reference maintained by the scorecard upsert, not by the store
    scorecard_id = Column(
        String(255),
        ForeignKey("scorecards.id", ondelete="SET NULL", use_alter=True, name="fk_matches_scorecard_id"),
        nullable=True,
        unique=True,
    )

    # Relationships
    league = relationship("League", back_populates="matches")
    team_a = relationship("Team", foreign_keys=[team_a_id])
    team_b = relationship("Team", foreign_keys=[team_b_id])
    toss_winner = relationship("Team", foreign_keys=[toss_won_by_team_id])

    __table_args__ = (
        CheckConstraint("team_a_id <> team_b_id", name="ck_matches_distinct_teams"),
        Index("idx_match_date_time", "date_time"),
    )

    def __repr__(self) -> str:
        return f"<Match({self.team_a_id} vs {self.team_b_id}, {self.date_time}, {self.status.value if self.status else None})>"
