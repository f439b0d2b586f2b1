"""Team and membership models for cricket league database."""

from sqlalchemy import Column, String, Text, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import Base, IdentifiedMixin


class Team(IdentifiedMixin, Base):
    """A roster-holding team within one league."""

    __tablename__ = "teams"

    name = Column(Text, nullable=False)
    league_id = Column(String(255), ForeignKey("leagues.id", ondelete="CASCADE"), nullable=False, index=True)
    captain_id = Column(String(255), ForeignKey("players.id", ondelete="SET NULL"), nullable=True)
    logo_url = Column(Text, nullable=True)

    # Relationships
    league = relationship("League", back_populates="teams")
    captain = relationship("Player", foreign_keys=[captain_id])
    memberships = relationship(
        "Membership",
        back_populates="team",
        order_by="Membership.player_id",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("name", "league_id", name="uq_teams_name_league"),
    )

    @property
    def player_ids(self) -> list[str]:
        return [m.player_id for m in self.memberships]

    def __repr__(self) -> str:
        return f"<Team(name='{self.name}', league_id='{self.league_id}')>"


class Membership(Base):
    """Many-to-many link between a player and a team's roster."""

    __tablename__ = "memberships"

    player_id = Column(String(255), ForeignKey("players.id", ondelete="CASCADE"), primary_key=True)
    team_id = Column(String(255), ForeignKey("teams.id", ondelete="CASCADE"), primary_key=True)

    player = relationship("Player", back_populates="memberships")
    team = relationship("Team", back_populates="memberships")

    __table_args__ = (
        Index("idx_membership_team", "team_id"),
    )

    def __repr__(self) -> str:
        return f"<Membership(player_id='{self.player_id}', team_id='{self.team_id}')>"
