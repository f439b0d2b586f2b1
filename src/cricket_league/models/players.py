"""Player model for cricket league database."""

from sqlalchemy import Column, Text, Index
from sqlalchemy.orm import relationship

from .base import Base, IdentifiedMixin


class Player(IdentifiedMixin, Base):
    """Player model representing cricket players."""

    __tablename__ = "players"

    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    # Optional, but unique when present
    email = Column(Text, nullable=True, unique=True)
    profile_picture_url = Column(Text, nullable=True)

    # Relationships
    memberships = relationship(
        "Membership",
        back_populates="player",
        order_by="Membership.team_id",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("idx_player_name", "last_name", "first_name"),
    )

    @property
    def team_ids(self) -> list[str]:
        return [m.team_id for m in self.memberships]

    def __repr__(self) -> str:
        return f"<Player(name='{self.first_name} {self.last_name}')>"
