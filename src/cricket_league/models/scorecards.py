"""Scorecard model for cricket league database."""

from sqlalchemy import JSON, Column, ForeignKey, String
from sqlalchemy.dialects.postgresql import JSONB

from .base import Base, IdentifiedMixin


# Innings are opaque to the core: stored and returned unchanged
InningsType = JSON(none_as_null=True).with_variant(JSONB(none_as_null=True), "postgresql")


class Scorecard(IdentifiedMixin, Base):
    """Record of up to two innings for one match."""

    __tablename__ = "scorecards"

    match_id = Column(
        String(255),
        ForeignKey("matches.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    innings1 = Column(InningsType, nullable=True)
    innings2 = Column(InningsType, nullable=True)

    def __repr__(self) -> str:
        return f"<Scorecard(id='{self.id}', match_id='{self.match_id}')>"
