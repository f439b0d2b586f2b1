"""User account model."""

from sqlalchemy import Column, Text

from .base import Base, IdentifiedMixin


class User(IdentifiedMixin, Base):
    """Application user. The password column holds the credential as given."""

    __tablename__ = "users"

    username = Column(Text, nullable=False, unique=True)
    password = Column(Text, nullable=False)
    email = Column(Text, nullable=True)
    role = Column(Text, nullable=False)
    profile_picture_url = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<User(username='{self.username}', role='{self.role}')>"
