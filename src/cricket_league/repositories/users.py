"""User lookups and the credential check."""

import logging
from typing import Optional

from sqlalchemy import select

from ..config import AuthSettings
from ..errors import InvalidCredentialsError, NotFoundError
from ..models import User
from ..schemas import UserResponse
from .base import Repository


logger = logging.getLogger(__name__)

ADMIN_ROLE = "ADMIN"


class UserRepository(Repository):

    def authenticate(self, username: str, password: str) -> UserResponse:
        """Return the user whose stored credential equals the one given."""
        with self.store.session() as session:
            user = session.scalars(
                select(User).where(User.username == username, User.password == password)
            ).first()
            if user is None:
                raise InvalidCredentialsError()
            return UserResponse.model_validate(user)

    def get(self, user_id: str) -> UserResponse:
        with self.store.session() as session:
            user = session.get(User, user_id)
            if user is None:
                raise NotFoundError("User not found")
            return UserResponse.model_validate(user)

    def ensure_default_admin(self, auth: Optional[AuthSettings] = None) -> bool:
        """Create the default admin account unless it exists. Returns True if created."""
        auth = auth or AuthSettings()
        with self.store.session() as session:
            exists = session.scalars(select(User.id).where(User.username == auth.admin_username)).first()
            if exists:
                return False
            self._insert_with_fresh_id(
                session,
                lambda new_id: User(
                    id=new_id,
                    username=auth.admin_username,
                    password=auth.admin_password,
                    email=auth.admin_email,
                    role=ADMIN_ROLE,
                ),
            )
        logger.info("Default admin user '%s' created", auth.admin_username)
        return True
