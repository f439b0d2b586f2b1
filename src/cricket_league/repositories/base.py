"""Shared repository plumbing: store handle, id allocation and inserts."""

from __future__ import annotations

import logging
from typing import Callable, Optional, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..database import Store
from ..errors import translate_store_error
from ..ids import IdAllocator, UuidAllocator, insert_with_fresh_id

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT")


class Repository:
    """Base class for entity repositories.

    Every repository is bound to an explicitly constructed ``Store``; there is
    no module-level connection state.
    """

    def __init__(self, store: Store, allocator: Optional[IdAllocator] = None, max_attempts: int = 3):
        self.store = store
        self.allocator = allocator or UuidAllocator()
        self.max_attempts = max_attempts

    def _insert_with_fresh_id(self, session: Session, build: Callable[[str], RowT]) -> RowT:
        """Insert ``build(new_id)``, retrying on primary-key collisions.

        Each attempt runs in a SAVEPOINT so a collision only undoes that
        attempt, not the caller's enclosing transaction.
        """

        def insert(new_id: str) -> RowT:
            row = build(new_id)
            try:
                with session.begin_nested():
                    session.add(row)
                    session.flush()
            except IntegrityError as exc:
                logger.error("Store error: %s", exc.orig)
                raise translate_store_error(exc) from exc
            session.refresh(row)
            return row

        return insert_with_fresh_id(self.allocator, insert, self.max_attempts)
