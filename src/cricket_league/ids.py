"""Identifier allocation for new rows.

Identifiers are opaque strings drawn from a high-entropy space. The allocator
performs no existence check; the primary-key constraint is the arbiter and a
violation on insert is retried with a fresh id (see ``insert_with_fresh_id``).
"""

from __future__ import annotations

import uuid
from typing import Callable, Protocol, TypeVar

from loguru import logger
from tenacity import RetryCallState, retry, retry_if_exception_type, stop_after_attempt

from .errors import IdCollisionError

T = TypeVar("T")


class IdAllocator(Protocol):
    """Produces identifiers for new rows."""

    def new_id(self) -> str:
        ...


class UuidAllocator:
    """Random UUID4 identifiers rendered as 32 hex characters."""

    def new_id(self) -> str:
        return uuid.uuid4().hex


def _log_collision(state: RetryCallState) -> None:
    logger.warning("Identifier collision on insert, retrying (attempt {})", state.attempt_number)


def insert_with_fresh_id(allocator: IdAllocator, insert: Callable[[str], T], max_attempts: int = 3) -> T:
    """Call ``insert(new_id)`` until it stops raising ``IdCollisionError``.

    ``insert`` must undo its own partial work on failure (repositories run it
    inside a savepoint). After ``max_attempts`` collisions the last
    ``IdCollisionError`` propagates.
    """

    @retry(
        reraise=True,
        stop=stop_after_attempt(max_attempts),
        retry=retry_if_exception_type(IdCollisionError),
        before_sleep=_log_collision,
    )
    def _attempt() -> T:
        return insert(allocator.new_id())

    return _attempt()
