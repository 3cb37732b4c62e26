"""Registration cycle ids shared by the log lines of one attempt."""
from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator
from uuid import uuid4

_cycle_id: ContextVar[str | None] = ContextVar("cycle_id", default=None)


def new_cycle_id() -> str:
    return uuid4().hex[:8]


def get_cycle_id() -> str | None:
    return _cycle_id.get()


@contextmanager
def cycle_context(cycle_id: str | None) -> Iterator[None]:
    """Tag log records emitted inside the block with ``cycle_id``.

    Backend events arrive outside the attempt that started them, so handlers
    re-enter the cycle they belong to. ``None`` leaves the current id alone.
    """

    if cycle_id is None:
        yield
        return
    token = _cycle_id.set(cycle_id)
    try:
        yield
    finally:
        _cycle_id.reset(token)
