"""Context-local scope stack.

Each thread and asyncio task sees its own stack. The formatter only reads a
snapshot of it, oldest scope first.
"""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from typing import Any, Iterator

from .template import TemplateState


class ScopeProvider:
    """Stack of active logging scopes stored in a :class:`contextvars.ContextVar`."""

    def __init__(self, name: str = "scopelog_scopes") -> None:
        self._stack: contextvars.ContextVar[tuple[Any, ...]] = contextvars.ContextVar(
            name, default=()
        )

    def push(self, state: Any) -> contextvars.Token:
        """Push ``state`` and return the token that :meth:`pop` restores."""
        return self._stack.set(self._stack.get() + (state,))

    def pop(self, token: contextvars.Token) -> None:
        self._stack.reset(token)

    @contextmanager
    def begin_scope(self, state: Any, *args: Any) -> Iterator[Any]:
        """Keep ``state`` on the stack for the duration of the ``with`` block.

        When positional ``args`` are given, ``state`` is a message template
        and the scope becomes a :class:`TemplateState`.
        """
        if args:
            state = TemplateState(state, *args)
        token = self.push(state)
        try:
            yield state
        finally:
            self.pop(token)

    def snapshot(self) -> tuple[Any, ...]:
        return self._stack.get()

    def __iter__(self) -> Iterator[Any]:
        return iter(self._stack.get())

    def __len__(self) -> int:
        return len(self._stack.get())


_default_provider = ScopeProvider()


def get_scope_provider() -> ScopeProvider:
    """Return the process-wide scope provider."""
    return _default_provider


def begin_scope(state: Any, *args: Any):
    """Open a scope on the process-wide provider."""
    return _default_provider.begin_scope(state, *args)
