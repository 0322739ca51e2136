"""RoadTable Cache Context - Explicit Execution-Context Handle.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import itertools
import logging
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any, Dict, Iterator, List, Optional

from roadtable_core.cache.slots import CacheSlots
from roadtable_core.errors import ContextError

logger = logging.getLogger(__name__)

_current_context: ContextVar[Optional["CacheContext"]] = ContextVar(
    "roadtable_cache_context", default=None
)

_context_ids = itertools.count(1)


class CacheContext:
    """Cache scope for one logical execution context (request, job, ...).

    Context-scoped tables keep their caches here instead of on the table,
    one CacheSlots per table strategy. Nothing in a context is shared with
    another context, so no locking is done. A context belongs to one
    logical flow and must not be used by two threads at once.

    The context can be passed explicitly to every table call, or activated
    so calls without a context pick it up:

        with CacheContext("request-42") as ctx:
            users.get("alice")          # uses ctx
            users.get("bob", ctx)       # same thing
        # ctx is closed here and its caches are discarded

    The active context is held in a ContextVar, so it follows asyncio tasks.
    New threads start without an active context.
    """

    def __init__(self, name: Optional[str] = None):
        """Initialize context.

        Args:
            name: Context name for logging
        """
        self.name = name or f"context-{next(_context_ids)}"
        self._slots: Dict[Any, CacheSlots] = {}
        self._tokens: List[Token] = []
        self._closed = False

    @classmethod
    def current(cls) -> "CacheContext":
        """Get the active context.

        Returns:
            Active CacheContext

        Raises:
            ContextError: If no context is active
        """
        context = _current_context.get()
        if context is None:
            raise ContextError("No active cache context; pass one explicitly or use 'with CacheContext()'")
        return context

    @classmethod
    def resolve(
        cls,
        context: Optional["CacheContext"] = None,
        required: bool = True,
    ) -> Optional["CacheContext"]:
        """Pick the explicit context or fall back to the active one.

        Args:
            context: Explicit context
            required: Raise when there is neither

        Returns:
            CacheContext, or None when not required and none is available

        Raises:
            ContextError: If required and no context is available
        """
        if context is not None:
            return context
        if required:
            return cls.current()
        return _current_context.get()

    @property
    def closed(self) -> bool:
        """Whether the context has been closed."""
        return self._closed

    def slots_for(self, owner: Any) -> CacheSlots:
        """Get the cache slots of a strategy, creating them on first use.

        Args:
            owner: Strategy owning the slots

        Returns:
            CacheSlots for this context

        Raises:
            ContextError: If the context is closed
        """
        if self._closed:
            raise ContextError(f"Cache context {self.name} is closed")
        slots = self._slots.get(owner)
        if slots is None:
            slots = CacheSlots()
            self._slots[owner] = slots
        return slots

    def discard(self, owner: Any) -> bool:
        """Discard the slots of a strategy.

        Args:
            owner: Strategy owning the slots

        Returns:
            True if there were slots to discard
        """
        return self._slots.pop(owner, None) is not None

    def close(self) -> None:
        """Discard every cache held by this context."""
        if not self._closed:
            logger.debug(f"Closing cache context {self.name} ({len(self._slots)} tables)")
        self._slots.clear()
        self._closed = True

    @contextmanager
    def activate(self) -> Iterator["CacheContext"]:
        """Make this the active context without closing it afterwards.

        Yields:
            This context
        """
        token = _current_context.set(self)
        try:
            yield self
        finally:
            _current_context.reset(token)

    def __enter__(self) -> "CacheContext":
        """Activate the context."""
        self._tokens.append(_current_context.set(self))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Deactivate and close once the outermost block exits."""
        _current_context.reset(self._tokens.pop())
        if not self._tokens:
            self.close()

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        return f"CacheContext(name={self.name!r}, tables={len(self._slots)}, closed={self._closed})"


__all__ = ["CacheContext"]
