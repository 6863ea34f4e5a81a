"""Ambient, read-only validation context.

A Context carries request-scoped values (a tenant, a database handle, a
locale) and an advisory cancellation flag into context-aware rules. Contexts
are immutable: deriving one with ``with_value`` or ``with_cancel`` never
changes its parent.

Usage:
    TENANT = ContextKey[str]("tenant")

    ctx = Context.background().with_value(TENANT, "acme")
    err = validate_with_context(ctx, slug, Required, UniqueSlug)
"""
from __future__ import annotations

import threading
from typing import Any, Callable, Generic, Hashable, TypeVar, overload

T = TypeVar("T")


class ContextKey(Generic[T]):
    """Typed key handle for context values.

    Keys compare by identity, so two modules picking the same name never collide.
    """

    __slots__ = ("name", "default")

    def __init__(self, name: str, default: T | None = None) -> None:
        self.name, self.default = name, default

    def __repr__(self) -> str:
        return f"ContextKey({self.name!r})"


class Context:
    """Immutable chain of key/value frames with an optional cancellation event."""

    __slots__ = ("_parent", "_key", "_value", "_cancel_event")

    def __init__(self, parent: Context | None = None, key: Hashable | None = None, value: Any = None,
                 cancel_event: threading.Event | None = None) -> None:
        self._parent, self._key, self._value = parent, key, value
        self._cancel_event = cancel_event

    @classmethod
    def background(cls) -> Context:
        """Empty, never-cancelled root context."""
        return cls()

    def with_value(self, key: Hashable, value: Any) -> Context:
        return Context(self, key, value)

    def with_cancel(self) -> tuple[Context, Callable[[], None]]:
        """Derive a cancellable context. Cancelling it also cancels its descendants, never its parent."""
        event = threading.Event()
        return Context(self, cancel_event=event), event.set

    @overload
    def value(self, key: ContextKey[T]) -> T | None: ...

    @overload
    def value(self, key: Hashable, default: Any = None) -> Any: ...

    def value(self, key, default=None):
        """Nearest value bound to ``key``; falls back to ``default`` or the key's own default."""
        node: Context | None = self
        while node is not None:
            if node._key is not None and node._key == key: return node._value
            node = node._parent
        if default is None and isinstance(key, ContextKey): return key.default
        return default

    @property
    def cancelled(self) -> bool:
        """True once this context or any ancestor was cancelled."""
        node: Context | None = self
        while node is not None:
            if node._cancel_event is not None and node._cancel_event.is_set(): return True
            node = node._parent
        return False

    def __repr__(self) -> str:
        depth, node = 0, self._parent
        while node is not None: depth, node = depth + 1, node._parent
        return f"Context(depth={depth}, cancelled={self.cancelled})"
