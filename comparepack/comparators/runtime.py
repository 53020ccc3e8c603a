"""Context-local registry activation."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from comparepack.comparators.registry import ComparatorRegistry

_ACTIVE_REGISTRY: ContextVar[ComparatorRegistry | None] = ContextVar(
    "comparepack_active_registry",
    default=None,
)


def active_registry() -> ComparatorRegistry | None:
    """Registry activated in the current context, if any."""
    return _ACTIVE_REGISTRY.get()


@contextmanager
def use_registry(registry: ComparatorRegistry) -> Iterator[ComparatorRegistry]:
    """Activate ``registry`` for the current context.

    Comparators dispatch nested values through the active registry, so a
    registry activates itself for the duration of each comparison it runs.
    """
    token = _ACTIVE_REGISTRY.set(registry)
    try:
        yield registry
    finally:
        _ACTIVE_REGISTRY.reset(token)
