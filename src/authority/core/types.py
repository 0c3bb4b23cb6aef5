"""Authority shared value types.

* ``Verb`` and ``Adjective`` are ``NewType`` wrappers around ``str`` for
  static type-safety; at run time they are plain strings.
* ``Options`` is the accepted shape of the optional options argument of
  every predicate and enforcement call.
* :func:`normalize_options` converts that argument into the mapping a
  predicate receives.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, NewType, Protocol, TypeAlias

from authority.core.errors import MalformedOptions

# ---------------------------------------------------------------------------
# Value types (NewType wrappers)
# ---------------------------------------------------------------------------

Verb = NewType("Verb", str)
"""Action name used as a vocabulary key, e.g. ``create``."""

Adjective = NewType("Adjective", str)
"""Capability string derived from a verb, e.g. ``creatable``."""

Options: TypeAlias = Mapping[str, Any] | Sequence[Any] | None
"""A mapping, a flat ``[key, value, key, value, ...]`` sequence, or ``None``."""


# ---------------------------------------------------------------------------
# Callable shapes
# ---------------------------------------------------------------------------

class DefaultStrategy(Protocol):
    """Fallback predicate used when no authorizer override exists."""

    def __call__(self, adjective: str, authorizer: Any, user: Any) -> bool:
        ...


class Predicate(Protocol):
    """Resource-scoped predicate stored in a :class:`PredicateTable`."""

    def __call__(
        self, actor: Any, resource: Any, options: dict[str, Any] | None = None
    ) -> Any:
        ...


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

def normalize_options(options: Options) -> dict[str, Any] | None:
    """Convert *options* into a fresh ``dict`` (or ``None``).

    ``None`` and an empty sequence both mean "no options", in which case
    the predicate is called without an options argument.

    Raises
    ------
    MalformedOptions
        If a flat sequence has an odd number of items, or *options* is
        neither a mapping nor a sequence.
    """
    if options is None:
        return None
    if isinstance(options, Mapping):
        return dict(options)
    if isinstance(options, (str, bytes)) or not isinstance(options, Sequence):
        raise MalformedOptions(
            f"Options of type {type(options).__name__} are not supported",
            details={"type": type(options).__name__},
        )
    if not options:
        return None
    if len(options) % 2:
        raise MalformedOptions(
            f"Odd number of arguments for options ({len(options)})",
            details={"length": len(options)},
        )
    items = list(options)
    return dict(zip(items[::2], items[1::2], strict=True))
