"""Enforcement engine -- the single authorization chokepoint.

Two entry points with deliberately different success values:

* :meth:`Enforcer.enforce` returns the *resource*, so calls chain::

      doc = authority.enforce("update", Document.get(pk), user).publish()

* :meth:`Enforcer.enforce_custom` returns the *decision* itself, because
  custom actions are about the actor's general eligibility and callers
  use the raw answer.

Both raise :class:`~authority.core.errors.SecurityViolation` on a falsey
decision.  Nothing raised by a predicate (a missing method included) is
caught or wrapped, so "no such predicate" stays distinguishable from
"predicate said no".
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from authority import lifecycle
from authority.core.errors import SecurityViolation
from authority.core.types import Options, normalize_options

if TYPE_CHECKING:
    from authority.capabilities.dispatch import DispatchRegistry
    from authority.core.config import ResolvedConfig

R = TypeVar("R")


class Enforcer:
    """Resolves and evaluates predicates for (action, resource, actor).

    Parameters
    ----------
    config:
        Resolved configuration; supplies the logger for denial records.
    dispatch:
        Registry of per-actor-type predicate tables and descriptors.
    """

    def __init__(self, config: ResolvedConfig, dispatch: DispatchRegistry) -> None:
        self._config = config
        self._dispatch = dispatch

    def enforce(
        self, action: str, resource: R, user: Any, options: Options = None
    ) -> R:
        """Return *resource* if ``user.can_<action>(resource[, options])`` is truthy.

        Raises
        ------
        authority.core.errors.MalformedOptions
            If *options* is an odd-length flat sequence.  Raised before
            the predicate is looked up.
        authority.core.errors.SecurityViolation
            If the predicate returns a falsey value.
        """
        opts = normalize_options(options)
        predicate = self._dispatch.predicate_for(type(user), action)
        if opts is None:
            authorized = predicate(user, resource)
        else:
            authorized = predicate(user, resource, opts)
        if not authorized:
            raise self._violation(user, action, resource)
        return resource

    def enforce_custom(
        self, action: str, resource: Any, user: Any, options: Options = None
    ) -> Any:
        """Return the decision of ``type(user)``'s descriptor for *action*.

        *resource* is not passed to the predicate; it is carried into the
        :class:`SecurityViolation` for audit consistency.

        Raises
        ------
        authority.core.errors.MalformedOptions
            If *options* is an odd-length flat sequence.
        authority.core.errors.SecurityViolation
            If the decision is falsey.
        """
        opts = normalize_options(options)
        descriptor = self._dispatch.descriptor_for(type(user))
        authorized = descriptor.authorizes(action, user, opts)
        if not authorized:
            raise self._violation(user, action, resource)
        return authorized

    def _violation(self, user: Any, action: str, resource: Any) -> SecurityViolation:
        violation = SecurityViolation(user, action, resource)
        self._config.logger.warning(violation.message)
        return violation


# ---------------------------------------------------------------------------
# Process-wide entry points
# ---------------------------------------------------------------------------

def enforce(action: str, resource: R, user: Any, options: Options = None) -> R:
    """:meth:`Enforcer.enforce` on the process-wide engine."""
    return lifecycle.enforcer().enforce(action, resource, user, options)


def enforce_custom(
    action: str, resource: Any, user: Any, options: Options = None
) -> Any:
    """:meth:`Enforcer.enforce_custom` on the process-wide engine."""
    return lifecycle.enforcer().enforce_custom(action, resource, user, options)
