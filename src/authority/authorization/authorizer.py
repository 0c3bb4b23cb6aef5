"""Authorizers.

An :class:`Authorizer` answers capability questions about one resource
(an instance or a resource class) on behalf of that resource, keeping
authorization logic out of the resource's own class.  It only holds a
back-reference to the resource.

Once ``authority.configure()`` has run, the base class carries one
ability method per adjective in the vocabulary, each delegating to the
configured default strategy::

    class DocumentAuthorizer(Authorizer):
        def updatable_by(self, user, options=None):
            return self.resource.author == user

    DocumentAuthorizer(doc).updatable_by(alice)   # custom logic
    DocumentAuthorizer(doc).deletable_by(alice)   # default strategy
"""
from __future__ import annotations

import logging
from typing import Any

from authority import lifecycle
from authority.capabilities.registry import ability_name, custom_predicate_name

logger = logging.getLogger(__name__)


class Authorizer:
    """Base authorizer; every ability defaults to the default strategy.

    Parameters
    ----------
    resource:
        The resource instance or class being authorized.
    """

    def __init__(self, resource: Any) -> None:
        self.resource = resource

    def default(
        self, adjective: str, user: Any, options: dict[str, Any] | None = None
    ) -> bool:
        """Ask the configured default strategy about *adjective*."""
        strategy = lifecycle.resolved().default_strategy
        decision = strategy(adjective, self, user)
        logger.debug(
            "default strategy %s(%s, %r) -> %r",
            getattr(strategy, "__name__", strategy),
            adjective,
            user,
            decision,
        )
        return decision

    @classmethod
    def ability_table(cls) -> dict[str, Any]:
        """Return ``verb -> ability function`` for this authorizer class."""
        registry = lifecycle.registry()
        return {
            verb: getattr(cls, ability_name(registry.adjective_for(verb)))
            for verb in registry.verbs()
        }

    def authorizes(
        self, verb: str, user: Any, options: dict[str, Any] | None = None
    ) -> Any:
        """Dispatch *verb* to the matching ability method.

        Raises
        ------
        authority.core.errors.InvalidVocabulary
            If *verb* is not in the configured vocabulary.
        """
        adjective = lifecycle.registry().adjective_for(verb)
        ability = getattr(self, ability_name(adjective))
        if options is None:
            return ability(user)
        return ability(user, options)

    @classmethod
    def authorizes_to(
        cls, action: str, user: Any, options: dict[str, Any] | None = None
    ) -> Any:
        """Answer a custom, resource-free *action* for *user*.

        Uses ``authorizes_to_<action>`` when the subclass defines one,
        otherwise the default strategy with the action as the capability
        name and this class as the authorizer.
        """
        check = getattr(cls, custom_predicate_name(action), None)
        if check is None:
            return lifecycle.resolved().default_strategy(action, cls, user)
        if options is None:
            return check(user)
        return check(user, options)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.resource!r})"
