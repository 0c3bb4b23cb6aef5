"""Capability registry.

Derives, from a resolved vocabulary, every name the enforcement engine
and the ability mixins agree on:

========================  ================================
Purpose                   Name for verb ``update``
========================  ================================
resource-scoped check     ``can_update``
actor-type check          ``authorizes_to_update``
authorizer ability        ``updatable_by``
========================  ================================

The naming convention is the only coupling between the engine and
application-defined predicates.  No registration beyond the vocabulary
is required, although :mod:`authority.capabilities.dispatch` allows it.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from authority.core.errors import InvalidVocabulary
from authority.core.types import Adjective, Verb

if TYPE_CHECKING:
    from authority.core.config import ResolvedConfig

PREDICATE_PREFIX = "can_"
CUSTOM_PREDICATE_PREFIX = "authorizes_to_"
ABILITY_SUFFIX = "_by"


def predicate_name(verb: str) -> str:
    """Return the resource-scoped predicate name for *verb*."""
    return f"{PREDICATE_PREFIX}{verb}"


def custom_predicate_name(action: str) -> str:
    """Return the actor-type predicate name for *action*."""
    return f"{CUSTOM_PREDICATE_PREFIX}{action}"


def ability_name(adjective: str) -> str:
    """Return the authorizer/resource ability name for *adjective*."""
    return f"{adjective}{ABILITY_SUFFIX}"


class CapabilityRegistry:
    """Read-only view of the vocabulary held by a :class:`ResolvedConfig`.

    Sequences returned by :meth:`verbs` and :meth:`adjectives` are
    tuples, so callers cannot alter the vocabulary through them.
    """

    def __init__(self, config: ResolvedConfig) -> None:
        self._abilities = config.ability_map
        self._adjective_to_verb = {adj: verb for verb, adj in config.abilities}
        self._actions = config.action_map

    def abilities(self) -> Mapping[str, str]:
        return self._abilities

    def verbs(self) -> tuple[Verb, ...]:
        return tuple(Verb(verb) for verb in self._abilities)

    def adjectives(self) -> tuple[Adjective, ...]:
        return tuple(Adjective(adj) for adj in self._abilities.values())

    def __contains__(self, verb: object) -> bool:
        return verb in self._abilities

    def adjective_for(self, verb: str) -> Adjective:
        try:
            return Adjective(self._abilities[verb])
        except KeyError:
            raise InvalidVocabulary(
                f"Unknown verb {verb!r}",
                details={"verb": str(verb), "known": list(self._abilities)},
            ) from None

    def verb_for_adjective(self, adjective: str) -> Verb:
        try:
            return Verb(self._adjective_to_verb[adjective])
        except KeyError:
            raise InvalidVocabulary(
                f"Unknown adjective {adjective!r}",
                details={
                    "adjective": str(adjective),
                    "known": list(self._adjective_to_verb),
                },
            ) from None

    def verb_for_action(self, action: str) -> Verb:
        """Map a framework action (``index``, ``edit``...) to its verb.

        Actions missing from the alias table map to themselves.
        """
        return Verb(self._actions.get(action, action))

    def predicate_names(self) -> dict[Verb, str]:
        return {verb: predicate_name(verb) for verb in self.verbs()}

    def ability_names(self) -> dict[Adjective, str]:
        return {adj: ability_name(adj) for adj in self.adjectives()}
