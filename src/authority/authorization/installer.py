"""One-time installation of vocabulary-derived methods.

Adds, for every ``(verb, adjective)`` pair:

* ``Authorizer.<adjective>_by``   -- delegates to the default strategy;
* ``Abilities.<adjective>_by``    -- asks the resource's authorizer;
* ``UserAbilities.can_<verb>``    -- asks the resource.

Names a class already defines in its own body are left alone.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from authority.authorization.abilities import (
    Abilities,
    UserAbilities,
    authorizer_ability,
    resource_ability,
    user_predicate,
)
from authority.authorization.authorizer import Authorizer
from authority.capabilities.registry import ability_name, predicate_name

if TYPE_CHECKING:
    from authority.capabilities.registry import CapabilityRegistry

logger = logging.getLogger(__name__)

Installed = list[tuple[type, str]]


def install_capabilities(registry: CapabilityRegistry) -> Installed:
    """Install the methods and return the ``(class, name)`` pairs added."""
    installed: Installed = []

    def put(cls: type, name: str, value: object) -> None:
        if name in vars(cls):
            logger.debug("%s.%s already defined, not installing", cls.__name__, name)
            return
        setattr(cls, name, value)
        installed.append((cls, name))

    for verb, adjective in registry.abilities().items():
        ability = ability_name(adjective)
        put(Authorizer, ability, authorizer_ability(adjective, ability))
        put(Abilities, ability, resource_ability(adjective, ability))
        name = predicate_name(verb)
        put(UserAbilities, name, user_predicate(verb, name, ability))

    logger.debug("installed %d capability methods", len(installed))
    return installed


def uninstall_capabilities(installed: Installed) -> None:
    """Remove methods previously returned by :func:`install_capabilities`."""
    for cls, name in reversed(installed):
        if name in vars(cls):
            delattr(cls, name)
