"""Authority -- capability resolution and enforcement.

Application code asks "may this actor perform this action on this
resource?" through one chokepoint and gets either the resource back or
a :class:`SecurityViolation`.

Components
----------
* Configuration (:mod:`authority.core.config`, :mod:`authority.lifecycle`)
* Capability registry (:mod:`authority.capabilities`)
* Authorizers and ability mixins (:mod:`authority.authorization`)
* Enforcement engine (:mod:`authority.enforcement`)
"""
from __future__ import annotations

__version__ = "1.0.0"

from authority.authorization import Abilities, Authorizer, UserAbilities
from authority.capabilities import (
    ActorDescriptor,
    AuthorizerDescriptor,
    CapabilityRegistry,
    ClassDescriptor,
    DispatchRegistry,
    ability_name,
    custom_predicate_name,
    predicate_name,
)
from authority.core.config import AuthorityConfig, ResolvedConfig, deny_all
from authority.core.errors import (
    AuthorityError,
    AuthorizationError,
    ConfigurationError,
    InvalidVocabulary,
    MalformedOptions,
    NoAuthorizerError,
    SecurityViolation,
    VocabularyLocked,
)
from authority.enforcement import Enforcer, enforce, enforce_custom
from authority.lifecycle import (
    abilities,
    adjectives,
    configure,
    get_configuration,
    register_descriptor,
    register_predicate,
    resolved,
    verbs,
)


__all__ = [
    "__version__",
    # Configuration
    "AuthorityConfig",
    "ResolvedConfig",
    "configure",
    "deny_all",
    "get_configuration",
    "resolved",
    # Vocabulary
    "CapabilityRegistry",
    "abilities",
    "ability_name",
    "adjectives",
    "custom_predicate_name",
    "predicate_name",
    "verbs",
    # Authorization
    "Abilities",
    "Authorizer",
    "UserAbilities",
    # Dispatch
    "ActorDescriptor",
    "AuthorizerDescriptor",
    "ClassDescriptor",
    "DispatchRegistry",
    "register_descriptor",
    "register_predicate",
    # Enforcement
    "Enforcer",
    "enforce",
    "enforce_custom",
    # Errors
    "AuthorityError",
    "AuthorizationError",
    "ConfigurationError",
    "InvalidVocabulary",
    "MalformedOptions",
    "NoAuthorizerError",
    "SecurityViolation",
    "VocabularyLocked",
]
