"""Capability resolution.

* **CapabilityRegistry** -- verbs, adjectives and the predicate names
  derived from the configured vocabulary.
* **DispatchRegistry** -- per-actor-type predicate tables and actor
  descriptors consulted by the enforcement engine.
"""
from __future__ import annotations

from authority.capabilities.dispatch import (
    ActorDescriptor,
    AuthorizerDescriptor,
    ClassDescriptor,
    DispatchRegistry,
    PredicateTable,
)
from authority.capabilities.registry import (
    CapabilityRegistry,
    ability_name,
    custom_predicate_name,
    predicate_name,
)

__all__ = [
    "ActorDescriptor",
    "AuthorizerDescriptor",
    "CapabilityRegistry",
    "ClassDescriptor",
    "DispatchRegistry",
    "PredicateTable",
    "ability_name",
    "custom_predicate_name",
    "predicate_name",
]
