"""Authorizers and the resource/actor ability mixins."""
from __future__ import annotations

from authority.authorization.abilities import Abilities, UserAbilities
from authority.authorization.authorizer import Authorizer

__all__ = [
    "Abilities",
    "Authorizer",
    "UserAbilities",
]
