"""Authority configuration.

Two models with an explicit two-phase lifecycle:

* :class:`AuthorityConfig` -- the mutable builder handed to
  ``authority.configure()`` blocks during startup.
* :class:`ResolvedConfig` -- the frozen snapshot produced by
  :meth:`AuthorityConfig.resolve`.  Everything that resolves or
  enforces capabilities reads only this snapshot.

Resolving locks the ability vocabulary on the builder: predicate names
are derived from it, so it cannot change once any of them exist.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationInfo,
    field_validator,
)

from authority.core.errors import InvalidVocabulary, VocabularyLocked

DEFAULT_ABILITIES: dict[str, str] = {
    "create": "creatable",
    "read": "readable",
    "update": "updatable",
    "delete": "deletable",
}

DEFAULT_AUTHORITY_ACTIONS: dict[str, str] = {
    "index": "read",
    "show": "read",
    "new": "create",
    "create": "create",
    "edit": "update",
    "update": "update",
    "destroy": "delete",
}


def deny_all(adjective: str, authorizer: Any, user: Any) -> bool:
    """Default strategy: nobody may do anything unless an authorizer says so."""
    return False


def _pairs(value: Any, field_name: str) -> Any:
    # Mappings pass through; a sequence of (key, value) pairs is accepted
    # so that duplicate keys can be reported instead of silently merged.
    if isinstance(value, Mapping) or not isinstance(value, (list, tuple)):
        return value
    result: dict[Any, Any] = {}
    for pair in value:
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise InvalidVocabulary(
                f"{field_name} entries must be (key, value) pairs, got {pair!r}",
                details={"field": field_name, "entry": repr(pair)},
            )
        key, item = pair
        if key in result:
            raise InvalidVocabulary(
                f"Duplicate key {key!r} in {field_name}",
                details={"field": field_name, "key": str(key)},
            )
        result[key] = item
    return result


class _LockedAbilities(dict):
    """A ``dict`` that refuses every mutation once the vocabulary is locked."""

    def _refuse(self, *args: Any, **kwargs: Any) -> None:
        raise VocabularyLocked()

    __setitem__ = _refuse
    __delitem__ = _refuse
    __ior__ = _refuse
    clear = _refuse
    pop = _refuse
    popitem = _refuse
    setdefault = _refuse
    update = _refuse


class AuthorityConfig(BaseModel):
    """Mutable configuration builder.

    All fields carry the built-in defaults, so ``AuthorityConfig()`` is a
    complete configuration.  Assignments are validated; assigning to (or
    mutating) ``abilities`` after :meth:`lock_vocabulary` raises
    :class:`~authority.core.errors.VocabularyLocked`.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        arbitrary_types_allowed=True,
    )

    abilities: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_ABILITIES),
        description="Ordered mapping of verb to adjective.",
    )
    authority_actions: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_AUTHORITY_ACTIONS),
        description=(
            "Framework action name to canonical verb, consumed by "
            "web-framework integrations."
        ),
    )
    default_strategy: Callable[[str, Any, Any], bool] = Field(
        default=deny_all,
        description=(
            "Fallback predicate called with (adjective, authorizer, user) "
            "when an authorizer does not override an ability."
        ),
    )
    user_method: str = Field(
        default="current_user",
        description="Name of the accessor that yields the acting user.",
    )
    logger: logging.Logger = Field(
        default_factory=lambda: logging.getLogger("authority"),
        description="Logger receiving denial and lifecycle records.",
    )

    _vocabulary_locked: bool = PrivateAttr(default=False)

    @field_validator("abilities", "authority_actions", mode="before")
    @classmethod
    def _accept_pairs(cls, value: Any, info: ValidationInfo) -> Any:
        return _pairs(value, info.field_name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "abilities" and self._vocabulary_locked:
            raise VocabularyLocked()
        super().__setattr__(name, value)

    @property
    def vocabulary_locked(self) -> bool:
        return self._vocabulary_locked

    def lock_vocabulary(self) -> None:
        """Freeze ``abilities`` for the rest of the process lifetime."""
        if self._vocabulary_locked:
            return
        self.__dict__["abilities"] = _LockedAbilities(self.abilities)
        self._vocabulary_locked = True

    def checkpoint(self) -> dict[str, Any]:
        """Capture field values so a failed ``configure`` block can be undone."""
        return {
            name: dict(value) if isinstance(value, dict) else value
            for name, value in self.__dict__.items()
        }

    def rollback(self, checkpoint: Mapping[str, Any]) -> None:
        """Restore the field values captured by :meth:`checkpoint`.

        A locked vocabulary cannot have changed, so it is left in place.
        """
        for name, value in checkpoint.items():
            if name == "abilities" and self._vocabulary_locked:
                continue
            self.__dict__[name] = dict(value) if isinstance(value, dict) else value

    def resolve(self) -> ResolvedConfig:
        """Validate, lock the vocabulary, and return a frozen snapshot.

        Raises
        ------
        InvalidVocabulary
            If a verb or adjective is not an identifier, or two verbs
            share an adjective.
        """
        abilities = tuple(self.abilities.items())
        _check_vocabulary(abilities)
        self.lock_vocabulary()
        return ResolvedConfig(
            abilities=abilities,
            authority_actions=tuple(self.authority_actions.items()),
            default_strategy=self.default_strategy,
            user_method=self.user_method,
            logger=self.logger,
        )


class ResolvedConfig(BaseModel):
    """Immutable configuration snapshot read by all resolution code."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    abilities: tuple[tuple[str, str], ...]
    authority_actions: tuple[tuple[str, str], ...]
    default_strategy: Callable[[str, Any, Any], bool]
    user_method: str
    logger: logging.Logger

    @property
    def ability_map(self) -> Mapping[str, str]:
        return MappingProxyType(dict(self.abilities))

    @property
    def action_map(self) -> Mapping[str, str]:
        return MappingProxyType(dict(self.authority_actions))


def _check_vocabulary(abilities: tuple[tuple[str, str], ...]) -> None:
    seen: dict[str, str] = {}
    for verb, adjective in abilities:
        for name in (verb, adjective):
            if not isinstance(name, str) or not name.isidentifier():
                raise InvalidVocabulary(
                    f"{name!r} is not a valid identifier",
                    details={"verb": repr(verb), "adjective": repr(adjective)},
                )
        if adjective in seen:
            raise InvalidVocabulary(
                f"Verbs {seen[adjective]!r} and {verb!r} share the "
                f"adjective {adjective!r}",
                details={"adjective": adjective},
            )
        seen[adjective] = verb
