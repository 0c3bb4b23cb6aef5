"""Ability mixins for resources and actors.

* :class:`Abilities` -- mixed into resource classes.  Exposes
  ``<adjective>_by(user, options=None)`` on both the class and its
  instances, answered by the resource's authorizer.
* :class:`UserAbilities` -- mixed into actor classes.  Exposes
  ``can_<verb>(resource, options=None)`` and ``can(action, options)``.

The per-vocabulary methods are added by
:func:`authority.authorization.installer.install_capabilities` when
``authority.configure()`` first runs.
"""
from __future__ import annotations

import functools
import importlib
import types
from typing import Any, ClassVar

from authority import lifecycle
from authority.authorization.authorizer import Authorizer
from authority.core.errors import NoAuthorizerError
from authority.core.types import Options, normalize_options


class hybridmethod:
    """Method bound to the class when read from the class, else to the instance."""

    def __init__(self, func: Any) -> None:
        self.func = func
        functools.update_wrapper(self, func)

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        target = owner if instance is None else instance
        return types.MethodType(self.func, target)


def resolve_authorizer(name: type[Authorizer] | str) -> type[Authorizer]:
    """Turn an authorizer class or dotted import path into a class.

    Raises
    ------
    NoAuthorizerError
        If *name* cannot be imported or is not an :class:`Authorizer`
        subclass.
    """
    candidate: Any = name
    if isinstance(name, str):
        module_name, _, attr = name.rpartition(".")
        if not module_name:
            raise NoAuthorizerError(
                f"Authorizer name {name!r} is not a dotted import path",
                details={"authorizer_name": name},
            )
        try:
            candidate = getattr(importlib.import_module(module_name), attr)
        except (ImportError, AttributeError) as exc:
            raise NoAuthorizerError(
                f"Cannot import authorizer {name!r}: {exc}",
                details={"authorizer_name": name},
            ) from exc
    if not (isinstance(candidate, type) and issubclass(candidate, Authorizer)):
        raise NoAuthorizerError(
            f"{candidate!r} is not an Authorizer subclass",
            details={"authorizer_name": repr(name)},
        )
    return candidate


class Abilities:
    """Resource mixin.

    Set ``authorizer_name`` to an :class:`Authorizer` subclass, or to
    its dotted import path to avoid import cycles between resource and
    authorizer modules.
    """

    authorizer_name: ClassVar[type[Authorizer] | str] = Authorizer

    @classmethod
    def authorizer_class(cls) -> type[Authorizer]:
        return resolve_authorizer(cls.authorizer_name)

    @hybridmethod
    def authorizer(target: Any) -> Authorizer:  # noqa: N805
        """Return an authorizer bound to this class or instance."""
        owner = target if isinstance(target, type) else type(target)
        return owner.authorizer_class()(target)


def resource_ability(adjective: str, name: str) -> hybridmethod:
    """Build ``<adjective>_by`` for :class:`Abilities`."""

    def ability(target: Any, user: Any, options: Options = None) -> Any:
        check = getattr(target.authorizer(), name)
        opts = normalize_options(options)
        if opts is None:
            return check(user)
        return check(user, opts)

    ability.__name__ = ability.__qualname__ = name
    ability.__doc__ = f"Return whether *user* may treat this resource as {adjective}."
    return hybridmethod(ability)


def authorizer_ability(adjective: str, name: str) -> Any:
    """Build ``<adjective>_by`` for :class:`Authorizer`."""

    def ability(
        self: Authorizer, user: Any, options: dict[str, Any] | None = None
    ) -> Any:
        return self.default(adjective, user, options)

    ability.__name__ = ability.__qualname__ = name
    return ability


class UserAbilities:
    """Actor mixin answering ``can_<verb>`` through the resource's authorizer."""

    def can(self, action: str, options: Options = None) -> Any:
        """Answer a custom, resource-free *action* through this type's descriptor."""
        descriptor = lifecycle.dispatch().descriptor_for(type(self))
        return descriptor.authorizes(action, self, normalize_options(options))


def user_predicate(verb: str, name: str, ability: str) -> Any:
    """Build ``can_<verb>`` for :class:`UserAbilities`."""

    def can(self: Any, resource: Any, options: Options = None) -> Any:
        check = getattr(resource, ability)
        opts = normalize_options(options)
        if opts is None:
            return check(self)
        return check(self, opts)

    can.__name__ = can.__qualname__ = name
    can.__doc__ = f"Return whether this actor may {verb} *resource*."
    return can
