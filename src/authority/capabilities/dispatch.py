"""Predicate dispatch tables.

The enforcement engine never builds a method name per call.  Instead it
asks a :class:`DispatchRegistry` for:

* a :class:`PredicateTable` entry -- ``verb -> predicate`` for one actor
  type, used by ``enforce``; and
* an :class:`ActorDescriptor` -- one per actor type, used by
  ``enforce_custom`` for decisions about the actor's general
  eligibility rather than about a specific resource.

Entries are either registered explicitly or derived once from the
``can_<verb>`` / ``authorizes_to_<action>`` naming convention and then
cached.  Deriving an entry for a type that lacks the method raises
:class:`AttributeError` unmodified.

Derivation looks at the actor *type*.  Predicates that exist only on
instances (attributes set in ``__init__``, or proxies answering through
``__getattr__``) are not discovered; register a predicate for the type
that delegates to the instance instead.

The registry is **not** thread-safe; populate it during startup.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from authority.capabilities.registry import custom_predicate_name, predicate_name

if TYPE_CHECKING:
    from authority.authorization.authorizer import Authorizer
    from authority.core.types import Predicate


# ---------------------------------------------------------------------------
# Actor descriptors (custom, type-level decisions)
# ---------------------------------------------------------------------------

@runtime_checkable
class ActorDescriptor(Protocol):
    """Answers custom capability questions for one actor type."""

    def authorizes(
        self, action: str, actor: Any, options: dict[str, Any] | None = None
    ) -> Any:
        """Return a truthy value when *actor* may perform *action*."""
        ...


class ClassDescriptor:
    """Default descriptor: ``actor_type.authorizes_to_<action>(actor[, options])``."""

    def __init__(self, actor_type: type) -> None:
        self.actor_type = actor_type

    def authorizes(
        self, action: str, actor: Any, options: dict[str, Any] | None = None
    ) -> Any:
        check = getattr(self.actor_type, custom_predicate_name(action))
        if options is None:
            return check(actor)
        return check(actor, options)

    def __repr__(self) -> str:
        return f"ClassDescriptor({self.actor_type.__qualname__})"


class AuthorizerDescriptor:
    """Descriptor that sends custom actions to an authorizer class.

    Actions the authorizer does not define fall back to the configured
    default strategy (see :meth:`Authorizer.authorizes_to`).
    """

    def __init__(self, authorizer_class: type[Authorizer]) -> None:
        self.authorizer_class = authorizer_class

    def authorizes(
        self, action: str, actor: Any, options: dict[str, Any] | None = None
    ) -> Any:
        return self.authorizer_class.authorizes_to(action, actor, options)

    def __repr__(self) -> str:
        return f"AuthorizerDescriptor({self.authorizer_class.__qualname__})"


# ---------------------------------------------------------------------------
# Predicate tables (resource-scoped decisions)
# ---------------------------------------------------------------------------

def method_predicate(name: str) -> Predicate:
    """Wrap the actor method *name* in the fixed predicate signature."""

    def predicate(
        actor: Any, resource: Any, options: dict[str, Any] | None = None
    ) -> Any:
        method = getattr(actor, name)
        if options is None:
            return method(resource)
        return method(resource, options)

    predicate.__name__ = predicate.__qualname__ = name
    return predicate


class PredicateTable:
    """``verb -> predicate`` for a single actor type."""

    def __init__(self, owner: type) -> None:
        self.owner = owner
        self.registered: dict[str, Predicate] = {}
        self._derived: dict[str, Predicate] = {}

    def __contains__(self, verb: object) -> bool:
        return verb in self.registered or verb in self._derived

    def register(self, verb: str, predicate: Predicate) -> None:
        self.registered[verb] = predicate
        self._derived.pop(verb, None)

    def get(self, verb: str) -> Predicate | None:
        return self.registered.get(verb, self._derived.get(verb))

    def derive(self, verb: str) -> Predicate:
        name = predicate_name(verb)
        # Fail on the type, not on the first call.
        getattr(self.owner, name)
        predicate = method_predicate(name)
        self._derived[verb] = predicate
        return predicate

    def forget_derived(self) -> None:
        self._derived.clear()

    def __repr__(self) -> str:
        return (
            f"PredicateTable({self.owner.__qualname__}, "
            f"registered={sorted(self.registered)})"
        )


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class DispatchRegistry:
    """Process-wide store of predicate tables and actor descriptors.

    Explicit registrations on a base class apply to its subclasses
    unless a subclass registers its own.
    """

    def __init__(self) -> None:
        self._tables: dict[type, PredicateTable] = {}
        self._descriptors: dict[type, ActorDescriptor] = {}
        self._default_descriptors: dict[type, ActorDescriptor] = {}

    def table_for(self, actor_type: type) -> PredicateTable:
        table = self._tables.get(actor_type)
        if table is None:
            table = self._tables[actor_type] = PredicateTable(actor_type)
        return table

    def register_predicate(
        self, actor_type: type, verb: str, predicate: Predicate
    ) -> None:
        self.table_for(actor_type).register(verb, predicate)
        # Subclass tables may have derived an entry this now overrides.
        for table in self._tables.values():
            table.forget_derived()

    def predicate_for(self, actor_type: type, verb: str) -> Predicate:
        table = self.table_for(actor_type)
        predicate = table.get(verb)
        if predicate is not None:
            return predicate
        for base in actor_type.__mro__[1:]:
            base_table = self._tables.get(base)
            if base_table is not None and verb in base_table.registered:
                return base_table.registered[verb]
        return table.derive(verb)

    def register_descriptor(
        self, actor_type: type, descriptor: ActorDescriptor
    ) -> None:
        if not isinstance(descriptor, ActorDescriptor):
            raise TypeError(
                f"{descriptor!r} does not implement authorizes(action, actor, options)"
            )
        self._descriptors[actor_type] = descriptor

    def descriptor_for(self, actor_type: type) -> ActorDescriptor:
        for base in actor_type.__mro__:
            if base in self._descriptors:
                return self._descriptors[base]
        descriptor = self._default_descriptors.get(actor_type)
        if descriptor is None:
            descriptor = self._default_descriptors[actor_type] = ClassDescriptor(
                actor_type
            )
        return descriptor

    def clear(self) -> None:
        self._tables.clear()
        self._descriptors.clear()
        self._default_descriptors.clear()
