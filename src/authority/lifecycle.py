"""Process-wide configuration lifecycle.

Authority keeps exactly one configuration per process and expects a
strict order:

1. **Configure** -- call :func:`configure` during startup, before any
   request handling.  The block mutates an
   :class:`~authority.core.config.AuthorityConfig` builder.
2. **Resolve** -- :func:`configure` snapshots the builder into a frozen
   :class:`~authority.core.config.ResolvedConfig`, locks the ability
   vocabulary and, the first time only, installs the vocabulary-derived
   methods on the authorizer and ability mixins.
3. **Read** -- everything else reads the resolved snapshot without
   locking.

Calling :func:`configure` again re-applies a block to the same builder
and re-resolves; it never installs twice and it cannot change the
vocabulary.  Mutating configuration while other threads enforce is out
of contract.

Usage
-----
::

    import authority

    def setup(config):
        config.abilities = {"read": "readable", "publish": "publishable"}
        config.default_strategy = lambda adjective, authorizer, user: user.is_admin

    authority.configure(setup)
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from authority.capabilities.dispatch import DispatchRegistry
from authority.capabilities.registry import CapabilityRegistry
from authority.core.config import AuthorityConfig, ResolvedConfig
from authority.core.types import Adjective, Verb

if TYPE_CHECKING:
    from authority.capabilities.dispatch import ActorDescriptor
    from authority.core.types import Predicate
    from authority.enforcement import Enforcer

logger = logging.getLogger(__name__)


class _State:
    def __init__(self) -> None:
        self.configuration: AuthorityConfig | None = None
        self.resolved: ResolvedConfig | None = None
        self.registry: CapabilityRegistry | None = None
        self.enforcer: Enforcer | None = None
        self.dispatch = DispatchRegistry()
        self.installed: list[tuple[type, str]] = []
        self.installations = 0


_state = _State()


# ---------------------------------------------------------------------------
# Configure / resolve
# ---------------------------------------------------------------------------

def get_configuration() -> AuthorityConfig:
    """Return the builder, creating one with defaults if absent."""
    if _state.configuration is None:
        _state.configuration = AuthorityConfig()
    return _state.configuration


def configure(
    block: Callable[[AuthorityConfig], Any] | None = None,
) -> AuthorityConfig:
    """Apply *block* to the process configuration and resolve it.

    If *block* or the resolution raises, every edit the block made is
    rolled back and the previously resolved configuration stays in
    effect.

    Raises
    ------
    authority.core.errors.VocabularyLocked
        If *block* changes ``abilities`` after they were resolved.
    authority.core.errors.InvalidVocabulary
        If the vocabulary is malformed.
    """
    _apply(block)
    return get_configuration()


def _apply(
    block: Callable[[AuthorityConfig], Any] | None,
) -> tuple[ResolvedConfig, CapabilityRegistry]:
    config = get_configuration()
    checkpoint = config.checkpoint()
    try:
        if block is not None:
            block(config)
        return _publish(config.resolve())
    except Exception:
        config.rollback(checkpoint)
        raise


def _publish(resolved: ResolvedConfig) -> tuple[ResolvedConfig, CapabilityRegistry]:
    registry = CapabilityRegistry(resolved)
    _state.resolved = resolved
    _state.registry = registry
    _state.enforcer = None
    _install_internals(registry, resolved.logger)
    resolved.logger.debug("authority configured: verbs=%s", list(registry.verbs()))
    return resolved, registry


def _install_internals(registry: CapabilityRegistry, log: logging.Logger) -> None:
    if _state.installations:
        return
    from authority.authorization.installer import install_capabilities

    _state.installed = install_capabilities(registry)
    _state.installations += 1
    log.info(
        "authority capability methods installed for %s", list(registry.verbs())
    )


def installation_count() -> int:
    """Number of times the capability methods were installed (0 or 1)."""
    return _state.installations


def is_configured() -> bool:
    return _state.resolved is not None


def resolved() -> ResolvedConfig:
    """Return the frozen configuration, configuring defaults on first use."""
    if _state.resolved is None:
        return _apply(None)[0]
    return _state.resolved


def registry() -> CapabilityRegistry:
    if _state.registry is None:
        return _apply(None)[1]
    return _state.registry


def dispatch() -> DispatchRegistry:
    return _state.dispatch


def enforcer() -> Enforcer:
    """Return the process-wide engine bound to the resolved configuration."""
    if _state.enforcer is None:
        from authority.enforcement import Enforcer

        _state.enforcer = Enforcer(resolved(), _state.dispatch)
    return _state.enforcer


# ---------------------------------------------------------------------------
# Vocabulary accessors
# ---------------------------------------------------------------------------

def abilities() -> Mapping[str, str]:
    """Verb -> adjective mapping.  Locks the vocabulary."""
    return registry().abilities()


def verbs() -> tuple[Verb, ...]:
    """Configured verbs in insertion order.  Locks the vocabulary."""
    return registry().verbs()


def adjectives() -> tuple[Adjective, ...]:
    """Configured adjectives in insertion order.  Locks the vocabulary."""
    return registry().adjectives()


# ---------------------------------------------------------------------------
# Teardown
# ---------------------------------------------------------------------------

def reset() -> None:
    """Forget all configuration, registrations and installed methods.

    Intended for test suites only.  Objects created before the reset
    keep whatever behaviour they captured, so calling this in a running
    application is unsafe.
    """
    global _state
    from authority.authorization.installer import uninstall_capabilities

    uninstall_capabilities(_state.installed)
    _state.dispatch.clear()
    _state = _State()
    logger.debug("authority state reset")


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

def register_predicate(actor_type: type, verb: str, predicate: Predicate) -> None:
    """Use *predicate* for ``verb`` on *actor_type* and its subclasses."""
    _state.dispatch.register_predicate(actor_type, verb, predicate)


def register_descriptor(actor_type: type, descriptor: ActorDescriptor) -> None:
    """Route ``enforce_custom`` for *actor_type* through *descriptor*."""
    _state.dispatch.register_descriptor(actor_type, descriptor)
