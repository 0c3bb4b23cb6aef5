"""Tests for configuration and its process lifecycle.

Covers:

1. **Defaults** -- the built-in vocabulary, alias table, strategy, logger.
2. **Builder validation** -- pair sequences, duplicates, assignment checks.
3. **Resolve and lock** -- frozen snapshot, vocabulary lock.
4. **configure()** -- block application, one-time installation,
   re-configuration.
"""
from __future__ import annotations

import logging

import pydantic
import pytest

import authority
from authority import lifecycle
from authority.authorization import Authorizer, UserAbilities
from authority.core.config import (
    DEFAULT_ABILITIES,
    DEFAULT_AUTHORITY_ACTIONS,
    AuthorityConfig,
    ResolvedConfig,
    deny_all,
)
from authority.core.errors import (
    ConfigurationError,
    InvalidVocabulary,
    VocabularyLocked,
)

from .conftest import User, allow_all

# ===================================================================
# 1. Defaults
# ===================================================================

class TestDefaults:

    def test_default_abilities(self) -> None:
        config = AuthorityConfig()
        assert list(config.abilities.items()) == [
            ("create", "creatable"),
            ("read", "readable"),
            ("update", "updatable"),
            ("delete", "deletable"),
        ]

    def test_default_actions(self) -> None:
        config = AuthorityConfig()
        assert config.authority_actions == DEFAULT_AUTHORITY_ACTIONS
        assert config.authority_actions["destroy"] == "delete"
        assert config.authority_actions["index"] == "read"

    def test_default_strategy_denies(self) -> None:
        config = AuthorityConfig()
        assert config.default_strategy is deny_all
        assert deny_all("readable", Authorizer(None), User("root", admin=True)) is False

    def test_default_user_method_and_logger(self) -> None:
        config = AuthorityConfig()
        assert config.user_method == "current_user"
        assert config.logger is logging.getLogger("authority")

    def test_instances_do_not_share_vocabulary(self) -> None:
        first = AuthorityConfig()
        first.abilities["publish"] = "publishable"
        assert "publish" not in AuthorityConfig().abilities
        assert "publish" not in DEFAULT_ABILITIES


# ===================================================================
# 2. Builder validation
# ===================================================================

class TestBuilderValidation:

    def test_accepts_pair_sequence(self) -> None:
        config = AuthorityConfig(abilities=[("read", "readable"), ("share", "shareable")])
        assert config.abilities == {"read": "readable", "share": "shareable"}

    def test_duplicate_verb_in_pairs_rejected(self) -> None:
        with pytest.raises(InvalidVocabulary, match="Duplicate key 'read'"):
            AuthorityConfig(abilities=[("read", "readable"), ("read", "visible")])

    def test_malformed_pair_rejected(self) -> None:
        with pytest.raises(InvalidVocabulary):
            AuthorityConfig(abilities=[("read", "readable", "extra")])

    def test_assignment_is_validated(self) -> None:
        config = AuthorityConfig()
        with pytest.raises(pydantic.ValidationError):
            config.user_method = 42  # type: ignore[assignment]

    def test_strategy_must_be_callable(self) -> None:
        config = AuthorityConfig()
        with pytest.raises(pydantic.ValidationError):
            config.default_strategy = "allow"  # type: ignore[assignment]


# ===================================================================
# 3. Resolve and lock
# ===================================================================

class TestResolve:

    def test_snapshot_is_frozen(self) -> None:
        resolved = AuthorityConfig().resolve()
        assert isinstance(resolved, ResolvedConfig)
        with pytest.raises(pydantic.ValidationError):
            resolved.user_method = "current_admin"  # type: ignore[misc]

    def test_snapshot_maps_are_read_only(self) -> None:
        resolved = AuthorityConfig().resolve()
        with pytest.raises(TypeError):
            resolved.ability_map["publish"] = "publishable"  # type: ignore[index]
        assert resolved.action_map["edit"] == "update"

    def test_resolve_locks_vocabulary(self) -> None:
        config = AuthorityConfig()
        assert not config.vocabulary_locked
        config.resolve()
        assert config.vocabulary_locked

    def test_locked_vocabulary_rejects_assignment(self) -> None:
        config = AuthorityConfig()
        config.lock_vocabulary()
        with pytest.raises(VocabularyLocked):
            config.abilities = {"read": "readable"}

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda a: a.__setitem__("publish", "publishable"),
            lambda a: a.__delitem__("read"),
            lambda a: a.update({"publish": "publishable"}),
            lambda a: a.pop("read"),
            lambda a: a.clear(),
            lambda a: a.setdefault("publish", "publishable"),
        ],
    )
    def test_locked_vocabulary_rejects_in_place_mutation(self, mutate) -> None:
        config = AuthorityConfig()
        config.lock_vocabulary()
        with pytest.raises(VocabularyLocked):
            mutate(config.abilities)
        assert list(config.abilities) == list(DEFAULT_ABILITIES)

    def test_other_fields_stay_mutable_after_lock(self) -> None:
        config = AuthorityConfig()
        config.resolve()
        config.default_strategy = allow_all
        config.authority_actions["archive"] = "update"
        assert config.resolve().default_strategy is allow_all
        with pytest.raises(VocabularyLocked):
            config.abilities["publish"] = "publishable"
        with pytest.raises(VocabularyLocked):
            config.abilities = {"read": "readable"}
        assert config.vocabulary_locked

    def test_shared_adjective_rejected(self) -> None:
        config = AuthorityConfig(abilities={"read": "visible", "show": "visible"})
        with pytest.raises(InvalidVocabulary, match="share the adjective"):
            config.resolve()
        assert not config.vocabulary_locked

    @pytest.mark.parametrize(
        "abilities",
        [{"read-all": "readable"}, {"read": "read able"}, {"": "readable"}],
    )
    def test_non_identifier_rejected(self, abilities: dict[str, str]) -> None:
        with pytest.raises(InvalidVocabulary):
            AuthorityConfig(abilities=abilities).resolve()

    @pytest.mark.parametrize(
        ("verb", "adjective"), [("publish", 5), (5, "publishable"), ("publish", None)]
    )
    def test_non_string_in_place_insertion_rejected(self, verb, adjective) -> None:
        authority.get_configuration().abilities[verb] = adjective
        with pytest.raises(InvalidVocabulary) as exc_info:
            authority.verbs()
        assert isinstance(exc_info.value, ConfigurationError)
        assert not isinstance(exc_info.value, AttributeError)
        assert not lifecycle.is_configured()


# ===================================================================
# 4. configure()
# ===================================================================

class TestConfigure:

    def test_creates_singleton(self) -> None:
        config = authority.configure()
        assert authority.get_configuration() is config
        assert lifecycle.is_configured()

    def test_applies_block(self) -> None:
        config = authority.configure(lambda c: setattr(c, "user_method", "current_admin"))
        assert config.user_method == "current_admin"
        assert authority.resolved().user_method == "current_admin"

    def test_builder_editable_before_configure(self) -> None:
        authority.get_configuration().abilities["publish"] = "publishable"
        authority.configure()
        assert authority.verbs()[-1] == "publish"

    def test_installation_happens_once(self) -> None:
        assert lifecycle.installation_count() == 0
        authority.configure()
        authority.configure()
        authority.configure(lambda c: setattr(c, "default_strategy", allow_all))
        assert lifecycle.installation_count() == 1

    def test_reconfigure_reapplies_to_same_instance(self) -> None:
        first = authority.configure()
        second = authority.configure(lambda c: setattr(c, "default_strategy", allow_all))
        assert first is second
        assert authority.resolved().default_strategy is allow_all

    def test_reconfigure_cannot_change_vocabulary(self) -> None:
        authority.configure()
        with pytest.raises(VocabularyLocked):
            authority.configure(lambda c: c.abilities.update({"publish": "publishable"}))
        assert "publish" not in authority.verbs()

    def test_failed_block_rolls_back_its_edits(self) -> None:
        authority.configure()

        def partial(config: AuthorityConfig) -> None:
            config.default_strategy = allow_all
            config.authority_actions["archive"] = "update"
            config.abilities["publish"] = "publishable"

        with pytest.raises(VocabularyLocked):
            authority.configure(partial)
        config = authority.get_configuration()
        assert config.default_strategy is deny_all
        assert "archive" not in config.authority_actions
        assert config.vocabulary_locked

        authority.configure()
        assert authority.resolved().default_strategy is deny_all

    def test_failed_resolution_rolls_back_block(self) -> None:
        with pytest.raises(InvalidVocabulary):
            authority.configure(lambda c: setattr(c, "abilities", {"read-all": "all"}))
        assert authority.get_configuration().abilities == DEFAULT_ABILITIES
        assert not authority.get_configuration().vocabulary_locked

    def test_failing_block_keeps_previous_snapshot(self) -> None:
        authority.configure(lambda c: setattr(c, "user_method", "current_admin"))

        def broken(config: AuthorityConfig) -> None:
            config.user_method = "current_member"
            raise RuntimeError("setup failed")

        with pytest.raises(RuntimeError, match="setup failed"):
            authority.configure(broken)
        assert authority.resolved().user_method == "current_admin"
        assert authority.get_configuration().user_method == "current_admin"

    def test_invalid_vocabulary_fails_at_configure(self) -> None:
        with pytest.raises(InvalidVocabulary):
            authority.configure(lambda c: setattr(c, "abilities", {"read-all": "all"}))
        assert lifecycle.installation_count() == 0

    def test_installs_capability_methods(self) -> None:
        assert not hasattr(UserAbilities, "can_read")
        authority.configure()
        assert hasattr(UserAbilities, "can_read")
        assert hasattr(Authorizer, "readable_by")

    def test_resolved_configures_on_first_use(self) -> None:
        assert not lifecycle.is_configured()
        resolved = authority.resolved()
        assert resolved.default_strategy is deny_all
        assert lifecycle.installation_count() == 1

    def test_lifecycle_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="authority"):
            authority.configure()
        assert "capability methods installed" in caplog.text

    def test_reset_uninstalls(self) -> None:
        authority.configure()
        lifecycle.reset()
        assert not hasattr(UserAbilities, "can_read")
        assert lifecycle.installation_count() == 0
        assert not authority.get_configuration().vocabulary_locked
