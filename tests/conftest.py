"""Shared fixtures and test doubles for the unit tests.

Every test starts and ends with an unconfigured process: the autouse
``clean_state`` fixture resets the configuration singleton, dispatch
registrations and installed capability methods.
"""
from __future__ import annotations

from typing import Any

import pytest

import authority
from authority import lifecycle
from authority.authorization import Abilities, Authorizer, UserAbilities

# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------

class User(UserAbilities):
    def __init__(self, name: str, *, admin: bool = False) -> None:
        self.name = name
        self.admin = admin

    @classmethod
    def authorizes_to_publish(cls, user: User, options: dict[str, Any] | None = None) -> bool:
        return user.admin

    @classmethod
    def authorizes_to_export(cls, user: User, options: dict[str, Any] | None = None) -> Any:
        if options is None:
            return False
        return options.get("format")

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"User({self.name!r})"


class DocumentAuthorizer(Authorizer):
    def readable_by(self, user: User, options: dict[str, Any] | None = None) -> bool:
        return True

    def updatable_by(self, user: User, options: dict[str, Any] | None = None) -> bool:
        if isinstance(self.resource, type):
            return user.admin
        return user.admin or self.resource.owner is user

    def deletable_by(self, user: User, options: dict[str, Any] | None = None) -> bool:
        return user.admin and bool(options and options.get("force"))


class Document(Abilities):
    authorizer_name = DocumentAuthorizer

    def __init__(self, title: str, owner: User) -> None:
        self.title = title
        self.owner = owner

    def __str__(self) -> str:
        return self.title


class Memo(Abilities):
    """Resource without a dedicated authorizer."""

    def __str__(self) -> str:
        return "memo"


def allow_all(adjective: str, authorizer: Any, user: Any) -> bool:
    return True


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def clean_state() -> Any:
    lifecycle.reset()
    yield
    lifecycle.reset()


@pytest.fixture()
def configured() -> authority.AuthorityConfig:
    """Process configured with the built-in defaults."""
    return authority.configure()


@pytest.fixture()
def alice() -> User:
    return User("alice")


@pytest.fixture()
def admin() -> User:
    return User("root", admin=True)


@pytest.fixture()
def document(alice: User) -> Document:
    return Document("report", alice)
