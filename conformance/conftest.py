"""Shared fixtures for the Authority conformance tests.

Provides a minimal document/user domain wired through the ability
mixins, and resets the process configuration around every test.
"""
from __future__ import annotations

from typing import Any

import pytest

from authority import lifecycle
from authority.authorization import Abilities, Authorizer, UserAbilities


# ---------------------------------------------------------------------------
# Domain
# ---------------------------------------------------------------------------
class Member(UserAbilities):
    def __init__(self, name: str, *, editor: bool = False) -> None:
        self.name = name
        self.editor = editor

    @classmethod
    def authorizes_to_publish(cls, member: Member) -> bool:
        return member.editor

    def __str__(self) -> str:
        return self.name


class PageAuthorizer(Authorizer):
    def readable_by(self, member: Member, options: dict[str, Any] | None = None) -> bool:
        return True


class Page(Abilities):
    authorizer_name = PageAuthorizer

    def __init__(self, title: str) -> None:
        self.title = title

    def __str__(self) -> str:
        return self.title


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def clean_state() -> Any:
    lifecycle.reset()
    yield
    lifecycle.reset()


@pytest.fixture()
def document_a() -> Page:
    return Page("documentA")


@pytest.fixture()
def user_a() -> Member:
    return Member("userA", editor=True)
