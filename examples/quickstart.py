#!/usr/bin/env python3
"""Authority quickstart.

Demonstrates the core workflow:

1. Configure the process once at startup.
2. Mix abilities into actor and resource classes.
3. Put per-resource logic in an authorizer.
4. Enforce resource-scoped and custom actions.

Run:
    python examples/quickstart.py
"""
from __future__ import annotations

import logging

import authority
from authority import Abilities, Authorizer, SecurityViolation, UserAbilities


class User(UserAbilities):
    def __init__(self, name: str, *, editor: bool = False) -> None:
        self.name = name
        self.editor = editor

    @classmethod
    def authorizes_to_publish(cls, user: User) -> bool:
        return user.editor

    def __str__(self) -> str:
        return self.name


class ArticleAuthorizer(Authorizer):
    def readable_by(self, user: User, options: dict | None = None) -> bool:
        return True

    def updatable_by(self, user: User, options: dict | None = None) -> bool:
        return user.editor or self.resource.author is user


class Article(Abilities):
    authorizer_name = ArticleAuthorizer

    def __init__(self, title: str, author: User) -> None:
        self.title = title
        self.author = author

    def __str__(self) -> str:
        return f"article {self.title!r}"


def setup(config: authority.AuthorityConfig) -> None:
    # Editors may do anything no authorizer decides explicitly.
    config.default_strategy = lambda adjective, authorizer, user: user.editor


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # -- Step 1: Configure once ----------------------------------------------
    authority.configure(setup)
    print(f"[1] Verbs: {list(authority.verbs())}")

    alice = User("alice")
    erin = User("erin", editor=True)
    article = Article("Hello", alice)

    # -- Step 2: Resource-scoped checks --------------------------------------
    print(f"[2] alice can update her article: {alice.can_update(article)}")
    print(f"    alice can delete her article: {alice.can_delete(article)}")

    # -- Step 3: Enforcement returns the resource -----------------------------
    title = authority.enforce("update", article, alice).title
    print(f"[3] Enforced update on {title!r}")

    try:
        authority.enforce("delete", article, alice)
    except SecurityViolation as exc:
        print(f"    Denied: {exc.message} ({exc.code})")

    # -- Step 4: Custom actions return the decision ---------------------------
    print(f"[4] erin may publish: {authority.enforce_custom('publish', article, erin)}")
    try:
        authority.enforce_custom("publish", article, alice)
    except SecurityViolation as exc:
        print(f"    Denied: {exc.to_dict()}")


if __name__ == "__main__":
    main()
