"""Authority error-code hierarchy.

Every failure this package reports on purpose is a concrete subclass of
:class:`AuthorityError`.

Hierarchy
---------
::

    AuthorityError
    +-- ConfigurationError     (AUTH-E1xx)
    +-- AuthorizationError     (AUTH-E2xx)

Errors raised *by* an application predicate (including a missing
predicate, which surfaces as :class:`AttributeError`) are not part of
this hierarchy and are never wrapped.

Usage
-----
Catch by category::

    try:
        authority.enforce("update", document, user)
    except AuthorizationError:
        # handles SecurityViolation
        ...
"""
from __future__ import annotations

from typing import Any

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

class AuthorityError(Exception):
    """Base exception for all Authority errors.

    Attributes
    ----------
    code : str
        Error code, e.g. ``"AUTH-E100"``.
    http_status : int
        Recommended HTTP status code for the boundary layer.
    message : str
        Human-readable description.
    details : dict[str, Any]
        Machine-readable context specific to the error instance.
    resolution : str
        Suggested action for the caller.
    """

    code: str = "AUTH-E000"
    http_status: int = 500
    message: str = "Unknown authority error"
    resolution: str = ""

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        resolution: str | None = None,
    ) -> None:
        self.details: dict[str, Any] = details or {}
        if message is not None:
            self.message = message
        if resolution is not None:
            self.resolution = resolution
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialise the error for an access-denied or error response."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            payload["detail"] = self.details
        if self.resolution:
            payload["resolution"] = self.resolution
        return {"error": payload}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


# ===================================================================
# Category base classes
# ===================================================================

class ConfigurationError(AuthorityError):
    """AUTH-E1xx -- Misconfiguration detected at a call site."""

    code = "AUTH-E1XX"
    http_status = 500


class AuthorizationError(AuthorityError):
    """AUTH-E2xx -- An authorization predicate denied the request."""

    code = "AUTH-E2XX"
    http_status = 403


# ===================================================================
# AUTH-E1xx  Configuration errors
# ===================================================================

class VocabularyLocked(ConfigurationError):
    """AUTH-E100 -- The ability vocabulary was changed after it was read."""

    code = "AUTH-E100"
    message = "Abilities cannot be modified once they have been read"
    resolution = (
        "Set abilities inside the first authority.configure() block, "
        "before any verbs, adjectives or enforcement calls."
    )


class InvalidVocabulary(ConfigurationError):
    """AUTH-E101 -- The ability vocabulary is malformed."""

    code = "AUTH-E101"
    message = "Ability vocabulary is malformed"
    resolution = (
        "Map each verb to exactly one adjective; both must be unique "
        "Python identifiers."
    )


class MalformedOptions(ConfigurationError, ValueError):
    """AUTH-E102 -- A flat options list did not pair up into keys and values."""

    code = "AUTH-E102"
    message = "Options must be a mapping or an even-length key/value sequence"
    resolution = "Pass options as a dict, or as alternating keys and values."


class NoAuthorizerError(ConfigurationError):
    """AUTH-E103 -- A resource names an authorizer that cannot be resolved."""

    code = "AUTH-E103"
    message = "Authorizer could not be resolved"
    resolution = (
        "Set authorizer_name to an Authorizer subclass or to the dotted "
        "import path of one."
    )


# ===================================================================
# AUTH-E2xx  Authorization errors
# ===================================================================

class SecurityViolation(AuthorizationError):
    """AUTH-E200 -- *user* is not authorized to perform *action* on *resource*.

    The three inputs are exposed read-only for auditing; *resource* may
    be a class when the check was made against a resource type.
    """

    code = "AUTH-E200"
    resolution = "Request the capability from an administrator."

    def __init__(self, user: Any, action: Any, resource: Any) -> None:
        self._user = user
        self._action = action
        self._resource = resource
        super().__init__(
            f"{user} not authorized to {action} {resource}",
            details={
                "user": repr(user),
                "action": str(action),
                "resource": repr(resource),
            },
        )

    @property
    def user(self) -> Any:
        return self._user

    @property
    def action(self) -> Any:
        return self._action

    @property
    def resource(self) -> Any:
        return self._resource

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self._user, self._action, self._resource))
