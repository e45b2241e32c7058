"""Exceptions raised by the groupstool core.

Everything derives from :class:`GroupsToolError` so the command line entry
point can report any failure with a single handler.
"""

from __future__ import annotations


class GroupsToolError(Exception):
    """Base class for all errors reported to the user."""


class ValidationError(GroupsToolError, ValueError):
    """A NetID or group ID is syntactically invalid."""


class CredentialError(GroupsToolError):
    """The client certificate/key could not be loaded or was rejected."""


class NetworkError(GroupsToolError):
    """The HTTP exchange could not be completed."""


class ResponseError(GroupsToolError):
    """A read request returned a non-2xx status."""

    def __init__(self, status: int, message: str = "") -> None:
        self.status = status
        self.message = message
        text = f"[HTTP {status}]"
        if message:
            text = f"{text} {message}"
        super().__init__(text)


class DecodeError(GroupsToolError):
    """A response body did not match the expected JSON envelope."""
