"""Decoding of Groups Web Service responses."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import List

from .errors import DecodeError


def decode_membership_list(raw: bytes) -> List[str]:
    """Return the ``id`` of every entry in a ``{"data": [...]}`` envelope.

    Used for both member searches and group member listings.  The order of
    the server's array is preserved; nothing is sorted or de-duplicated.
    """

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Response is not valid UTF-8: {e}") from e
    try:
        body = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Response is not valid JSON: {e}") from e

    if not isinstance(body, dict) or "data" not in body:
        raise DecodeError("Response is missing the 'data' field")
    entries = body["data"]
    if not isinstance(entries, list):
        raise DecodeError("Response field 'data' is not a list")

    ids: List[str] = []
    for pos, entry in enumerate(entries):
        ident = entry.get("id") if isinstance(entry, dict) else None
        if not isinstance(ident, str):
            raise DecodeError(f"Entry {pos} in 'data' has no string 'id'")
        ids.append(ident)
    return ids


@dataclass(frozen=True)
class OperationResult:
    """Outcome of an add/remove request.

    ``status`` is whatever the service answered; a 403 or 404 is a result to
    show the operator, not a failure of the client.  ``action`` is the
    operation's message template with ``{member}`` and ``{group}`` fields.
    """

    member: str
    group: str
    status: int
    action: str

    def describe(self) -> str:
        action = self.action.format(member=self.member, group=self.group)
        return f"{action}: {self.status}"
