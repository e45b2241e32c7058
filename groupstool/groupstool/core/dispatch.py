"""Mapping of the four Groups Web Service operations to HTTP requests.

Identifiers are expected to be validated already (see :mod:`.validate`);
passing raw user input here is a programming error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union
from urllib.parse import quote

from .config import Settings
from .decode import OperationResult, decode_membership_list
from .http import fetch_body, fetch_status
from .log import get_logger

logger = get_logger(__name__)

GROUPS_BY_MEMBER = "groups-by-member"
LIST_MEMBERS = "list-members"
ADD_MEMBER = "add-member"
REMOVE_MEMBER = "remove-member"


@dataclass(frozen=True)
class Operation:
    name: str
    method: str
    path: str
    # Write operations only: how the returned status is reported
    report: Optional[str] = None

    @property
    def reads(self) -> bool:
        return self.report is None


OPERATIONS: Dict[str, Operation] = {
    op.name: op
    for op in (
        Operation(GROUPS_BY_MEMBER, "GET", "/search?member={netid}"),
        Operation(LIST_MEMBERS, "GET", "/group/{group}/member"),
        Operation(
            ADD_MEMBER, "PUT", "/group/{group}/member/{netid}",
            report="Adding member {member} to group {group}",
        ),
        Operation(
            REMOVE_MEMBER, "DELETE", "/group/{group}/member/{netid}",
            report="Removing member {member} from group {group}",
        ),
    )
}


def build_request(
    operation: str,
    base_url: str,
    *,
    group: Optional[str] = None,
    netid: Optional[str] = None,
) -> Tuple[str, str]:
    """Return the ``(method, url)`` pair for ``operation``."""
    op = OPERATIONS[operation]
    params = {}
    for key, value in (("group", group), ("netid", netid)):
        if "{" + key + "}" in op.path:
            if not value:
                raise ValueError(f"{operation} requires a {key}")
            params[key] = quote(value, safe="")
    return op.method, base_url.rstrip("/") + op.path.format(**params)


def run_operation(
    operation: str,
    credential: str,
    settings: Settings,
    *,
    group: Optional[str] = None,
    netid: Optional[str] = None,
) -> Union[List[str], OperationResult]:
    """Execute ``operation`` and decode its response.

    Read operations return the list of identifiers from the response body,
    write operations an :class:`OperationResult` carrying the status code.
    """

    op = OPERATIONS[operation]
    method, url = build_request(operation, settings.base_url, group=group, netid=netid)
    logger.debug("dispatch", operation=operation, group=group, netid=netid)
    if op.reads:
        raw = fetch_body(url, credential, timeout=settings.timeout, ca_file=settings.ca_file)
        return decode_membership_list(raw)
    status = fetch_status(
        method, url, credential, timeout=settings.timeout, ca_file=settings.ca_file
    )
    return OperationResult(member=netid, group=group, status=status, action=op.report)
