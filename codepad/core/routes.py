"""Routes — the URL locations the workspace reacts to.

Invariants:
    - parse_route is total: any path maps to exactly one Route
    - route_path(parse_route(p)) is the canonical form of p
    - NotFound has no canonical path; it only ever triggers a redirect
"""

import re
from dataclasses import dataclass

from codepad.core.domain_types import RevisionId

NEW_DOCUMENT_PATH = "/new"

_REVISION_ID = re.compile(r"^[A-Za-z0-9_-]{4,40}$")


@dataclass(frozen=True)
class NewDocument:
    pass


@dataclass(frozen=True)
class ExistingRevision:
    revision_id: RevisionId


@dataclass(frozen=True)
class NotFound:
    pass


Route = NewDocument | ExistingRevision | NotFound


def parse_route(path: str) -> Route:
    """Map a URL path (query string and fragment ignored) to a Route."""
    path = path.split("?", 1)[0].split("#", 1)[0]
    stripped = path.strip("/")
    if stripped in ("", "new"):
        return NewDocument()
    if "/" not in stripped and _REVISION_ID.match(stripped):
        return ExistingRevision(RevisionId(stripped))
    return NotFound()


def route_path(route: NewDocument | ExistingRevision) -> str:
    match route:
        case ExistingRevision(revision_id=revision_id):
            return f"/{revision_id}"
        case _:
            return NEW_DOCUMENT_PATH
