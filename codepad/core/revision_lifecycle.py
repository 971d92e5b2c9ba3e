"""Revision Lifecycle — how the Workspace relates to a persisted Revision.

Invariants:
    - At most one fetch is outstanding: Loading/Replacing carry its id
    - A route to a different id supersedes the outstanding fetch
    - A fetch completion is accepted only while Loading(x)/Replacing(x, _) with
      x == the completion's id; anything else is a stale response and discarded
    - A not-found failure passes the same id check before it redirects
    - Route to the id already pending or held is a no-op
    - Dirty-check baseline is the loaded revision when Loaded, otherwise the
      default document

Design Decisions:
    - RevisionRef is a closed union of frozen dataclasses matched exhaustively,
      not an Optional plus flags: "single outstanding fetch" holds by construction
    - Transitions return a RouteStep value; the reducer applies it to the State
"""

from dataclasses import dataclass

from codepad.core.commands import Command, FetchRevision, Redirect
from codepad.core.domain_types import RevisionId
from codepad.core.routes import (
    ExistingRevision, NewDocument, NotFound, Route, route_path,
)
from codepad.core.workspace import (
    Revision, Workspace, default_workspace, revision_content,
)


@dataclass(frozen=True)
class NotAsked:
    """Brand-new document, no revision context."""


@dataclass(frozen=True)
class Loading:
    """Fetch outstanding, nothing held yet."""
    revision_id: RevisionId


@dataclass(frozen=True)
class Replacing:
    """Fetch outstanding while `current` is still displayed."""
    revision_id: RevisionId
    current: Revision


@dataclass(frozen=True)
class Loaded:
    revision: Revision


RevisionRef = NotAsked | Loading | Replacing | Loaded


@dataclass(frozen=True)
class RouteStep:
    """Outcome of a route event.

    reset: replace the whole document aggregate with a fresh default Workspace.
    """
    ref: RevisionRef
    command: Command | None = None
    reset: bool = False


# ─── Queries ──────────────────────────────────────────────

def held_revision(ref: RevisionRef) -> Revision | None:
    """The revision currently displayed, if any."""
    match ref:
        case Loaded(revision=revision):
            return revision
        case Replacing(current=current):
            return current
        case _:
            return None


def pending_revision_id(ref: RevisionRef) -> RevisionId | None:
    """Id of the outstanding fetch, if any."""
    match ref:
        case Loading(revision_id=rid) | Replacing(revision_id=rid):
            return rid
        case _:
            return None


def is_dirty(workspace: Workspace, ref: RevisionRef) -> bool:
    """Whether the workspace differs from its baseline."""
    match ref:
        case Loaded(revision=revision):
            baseline = revision_content(revision)
        case _:
            baseline = default_workspace().content
    return workspace.content != baseline


# ─── Transitions ──────────────────────────────────────────

def on_route(ref: RevisionRef, route: Route) -> RouteStep:
    match route:
        case ExistingRevision(revision_id=rid):
            return _route_to_revision(ref, rid)
        case NewDocument():
            if isinstance(ref, NotAsked):
                return RouteStep(ref)
            return RouteStep(NotAsked(), reset=True)
        case NotFound():
            held = held_revision(ref)
            if held is not None:
                target = route_path(ExistingRevision(held.id))
            else:
                target = route_path(NewDocument())
            return RouteStep(ref, Redirect(target))
        case _:
            return RouteStep(ref)


def _route_to_revision(ref: RevisionRef, rid: RevisionId) -> RouteStep:
    match ref:
        case NotAsked():
            return RouteStep(Loading(rid), FetchRevision(rid))
        case Loading(revision_id=cur):
            if cur == rid:
                return RouteStep(ref)
            return RouteStep(Loading(rid), FetchRevision(rid))
        case Replacing(revision_id=cur, current=current):
            if cur == rid:
                return RouteStep(ref)
            return RouteStep(Replacing(rid, current), FetchRevision(rid))
        case Loaded(revision=revision):
            if revision.id == rid:
                return RouteStep(ref)
            return RouteStep(Replacing(rid, revision), FetchRevision(rid))
        case _:
            return RouteStep(ref)


def on_revision_loaded(
    ref: RevisionRef, revision_id: RevisionId, revision: Revision,
) -> RevisionRef | None:
    """Loaded(revision) if the completion is still wanted, else None (stale).

    TODO: fetches are matched by id only; two in-flight fetches for the same id
    would let whichever lands last win. Carry a request sequence number in
    FetchRevision/RevisionLoaded if same-id refetches become reachable.
    """
    if pending_revision_id(ref) != revision_id:
        return None
    if revision.id != revision_id:
        return None
    return Loaded(revision)


def on_revision_missing(
    ref: RevisionRef, revision_id: RevisionId,
) -> RouteStep | None:
    """Not-found redirect if the failed fetch is still the pending one, else None."""
    if pending_revision_id(ref) != revision_id:
        return None
    return on_route(ref, NotFound())
