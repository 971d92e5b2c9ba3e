"""Revision lifecycle tests — pure tests for the RevisionRef state machine.

Tests cover:
    - Route to an existing revision from every RevisionRef state
    - Idempotent re-navigation
    - Route to new document / not found
    - Stale-response rejection for completions and not-found failures
    - Dirty-check baselines
"""

from dataclasses import replace

import pytest

from codepad.core.commands import FetchRevision, Redirect
from codepad.core.domain_types import RevisionId
from codepad.core.revision_lifecycle import (
    Loaded, Loading, NotAsked, Replacing, held_revision, is_dirty,
    on_revision_loaded, on_revision_missing, on_route, pending_revision_id,
)
from codepad.core.routes import ExistingRevision, NewDocument, NotFound
from codepad.core.workspace import (
    Revision, default_workspace, workspace_from_revision,
)

A = RevisionId("aaaa1111")
B = RevisionId("bbbb2222")


def _rev(rid: RevisionId, code: str = "main = 1") -> Revision:
    return Revision(id=rid, code=code, markup="<body></body>")


ALL_REFS = [
    NotAsked(),
    Loading(A),
    Replacing(A, _rev(B)),
    Loaded(_rev(A)),
]


# ─── Route to existing revision ───────────────────────────

def test_not_asked_to_existing_starts_loading():
    step = on_route(NotAsked(), ExistingRevision(A))
    assert step.ref == Loading(A)
    assert step.command == FetchRevision(A)


def test_loading_to_other_id_supersedes():
    step = on_route(Loading(A), ExistingRevision(B))
    assert step.ref == Loading(B)
    assert step.command == FetchRevision(B)


def test_replacing_to_other_id_keeps_displayed_revision():
    shown = _rev(RevisionId("cccc3333"))
    step = on_route(Replacing(A, shown), ExistingRevision(B))
    assert step.ref == Replacing(B, shown)
    assert step.command == FetchRevision(B)


def test_loaded_to_other_id_starts_replacing():
    rev = _rev(A)
    step = on_route(Loaded(rev), ExistingRevision(B))
    assert step.ref == Replacing(B, rev)
    assert step.command == FetchRevision(B)


@pytest.mark.parametrize("ref", [Loading(A), Replacing(A, _rev(B)), Loaded(_rev(A))])
def test_route_to_current_id_is_noop(ref):
    step = on_route(ref, ExistingRevision(A))
    assert step.ref == ref
    assert step.command is None
    assert not step.reset


# ─── Route to new document ────────────────────────────────

def test_new_document_from_not_asked_is_noop():
    step = on_route(NotAsked(), NewDocument())
    assert step.ref == NotAsked()
    assert not step.reset
    assert step.command is None


@pytest.mark.parametrize("ref", ALL_REFS[1:])
def test_new_document_resets_from_any_other_state(ref):
    step = on_route(ref, NewDocument())
    assert step.ref == NotAsked()
    assert step.reset


# ─── Route to not found ───────────────────────────────────

def test_not_found_with_loaded_redirects_to_revision():
    step = on_route(Loaded(_rev(A)), NotFound())
    assert step.command == Redirect(f"/{A}")
    assert step.ref == Loaded(_rev(A))


def test_not_found_while_replacing_redirects_to_displayed_revision():
    step = on_route(Replacing(A, _rev(B)), NotFound())
    assert step.command == Redirect(f"/{B}")


@pytest.mark.parametrize("ref", [NotAsked(), Loading(A)])
def test_not_found_without_revision_redirects_to_new(ref):
    step = on_route(ref, NotFound())
    assert step.command == Redirect("/new")
    assert step.ref == ref


# ─── Fetch completion ─────────────────────────────────────

def test_completion_accepted_while_loading_same_id():
    rev = _rev(A)
    assert on_revision_loaded(Loading(A), A, rev) == Loaded(rev)


def test_completion_accepted_while_replacing_same_id():
    rev = _rev(A)
    assert on_revision_loaded(Replacing(A, _rev(B)), A, rev) == Loaded(rev)


@pytest.mark.parametrize("ref", ALL_REFS)
def test_completion_for_other_id_is_stale(ref):
    assert on_revision_loaded(ref, B, _rev(B)) is None


@pytest.mark.parametrize("ref", [NotAsked(), Loaded(_rev(A))])
def test_completion_without_pending_fetch_is_stale(ref):
    assert on_revision_loaded(ref, A, _rev(A)) is None


def test_completion_whose_body_names_other_id_is_rejected():
    assert on_revision_loaded(Loading(A), A, _rev(B)) is None


def test_supersession_discards_first_response():
    ref = on_route(NotAsked(), ExistingRevision(A)).ref
    ref = on_route(ref, ExistingRevision(B)).ref
    assert pending_revision_id(ref) == B
    assert on_revision_loaded(ref, A, _rev(A)) is None
    assert on_revision_loaded(ref, B, _rev(B)) == Loaded(_rev(B))


# ─── Fetch failure ────────────────────────────────────────

def test_missing_pending_revision_redirects_to_new():
    step = on_revision_missing(Loading(A), A)
    assert step.ref == Loading(A)
    assert step.command == Redirect("/new")


def test_missing_pending_replacement_redirects_to_displayed_revision():
    step = on_revision_missing(Replacing(A, _rev(B)), A)
    assert step.command == Redirect("/bbbb2222")


@pytest.mark.parametrize("ref", ALL_REFS)
def test_missing_superseded_revision_is_stale(ref):
    assert on_revision_missing(ref, B) is None


def test_superseded_failure_does_not_disturb_new_fetch():
    ref = on_route(NotAsked(), ExistingRevision(A)).ref
    ref = on_route(ref, ExistingRevision(B)).ref
    assert on_revision_missing(ref, A) is None
    assert on_revision_loaded(ref, B, _rev(B)) == Loaded(_rev(B))


# ─── Queries ──────────────────────────────────────────────

def test_held_revision():
    assert held_revision(NotAsked()) is None
    assert held_revision(Loading(A)) is None
    assert held_revision(Replacing(A, _rev(B))) == _rev(B)
    assert held_revision(Loaded(_rev(A))) == _rev(A)


def test_pending_revision_id():
    assert pending_revision_id(NotAsked()) is None
    assert pending_revision_id(Loaded(_rev(A))) is None
    assert pending_revision_id(Loading(A)) == A
    assert pending_revision_id(Replacing(B, _rev(A))) == B


# ─── Dirty check ──────────────────────────────────────────

def test_default_workspace_not_dirty_without_revision():
    assert not is_dirty(default_workspace(), NotAsked())
    assert not is_dirty(default_workspace(), Loading(A))


def test_edited_default_workspace_is_dirty():
    ws = replace(default_workspace(), code="main = 2")
    assert is_dirty(ws, NotAsked())


def test_loaded_revision_is_baseline():
    rev = _rev(A)
    ws = workspace_from_revision(rev, default_workspace())
    assert not is_dirty(ws, Loaded(rev))
    assert is_dirty(replace(ws, code="main = 2"), Loaded(rev))
    assert is_dirty(default_workspace(), Loaded(rev))


def test_replacing_compares_against_default_document():
    rev = _rev(A)
    ws = workspace_from_revision(rev, default_workspace())
    assert is_dirty(ws, Replacing(B, rev))


def test_project_name_and_layout_do_not_affect_dirty():
    ws = replace(default_workspace(), project_name="Mine", editor_ratio=0.9)
    assert not is_dirty(ws, NotAsked())
