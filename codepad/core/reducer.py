"""Reducer — the single entry point folding messages into State.

Invariants:
    - reduce(state, msg) is pure and total: it never raises and never performs IO
    - Every message has defined handling; unknown values are a no-op
    - Stale fetch completions and failures leave the State untouched
      (revision_lifecycle)
    - Code, markup and package edits re-evaluate the dirty-check and emit
      EnableNavigationCheck with the result
    - Action pane commands leave wrapped in ForPane

Design Decisions:
    - One match over the message type, one small helper per message group:
      every mapping visible in one place
    - Commands returned as a list in execution order; the runtime may run them
      concurrently, nothing here depends on their completion order
"""

from dataclasses import replace

from codepad.core.action_pane import init_pane, pane_kind, update_pane
from codepad.core.commands import (
    Command, Delay, EnableNavigationCheck, ForPane, FormatCode,
    SaveSettings, StartCompile,
)
from codepad.core.compilation import finish_compile, request_compile
from codepad.core.domain_types import PaneKind, RevisionId
from codepad.core.editor_state import Flags, State, initial_state
from codepad.core.messages import (
    ActionPaneMsg, ActionPaneRatioChanged, ActionPaneSelected,
    ActionPaneToggled, CodeChanged, CompileFinished, CompileRequested,
    EditorRatioChanged, FormatCompleted, FormatRequested, MarkupChanged,
    Msg, NoOp, PackageInstalled, PackageUninstalled, ProjectNameChanged,
    RevisionFetchFailed, RevisionLoaded, RouteChanged, SettingsChanged,
    WorkAreaRatioChanged, WorkspaceAttached, WorkspaceDetached,
)
from codepad.core.revision_lifecycle import (
    RouteStep, on_revision_loaded, on_revision_missing, on_route,
)
from codepad.core.routes import Route
from codepad.core.workspace import (
    Revision, Workspace, clamp_ratio, default_workspace, install_package,
    uninstall_package, workspace_from_revision,
)

Step = tuple[State, list[Command]]


def init(flags: Flags, route: Route) -> Step:
    """Initial State for a session opened at `route`."""
    return _reduce_route(initial_state(flags), route)


def reduce(state: State, msg: Msg) -> Step:
    match msg:
        case RouteChanged(route=route):
            return _reduce_route(state, route)
        case RevisionLoaded(revision_id=rid, revision=revision):
            return _reduce_revision_loaded(state, rid, revision)
        case RevisionFetchFailed(revision_id=rid):
            return _reduce_revision_missing(state, rid)

        case CodeChanged(code=code):
            return _edit(state, replace(state.workspace, code=code))
        case MarkupChanged(markup=markup):
            return _edit(state, replace(state.workspace, markup=markup))
        case PackageInstalled(package=package):
            return _edit(state, install_package(state.workspace, package))
        case PackageUninstalled(name=name):
            return _edit(state, uninstall_package(state.workspace, name))
        case ProjectNameChanged(name=name):
            return replace(
                state, workspace=replace(state.workspace, project_name=name),
            ), []

        case FormatRequested():
            return state, [FormatCode(state.workspace.code)]
        case FormatCompleted(original=original, formatted=formatted):
            if original != state.workspace.code:
                return state, []
            return _edit(state, replace(state.workspace, code=formatted))

        case SettingsChanged(settings=settings):
            return replace(state, settings=settings), [
                SaveSettings(state.token, settings),
            ]

        case CompileRequested():
            return _reduce_compile_requested(state)
        case CompileFinished(errors=errors):
            return replace(state, compile=finish_compile(state.compile, errors)), []

        case WorkspaceDetached():
            return replace(state, connected=False), []
        case WorkspaceAttached():
            return replace(state, connected=True), []

        case EditorRatioChanged(ratio=ratio):
            return _layout(state, editor_ratio=clamp_ratio(ratio))
        case WorkAreaRatioChanged(ratio=ratio):
            return _layout(state, work_area_ratio=clamp_ratio(ratio))
        case ActionPaneRatioChanged(ratio=ratio):
            return _layout(state, action_pane_ratio=clamp_ratio(ratio))
        case ActionPaneToggled():
            return _animate(replace(state, action_pane_open=not state.action_pane_open))
        case ActionPaneSelected(kind=kind):
            return _reduce_pane_selected(state, kind)
        case ActionPaneMsg(msg=pane_msg):
            pane, commands = update_pane(state.action_pane, pane_msg)
            return replace(state, action_pane=pane), [ForPane(c) for c in commands]

        case NoOp():
            return state, []
        case _:
            return state, []


# ─── Revision lifecycle ───────────────────────────────────

def _reduce_route(state: State, route: Route) -> Step:
    return _apply_route_step(state, on_route(state.revision, route))


def _apply_route_step(state: State, step: RouteStep) -> Step:
    if step.reset:
        new_state = replace(
            state, workspace=default_workspace(), revision=step.ref,
        )
        return new_state, [EnableNavigationCheck(False)]
    new_state = replace(state, revision=step.ref)
    if step.command is None:
        return new_state, []
    return new_state, [step.command]


def _reduce_revision_loaded(
    state: State, rid: RevisionId, revision: Revision,
) -> Step:
    loaded = on_revision_loaded(state.revision, rid, revision)
    if loaded is None:
        return state, []
    new_state = replace(
        state,
        workspace=workspace_from_revision(revision, state.workspace),
        revision=loaded,
    )
    return new_state, [EnableNavigationCheck(new_state.dirty)]


def _reduce_revision_missing(state: State, rid: RevisionId) -> Step:
    step = on_revision_missing(state.revision, rid)
    if step is None:
        return state, []
    return _apply_route_step(state, step)


# ─── Editing ──────────────────────────────────────────────

def _edit(state: State, workspace: Workspace) -> Step:
    new_state = replace(state, workspace=workspace)
    return new_state, [EnableNavigationCheck(new_state.dirty)]


def _reduce_compile_requested(state: State) -> Step:
    ws = state.workspace
    return replace(state, compile=request_compile(state.compile)), [
        StartCompile(state.token, ws.code, ws.markup, ws.packages),
    ]


# ─── Layout ───────────────────────────────────────────────

def _layout(state: State, **ratios) -> Step:
    return replace(state, workspace=replace(state.workspace, **ratios)), []


def _animate(state: State) -> Step:
    return state, [Delay(state.pane_animation_ms)]


def _reduce_pane_selected(state: State, kind: PaneKind) -> Step:
    pane = state.action_pane
    if pane_kind(pane) != kind:
        pane = init_pane(kind)
    if state.action_pane_open and pane is state.action_pane:
        return state, []
    return _animate(replace(state, action_pane=pane, action_pane_open=True))
