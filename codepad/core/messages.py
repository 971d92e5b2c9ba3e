"""Messages — every input the reducer accepts.

Invariants:
    - Messages are frozen values; the reducer handles each one totally
    - Completion messages carry the identity of their request (revision id,
      original code, search query) so the reducer can reject stale ones
"""

from dataclasses import dataclass

from codepad.core.action_pane import PaneMsg
from codepad.core.compilation import CompileError
from codepad.core.domain_types import PaneKind, RevisionId
from codepad.core.routes import Route
from codepad.core.user_settings import UserSettings
from codepad.core.workspace import Package, Revision


@dataclass(frozen=True)
class NoOp:
    """Placeholder, e.g. the completion of a Delay."""


# ─── Navigation & storage ─────────────────────────────────

@dataclass(frozen=True)
class RouteChanged:
    route: Route


@dataclass(frozen=True)
class RevisionLoaded:
    revision_id: RevisionId
    revision: Revision


@dataclass(frozen=True)
class RevisionFetchFailed:
    """The store has no revision for a fetch issued earlier."""
    revision_id: RevisionId


# ─── Editing ──────────────────────────────────────────────

@dataclass(frozen=True)
class CodeChanged:
    code: str


@dataclass(frozen=True)
class MarkupChanged:
    markup: str


@dataclass(frozen=True)
class ProjectNameChanged:
    name: str


@dataclass(frozen=True)
class PackageInstalled:
    package: Package


@dataclass(frozen=True)
class PackageUninstalled:
    name: str


@dataclass(frozen=True)
class FormatRequested:
    pass


@dataclass(frozen=True)
class FormatCompleted:
    original: str
    formatted: str


@dataclass(frozen=True)
class SettingsChanged:
    settings: UserSettings


# ─── Compilation ──────────────────────────────────────────

@dataclass(frozen=True)
class CompileRequested:
    pass


@dataclass(frozen=True)
class CompileFinished:
    errors: tuple[CompileError, ...]


# ─── Connectivity ─────────────────────────────────────────

@dataclass(frozen=True)
class WorkspaceDetached:
    pass


@dataclass(frozen=True)
class WorkspaceAttached:
    pass


# ─── Layout ───────────────────────────────────────────────

@dataclass(frozen=True)
class EditorRatioChanged:
    ratio: float


@dataclass(frozen=True)
class WorkAreaRatioChanged:
    ratio: float


@dataclass(frozen=True)
class ActionPaneRatioChanged:
    ratio: float


@dataclass(frozen=True)
class ActionPaneToggled:
    pass


@dataclass(frozen=True)
class ActionPaneSelected:
    kind: PaneKind


@dataclass(frozen=True)
class ActionPaneMsg:
    """A message for whichever action pane is active."""
    msg: PaneMsg


Msg = (
    NoOp | RouteChanged | RevisionLoaded | RevisionFetchFailed
    | CodeChanged | MarkupChanged | ProjectNameChanged
    | PackageInstalled | PackageUninstalled
    | FormatRequested | FormatCompleted | SettingsChanged
    | CompileRequested | CompileFinished
    | WorkspaceDetached | WorkspaceAttached
    | EditorRatioChanged | WorkAreaRatioChanged | ActionPaneRatioChanged
    | ActionPaneToggled | ActionPaneSelected | ActionPaneMsg
)
