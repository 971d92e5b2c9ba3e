"""Editor State — the complete model owned by the reducer.

Invariants:
    - workspace + revision form the document aggregate; only reduce() replaces them
    - connected is flipped only by WorkspaceDetached/WorkspaceAttached
    - action_pane is owned here but updated only through core/action_pane.py

Design Decisions:
    - Frozen dataclass: every message yields a new State via dataclasses.replace
    - Flags carry the runtime-provided values (token, settings, config) so the
      core never reads configuration itself
"""

from dataclasses import dataclass, field

from codepad.core.action_pane import ActionPane, PackagesPane
from codepad.core.compilation import CompileState, Ready
from codepad.core.domain_types import Token
from codepad.core.revision_lifecycle import NotAsked, RevisionRef, is_dirty
from codepad.core.user_settings import UserSettings
from codepad.core.workspace import Workspace


@dataclass(frozen=True)
class Flags:
    """Startup inputs supplied by the runtime."""
    token: Token
    settings: UserSettings = field(default_factory=UserSettings)
    connected: bool = True
    pane_animation_ms: int = 300


@dataclass(frozen=True)
class State:
    token: Token
    workspace: Workspace = field(default_factory=Workspace)
    revision: RevisionRef = field(default_factory=NotAsked)
    compile: CompileState = field(default_factory=Ready)
    connected: bool = True
    settings: UserSettings = field(default_factory=UserSettings)
    action_pane: ActionPane = field(default_factory=PackagesPane)
    action_pane_open: bool = False
    pane_animation_ms: int = 300

    @property
    def dirty(self) -> bool:
        """Whether the workspace has unsaved changes against its baseline."""
        return is_dirty(self.workspace, self.revision)


def initial_state(flags: Flags) -> State:
    return State(
        token=flags.token,
        connected=flags.connected,
        settings=flags.settings,
        pane_animation_ms=flags.pane_animation_ms,
    )
