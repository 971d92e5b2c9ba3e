"""Commands — effect requests returned by the reducer, executed by the runtime.

Invariants:
    - Commands are plain frozen values: the core never performs IO
    - Every command that completes names the message it completes with in its
      docstring; the runtime is the only producer of those messages
    - NoCommand is dropped by batch(); an empty list means "no effect"

Design Decisions:
    - One dataclass per command over a generic (name, payload) pair: the runtime
      matches exhaustively on type
    - ForPane wraps action-pane commands so their completions are re-delivered
      as ActionPaneMsg without the parent knowing the pane's message types
"""

from dataclasses import dataclass

from codepad.core.domain_types import RevisionId, Token
from codepad.core.user_settings import UserSettings
from codepad.core.workspace import Package


@dataclass(frozen=True)
class NoCommand:
    """Explicit empty marker."""


@dataclass(frozen=True)
class StartCompile:
    """Fire-and-forget; results arrive through the compile-finished listener."""
    token: Token
    code: str
    markup: str
    packages: tuple[Package, ...]


@dataclass(frozen=True)
class FormatCode:
    """Completes with FormatCompleted(original=code, formatted=...)."""
    code: str


@dataclass(frozen=True)
class SaveSettings:
    token: Token
    settings: UserSettings


@dataclass(frozen=True)
class FetchRevision:
    """Completes with RevisionLoaded(revision_id, revision)."""
    revision_id: RevisionId


@dataclass(frozen=True)
class Redirect:
    """Replace the current URL; the navigator reports the new route back."""
    path: str


@dataclass(frozen=True)
class EnableNavigationCheck:
    """Toggle the "unsaved changes" prompt on navigation away."""
    enabled: bool


@dataclass(frozen=True)
class Delay:
    """Completes with NoOp after duration_ms."""
    duration_ms: int


@dataclass(frozen=True)
class SearchPackages:
    """Fire-and-forget; hits arrive through the package-search listener."""
    query: str


@dataclass(frozen=True)
class ForPane:
    """An action-pane command; its completion is wrapped in ActionPaneMsg."""
    command: "Command"


Command = (
    NoCommand | StartCompile | FormatCode | SaveSettings | FetchRevision
    | Redirect | EnableNavigationCheck | Delay | SearchPackages | ForPane
)


def batch(*commands: Command) -> list[Command]:
    """Collect commands, dropping NoCommand markers."""
    return [c for c in commands if not isinstance(c, NoCommand)]
