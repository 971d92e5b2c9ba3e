"""Listener Descriptors — inbound event sources the workspace wants to hear from.

Invariants:
    - Descriptors are frozen and hashable: subscription sets are diffed by value
    - Two equal descriptors denote the same live listener
"""

from dataclasses import dataclass

from codepad.core.domain_types import Token


@dataclass(frozen=True)
class OnKeepAlive:
    """Periodic ping on the workspace channel. Delivers NoOp."""
    token: Token


@dataclass(frozen=True)
class OnCompileFinished:
    """Delivers CompileFinished(errors)."""
    token: Token


@dataclass(frozen=True)
class OnDetached:
    """Fires once when the workspace channel drops. Delivers WorkspaceDetached."""
    token: Token


@dataclass(frozen=True)
class OnAttached:
    """Fires once when the workspace channel returns. Delivers WorkspaceAttached."""
    token: Token


@dataclass(frozen=True)
class OnPackageSearchResults:
    """Hits for one search query. Delivers SearchResultsReceived(query, packages)."""
    query: str


@dataclass(frozen=True)
class ForPaneListener:
    """An action-pane listener; its events are wrapped in ActionPaneMsg."""
    listener: "Listener"


Listener = (
    OnKeepAlive | OnCompileFinished | OnDetached | OnAttached
    | OnPackageSearchResults | ForPaneListener
)
