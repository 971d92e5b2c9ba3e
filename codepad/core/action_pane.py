"""Action Pane — delegated side-panel sub-components.

Invariants:
    - The variant set is closed: PackagesPane | SettingsPane
    - update_pane and pane_subscriptions are total over (variant, message);
      a message addressed to another variant is a no-op
    - PackagesPane holds at most one pending query; results for any other
      query are discarded
    - Returned commands/listeners are unwrapped; the parent wraps them in
      ForPane/ForPaneListener

Design Decisions:
    - Tagged union + match over an abstract base class: the parent dispatches
      through update_pane/pane_subscriptions and never inspects the variant
"""

from dataclasses import dataclass, replace

from codepad.core.commands import Command, NoCommand, SearchPackages, batch
from codepad.core.domain_types import PaneKind
from codepad.core.listeners import Listener, OnPackageSearchResults
from codepad.core.workspace import Package

MIN_QUERY_LENGTH = 2


# ─── Variants ─────────────────────────────────────────────

@dataclass(frozen=True)
class PackagesPane:
    query: str = ""
    pending_query: str | None = None
    results: tuple[Package, ...] = ()

    @property
    def searching(self) -> bool:
        return self.pending_query is not None


@dataclass(frozen=True)
class SettingsPane:
    pass


ActionPane = PackagesPane | SettingsPane


# ─── Messages ─────────────────────────────────────────────

@dataclass(frozen=True)
class SearchQueryChanged:
    query: str


@dataclass(frozen=True)
class SearchResultsReceived:
    query: str
    packages: tuple[Package, ...]


@dataclass(frozen=True)
class SearchCleared:
    pass


PaneMsg = SearchQueryChanged | SearchResultsReceived | SearchCleared


# ─── Interface ────────────────────────────────────────────

def init_pane(kind: PaneKind) -> ActionPane:
    match kind:
        case PaneKind.SETTINGS:
            return SettingsPane()
        case _:
            return PackagesPane()


def pane_kind(pane: ActionPane) -> PaneKind:
    match pane:
        case SettingsPane():
            return PaneKind.SETTINGS
        case _:
            return PaneKind.PACKAGES


def update_pane(pane: ActionPane, msg: PaneMsg) -> tuple[ActionPane, list[Command]]:
    match pane:
        case PackagesPane():
            return _update_packages(pane, msg)
        case _:
            return pane, batch(NoCommand())


def pane_subscriptions(pane: ActionPane) -> frozenset[Listener]:
    match pane:
        case PackagesPane() if pane.searching:
            return frozenset({OnPackageSearchResults(pane.pending_query)})
        case _:
            return frozenset()


# ─── Packages pane ────────────────────────────────────────

def _update_packages(
    pane: PackagesPane, msg: PaneMsg,
) -> tuple[ActionPane, list[Command]]:
    match msg:
        case SearchQueryChanged(query=query):
            term = query.strip()
            if len(term) < MIN_QUERY_LENGTH:
                return PackagesPane(query=query), []
            if term == pane.pending_query:
                return replace(pane, query=query), []
            return (
                replace(pane, query=query, pending_query=term),
                [SearchPackages(term)],
            )
        case SearchResultsReceived(query=query, packages=packages):
            if query != pane.pending_query:
                return pane, []
            return replace(pane, pending_query=None, results=tuple(packages)), []
        case SearchCleared():
            return PackagesPane(), []
        case _:
            return pane, []
