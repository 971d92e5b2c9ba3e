"""Boundary Protocols — contracts between the core and its collaborators.

Invariants:
    - Core NEVER imports from the shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Collaborators return raw JSON-like payloads; schemas/ validates them
    - Failures are raised as CodepadError subclasses (core/errors.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, but the reducer that consumes
      their results is never async; the runtime orchestrates around it
"""

from dataclasses import dataclass
from typing import Any, AsyncIterator, Protocol

from codepad.core.domain_types import RevisionId, Token
from codepad.core.listeners import Listener


class RevisionStore(Protocol):
    """Remote store of persisted revisions."""
    async def fetch(self, revision_id: RevisionId) -> dict[str, Any]:
        """Raw revision payload. Raises RevisionNotFoundError if absent."""
        ...


class CompilerService(Protocol):
    """Starts compiles; results are pushed through OnCompileFinished."""
    async def start_compile(
        self, token: Token, code: str, markup: str, packages: list[dict],
    ) -> None: ...


class CodeFormatter(Protocol):
    async def format(self, code: str) -> str: ...


class SettingsStore(Protocol):
    async def save(self, token: Token, settings: dict[str, Any]) -> None: ...


class PackageIndex(Protocol):
    """Starts a search; hits are pushed through OnPackageSearchResults."""
    async def request_search(self, query: str) -> None: ...


class Navigator(Protocol):
    """Browser location and navigation guard."""
    async def replace_url(self, path: str) -> None: ...
    async def set_navigation_check(self, enabled: bool) -> None: ...


class EventSource(Protocol):
    """Inbound event streams, one per listener descriptor."""
    def listen(self, listener: Listener) -> AsyncIterator[Any]: ...


@dataclass
class Collaborators:
    """Every external collaborator the runtime drives."""
    store: RevisionStore
    compiler: CompilerService
    formatter: CodeFormatter
    settings_store: SettingsStore
    package_index: PackageIndex
    navigator: Navigator
    events: EventSource
