"""Workspace — the live editing surface and the persisted Revision it mirrors.

Invariants:
    - Workspace and Revision are frozen: edits return a new Workspace
    - Package names are unique within a Workspace (install replaces by name)
    - Layout ratios are always clamped to [0.0, 1.0]
    - Loading a Revision replaces content (code, markup, packages, name)
      but keeps the current layout

Design Decisions:
    - Tuples for package lists: hashable, comparable, safe to share between states
"""

import math
from dataclasses import dataclass, replace

from codepad.core.domain_types import MAX_RATIO, MIN_RATIO, Ratio, RevisionId


DEFAULT_CODE = """module Main exposing (main)

import Html exposing (Html, text)


main : Html msg
main =
    text "Hello, World!"
"""

DEFAULT_MARKUP = """<html>
<head>
  <style>
    /* you can style your program here */
  </style>
</head>
<body>
  <main></main>
  <script>
    var app = Elm.Main.init({ node: document.querySelector('main') })
    // you can use ports and stuff here
  </script>
</body>
</html>
"""

DEFAULT_PROJECT_NAME = ""


@dataclass(frozen=True)
class Package:
    """A dependency pinned to an exact version."""
    name: str
    version: str


DEFAULT_PACKAGES: tuple[Package, ...] = (
    Package("elm/browser", "1.0.2"),
    Package("elm/core", "1.0.5"),
    Package("elm/html", "1.0.0"),
)


@dataclass(frozen=True)
class Revision:
    """Persisted, immutable snapshot of a document."""
    id: RevisionId
    code: str
    markup: str
    packages: tuple[Package, ...] = ()
    title: str = ""


@dataclass(frozen=True)
class Workspace:
    """Mutable-by-replacement editing state."""
    code: str = DEFAULT_CODE
    markup: str = DEFAULT_MARKUP
    packages: tuple[Package, ...] = DEFAULT_PACKAGES
    project_name: str = DEFAULT_PROJECT_NAME

    # Layout
    editor_ratio: Ratio = Ratio(0.5)        # code vs markup editor
    work_area_ratio: Ratio = Ratio(0.5)     # editors vs output
    action_pane_ratio: Ratio = Ratio(0.25)  # side panel vs work area

    @property
    def content(self) -> tuple[str, str, tuple[Package, ...]]:
        """The part of the workspace compared for dirty-checking."""
        return (self.code, self.markup, self.packages)


def default_workspace() -> Workspace:
    return Workspace()


def revision_content(revision: Revision) -> tuple[str, str, tuple[Package, ...]]:
    return (revision.code, revision.markup, revision.packages)


def workspace_from_revision(revision: Revision, layout: Workspace) -> Workspace:
    """Replace all document content with the revision's, keeping layout."""
    return replace(
        layout,
        code=revision.code,
        markup=revision.markup,
        packages=revision.packages,
        project_name=revision.title,
    )


# ─── Package edits ────────────────────────────────────────

def install_package(workspace: Workspace, package: Package) -> Workspace:
    """Add a package, replacing any installed version with the same name."""
    kept = tuple(p for p in workspace.packages if p.name != package.name)
    return replace(workspace, packages=kept + (package,))


def uninstall_package(workspace: Workspace, name: str) -> Workspace:
    return replace(
        workspace,
        packages=tuple(p for p in workspace.packages if p.name != name),
    )


# ─── Layout ───────────────────────────────────────────────

def clamp_ratio(value: float) -> Ratio:
    """Bound a pane ratio to [0.0, 1.0]. NaN collapses to the lower bound."""
    if math.isnan(value):
        return Ratio(MIN_RATIO)
    return Ratio(min(MAX_RATIO, max(MIN_RATIO, value)))
