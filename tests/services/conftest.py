"""Runtime test fixtures — fake collaborators and started runtimes.

Invariants:
    - Every test gets fresh fakes
    - Every runtime created through make_runtime is stopped on teardown
"""

import pytest

from codepad.core.editor_state import Flags
from codepad.core.routes import parse_route
from codepad.services.runtime import WorkspaceRuntime
from tests.services.fakes import (
    REVISION_A, REVISION_B, TOKEN, make_collaborators,
)


@pytest.fixture
def collab():
    c = make_collaborators()
    c.store.revisions.update({"aaaa1111": REVISION_A, "bbbb2222": REVISION_B})
    return c


@pytest.fixture
async def make_runtime(collab):
    runtimes: list[WorkspaceRuntime] = []

    async def _make(path: str = "/new", timeout: float = 1.0, **flag_overrides):
        flags = Flags(token=TOKEN, pane_animation_ms=0, **flag_overrides)
        runtime = WorkspaceRuntime(
            collab, flags, parse_route(path), command_timeout=timeout,
        )
        await runtime.start()
        runtimes.append(runtime)
        return runtime

    yield _make
    for runtime in runtimes:
        await runtime.stop()

