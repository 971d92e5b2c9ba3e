"""Workspace entry point — wires settings, logging and collaborators into a runtime.

Invariants:
    - Logging configured once per session from Settings
    - The runtime is always stopped on exit, cancelling listeners and commands

Design Decisions:
    - Async context manager over start/stop pairs: the embedding host cannot leak
      listener tasks
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from codepad.config import Settings, get_settings
from codepad.core.domain_types import Token
from codepad.core.editor_state import Flags
from codepad.core.repository_protocols import Collaborators
from codepad.core.routes import parse_route
from codepad.core.user_settings import UserSettings
from codepad.infrastructure.observability import setup_logging
from codepad.services.runtime import WorkspaceRuntime

logger = logging.getLogger(__name__)


def build_runtime(
    collaborators: Collaborators,
    token: str,
    path: str,
    *,
    user_settings: UserSettings | None = None,
    settings: Settings | None = None,
) -> WorkspaceRuntime:
    """Runtime for a session opened at URL `path`. Not started."""
    settings = settings or get_settings()
    flags = Flags(
        token=Token(token),
        settings=user_settings or UserSettings(),
        connected=settings.start_connected,
        pane_animation_ms=settings.pane_animation_ms,
    )
    return WorkspaceRuntime(
        collaborators, flags, parse_route(path),
        command_timeout=settings.command_timeout_seconds,
    )


@asynccontextmanager
async def workspace_session(
    collaborators: Collaborators,
    token: str,
    path: str,
    *,
    user_settings: UserSettings | None = None,
    settings: Settings | None = None,
) -> AsyncIterator[WorkspaceRuntime]:
    """Startup/shutdown lifecycle of one editor session."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)
    runtime = build_runtime(
        collaborators, token, path,
        user_settings=user_settings, settings=settings,
    )
    await runtime.start()
    logger.info("Workspace session started")
    try:
        yield runtime
    finally:
        await runtime.stop()
        logger.info("Workspace session stopped")
