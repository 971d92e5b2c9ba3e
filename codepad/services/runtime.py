"""Workspace Runtime — async driver loop around the pure reducer.

Invariants:
    - Single writer: only the runner task calls reduce() and replaces the State,
      one queued message at a time
    - After every State change the live listener set equals subscriptions(state)
    - Commands run as independent tasks; their completions re-enter through the
      queue, never by touching the State directly
    - Collaborator failures never crash the loop and are never retried
    - A fetch answered with RevisionNotFoundError re-enters as RevisionFetchFailed,
      so the reducer's id check decides whether it still matters
    - A listener whose stream ends or fails is dropped from the live set and
      restarted by the next reconcile

Design Decisions:
    - asyncio.Queue as the mailbox: completions and listener events are ordered
      by arrival, correctness comes from ids carried in the messages
    - Listener tasks keyed by descriptor value: diffing two frozensets decides
      which tasks to start and cancel
    - Payload validation (schemas/) happens here, so the core only ever sees
      domain values
"""

import asyncio
import logging
from typing import Any, Awaitable, TypeVar

from pydantic import BaseModel, ValidationError

from codepad.core.action_pane import SearchResultsReceived
from codepad.core.commands import (
    Command, Delay, EnableNavigationCheck, FetchRevision, ForPane, FormatCode,
    NoCommand, Redirect, SaveSettings, SearchPackages, StartCompile,
)
from codepad.core.editor_state import Flags, State
from codepad.core.errors import (
    CodepadError, CollaboratorTimeoutError, ErrorContext,
    MalformedPayloadError, RevisionNotFoundError,
)
from codepad.core.listeners import (
    ForPaneListener, Listener, OnAttached, OnCompileFinished, OnDetached,
    OnKeepAlive, OnPackageSearchResults,
)
from codepad.core.messages import (
    ActionPaneMsg, CompileFinished, FormatCompleted, Msg, NoOp,
    RevisionFetchFailed, RevisionLoaded, RouteChanged, WorkspaceAttached,
    WorkspaceDetached,
)
from codepad.core.reducer import init, reduce
from codepad.core.repository_protocols import Collaborators
from codepad.core.routes import Route, parse_route
from codepad.core.subscriptions import subscriptions
from codepad.schemas.compiler import CompileResultPayload
from codepad.schemas.revision import (
    PackagePayload, PackageSearchPayload, RevisionPayload,
)
from codepad.schemas.settings import SettingsPayload

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


class WorkspaceRuntime:
    """Feeds messages to reduce(), executes commands, keeps listeners live."""

    def __init__(
        self,
        collaborators: Collaborators,
        flags: Flags,
        route: Route,
        *,
        command_timeout: float = 30.0,
    ):
        self._collab = collaborators
        self._flags = flags
        self._route = route
        self._timeout = command_timeout
        self._queue: asyncio.Queue[Msg] = asyncio.Queue()
        self._state: State | None = None
        self._listeners: dict[Listener, asyncio.Task] = {}
        self._commands: set[asyncio.Task] = set()
        self._runner: asyncio.Task | None = None

    @property
    def state(self) -> State:
        if self._state is None:
            raise RuntimeError("WorkspaceRuntime.start() has not been called")
        return self._state

    @property
    def active_listeners(self) -> frozenset[Listener]:
        return frozenset(self._listeners)

    # ─── Lifecycle ────────────────────────────────────────

    async def start(self) -> None:
        state, commands = init(self._flags, self._route)
        self._apply(state, commands)
        self._runner = asyncio.create_task(self._run())

    async def stop(self) -> None:
        tasks = [*self._listeners.values(), *self._commands]
        if self._runner is not None:
            tasks.append(self._runner)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._listeners.clear()
        self._commands.clear()
        self._runner = None

    def dispatch(self, msg: Msg) -> None:
        self._queue.put_nowait(msg)

    async def settle(self) -> None:
        """Wait until the mailbox is empty and no command is in flight."""
        while True:
            await self._queue.join()
            pending = [t for t in self._commands if not t.done()]
            if not pending:
                if self._queue.empty():
                    return
                continue
            await asyncio.wait(pending)

    # ─── Message loop ─────────────────────────────────────

    async def _run(self) -> None:
        while True:
            msg = await self._queue.get()
            try:
                self._step(msg)
            finally:
                self._queue.task_done()

    def _step(self, msg: Msg) -> None:
        logger.debug(
            "Reducing %s", type(msg).__name__,
            extra={"message_type": type(msg).__name__},
        )
        previous = self.state
        state, commands = reduce(previous, msg)
        stale = state is previous
        if stale and isinstance(msg, (RevisionLoaded, RevisionFetchFailed)):
            logger.debug(
                "Discarded stale revision result",
                extra={"revision_id": msg.revision_id},
            )
        self._apply(state, commands)

    def _apply(self, state: State, commands: list[Command]) -> None:
        self._state = state
        self._reconcile()
        for command in commands:
            task = asyncio.create_task(self._execute(command))
            self._commands.add(task)
            task.add_done_callback(self._commands.discard)

    # ─── Commands ─────────────────────────────────────────

    async def _execute(self, command: Command) -> None:
        name = type(command).__name__
        logger.debug("Executing %s", name, extra={"command": name})
        try:
            msg = await self._perform(command)
        except CodepadError as e:
            e.context.command = e.context.command or name
            logger.error(e.message, extra=e.to_log_extra())
            return
        except Exception as e:
            logger.error(
                "Unexpected error executing %s: %s", name, e,
                extra={"command": name}, exc_info=True,
            )
            return
        if msg is not None:
            self.dispatch(msg)

    async def _perform(self, command: Command) -> Msg | None:
        collab = self._collab
        match command:
            case ForPane(command=inner):
                msg = await self._perform(inner)
                return ActionPaneMsg(msg) if msg is not None else None
            case FetchRevision(revision_id=rid):
                try:
                    raw = await self._call("revision store", collab.store.fetch(rid))
                except RevisionNotFoundError as e:
                    logger.warning(e.message, extra=e.to_log_extra())
                    return RevisionFetchFailed(rid)
                payload = _validate(RevisionPayload, raw, "revision store")
                return RevisionLoaded(rid, payload.to_domain())
            case StartCompile(token=token, code=code, markup=markup, packages=packages):
                await self._call("compiler", collab.compiler.start_compile(
                    token, code, markup,
                    [PackagePayload.from_domain(p).model_dump() for p in packages],
                ))
                return None
            case FormatCode(code=code):
                formatted = await self._call("formatter", collab.formatter.format(code))
                return FormatCompleted(original=code, formatted=formatted)
            case SaveSettings(token=token, settings=settings):
                body = SettingsPayload.from_domain(settings).model_dump(mode="json")
                await self._call("settings store", collab.settings_store.save(token, body))
                return None
            case Redirect(path=path):
                await self._call("navigator", collab.navigator.replace_url(path))
                return RouteChanged(parse_route(path))
            case EnableNavigationCheck(enabled=enabled):
                await self._call(
                    "navigator", collab.navigator.set_navigation_check(enabled),
                )
                return None
            case Delay(duration_ms=duration_ms):
                await asyncio.sleep(duration_ms / 1000)
                return NoOp()
            case SearchPackages(query=query):
                await self._call(
                    "package index", collab.package_index.request_search(query),
                )
                return None
            case NoCommand():
                return None
            case _:
                logger.warning("Unknown command %r ignored", command)
                return None

    async def _call(self, collaborator: str, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, self._timeout)
        except asyncio.TimeoutError:
            raise CollaboratorTimeoutError(collaborator, self._timeout) from None

    # ─── Listeners ────────────────────────────────────────

    def _reconcile(self) -> None:
        wanted = subscriptions(self.state)
        for listener in list(self._listeners):
            if listener not in wanted:
                logger.debug("Stopping listener", extra={"listener": repr(listener)})
                self._listeners.pop(listener).cancel()
        for listener in wanted:
            if listener not in self._listeners:
                logger.debug("Starting listener", extra={"listener": repr(listener)})
                self._listeners[listener] = asyncio.create_task(self._listen(listener))

    async def _listen(self, listener: Listener) -> None:
        try:
            async for payload in self._collab.events.listen(listener):
                try:
                    msg = _event_message(listener, payload)
                except MalformedPayloadError as e:
                    logger.error(e.message, extra={
                        **e.to_log_extra(), "listener": repr(listener),
                    })
                    continue
                self.dispatch(msg)
        except CodepadError as e:
            logger.error(
                "Listener stopped: %s", e.message,
                extra={**e.to_log_extra(), "listener": repr(listener)},
            )
        except Exception as e:
            logger.error(
                "Listener stream failed: %s", e,
                extra={"listener": repr(listener)}, exc_info=True,
            )
        finally:
            if self._listeners.get(listener) is asyncio.current_task():
                del self._listeners[listener]


def _event_message(listener: Listener, payload: Any) -> Msg:
    match listener:
        case ForPaneListener(listener=inner):
            return ActionPaneMsg(_event_message(inner, payload))
        case OnCompileFinished():
            result = _validate(CompileResultPayload, payload or {}, "compiler")
            return CompileFinished(result.to_domain())
        case OnDetached():
            return WorkspaceDetached()
        case OnAttached():
            return WorkspaceAttached()
        case OnPackageSearchResults(query=query):
            hits = _validate(PackageSearchPayload, payload or {}, "package index")
            return SearchResultsReceived(query, hits.to_domain())
        case OnKeepAlive():
            return NoOp()
        case _:
            return NoOp()


def _validate(schema: type[M], raw: Any, source: str) -> M:
    try:
        return schema.model_validate(raw)
    except ValidationError as e:
        raise MalformedPayloadError(
            str(e), source, ErrorContext(debug_info={"errors": e.errors()}),
        ) from e
