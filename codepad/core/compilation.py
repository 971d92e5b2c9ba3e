"""Compilation Pipeline — four-state machine over compile request/response cycles.

Invariants:
    - A compile request always moves to Compiling, whatever the current state
    - A result replaces any previous error list; errors never accumulate
    - An empty error list means Succeeded

Design Decisions:
    - Results are accepted in any state: the compile-finished listener is always
      active and a result is always newer than the state it replaces
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Region:
    """1-based source span an error points at."""
    start_line: int
    start_column: int
    end_line: int
    end_column: int


@dataclass(frozen=True)
class CompileError:
    title: str
    message: str
    region: Region | None = None
    module: str | None = None


@dataclass(frozen=True)
class Ready:
    pass


@dataclass(frozen=True)
class Compiling:
    pass


@dataclass(frozen=True)
class FinishedWithErrors:
    errors: tuple[CompileError, ...]


@dataclass(frozen=True)
class Succeeded:
    pass


CompileState = Ready | Compiling | FinishedWithErrors | Succeeded


def request_compile(state: CompileState) -> CompileState:
    return Compiling()


def finish_compile(
    state: CompileState, errors: tuple[CompileError, ...],
) -> CompileState:
    if errors:
        return FinishedWithErrors(tuple(errors))
    return Succeeded()

