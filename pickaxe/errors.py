"""
pickaxe/errors.py

Centralized exception types for the Pickaxe shell.

This module defines:
- A common base exception for all Pickaxe errors
- A lightweight Position structure for reporting compile errors with line/column context
- The error taxonomy used by the compiler, the runtime and the orchestrator:
    - CompileError: a statement was rejected before execution
    - ExecutionAborted: a run was cancelled on request
    - ScriptError: a running program raised on purpose
"""

from __future__ import annotations

from dataclasses import dataclass


class PickaxeError(Exception):
    """
    Base class for all Pickaxe errors.

    Catching this exception allows callers (REPL/batch runner) to handle all
    shell errors without accidentally swallowing unrelated system exceptions.
    """


@dataclass(frozen=True)
class Position:
    """
    Represents a location in a statement's source text.

    Attributes:
        line: 1-based line number
        col:  1-based column number
    """
    line: int
    col: int


class CompileError(PickaxeError):
    """
    Raised when tokenization/parsing of a statement fails.

    The compiler collects these rather than stopping at the first one; only
    their messages reach the user.

    Args:
        message: Human readable explanation.
        position: Optional Position indicating where the error occurred.
    """

    def __init__(self, message: str, position: Position | None = None):
        self.message = message
        self.position = position
        super().__init__(self.__str__())

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"line {self.position.line}, col {self.position.col}: {self.message}"


class ExecutionAborted(PickaxeError):
    """Raised inside a worker when its run has been cancelled."""


class ScriptError(PickaxeError):
    """
    Raised by a program that fails on its own terms (e.g. `raise 'boom'`).

    The orchestrator treats it like any other unexpected failure.
    """


class ScriptNotFoundError(PickaxeError):
    """Raised when a batch script path does not exist."""
