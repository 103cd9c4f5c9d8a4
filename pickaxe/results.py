"""
pickaxe/results.py

Value objects passed between the compiler, the runtime, the orchestrator and
the renderer.

- CompileResult: output of one compile step (program xor errors)
- ResultTable: one tabular result delivered by a run
- Outcome / RunOutcome: the terminal outcome of dispatching one statement
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


@dataclass(frozen=True)
class CompileResult:
    """
    Result of compiling one statement.

    Attributes:
        program: The runnable unit, present if and only if `errors` is empty.
        errors: Error messages in the order they were found.
    """
    program: Any = None
    errors: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if (self.program is None) == (not self.errors):
            raise ValueError("CompileResult needs exactly one of program or errors")

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class ResultTable:
    """
    A completed tabular result.

    Attributes:
        columns: Column names in order.
        rows: Rows in order; each row holds exactly one value per column.
    """
    columns: list[str]
    rows: list[list[Any]] = field(default_factory=list)

    def __post_init__(self) -> None:
        width = len(self.columns)
        for n, row in enumerate(self.rows):
            if len(row) != width:
                raise ValueError(f"Row {n} has {len(row)} values, expected {width}")


class Outcome(Enum):
    """Terminal outcome of one dispatched statement."""
    COMPILE_ERRORS = auto()
    COMPLETED = auto()
    ABORTED = auto()
    FAILED = auto()


@dataclass(frozen=True)
class RunOutcome:
    """
    What happened to one statement.

    Attributes:
        outcome: Which terminal state was reached.
        errors: Compile error messages (COMPILE_ERRORS only).
        tables: Result tables delivered by the run, in delivery order.
        failure: The exception that ended a FAILED run.
    """
    outcome: Outcome
    errors: list[str] = field(default_factory=list)
    tables: list[ResultTable] = field(default_factory=list)
    failure: BaseException | None = None
