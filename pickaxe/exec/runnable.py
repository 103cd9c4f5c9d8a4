"""
pickaxe/exec/runnable.py

Execution context for compiled programs.

Responsibilities:
- Walk a Program's instructions in order
- Deliver each result table to the single subscribed callback
- Stop at safe points when the run's CancellationToken is cancelled

Cancellation is cooperative: nothing is killed from outside. The token is
checked before every instruction and while waiting in SLEEP.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Callable

from ..ast import Raise, Select, Sleep, Values
from ..compiler import Program
from ..errors import ExecutionAborted, ScriptError
from ..results import ResultTable

ResultCallback = Callable[[ResultTable], None]

UNNAMED_COLUMN = "(No column name)"


class CancellationToken:
    """One-way cancel flag shared by the orchestrator and one worker."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise ExecutionAborted("Program aborted")

    def wait(self, seconds: float) -> None:
        """Sleep up to `seconds`, raising ExecutionAborted as soon as cancelled."""
        if self._event.wait(seconds):
            raise ExecutionAborted("Program aborted")


@dataclass
class Runnable:
    """
    Runs one Program.

    Usage:
        runnable = Runnable(program)
        runnable.subscribe(on_table)
        runnable.run(token)

    Attributes:
        program: Compiled program.
        tables_delivered: Number of tables handed to the callback so far.
    """
    program: Program
    tables_delivered: int = 0
    _callback: ResultCallback | None = field(default=None, repr=False)

    def subscribe(self, callback: ResultCallback) -> None:
        """Register the result-table callback. Exactly one is allowed."""
        if self._callback is not None:
            raise RuntimeError("A result callback is already subscribed")
        self._callback = callback

    def run(self, token: CancellationToken | None = None) -> None:
        """
        Execute every instruction in order on the calling thread.

        Raises:
            RuntimeError: if no callback was subscribed.
            ExecutionAborted: if the token was cancelled.
            ScriptError: on RAISE.
        """
        if self._callback is None:
            raise RuntimeError("Subscribe a result callback before run()")
        token = token or CancellationToken()

        for ins in self.program.instructions:
            token.raise_if_cancelled()
            if isinstance(ins, Select):
                columns = [item.alias or UNNAMED_COLUMN for item in ins.items]
                self._deliver(ResultTable(columns=columns, rows=[[item.value for item in ins.items]]))
            elif isinstance(ins, Values):
                width = len(ins.rows[0])
                columns = ins.columns or [f"column{n}" for n in range(1, width + 1)]
                self._deliver(ResultTable(columns=list(columns), rows=[list(r) for r in ins.rows]))
            elif isinstance(ins, Sleep):
                token.wait(ins.millis / 1000.0)
            elif isinstance(ins, Raise):
                raise ScriptError(f"line {ins.pos.line}, col {ins.pos.col}: {ins.message}")
            else:
                raise TypeError(f"Unsupported instruction: {type(ins).__name__}")

    def _deliver(self, table: ResultTable) -> None:
        self.tables_delivered += 1
        self._callback(table)
