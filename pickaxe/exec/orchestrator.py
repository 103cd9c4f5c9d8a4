"""
pickaxe/exec/orchestrator.py

Compile-then-run pipeline for one statement at a time.

Responsibilities:
- Compile a statement; print every compile error and stop if there are any
- Otherwise run the program on a dedicated worker thread and wait for it
- Render each result table the run delivers
- Tell an intentional abort apart from an unexpected failure

A failed or aborted run never leaks into the next statement: each run gets a
fresh Runnable, CancellationToken, worker and outcome future.
"""

from __future__ import annotations

import logging
import sys
import threading
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, Callable, TextIO

from ..compiler import Compiler, compile_source
from ..errors import ExecutionAborted
from ..render import render_table
from ..results import Outcome, ResultTable, RunOutcome
from .runnable import CancellationToken, Runnable

log = logging.getLogger(__name__)


@dataclass
class Orchestrator:
    """
    Dispatches statements to the compiler and, when they compile, to a worker.

    Attributes:
        compiler: Callable implementing the compile contract.
        out: Stream for compile errors and tables (defaults to sys.stdout at write time).
        renderer: Table -> text.
        runnable_factory: Builds the execution context for a compiled program.
    """
    compiler: Compiler = compile_source
    out: TextIO | None = None
    renderer: Callable[[ResultTable], str] = render_table
    runnable_factory: Callable[[Any], Runnable] = Runnable

    _runs: int = field(default=0, init=False, repr=False)
    _active: CancellationToken | None = field(default=None, init=False, repr=False)
    _dispatch_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _state_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _write_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    # --------------------------
    # public entry points
    # --------------------------

    def dispatch(self, statement: str) -> RunOutcome:
        """
        Compile and, if that succeeds, run one statement.

        Blocks until the worker has joined. Concurrent callers are serialized.

        Args:
            statement: Statement text (terminator excluded).

        Returns:
            RunOutcome describing the single terminal outcome.
        """
        with self._dispatch_lock:
            log.info("Compiling...")
            result = self.compiler(statement)
            if not result.ok:
                self._write_lines(result.errors)
                return RunOutcome(outcome=Outcome.COMPILE_ERRORS, errors=list(result.errors))
            return self._run(result.program)

    def abort(self) -> bool:
        """
        Cancel the active run, if any.

        Returns:
            True if a run was active and has been asked to stop.
        """
        with self._state_lock:
            token = self._active
        if token is None:
            return False
        token.cancel()
        return True

    @property
    def running(self) -> bool:
        with self._state_lock:
            return self._active is not None

    # --------------------------
    # internals
    # --------------------------

    def _run(self, program: Any) -> RunOutcome:
        tables: list[ResultTable] = []

        # Runs on the worker: a renderer or output error fails the run like a script error.
        def on_table(table: ResultTable) -> None:
            tables.append(table)
            self._write_lines([self.renderer(table)])

        runnable = self.runnable_factory(program)
        runnable.subscribe(on_table)

        token = CancellationToken()
        done: Future = Future()
        self._runs += 1
        worker = threading.Thread(
            target=self._work,
            args=(runnable, token, done),
            name=f"pickaxe-run-{self._runs}",
            daemon=True,
        )

        with self._state_lock:
            self._active = token
        try:
            log.info("Running...")
            worker.start()
            self._join(worker, token)
        finally:
            with self._state_lock:
                self._active = None

        if done.done():
            outcome, failure = done.result()
        else:
            outcome, failure = Outcome.FAILED, RuntimeError(f"{worker.name} ended without an outcome")
        if outcome is Outcome.ABORTED:
            log.info("Program aborted")
        elif outcome is Outcome.FAILED:
            log.critical("Unexpected exception", exc_info=failure)
        return RunOutcome(outcome=outcome, tables=tables, failure=failure)

    @staticmethod
    def _work(runnable: Runnable, token: CancellationToken, done: Future) -> None:
        """Worker body: resolve `done` exactly once with (Outcome, failure)."""
        try:
            runnable.run(token)
        except ExecutionAborted:
            done.set_result((Outcome.ABORTED, None))
        except BaseException as e:
            # SystemExit and friends end the run, not the session
            done.set_result((Outcome.FAILED, e))
        else:
            done.set_result((Outcome.COMPLETED, None))

    @staticmethod
    def _join(worker: threading.Thread, token: CancellationToken) -> None:
        # Ctrl+C while waiting aborts the run instead of the session.
        while True:
            try:
                worker.join()
                return
            except KeyboardInterrupt:
                token.cancel()

    def _write_lines(self, lines: list[str]) -> None:
        out = self.out or sys.stdout
        with self._write_lock:
            for line in lines:
                out.write(line + "\n")
            out.flush()
