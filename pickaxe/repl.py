"""
pickaxe/repl.py

Interactive shell and batch runner for Pickaxe.

Responsibilities:
- Read statements from the console, one character at a time, ending each at ';'
- Show a primary prompt for a new statement and a continuation prompt after each newline
- Hand each completed statement to the Orchestrator and wait for it to finish
- Run a script file as a single statement when a path is given

Usage:
    pickaxe                # interactive
    pickaxe script.pxe     # batch
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import TextIO

from .config import Settings
from .delimiter import Signal, StatementDelimiter, read_batch
from .errors import ScriptNotFoundError
from .exec.orchestrator import Orchestrator
from .logs import setup_logging
from .results import Outcome, RunOutcome

log = logging.getLogger(__name__)

PROMPT = "pickaxe> "
PROMPT_CONT = "      -> "


@dataclass
class Session:
    """
    One interactive session. Owns the input buffer and prompt state.

    Attributes:
        orchestrator: Runs completed statements.
        stdin: Character source.
        stdout: Prompt sink (tables and errors go through the orchestrator's stream).
        delimiter: Statement lexer.
        last_outcome: Outcome of the most recent statement, if any.
    """
    orchestrator: Orchestrator
    stdin: TextIO = field(default_factory=lambda: sys.stdin)
    stdout: TextIO = field(default_factory=lambda: sys.stdout)
    delimiter: StatementDelimiter = field(default_factory=StatementDelimiter)
    prompt: str = PROMPT
    prompt_cont: str = PROMPT_CONT
    last_outcome: RunOutcome | None = None

    def run(self) -> int:
        """
        Read and dispatch statements until the input is exhausted.

        Returns:
            Process exit code (0 on end of input).
        """
        self._write(self.prompt)
        while True:
            try:
                ch = self.stdin.read(1)
            except KeyboardInterrupt:
                # Clear current buffer on Ctrl+C
                self.delimiter.reset()
                self._write("\n" + self.prompt)
                continue

            if ch == "":
                statement = self.delimiter.finish()
                if statement is not None:
                    self._dispatch(statement)
                else:
                    log.debug("End of input, nothing to run")
                self._write("\n")
                return 0

            signal = self.delimiter.feed(ch)
            if signal is Signal.CONTINUATION:
                self._write(self.prompt_cont)
            elif signal is Signal.COMPLETE:
                self._dispatch(self.delimiter.take())
                self._write(self.prompt)

    def _dispatch(self, statement: str) -> None:
        self.last_outcome = self.orchestrator.dispatch(statement)

    def _write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()


def run_file(path: str, orchestrator: Orchestrator) -> int:
    """
    Run a script file as one statement.

    Returns:
        0 if the run completed or was aborted, 1 on compile errors, failure or a missing file.
    """
    try:
        source = read_batch(path)
    except ScriptNotFoundError as e:
        print(e)
        return 1

    result = orchestrator.dispatch(source)
    if result.outcome in (Outcome.COMPLETED, Outcome.ABORTED):
        return 0
    return 1


def main(argv: list[str]) -> int:
    """
    CLI entrypoint.

    Args:
        argv: sys.argv list.

    Returns:
        Exit code.
    """
    if len(argv) > 2:
        print("usage: pickaxe [script]", file=sys.stderr)
        return 2

    setup_logging(Settings.from_env())
    orchestrator = Orchestrator()

    if len(argv) == 2:
        return run_file(argv[1], orchestrator)
    return Session(orchestrator=orchestrator).run()


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
