"""
pickaxe/delimiter.py

Splits raw input into statements.

Two modes:
- batch: a whole script file is one statement (read_batch)
- interactive: characters are fed one at a time to StatementDelimiter

Interactive rules:
- ';' ends a statement; the ';' itself is not part of it
- everything after the ';' up to and including the next newline is dropped
- the statement is only complete once that newline has been seen
- there is no quoting awareness: a ';' inside a string literal still ends the statement
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path

from .errors import ScriptNotFoundError

TERMINATOR = ";"


class LexState(Enum):
    ACCUMULATING = auto()
    DISCARDING_TO_LINE_END = auto()


class Signal(Enum):
    """What the caller should do after feeding one character."""
    NONE = auto()
    CONTINUATION = auto()   # newline inside a statement: show the continuation prompt
    COMPLETE = auto()       # a statement is ready: take it with StatementDelimiter.take()


@dataclass
class StatementDelimiter:
    """
    Two-state lexer turning a character stream into statements.

    Attributes:
        terminator: Statement terminator character.
        state: Current LexState.
    """
    terminator: str = TERMINATOR
    state: LexState = LexState.ACCUMULATING
    _buffer: list[str] = field(default_factory=list, repr=False)
    _ready: str | None = field(default=None, repr=False)

    def feed(self, ch: str) -> Signal:
        """
        Consume one character.

        Args:
            ch: A single character.

        Returns:
            Signal for the caller.
        """
        if self.state is LexState.DISCARDING_TO_LINE_END:
            if ch == "\n":
                self.state = LexState.ACCUMULATING
                return Signal.COMPLETE
            return Signal.NONE

        if ch == self.terminator:
            self._ready = "".join(self._buffer)
            self._buffer.clear()
            self.state = LexState.DISCARDING_TO_LINE_END
            return Signal.NONE

        self._buffer.append(ch)
        if ch == "\n":
            return Signal.CONTINUATION
        return Signal.NONE

    def take(self) -> str:
        """Return the completed statement and forget it."""
        if self._ready is None:
            raise RuntimeError("No completed statement")
        statement, self._ready = self._ready, None
        return statement

    def finish(self) -> str | None:
        """
        Handle end of input.

        Returns:
            The pending statement if its terminator was already read (the rest
            of its line is simply missing), else None. Unterminated text is
            dropped.
        """
        statement = self._ready
        self.reset()
        return statement

    def reset(self) -> None:
        self._buffer.clear()
        self._ready = None
        self.state = LexState.ACCUMULATING

    @property
    def pending(self) -> str:
        """Text accumulated for the statement being entered."""
        return "".join(self._buffer)


def read_batch(path: str | Path) -> str:
    """
    Load a whole script file as one statement.

    Raises:
        ScriptNotFoundError: if the file does not exist.
    """
    p = Path(path)
    if not p.is_file():
        raise ScriptNotFoundError(f"File not found: {p}")
    return p.read_text(encoding="utf-8")
