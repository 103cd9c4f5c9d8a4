"""
pickaxe/ast.py

Instruction nodes for the Pickaxe query subset.

The parser turns token streams into a list of these dataclasses; a compiled
program is nothing more than that list, executed in order by
pickaxe/exec/runnable.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import Position


class Instruction:
    """Base class marker for all instructions."""


@dataclass(frozen=True)
class SelectItem:
    """
    One projected literal.

    Attributes:
        value: Literal value (int, str, bool or None).
        alias: Column name given with AS, if any.
    """
    value: Any
    alias: str | None = None


@dataclass(frozen=True)
class Select(Instruction):
    """SELECT <item>, ... : produces a one-row table."""
    items: list[SelectItem]


@dataclass(frozen=True)
class Values(Instruction):
    """
    VALUES (..), (..) [AS (c1, c2, ...)]

    Attributes:
        rows: Literal rows, all of the same width.
        columns: Column names from the AS list, or None for column1..N.
    """
    rows: list[list[Any]]
    columns: list[str] | None = None


@dataclass(frozen=True)
class Sleep(Instruction):
    """SLEEP <ms>"""
    millis: int


@dataclass(frozen=True)
class Raise(Instruction):
    """RAISE '<message>' : fails the run with a ScriptError."""
    message: str
    pos: Position
