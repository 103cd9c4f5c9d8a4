"""
pickaxe/compiler.py

Compile step: statement text -> CompileResult.

The orchestrator only relies on the `Compiler` contract (a callable taking
source text and returning a CompileResult). `compile_source` is the built-in
implementation for the Pickaxe query subset.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .ast import Instruction
from .errors import CompileError, Position
from .lexer import tokenize
from .parser import Parser
from .results import CompileResult

Compiler = Callable[[str], CompileResult]


@dataclass(frozen=True)
class Program:
    """
    A compiled, runnable unit.

    Attributes:
        instructions: Instructions in execution order.
    """
    instructions: list[Instruction]


def compile_source(source: str) -> CompileResult:
    """
    Compile statement text.

    Args:
        source: One statement, or (in batch mode) a whole ';'-separated script.

    Returns:
        CompileResult with a Program, or with every error message found.
        A lexical error stops compilation and is reported on its own.
    """
    try:
        tokens = tokenize(source)
    except CompileError as e:
        return CompileResult(errors=[str(e)])

    parser = Parser(tokens)
    instructions = parser.parse_script()
    if parser.errors:
        return CompileResult(errors=[str(e) for e in parser.errors])
    if not instructions:
        return CompileResult(errors=[str(CompileError("Empty statement", Position(1, 1)))])
    return CompileResult(program=Program(instructions=instructions))
