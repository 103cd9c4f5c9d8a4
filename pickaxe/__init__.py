"""
Pickaxe: a statement shell that compiles each statement, runs it on an
isolated worker and prints its result tables as bordered text.
"""

from .compiler import Compiler, Program, compile_source
from .delimiter import StatementDelimiter, read_batch
from .errors import CompileError, ExecutionAborted, PickaxeError, ScriptError, ScriptNotFoundError
from .exec.orchestrator import Orchestrator
from .exec.runnable import CancellationToken, Runnable
from .render import render_table
from .results import CompileResult, Outcome, ResultTable, RunOutcome

__all__ = [
    "CancellationToken",
    "CompileError",
    "CompileResult",
    "Compiler",
    "ExecutionAborted",
    "Orchestrator",
    "Outcome",
    "PickaxeError",
    "Program",
    "ResultTable",
    "RunOutcome",
    "Runnable",
    "ScriptError",
    "ScriptNotFoundError",
    "StatementDelimiter",
    "compile_source",
    "read_batch",
    "render_table",
]
