import pytest

from pickaxe.compiler import compile_source
from pickaxe.errors import ExecutionAborted, ScriptError
from pickaxe.exec.runnable import UNNAMED_COLUMN, CancellationToken, Runnable


def run_source(source: str, token: CancellationToken | None = None):
    tables = []
    runnable = Runnable(compile_source(source).program)
    runnable.subscribe(tables.append)
    runnable.run(token)
    return tables


def test_select_and_values_tables():
    select, values, named = run_source("select 1, 'x' as name; values (1, true), (2, null); values (3) as (n)")

    assert select.columns == [UNNAMED_COLUMN, "name"]
    assert select.rows == [[1, "x"]]
    assert values.columns == ["column1", "column2"]
    assert values.rows == [[1, True], [2, None]]
    assert named.columns == ["n"]


def test_raise_fails_after_earlier_tables():
    tables = []
    runnable = Runnable(compile_source("select 1; raise 'boom'; select 2").program)
    runnable.subscribe(tables.append)
    with pytest.raises(ScriptError, match="boom"):
        runnable.run()
    assert len(tables) == 1
    assert runnable.tables_delivered == 1


def test_cancelled_token_stops_before_first_instruction():
    token = CancellationToken()
    token.cancel()
    with pytest.raises(ExecutionAborted):
        run_source("select 1", token)


def test_cancel_interrupts_sleep():
    token = CancellationToken()
    token.cancel()
    with pytest.raises(ExecutionAborted):
        token.wait(60)


def test_subscribe_then_run_contract():
    runnable = Runnable(compile_source("select 1").program)
    with pytest.raises(RuntimeError):
        runnable.run()

    runnable.subscribe(lambda table: None)
    with pytest.raises(RuntimeError):
        runnable.subscribe(lambda table: None)
