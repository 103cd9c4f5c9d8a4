import io

import pytest

from pickaxe import repl
from pickaxe.compiler import compile_source
from pickaxe.exec.orchestrator import Orchestrator
from pickaxe.repl import PROMPT, PROMPT_CONT, Session, main
from pickaxe.results import Outcome


def make_session(text: str):
    dispatched = []

    def compiler(source):
        dispatched.append(source)
        return compile_source(source)

    out = io.StringIO()
    session = Session(
        orchestrator=Orchestrator(compiler=compiler, out=out),
        stdin=io.StringIO(text),
        stdout=out,
    )
    return session, dispatched, out


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    monkeypatch.setattr(repl, "setup_logging", lambda settings: None)


def test_one_statement_is_dispatched_without_terminator():
    session, dispatched, _ = make_session("select 1;\n")
    assert session.run() == 0
    assert dispatched == ["select 1"]


def test_prompts_and_table_output():
    session, dispatched, out = make_session("select 1 as a,\n'b' as b;\n")
    session.run()

    assert dispatched == ["select 1 as a,\n'b' as b"]
    assert out.getvalue() == (
        PROMPT
        + PROMPT_CONT
        + "+---+---+\n"
        + "| a | b |\n"
        + "+---+---+\n"
        + "| 1 | b |\n"
        + "+---+---+\n"
        + PROMPT
        + "\n"
    )


def test_statements_run_in_order_and_errors_do_not_stop_session():
    session, dispatched, out = make_session("bogus;\nraise 'x';\nselect 3;\n")
    outcomes = []
    dispatch = session.orchestrator.dispatch

    def recording_dispatch(statement):
        outcomes.append(dispatch(statement))
        return outcomes[-1]

    session.orchestrator.dispatch = recording_dispatch
    session.run()

    assert dispatched == ["bogus", "raise 'x'", "select 3"]
    assert [o.outcome for o in outcomes] == [
        Outcome.COMPILE_ERRORS,
        Outcome.FAILED,
        Outcome.COMPLETED,
    ]
    assert session.last_outcome is outcomes[-1]
    assert "line 1, col 1: Unexpected token: 'bogus'\n" in out.getvalue()


def test_bad_number_is_reported_and_session_continues():
    session, dispatched, out = make_session("select ²;\nselect 1;\n")
    assert session.run() == 0

    assert dispatched == ["select ²", "select 1"]
    assert "line 1, col 8: Unexpected character: '²'\n" in out.getvalue()
    assert session.last_outcome.outcome is Outcome.COMPLETED


class InterruptOnce(io.StringIO):
    """Console stub: raises KeyboardInterrupt once, after `after` characters."""

    def __init__(self, text: str, after: int):
        super().__init__(text)
        self.after = after
        self.interrupted = False

    def read(self, size=-1):
        if not self.interrupted and self.tell() == self.after:
            self.interrupted = True
            raise KeyboardInterrupt
        return super().read(size)


def test_ctrl_c_clears_buffer_and_reprompts():
    session, dispatched, out = make_session("")
    session.stdin = InterruptOnce("select 1\nselect 2;\n", after=len("select 1\n"))

    assert session.run() == 0
    assert dispatched == ["select 2"]
    assert out.getvalue().startswith(PROMPT + PROMPT_CONT + "\n" + PROMPT + "+")


def test_end_of_input_after_terminator_still_dispatches():
    session, dispatched, _ = make_session("select 1; ignored")
    session.run()
    assert dispatched == ["select 1"]


def test_unterminated_input_is_dropped_at_end():
    session, dispatched, out = make_session("select 1\nselect 2")
    assert session.run() == 0
    assert dispatched == []
    assert out.getvalue() == PROMPT + PROMPT_CONT + "\n"


def test_batch_file_runs_as_one_statement(tmp_path, capsys):
    script = tmp_path / "report.pxe"
    script.write_text("select 1 as id;\nvalues ('Ann'), ('Bob') as (name);\n", encoding="utf-8")

    assert main(["pickaxe", str(script)]) == 0
    assert capsys.readouterr().out == (
        "+----+\n| id |\n+----+\n| 1  |\n+----+\n"
        "+------+\n| name |\n+------+\n| Ann  |\n| Bob  |\n+------+\n"
    )


def test_batch_exit_codes(tmp_path, capsys):
    bad = tmp_path / "bad.pxe"
    bad.write_text("select", encoding="utf-8")
    assert main(["pickaxe", str(bad)]) == 1

    failing = tmp_path / "failing.pxe"
    failing.write_text("raise 'nope'", encoding="utf-8")
    assert main(["pickaxe", str(failing)]) == 1

    assert main(["pickaxe", str(tmp_path / "missing.pxe")]) == 1
    assert "File not found" in capsys.readouterr().out

    assert main(["pickaxe", "a", "b"]) == 2
    assert "usage" in capsys.readouterr().err
