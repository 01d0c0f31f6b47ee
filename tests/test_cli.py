import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Any

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from exprtree import exprtree_cli

SRC_DIR = Path(__file__).resolve().parent.parent / "src"


def run_main(monkeypatch: pytest.MonkeyPatch, *args: str) -> None:
    monkeypatch.setattr(sys, "argv", ["exprtree", *args])
    exprtree_cli.main()


def test_run_exprtree_prints_tree(capsys: pytest.CaptureFixture[str]) -> None:
    assert exprtree_cli.run_exprtree("(1+2)*3") == 0
    captured = capsys.readouterr()
    assert captured.out == "(Mul(Add  1  2)  3)\n"
    assert captured.err == ""


def test_run_exprtree_empty_input_prints_nothing(
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert exprtree_cli.run_exprtree("   ") == 0
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize(
    "source,kind",
    [
        ("(", "missing_operand"),
        ("1+", "missing_operand"),
        (")1", "missing_operand"),
        ("(1", "unbalanced_parenthesis"),
        ("1)", "trailing_input"),
        ("1@2", "lexical"),
    ],
)
def test_run_exprtree_errors(
    capsys: pytest.CaptureFixture[str], source: str, kind: str
) -> None:
    assert exprtree_cli.run_exprtree(source) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith(f"[error] >>> {kind}: ")


def test_run_exprtree_json(capsys: pytest.CaptureFixture[str]) -> None:
    assert exprtree_cli.run_exprtree("1-2", as_json=True) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["kind"] == "binary"
    assert data["operator"] == "SUB"


def test_run_exprtree_tokens(capsys: pytest.CaptureFixture[str]) -> None:
    assert exprtree_cli.run_exprtree("12*(3)", show_tokens=True) == 0
    assert capsys.readouterr().out.splitlines() == [
        "Token(NUMBER, 12)",
        "Token(MUL, *)",
        "Token(LPAREN, ()",
        "Token(NUMBER, 3)",
        "Token(RPAREN, ))",
    ]


def test_run_exprtree_tokens_lexical_error(
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert exprtree_cli.run_exprtree("1 $", show_tokens=True) == 1
    assert "[error] >>> lexical" in capsys.readouterr().err


def test_run_exprtree_tokens_skip_syntax_check(
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert exprtree_cli.run_exprtree("1)", show_tokens=True) == 0
    assert len(capsys.readouterr().out.splitlines()) == 2


def test_run_exprtree_verbose_traces_on_stderr(
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert exprtree_cli.run_exprtree("1+2", verbose=True) == 0
    captured = capsys.readouterr()
    assert captured.out == "(Add  1  2)\n"
    assert "[tokens] >>> [Token(NUMBER, 1)" in captured.err
    assert "[ast] >>> BinaryNode(ADD" in captured.err


def test_run_exprtree_deep_parentheses_reports_error(
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = "(" * 2000 + "1" + ")" * 2000
    assert exprtree_cli.run_exprtree(source) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("[error] >>> nesting_too_deep: ")


def test_run_exprtree_json_long_chain(capsys: pytest.CaptureFixture[str]) -> None:
    assert exprtree_cli.run_exprtree("+".join(["1"] * 2000), as_json=True) == 0
    out = capsys.readouterr().out
    assert out.startswith('{"kind": "binary", "operator": "ADD"')
    assert out.count('"kind": "number"') == 2000


def test_run_exprtree_verbose_long_chain(capsys: pytest.CaptureFixture[str]) -> None:
    assert exprtree_cli.run_exprtree("+".join(["1"] * 2000), verbose=True) == 0
    captured = capsys.readouterr()
    assert captured.out.startswith("(Add" * 1999 + "  1  1)")
    assert "[ast] >>> BinaryNode(ADD, BinaryNode(ADD" in captured.err


def test_main_joins_arguments(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    run_main(monkeypatch, "1", "+", "2", "*", "3")
    assert capsys.readouterr().out == "(Add  1(Mul  2  3))\n"


def test_main_joins_without_separator(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    run_main(monkeypatch, "1", "2")
    assert capsys.readouterr().out == "(Number(12))\n"


def test_main_no_arguments_prints_nothing(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    run_main(monkeypatch)
    assert capsys.readouterr().out == ""


def test_main_error_exits_nonzero(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as e:
        run_main(monkeypatch, "(1+2")
    assert e.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "unbalanced_parenthesis" in captured.err


def test_main_json_flag(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    run_main(monkeypatch, "--json", "4/2")
    assert json.loads(capsys.readouterr().out)["operator"] == "DIV"


def test_main_repl_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: dict[str, Any] = {}
    monkeypatch.setattr(
        "exprtree.exprtree_repl.start_repl", lambda **kwargs: calls.update(kwargs)
    )
    run_main(monkeypatch, "--repl", "--verbose")
    assert calls == {"as_json": False, "verbose": True}


def test_main_unknown_option(monkeypatch: pytest.MonkeyPatch) -> None:
    with pytest.raises(SystemExit) as e:
        run_main(monkeypatch, "--nope")
    assert e.value.code == 2


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])  # type: ignore[misc]
@given(st.text(max_size=30))  # type: ignore[misc]
def test_run_exprtree_random_input_does_not_crash(
    capsys: pytest.CaptureFixture[str], source: str
) -> None:
    status = exprtree_cli.run_exprtree(source)
    captured = capsys.readouterr()
    assert status in (0, 1)
    if status == 1:
        assert captured.out == ""
        assert captured.err.startswith("[error] >>>")


def test_cli_subprocess() -> None:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(SRC_DIR), env.get("PYTHONPATH", "")) if p
    )
    ok = subprocess.run(
        [sys.executable, "-m", "exprtree.exprtree_cli", "1", "+", "2"],
        capture_output=True,
        text=True,
        env=env,
    )
    assert ok.returncode == 0
    assert ok.stdout == "(Add  1  2)\n"

    bad = subprocess.run(
        [sys.executable, "-m", "exprtree.exprtree_cli", "1", "+"],
        capture_output=True,
        text=True,
        env=env,
    )
    assert bad.returncode == 1
    assert bad.stdout == ""
    assert "missing_operand" in bad.stderr
