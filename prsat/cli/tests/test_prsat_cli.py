"""Tests for the prsat command line"""

import json

import pytest

from prsat.cli.prsat_cli import EXIT_ERROR, EXIT_NOT_SAT, EXIT_SAT, main
from prsat.language.builders import letter, and_, lit, pr, cpr, eq, gt, lte
from prsat.language.serialization import dump_constraints, to_json

A, B, C = letter("A"), letter("B"), letter("C")


@pytest.fixture
def problem(tmp_path):
    def write(constraints, name="problem.json"):
        path = tmp_path / name
        path.write_text(dump_constraints(constraints), encoding="utf-8")
        return str(path)
    return write


def test_sat(problem, capsys):
    code = main([problem([eq(pr(A), lit(0.5)), lte(pr(and_(A, B)), lit(0.25))])])
    out = capsys.readouterr().out.splitlines()
    assert code == EXIT_SAT
    assert out[0] == "sat"
    assert "constraints:" in out
    assert any(line.startswith("  s_3 = ") for line in out)
    assert not any("FAILED" in line for line in out)


def test_unsat(problem, capsys):
    assert main([problem([gt(pr(A), lit(1))])]) == EXIT_NOT_SAT
    assert capsys.readouterr().out.splitlines()[0] == "unsat"


def test_regular(problem, capsys):
    path = problem([eq(pr(A), lit(1))])
    assert main([path]) == EXIT_SAT
    assert main([path, "--regular"]) == EXIT_NOT_SAT


def test_emit_smtlib(problem, capsys):
    code = main([problem([eq(cpr(A, B), lit(1))]), "--emit-smtlib"])
    out = capsys.readouterr().out.splitlines()
    assert code == EXIT_SAT
    assert out[0] == "(set-logic QF_NRA)"
    assert "(assert (not (= (+ s_0 s_2) 0)))" in out
    assert "(assert (= (/ s_0 (+ s_0 s_2)) 1))" in out
    assert out[-1] == "(get-model)"


def test_eval(problem, tmp_path, capsys):
    exprs = tmp_path / "exprs.json"
    exprs.write_text(json.dumps([to_json(pr(A)), to_json(pr(C))]), encoding="utf-8")
    single = tmp_path / "single.json"
    single.write_text(json.dumps(to_json(gt(pr(A), lit(0.25)))), encoding="utf-8")

    code = main([problem([eq(pr(A), lit(0.5))]), "--eval", str(exprs), "--eval", str(single)])
    out = capsys.readouterr().out.splitlines()
    assert code == EXIT_SAT
    assert "evaluations:" in out
    assert "  Pr(A) => 0.5" in out
    assert "  Pr(C) => undeclared: C" in out
    assert any(line.endswith("=> True") for line in out)


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.json")]) == EXIT_ERROR
    assert "File not found" in capsys.readouterr().err


def test_malformed_problem(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text('[{"tag": "equal", "left": {"tag": "literal", "value": 1}}]', encoding="utf-8")
    assert main([str(path)]) == EXIT_ERROR
    assert "Error:" in capsys.readouterr().err


def test_invalid_json(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text("[", encoding="utf-8")
    assert main([str(path)]) == EXIT_ERROR
