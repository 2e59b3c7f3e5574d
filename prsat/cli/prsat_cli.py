"""CLI tool for PrSAT: satisfiability of probabilistic constraints.

The problem file is JSON, either a list of constraints or an object with a
``"constraints"`` key, in the tagged form written by
:func:`prsat.language.serialization.dump_constraints`.
"""

import argparse
import json
import logging
import signal
import sys
import threading
from pathlib import Path
from typing import List, Optional, Union

import prsat
from prsat.evaluation.result import DivisionByZero, Ok
from prsat.global_params.config import SolverOptions, global_config
from prsat.language.constraint import Constraint
from prsat.language.printer import constraint_to_string, real_expr_to_string, sentence_to_string
from prsat.language.real_expr import RealExpr
from prsat.language.serialization import constraint_or_real_expr_from_json, load_constraints
from prsat.model.assignment import model_assignment_output_to_string
from prsat.solver import PrSatSolver, SolverReturn, SolverStatus, evaluate_against_model
from prsat.state_space.truth_table import TruthTable
from prsat.translator import (
    constraints_to_smtlib_string,
    enrich_constraints,
    translate,
    variables_in_constraints,
)
from prsat.utils.exceptions import MalformedInputError, PrSatException
from prsat.utils.parallel.drop_dead import CancelToken, RaceOutcome

logger = logging.getLogger(__name__)

EXIT_SAT = 0
EXIT_NOT_SAT = 1
EXIT_ERROR = 2

Expr = Union[Constraint, RealExpr]


def _load_eval_exprs(path: str) -> List[Expr]:
    try:
        doc = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise MalformedInputError(f"{path}: invalid JSON: {exc}") from exc
    items = doc if isinstance(doc, list) else [doc]
    return [constraint_or_real_expr_from_json(item) for item in items]


def _expr_to_string(expr: Expr) -> str:
    if isinstance(expr, Constraint):
        return constraint_to_string(expr)
    return real_expr_to_string(expr)


def _emit_smtlib(constraints: List[Constraint], regular: bool) -> str:
    found = variables_in_constraints(constraints)
    tt = TruthTable(found.sentence)
    enriched = enrich_constraints(tt, regular, translate(tt, constraints))
    return constraints_to_smtlib_string(tt, found.real, enriched)


def _print_model(ret: SolverReturn, constraints: List[Constraint]) -> None:
    print("constraints:")
    for c, holds in zip(constraints, ret.validation):
        print(f"  [{'ok' if holds else 'FAILED'}] {constraint_to_string(c)}")
    print("states:")
    state_values = ret.state_values()
    for i in ret.tt.state_indices():
        state = sentence_to_string(ret.tt.state_from_index(i))
        value = model_assignment_output_to_string(ret.state_model[i])
        print(f"  s_{i} = {value} ~ {state_values[i]:.6g}    ({state})")
    if ret.real_model:
        print("variables:")
        variable_values = ret.variable_values()
        for name, value in ret.real_model.items():
            print(f"  {name} = {model_assignment_output_to_string(value)} ~ {variable_values[name]:.6g}")


def _print_evaluation(ret: SolverReturn, expr: Expr) -> None:
    result = evaluate_against_model(ret, expr)
    if isinstance(result, Ok):
        print(f"  {_expr_to_string(expr)} => {result.value}")
    elif isinstance(result.failure, DivisionByZero):
        print(f"  {_expr_to_string(expr)} => division by zero")
    else:
        names = list(result.failure.real) + [str(l) for l in result.failure.sentence]
        print(f"  {_expr_to_string(expr)} => undeclared: {', '.join(names)}")


def _solve(constraints: List[Constraint], options: SolverOptions) -> Optional[SolverReturn]:
    solver = PrSatSolver(options)
    token = CancelToken()
    # Ctrl-C cancels the solve; signal handlers can only be set from the main thread
    if threading.current_thread() is not threading.main_thread():
        race = solver.solve_with_cancellation(constraints, token)
    else:
        previous = signal.signal(signal.SIGINT, lambda signum, frame: token.cancel())
        try:
            race = solver.solve_with_cancellation(constraints, token)
        finally:
            signal.signal(signal.SIGINT, previous)
    if race.outcome != RaceOutcome.COMPLETED:
        logger.warning("solve %s", race.outcome.value)
        return None
    return race.value


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the PrSAT CLI."""
    parser = argparse.ArgumentParser(
        description="Decide satisfiability of probabilistic constraints",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", type=str, help="problem file (.json)")
    parser.add_argument(
        "--regular",
        action="store_true",
        help="require every state to have strictly positive probability",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        help=f"solver timeout in milliseconds (default: PRSAT_TIMEOUT_MS or {global_config.timeout_ms})",
    )
    parser.add_argument(
        "--emit-smtlib",
        action="store_true",
        help="print the SMT-LIB request instead of solving",
    )
    parser.add_argument(
        "--eval",
        action="append",
        default=[],
        metavar="EXPR.json",
        help="evaluate an expression or constraint against the model (repeatable)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    args = parser.parse_args(argv)
    if not Path(args.file).exists():
        print(f"Error: File not found: {args.file}", file=sys.stderr)
        return EXIT_ERROR

    debug = prsat.PRSAT_DEBUG or global_config.debug
    logging.basicConfig(
        level=logging.DEBUG if debug else getattr(logging, args.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        constraints = load_constraints(Path(args.file).read_text(encoding="utf-8"))
        eval_exprs = [e for path in args.eval for e in _load_eval_exprs(path)]
        if args.emit_smtlib:
            print(_emit_smtlib(constraints, args.regular))
            return EXIT_SAT

        options = global_config.solver_options(regular=args.regular, timeout_ms=args.timeout)
        ret = _solve(constraints, options)
        if ret is None:
            print("cancelled")
            return EXIT_NOT_SAT
        print(ret.status.value)
        if ret.status != SolverStatus.SAT:
            if ret.reason_unknown:
                print(f"reason: {ret.reason_unknown}")
            return EXIT_NOT_SAT

        _print_model(ret, constraints)
        if eval_exprs:
            print("evaluations:")
            for expr in eval_exprs:
                _print_evaluation(ret, expr)
        return EXIT_SAT
    except (PrSatException, ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        if debug or args.log_level == "DEBUG":
            import traceback

            traceback.print_exc()
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
