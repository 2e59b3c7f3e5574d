"""
Solve probabilistic constraints with z3.

The pipeline is: translate against the truth table, add axioms and division
guards, encode as SMT-LIB, load the declarations and assertions into a z3
solver and check. A ``sat`` model is decoded state by state and every input
constraint is re-checked on the exact model values before it is returned.
"""
import logging
import time
from typing import Dict, Iterable, List, Optional

import z3

from ..global_params.config import SolverOptions, global_config
from ..language.constraint import Constraint
from ..evaluation.evaluator import validate_model
from ..model.assignment import ModelAssignmentOutput, parse_to_assignment
from ..model.numeric import assignment_to_float, assignment_to_sympy
from ..state_space.truth_table import TruthTable
from ..translator.axioms import enrich_constraints
from ..translator.smtlib import LOGIC, constraints_to_smtlib_lines, state_index_id
from ..translator.translate import translate
from ..translator.variables import variables_in_constraints
from ..utils.exceptions import ModelValidationError, SolverError
from ..utils.parallel.drop_dead import CancelToken, RaceResult, run_with_drop_dead_timeout
from ..utils.sexpr import parse_s, s_to_string
from .result import SolverReturn, SolverStatus

logger = logging.getLogger(__name__)

# commands z3 runs itself when loading a script; the solver is driven through the API
_SCRIPT_COMMANDS = ("declare-const", "assert")


def _status(result: z3.CheckSatResult) -> SolverStatus:
    if result == z3.sat:
        return SolverStatus.SAT
    if result == z3.unsat:
        return SolverStatus.UNSAT
    return SolverStatus.UNKNOWN


class PrSatSolver:
    """Satisfiability of probabilistic constraints, backed by a private z3 context.

    One solver runs one solve at a time. :meth:`interrupt` may be called
    from another thread; :meth:`reset` gives up on a solve that ignores it.
    """

    def __init__(self, options: Optional[SolverOptions] = None):
        self.options = options or SolverOptions()
        self._ctx = z3.Context()

    def interrupt(self) -> None:
        """Ask a running check to stop; it then answers ``unknown``."""
        logger.info("interrupting z3")
        self._ctx.interrupt()

    def reset(self) -> None:
        """Abandon the current context and start over with a fresh one."""
        logger.warning("abandoning z3 context")
        self._ctx = z3.Context()

    def solve(self, constraints: Iterable[Constraint]) -> SolverReturn:
        """Solve over the truth table of every letter in ``constraints``."""
        constraints = list(constraints)
        tt = TruthTable(variables_in_constraints(constraints).sentence)
        return self.solve_with_truth_table(tt, constraints)

    def solve_with_truth_table(self, tt: TruthTable, constraints: Iterable[Constraint]) -> SolverReturn:
        """Solve over a caller-supplied truth table.

        Raises:
            SolverError: z3 rejected the request.
            ModelValidationError: a returned model violates an input constraint.
        """
        constraints = list(constraints)
        start = time.time()
        translated = translate(tt, constraints)
        enriched = enrich_constraints(tt, self.options.regular, translated)
        real_variables = variables_in_constraints(constraints).real
        lines = constraints_to_smtlib_lines(tt, real_variables, enriched)
        smtlib = "\n".join(s_to_string(line) for line in lines)
        logger.debug("smtlib request:\n%s", smtlib)
        logger.info(
            "encoded %d constraint(s): %d state(s), %d real variable(s), %d assertion(s) in %.3fs",
            len(constraints), tt.n_states(), len(real_variables), len(enriched), time.time() - start,
        )

        ctx = self._ctx
        solver = z3.SolverFor(LOGIC, ctx=ctx)
        if self.options.timeout_ms:
            solver.set("timeout", self.options.timeout_ms)
        script = "\n".join(s_to_string(line) for line in lines if line[0] in _SCRIPT_COMMANDS)
        check_start = time.time()
        try:
            solver.from_string(script)
            status = _status(solver.check())
        except z3.Z3Exception as e:
            raise SolverError(f"z3 failed: {e}") from e
        logger.info("z3 answered %s in %.3fs", status.value, time.time() - check_start)

        ret = SolverReturn(status, translated, enriched, tt, smtlib=smtlib)
        if status == SolverStatus.UNKNOWN:
            ret.reason_unknown = solver.reason_unknown()
            logger.debug("reason unknown: %s", ret.reason_unknown)
        if status != SolverStatus.SAT:
            return ret

        model = solver.model()
        ret.state_model = {
            i: self._decode(model, state_index_id(i), ctx) for i in tt.state_indices()
        }
        ret.real_model = {name: self._decode(model, name, ctx) for name in real_variables}
        ret.validation = self._validate(tt, constraints, ret.state_model, ret.real_model)
        return ret

    @staticmethod
    def _decode(model: z3.ModelRef, name: str, ctx: z3.Context) -> ModelAssignmentOutput:
        value = model.eval(z3.Real(name, ctx), model_completion=True)
        text = value.sexpr()
        logger.debug("%s = %s", name, text)
        return parse_to_assignment(parse_s(text))

    def _validate(
        self,
        tt: TruthTable,
        constraints: List[Constraint],
        state_model: Dict[int, ModelAssignmentOutput],
        real_model: Dict[str, ModelAssignmentOutput],
    ) -> List[bool]:
        exact = self.options.exact_validation
        to_number = assignment_to_sympy if exact else assignment_to_float
        state_values = {i: to_number(v) for i, v in state_model.items()}
        variable_values = {name: to_number(v) for name, v in real_model.items()}
        validation = validate_model(
            constraints,
            state_values,
            tt,
            variable_values,
            tol=self.options.validation_tolerance,
            exact=exact,
        )
        failed = [i for i, holds in enumerate(validation) if not holds]
        if failed:
            logger.error("model fails constraint(s) %s", failed)
            raise ModelValidationError(failed)
        return validation

    def solve_with_cancellation(
        self,
        constraints: Iterable[Constraint],
        token: CancelToken,
        grace_ms: Optional[int] = None,
    ) -> RaceResult:
        """Solve on a worker thread that ``token`` can cancel.

        On cancellation z3 is interrupted; if it has not answered within
        ``grace_ms`` the context is abandoned.
        """
        grace_seconds = global_config.cancel_grace_seconds if grace_ms is None else grace_ms / 1000.0
        constraints = list(constraints)
        return run_with_drop_dead_timeout(
            lambda: self.solve(constraints),
            token,
            stop=self.interrupt,
            abandon=self.reset,
            grace_seconds=grace_seconds,
        )
