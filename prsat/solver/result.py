"""Result of one PrSAT solve."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from ..language.constraint import Constraint
from ..model.assignment import ModelAssignmentOutput
from ..model.numeric import assignment_to_float
from ..state_space.truth_table import TruthTable


class SolverStatus(str, Enum):
    SAT = "sat"
    UNSAT = "unsat"
    UNKNOWN = "unknown"


@dataclass
class SolverReturn:
    """Everything a solve produced.

    Attributes:
        status: the backend's answer.
        translated: the input constraints with probabilities translated.
        enriched: axioms, then division guards, then ``translated``.
        tt: the truth table the problem was translated against.
        state_model: decoded value of every state variable (sat only).
        real_model: decoded value of every free real variable (sat only).
        validation: whether each input constraint holds under the model (sat only).
        smtlib: the request sent to the backend.
        reason_unknown: the backend's explanation for an unknown answer.
    """
    status: SolverStatus
    translated: List[Constraint]
    enriched: List[Constraint]
    tt: TruthTable
    state_model: Dict[int, ModelAssignmentOutput] = field(default_factory=dict)
    real_model: Dict[str, ModelAssignmentOutput] = field(default_factory=dict)
    validation: List[bool] = field(default_factory=list)
    smtlib: str = ""
    reason_unknown: Optional[str] = None

    @property
    def is_sat(self) -> bool:
        return self.status == SolverStatus.SAT

    def state_values(self) -> Dict[int, float]:
        return {i: assignment_to_float(v) for i, v in self.state_model.items()}

    def variable_values(self) -> Dict[str, float]:
        return {name: assignment_to_float(v) for name, v in self.real_model.items()}
