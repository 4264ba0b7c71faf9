"""
Simultaneous linear equations sharing one set of unknowns.

Every member equation must carry the identical set of unknown names and at
least two unknowns; both rules are checked on insertion. Solving substitutes
any known values, then runs Gauss-Jordan elimination with partial pivoting on
the reduced augmented matrix. Pivots with magnitude below ``epsilon`` times
the largest coefficient are treated as zero.
"""

import logging
import os
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import numpy as np

from .equation import Equation

logger = logging.getLogger(__name__)

PIVOT_EPSILON = float(os.environ.get("GRIDCIRCUIT_PIVOT_EPSILON", "1e-9"))


# ============================================================
# Errors
# ============================================================
class SimultaneousEquationsError(ValueError):
    message = "Invalid simultaneous equations"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class InsufficientUnknownsError(SimultaneousEquationsError):
    message = "Equation to be included into Simultaneous Equations should contain at least two unknowns"


class QuantityMismatchError(SimultaneousEquationsError):
    message = "The quantity of unknown is unmatched among the equations set"


class NameMismatchError(SimultaneousEquationsError):
    message = "Name of the unknown is unmatched among the equations set"


class UnknownNameMismatchError(SimultaneousEquationsError):
    message = "Provided known values aren't matching the name of the unknowns in the equations set"


class InsufficientEquationsError(SimultaneousEquationsError):
    message = "There aren't enough equations to solve the unknowns"


class InconsistentEquationsError(SimultaneousEquationsError):
    message = "The equations set is inconsistent and has no solution"


# ============================================================
# Elimination
# ============================================================
def _tolerance(values: np.ndarray, epsilon: float) -> float:
    """``epsilon`` relative to the largest magnitude in ``values``."""
    scale = float(np.abs(values).max()) if values.size else 0.0
    return epsilon * (scale if scale > 0.0 else 1.0)


def _eliminate(matrix: np.ndarray, columns: int, epsilon: float) -> Tuple[np.ndarray, List[int]]:
    """
    Reduces ``matrix`` to reduced row echelon form over its first ``columns``
    columns (any further columns, e.g. constants, are carried along).

    A pivot counts as zero when it is below ``epsilon`` times the largest
    coefficient, so uniformly scaled systems reduce the same way.

    Returns:
        (reduced matrix, pivot column of each leading row)
    """
    reduced = np.array(matrix, dtype=float)
    rows = reduced.shape[0]
    tolerance = _tolerance(reduced[:, :columns], epsilon)
    pivots: List[int] = []
    row = 0

    for col in range(columns):
        if row >= rows:
            break
        candidate = row + int(np.argmax(np.abs(reduced[row:, col])))
        if abs(reduced[candidate, col]) < tolerance:
            reduced[row:, col] = 0.0
            continue
        if candidate != row:
            reduced[[row, candidate]] = reduced[[candidate, row]]
        reduced[row] /= reduced[row, col]
        for other in range(rows):
            if other != row:
                reduced[other] -= reduced[other, col] * reduced[row]
        pivots.append(col)
        row += 1

    return reduced, pivots


def _is_inconsistent(matrix: np.ndarray, reduced: np.ndarray, rank: int, epsilon: float) -> bool:
    """
    A row past the rank with a nonzero constant reads ``0 = c``. The constant
    is compared against ``epsilon`` scaled by the larger of the unreduced
    coefficients and constants.
    """
    tolerance = max(_tolerance(matrix[:, :-1], epsilon), _tolerance(matrix[:, -1], epsilon))
    return bool(np.any(np.abs(reduced[rank:, -1]) > tolerance))


# ============================================================
# SimultaneousEquations
# ============================================================
class SimultaneousEquations:
    def __init__(self, equations: Optional[Iterable[Equation]] = None,
                 epsilon: Optional[float] = None):
        self.epsilon = PIVOT_EPSILON if epsilon is None else epsilon
        self._unknowns: List[str] = []
        # Insertion-ordered; Equation hashes by identity
        self._equations: Dict[Equation, None] = {}
        for equation in equations or ():
            self.add_equation(equation)

    @property
    def unknowns(self) -> frozenset:
        return frozenset(self._unknowns)

    @property
    def equations(self) -> List[Equation]:
        return list(self._equations)

    def add_equation(self, equation: Equation):
        """
        Adds an equation to the set. Re-adding a member is a no-op.

        Raises:
            InsufficientUnknownsError: The equation has fewer than two unknowns
            QuantityMismatchError: Its unknown count differs from the set's
            NameMismatchError: Same count, different unknown names
        """
        names = equation.unknowns()
        if len(names) < 2:
            raise InsufficientUnknownsError()

        if self._unknowns:
            if len(names) != len(self._unknowns):
                raise QuantityMismatchError()
            if set(names) != set(self._unknowns):
                raise NameMismatchError()
        else:
            self._unknowns = list(names)

        self._equations[equation] = None

    # ------------------------------------------------------------
    # Matrix helpers
    # ------------------------------------------------------------
    def _augmented(self, equations: List[Equation], columns: List[str]) -> np.ndarray:
        matrix = np.zeros((len(equations), len(columns) + 1), dtype=float)
        for i, equation in enumerate(equations):
            for j, name in enumerate(columns):
                matrix[i, j] = equation.coefficient(name)
            matrix[i, -1] = equation.constant_value
        return matrix

    def rank(self) -> int:
        """Rank of the coefficient matrix."""
        if not self._equations:
            return 0
        matrix = self._augmented(self.equations, self._unknowns)
        _, pivots = _eliminate(matrix, len(self._unknowns), self.epsilon)
        return len(pivots)

    def has_linearly_dependent_equations(self) -> bool:
        return self.rank() < len(self._equations)

    def simplify(self):
        """
        Drops equations that add no constraint, keeping the first equation of
        each dependent group.

        Raises:
            InconsistentEquationsError: A dependent equation contradicts the
                others; the set is left unchanged
        """
        kept: List[Equation] = []
        rank = 0
        columns = len(self._unknowns)

        for equation in self._equations:
            candidate = kept + [equation]
            matrix = self._augmented(candidate, self._unknowns)
            reduced, pivots = _eliminate(matrix, columns, self.epsilon)
            if len(pivots) > rank:
                kept.append(equation)
                rank = len(pivots)
            elif _is_inconsistent(matrix, reduced, len(pivots), self.epsilon):
                logger.warning("Contradictory equation %r", equation)
                raise InconsistentEquationsError()
            else:
                logger.debug("Dropping dependent equation %r", equation)

        self._equations = dict.fromkeys(kept)

    def solve(self, known: Optional[Mapping[str, float]] = None) -> Dict[str, float]:
        """
        Solves for every unknown.

        Args:
            known: Values for some of the unknowns, substituted before solving

        Returns:
            Mapping of every unknown to its value, including ``known``

        Raises:
            UnknownNameMismatchError: ``known`` names an unknown outside the set
            InconsistentEquationsError: The reduced system is contradictory
            InsufficientEquationsError: Too few independent equations remain
        """
        known = dict(known or {})
        stray = [name for name in known if name not in self._unknowns]
        if stray:
            raise UnknownNameMismatchError()

        remaining = [name for name in self._unknowns if name not in known]
        equations = [equation.substitute(known) for equation in self._equations]
        matrix = self._augmented(equations, remaining)
        reduced, pivots = _eliminate(matrix, len(remaining), self.epsilon)

        if _is_inconsistent(matrix, reduced, len(pivots), self.epsilon):
            raise InconsistentEquationsError()
        if len(pivots) < len(remaining):
            logger.debug("Rank %d for %d unknowns", len(pivots), len(remaining))
            raise InsufficientEquationsError()

        solution = dict(known)
        for row, col in enumerate(pivots):
            solution[remaining[col]] = float(reduced[row, -1])
        return {name: solution[name] for name in self._unknowns}

    def __repr__(self) -> str:
        return f"SimultaneousEquations({self.equations})"
