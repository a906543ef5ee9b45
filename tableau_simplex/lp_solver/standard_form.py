# Monta o tableau inicial com folgas para problemas "A x <= b, b >= 0" e
# decodifica a base final em um ponto primal.

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from tableau_simplex.core.errors import InvalidTableau
from tableau_simplex.core.tableau import Tableau
from tableau_simplex.lp_solver.config import EngineConfig
from tableau_simplex.lp_solver.pivot_engine import EngineState, PivotEngine


@dataclass
class LPSolution:
    status: EngineState
    x: Optional[np.ndarray]
    objective_value: Optional[float]
    basic_variables: List[int]
    iterations: int


def tableau_from_inequalities(c: Sequence[float],
                              A: Sequence[Sequence[float]],
                              b: Sequence[float],
                              maximize: bool = True,
                              variable_names: Optional[List[str]] = None,
                              name: str = "") -> Tableau:
    """
    Constrói o tableau [A I | b ; -c 0 | 0] (ou [c 0 | 0] ao minimizar) com
    as folgas como base inicial.
    """
    c = np.array(c, dtype=float)
    A = np.array(A, dtype=float)
    b = np.array(b, dtype=float)
    if A.ndim != 2 or A.shape != (b.size, c.size):
        raise InvalidTableau(f"Dimensões inconsistentes: A {A.shape}, b {b.shape}, c {c.shape}.")
    if np.any(b < 0):
        raise InvalidTableau("O lado direito deve ser não negativo para usar as folgas como base inicial.")

    num_constraints, num_vars = A.shape
    tableau = np.zeros((num_constraints + 1, num_vars + num_constraints + 1))
    tableau[:num_constraints, :num_vars] = A
    tableau[:num_constraints, num_vars:-1] = np.eye(num_constraints)
    tableau[:num_constraints, -1] = b
    tableau[-1, :num_vars] = -c if maximize else c

    if variable_names is None:
        variable_names = [f"x{i + 1}" for i in range(num_vars)]
    names = list(variable_names) + [f"s{i + 1}" for i in range(num_constraints)]
    basis = list(range(num_vars, num_vars + num_constraints))
    return Tableau(tableau, basis, maximize=maximize, variable_names=names, name=name)


def simplex1(c: Sequence[float],
             A: Sequence[Sequence[float]],
             b: Sequence[float],
             maximize: bool = True,
             config: Optional[EngineConfig] = None) -> LPSolution:
    """Resolve max/min c·x s.a. A x <= b, x >= 0 (com b >= 0) pelo simplex em tableau."""
    num_vars = len(c)
    tableau = tableau_from_inequalities(c, A, b, maximize=maximize)
    result = PivotEngine(tableau, config).run()

    x = None
    if result.is_optimal:
        x = result.tableau.basic_solution()[:num_vars]
    return LPSolution(
        status=result.state,
        x=x,
        objective_value=result.cost,
        basic_variables=list(result.basic_variables),
        iterations=result.iterations,
    )
