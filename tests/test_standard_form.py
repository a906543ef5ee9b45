import numpy as np
import pytest

from tableau_simplex.core.errors import InvalidTableau
from tableau_simplex.lp_solver.config import EngineConfig
from tableau_simplex.lp_solver.pivot_engine import EngineState
from tableau_simplex.lp_solver.standard_form import simplex1, tableau_from_inequalities


def test_slack_tableau_layout():
    tableau = tableau_from_inequalities([3, 2], [[1, 1], [1, 3]], [4, 6], name="exemplo")

    expected = np.array([
        [1.0, 1.0, 1.0, 0.0, 4.0],
        [1.0, 3.0, 0.0, 1.0, 6.0],
        [-3.0, -2.0, 0.0, 0.0, 0.0],
    ])
    np.testing.assert_array_equal(tableau.matrix, expected)
    assert tableau.basic_variables == [2, 3]
    assert tableau.variable_names == ["x1", "x2", "s1", "s2"]
    assert tableau.maximize
    assert tableau.name == "exemplo"


def test_minimization_keeps_costs():
    tableau = tableau_from_inequalities([1, 2], [[1, 1]], [3], maximize=False)
    np.testing.assert_array_equal(tableau.reduced_costs, [1.0, 2.0, 0.0])


def test_rejects_negative_rhs_and_bad_shapes():
    with pytest.raises(InvalidTableau):
        tableau_from_inequalities([1, 1], [[1, 1]], [-1])
    with pytest.raises(InvalidTableau):
        tableau_from_inequalities([1, 1], [[1, 1, 1]], [1])


def test_simplex1_round_trip():
    solution = simplex1([2, 4], [[1, 1], [1, 3]], [4, 6])

    assert solution.status == EngineState.OPTIMAL
    assert solution.objective_value == pytest.approx(10.0)
    np.testing.assert_allclose(solution.x, [3.0, 1.0])
    assert solution.basic_variables == [0, 1]
    assert solution.iterations == 2


def test_simplex1_minimization_stays_at_origin():
    solution = simplex1([1, 2], [[1, 1]], [3], maximize=False)
    assert solution.status == EngineState.OPTIMAL
    assert solution.objective_value == pytest.approx(0.0)
    np.testing.assert_allclose(solution.x, [0.0, 0.0])


def test_simplex1_unbounded():
    solution = simplex1([1, 0], [[-1, 1]], [1], config=EngineConfig(pivot_rule="bland"))
    assert solution.status == EngineState.UNBOUNDED
    assert solution.x is None
    assert solution.objective_value is None
