import pytest

pytest.importorskip("gurobipy")

from tableau_simplex.lp_solver.pivot_engine import pivot_tableau  # noqa: E402
from tableau_simplex.lp_solver.reference import solve_tableau_with_gurobi  # noqa: E402


def test_matches_engine_on_optimal_problems(two_var_tableau, beale_tableau, optimal_tableau):
    for tableau in (two_var_tableau, beale_tableau, optimal_tableau):
        reference = solve_tableau_with_gurobi(tableau)
        result = pivot_tableau(tableau)
        assert reference['status'] == 'OPTIMAL'
        assert reference['objective'] == pytest.approx(result.cost, abs=1e-6)


def test_reference_solution_names(two_var_tableau):
    reference = solve_tableau_with_gurobi(two_var_tableau)
    assert reference['solution']['x'] == pytest.approx(3.0, abs=1e-6)
    assert reference['solution']['y'] == pytest.approx(1.0, abs=1e-6)


def test_reference_unbounded(unbounded_tableau):
    assert solve_tableau_with_gurobi(unbounded_tableau)['status'] == 'UNBOUNDED'


def test_reference_on_mid_run_tableau(two_var_tableau):
    # O tableau após um pivô descreve o mesmo PL
    two_var_tableau.apply_pivot(1, 1)
    assert solve_tableau_with_gurobi(two_var_tableau)['objective'] == pytest.approx(10.0, abs=1e-6)
