# Verificação cruzada: resolve com o Gurobi o mesmo PL descrito por um tableau.

import logging
from typing import Any, Dict

import gurobipy as gp
from gurobipy import GRB
from scipy.sparse import csr_matrix

from tableau_simplex.core.tableau import Tableau


def solve_tableau_with_gurobi(tableau: Tableau) -> Dict[str, Any]:
    """
    Resolve min d·x + z0 s.a. A x = b, x >= 0, lido diretamente das linhas do
    tableau (d = custos reduzidos, z0 = objetivo atual). O valor retornado usa
    a mesma convenção de sinal de `tableau.objective_value`.
    """
    model = None
    num_constraints, num_vars = tableau.num_constraints, tableau.num_variables
    try:
        model = gp.Model(tableau.name or "tableau")
        model.setParam('OutputFlag', 0)
        # Status definitivo entre inviável e ilimitado
        model.setParam('DualReductions', 0)

        A = csr_matrix(tableau.matrix[:num_constraints, :num_vars])
        b = tableau.matrix[:num_constraints, -1]
        d = tableau.matrix[-1, :num_vars]
        z0 = float(-tableau.matrix[-1, -1])

        x = model.addMVar(num_vars, lb=0.0, name="x")
        model.addConstr(A @ x == b, name="linha")
        model.setObjective(d @ x + z0, GRB.MINIMIZE)
        model.optimize()

        status_code = model.Status
        if status_code == GRB.OPTIMAL:
            value = model.ObjVal
            return {
                'status': 'OPTIMAL',
                'objective': -value if tableau.maximize else value,
                'solution': {name: float(v) for name, v in zip(tableau.variable_names, x.X)},
            }
        elif status_code == GRB.INFEASIBLE:
            return {'status': 'INFEASIBLE', 'objective': None, 'solution': None}
        elif status_code == GRB.UNBOUNDED:
            return {'status': 'UNBOUNDED', 'objective': None, 'solution': None}
        else:
            return {'status': f'OTHER_{status_code}', 'objective': None, 'solution': None}

    except gp.GurobiError as e:
        logging.error(f"Erro do Gurobi na verificação cruzada: {e}")
        return {'status': 'ERROR', 'objective': None, 'solution': None}

    finally:
        if model is not None:
            model.dispose()
