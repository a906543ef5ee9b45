import numpy as np
import pytest

from tableau_simplex.core.tableau import Tableau


@pytest.fixture
def two_var_tableau():
    """max 2x + 4y  s.a.  x + y <= 4,  x + 3y <= 6  (ótimo 10 em x=3, y=1)."""
    matrix = np.array([
        [1.0, 1.0, 1.0, 0.0, 4.0],
        [1.0, 3.0, 0.0, 1.0, 6.0],
        [-2.0, -4.0, 0.0, 0.0, 0.0],
    ])
    return Tableau(matrix, [2, 3], maximize=True, variable_names=["x", "y", "s1", "s2"])


@pytest.fixture
def beale_tableau():
    """Exemplo de Beale: cicla com Dantzig puro e desempate pela menor variável básica."""
    matrix = np.array([
        [0.5, -5.5, -2.5, 9.0, 1.0, 0.0, 0.0, 0.0],
        [0.5, -1.5, -0.5, 1.0, 0.0, 1.0, 0.0, 0.0],
        [1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0, 1.0],
        [-10.0, 57.0, 9.0, 24.0, 0.0, 0.0, 0.0, 0.0],
    ])
    return Tableau(matrix, [4, 5, 6], maximize=True)


@pytest.fixture
def unbounded_tableau():
    """max x1  s.a.  -x1 + x2 <= 1: a coluna de x1 não tem coeficiente positivo."""
    matrix = np.array([
        [-1.0, 1.0, 1.0, 1.0],
        [-1.0, 0.0, 0.0, 0.0],
    ])
    return Tableau(matrix, [2], maximize=True)


@pytest.fixture
def optimal_tableau():
    """min x1 + 2x2 com as folgas na base: já ótimo."""
    matrix = np.array([
        [1.0, 1.0, 1.0, 0.0, 3.0],
        [2.0, 1.0, 0.0, 1.0, 5.0],
        [1.0, 2.0, 0.0, 0.0, 0.0],
    ])
    return Tableau(matrix, [2, 3])
