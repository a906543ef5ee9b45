"""
Define a estrutura de dados central do simplex: o tableau denso.
"""
import copy
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from tableau_simplex.core.errors import DivisionByZero, InvalidTableau

DEFAULT_TOLERANCE = 1e-9


def find_identity_basis(matrix: np.ndarray, tolerance: float = DEFAULT_TOLERANCE) -> List[int]:
    """
    Procura, para cada linha de restrição, a primeira coluna que seja o vetor
    unitário daquela linha (zero na linha objetivo inclusive).

    Levanta InvalidTableau se alguma linha não tiver coluna unitária.
    """
    matrix = np.asarray(matrix, dtype=float)
    num_constraints = matrix.shape[0] - 1
    num_vars = matrix.shape[1] - 1
    basis = []
    for row in range(num_constraints):
        expected = np.zeros(matrix.shape[0])
        expected[row] = 1.0
        found = next(
            (j for j in range(num_vars)
             if np.allclose(matrix[:, j], expected, rtol=0.0, atol=tolerance) and j not in basis),
            None
        )
        if found is None:
            raise InvalidTableau(f"Bloco identidade ausente: nenhuma coluna unitária para a linha {row}.")
        basis.append(found)
    return basis


class Tableau:
    """
    Representa um programa linear em forma canônica em relação a uma base viável:

        [ A | b ]     <- m linhas de restrição
        [ d | -z ]    <- linha objetivo (custos reduzidos)

    A linha objetivo é sempre lida como a de um problema de minimização. Com
    `maximize=True` ela guarda -c e o valor objetivo reportado volta ao sentido
    original (maximização).

    Atributos:
        matrix (np.ndarray): Matriz densa (m + 1) x (n + 1). Última linha é a
            objetivo, última coluna é o lado direito (RHS).
        basic_variables (List[int]): Para cada linha de restrição, o índice da
            coluna básica naquela linha.
        maximize (bool): Convenção de sinal fixada na construção.
        variable_names (List[str]): Nomes das n colunas de variáveis.
        name (str): Rótulo do tableau.
        tolerance (float): Tolerância numérica usada nas validações e no pivô.
    """

    def __init__(self,
                 matrix,
                 basic_variables: Sequence[int],
                 maximize: bool = False,
                 variable_names: Optional[Sequence[str]] = None,
                 name: str = "",
                 tolerance: float = DEFAULT_TOLERANCE):
        if tolerance < 0:
            raise ValueError("A tolerância deve ser não negativa.")
        self.matrix: np.ndarray = np.array(matrix, dtype=float)
        self.maximize = maximize
        self.name = name
        self.tolerance = tolerance
        self.basic_variables: List[int] = self._to_index_list(basic_variables)
        self._validate()

        if variable_names is None:
            variable_names = [f"x{j}" for j in range(self.num_variables)]
        elif len(variable_names) != self.num_variables:
            raise InvalidTableau(
                f"Foram dados {len(variable_names)} nomes para {self.num_variables} variáveis."
            )
        self.variable_names: List[str] = list(variable_names)

    @classmethod
    def from_array(cls, matrix, basic_variables: Optional[Sequence[int]] = None, **kwargs) -> "Tableau":
        """Constrói o tableau detectando a base pelas colunas unitárias quando ela não é dada."""
        if basic_variables is None:
            array = np.asarray(matrix, dtype=float)
            if array.ndim != 2 or array.shape[0] < 2 or array.shape[1] < 2:
                raise InvalidTableau(f"O tableau deve ser uma matriz de pelo menos 2x2, recebido shape {array.shape}.")
            basic_variables = find_identity_basis(array, kwargs.get("tolerance", DEFAULT_TOLERANCE))
        return cls(matrix, basic_variables, **kwargs)

    @staticmethod
    def _to_index_list(basic_variables: Sequence[int]) -> List[int]:
        indices = np.asarray(basic_variables, dtype=float).ravel()
        if not np.all(np.isfinite(indices)) or not np.all(indices == np.round(indices)):
            raise InvalidTableau(f"Índices de variáveis básicas devem ser inteiros: {list(basic_variables)}")
        return [int(i) for i in indices]

    def _validate(self):
        """Garante a forma padrão: base identidade em forma reduzida e RHS não negativo."""
        if self.matrix.ndim != 2 or self.matrix.shape[0] < 2 or self.matrix.shape[1] < 2:
            raise InvalidTableau(f"O tableau deve ser uma matriz de pelo menos 2x2, recebido shape {self.matrix.shape}.")
        if not np.all(np.isfinite(self.matrix)):
            raise InvalidTableau("O tableau contém valores não finitos (NaN ou inf).")

        num_constraints, num_vars = self.num_constraints, self.num_variables
        if len(self.basic_variables) != num_constraints:
            raise InvalidTableau(
                f"A base tem {len(self.basic_variables)} índices, mas o tableau tem {num_constraints} restrições."
            )
        for row, col in enumerate(self.basic_variables):
            if not 0 <= col < num_vars:
                raise InvalidTableau(f"Índice básico {col} da linha {row} fora do intervalo [0, {num_vars}).")
        if len(set(self.basic_variables)) != num_constraints:
            raise InvalidTableau(f"Índices básicos repetidos: {self.basic_variables}")

        for row, col in enumerate(self.basic_variables):
            expected = np.zeros(num_constraints + 1)
            expected[row] = 1.0
            if not np.allclose(self.matrix[:, col], expected, rtol=0.0, atol=self.tolerance):
                raise InvalidTableau(
                    f"A coluna {col}, básica na linha {row}, não é um vetor unitário (forma reduzida)."
                )

        rhs = self.matrix[:num_constraints, -1]
        if np.any(rhs < -self.tolerance):
            bad_rows = np.where(rhs < -self.tolerance)[0].tolist()
            raise InvalidTableau(f"Lado direito negativo nas linhas {bad_rows}: a base inicial não é viável.")

    # --- DIMENSÕES ---
    @property
    def shape(self) -> Tuple[int, int]:
        return self.matrix.shape

    @property
    def num_constraints(self) -> int:
        return self.matrix.shape[0] - 1

    @property
    def num_variables(self) -> int:
        return self.matrix.shape[1] - 1

    def _check_row(self, row: int):
        if not 0 <= row < self.num_constraints:
            raise IndexError(f"Linha {row} não é uma linha de restrição (0..{self.num_constraints - 1}).")

    def _check_column(self, col: int):
        if not 0 <= col < self.num_variables:
            raise IndexError(f"Coluna {col} não é uma coluna de variável (0..{self.num_variables - 1}).")

    # --- LEITURA ---
    def coefficient_at(self, row: int, col: int) -> float:
        """Coeficiente da coluna de variável `col`; `row` pode ser a linha objetivo (índice m)."""
        if not 0 <= row <= self.num_constraints:
            raise IndexError(f"Linha {row} fora do tableau (0..{self.num_constraints}).")
        self._check_column(col)
        return float(self.matrix[row, col])

    def basic_variable(self, row: int) -> int:
        self._check_row(row)
        return self.basic_variables[row]

    def objective_row_coefficient(self, col: int) -> float:
        """Custo reduzido da coluna `col`."""
        self._check_column(col)
        return float(self.matrix[-1, col])

    def rhs(self, row: int) -> float:
        self._check_row(row)
        return float(self.matrix[row, -1])

    @property
    def rhs_column(self) -> np.ndarray:
        return self.matrix[:-1, -1].copy()

    @property
    def reduced_costs(self) -> np.ndarray:
        return self.matrix[-1, :-1].copy()

    @property
    def objective_value(self) -> float:
        value = self.matrix[-1, -1]
        return float(value) if self.maximize else float(-value)

    def nonbasic_columns(self) -> List[int]:
        basic = set(self.basic_variables)
        return [j for j in range(self.num_variables) if j not in basic]

    def is_optimal(self, tolerance: Optional[float] = None) -> bool:
        """Verdadeiro quando nenhum custo reduzido é negativo além da tolerância."""
        tol = self.tolerance if tolerance is None else tolerance
        return bool(np.all(self.matrix[-1, :-1] >= -tol))

    def basic_solution(self) -> np.ndarray:
        """Valor de cada variável na solução básica atual (não básicas valem zero)."""
        x = np.zeros(self.num_variables)
        for row, col in enumerate(self.basic_variables):
            x[col] = self.matrix[row, -1]
        return x

    def solution_by_name(self) -> Dict[str, float]:
        return {name: float(value) for name, value in zip(self.variable_names, self.basic_solution())}

    # --- MUTAÇÃO ---
    def apply_pivot(self, pivot_row: int, pivot_column: int):
        """
        Eliminação de Gauss-Jordan em torno de matrix[pivot_row, pivot_column].

        Normaliza a linha pivô e zera a coluna pivô em todas as outras linhas,
        incluindo a linha objetivo. A variável da coluna pivô passa a ser a
        básica da linha pivô.

        Args:
            pivot_row (int): Linha de restrição que sai da base.
            pivot_column (int): Coluna da variável que entra na base.

        Raises:
            DivisionByZero: Se o elemento pivô for nulo dentro da tolerância.
        """
        self._check_row(pivot_row)
        self._check_column(pivot_column)

        pivot_element = self.matrix[pivot_row, pivot_column]
        if abs(pivot_element) <= self.tolerance:
            raise DivisionByZero(
                f"Elemento pivô ({pivot_row}, {pivot_column}) = {pivot_element!r} é nulo dentro da tolerância."
            )

        self.matrix[pivot_row, :] /= pivot_element
        for i in range(self.matrix.shape[0]):
            if i != pivot_row:
                multiplier = self.matrix[i, pivot_column]
                if multiplier != 0.0:
                    self.matrix[i, :] -= multiplier * self.matrix[pivot_row, :]

        # A coluna pivô fica exatamente unitária, sem resíduo de arredondamento
        self.matrix[:, pivot_column] = 0.0
        self.matrix[pivot_row, pivot_column] = 1.0
        self.basic_variables[pivot_row] = pivot_column

    def copy(self) -> "Tableau":
        return copy.deepcopy(self)

    def __repr__(self) -> str:
        return (
            f"Tableau(name='{self.name}', "
            f"shape={self.shape}, "
            f"basis={self.basic_variables}, "
            f"objective={self.objective_value})"
        )

    def __str__(self):
        """Imprime o tableau com os nomes das variáveis no cabeçalho e das básicas nas linhas."""
        width = max(10, max(len(name) for name in self.variable_names) + 2)
        header = f"{'':>{width}s}" + "".join(f"{name:>{width}s}" for name in self.variable_names) + f"{'RHS':>{width}s}"
        lines = [header, "-" * len(header)]
        for row in range(self.matrix.shape[0]):
            if row < self.num_constraints:
                label = self.variable_names[self.basic_variables[row]]
            else:
                label = "z"
            values = "".join(f"{value:{width}.4f}" for value in self.matrix[row, :])
            lines.append(f"{label:>{width}s}{values}")
        return "\n".join(lines)
