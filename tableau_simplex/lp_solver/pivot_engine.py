"""
Motor de pivoteamento do simplex primal sobre um tableau denso.

Expõe tanto o passo único (`pivot_step`) quanto a execução completa até um
estado terminal (`pivot_tableau` / `PivotEngine.run`).
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from tableau_simplex.core.tableau import Tableau
from tableau_simplex.lp_solver.config import EngineConfig


class EngineState(Enum):
    """Estados da máquina de estados do motor. Apenas RUNNING não é terminal."""
    RUNNING = "running"
    OPTIMAL = "optimal"
    UNBOUNDED = "unbounded"
    ITERATION_LIMIT_EXCEEDED = "iteration_limit_exceeded"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class PivotRecord:
    """Pivô executado em uma iteração."""
    row: int
    column: int
    leaving: int
    ratio: float
    degenerate: bool


@dataclass
class PivotResult:
    """
    Resultado de uma execução do motor.

    Atributos:
        state (EngineState): Estado terminal alcançado.
        basic_variables (Tuple[int, ...]): Índices básicos finais, um por linha.
        cost (Optional[float]): Valor objetivo. Só existe quando o estado é OPTIMAL.
        iterations (int): Número de pivôs executados.
        tableau (Tableau): Tableau no último estado alcançado (para diagnóstico).
        last_objective_value (float): Objetivo no último estado, ótimo ou não.
        unbounded_column (Optional[int]): Coluna de entrada sem limite (UNBOUNDED).
        history (List[PivotRecord]): Pivôs executados, em ordem.
    """
    state: EngineState
    basic_variables: Tuple[int, ...]
    cost: Optional[float]
    iterations: int
    tableau: Tableau
    last_objective_value: float
    unbounded_column: Optional[int] = None
    history: List[PivotRecord] = field(default_factory=list)

    @property
    def is_optimal(self) -> bool:
        return self.state == EngineState.OPTIMAL

    @property
    def is_complete(self) -> bool:
        """OPTIMAL e UNBOUNDED são respostas definitivas; os demais estados não."""
        return self.state in (EngineState.OPTIMAL, EngineState.UNBOUNDED)


class PivotEngine:
    """
    Executa o simplex primal sobre um tableau, que passa a pertencer ao motor
    e é modificado no lugar a cada iteração.
    """
    def __init__(self, tableau: Tableau, config: Optional[EngineConfig] = None):
        self.tableau = tableau
        self.config = config if config else EngineConfig()
        self.tolerance = self.config.tolerance
        # Um único ε por execução: o teste da razão e o pivô usam o mesmo valor
        self.tableau.tolerance = self.tolerance
        rows, columns = tableau.shape
        self.max_iterations = self.config.iteration_limit(rows, columns)

        self.state = EngineState.RUNNING
        self.iterations = 0
        self.history: List[PivotRecord] = []
        self.unbounded_column: Optional[int] = None

        self._degenerate_streak = 0
        self._use_bland = self.config.pivot_rule == "bland"

    def select_entering(self) -> Optional[int]:
        """
        Escolhe a coluna que entra na base, ou None se o tableau já é ótimo.

        Dantzig: custo reduzido mais negativo, empates pelo menor índice.
        Bland: menor índice com custo reduzido negativo.
        """
        reduced_costs = self.tableau.matrix[-1, :-1]
        basic = set(self.tableau.basic_variables)
        candidates = [
            j for j in range(reduced_costs.size)
            if j not in basic and reduced_costs[j] < -self.tolerance
        ]
        if not candidates:
            return None
        if self._use_bland:
            return candidates[0]

        min_cost = min(reduced_costs[j] for j in candidates)
        return next(j for j in candidates if reduced_costs[j] <= min_cost + self.tolerance)

    def select_leaving(self, pivot_column: int) -> Optional[int]:
        """
        Teste da razão para a coluna de entrada. Retorna a linha pivô, ou None
        se nenhuma linha tem coeficiente positivo (problema ilimitado).

        Empates na razão mínima vão para a linha com o menor índice de variável básica.
        """
        column = self.tableau.matrix[:-1, pivot_column]
        rhs = self.tableau.matrix[:-1, -1]
        candidates = np.where(column > self.tolerance)[0]
        if candidates.size == 0:
            return None

        ratios = rhs[candidates] / column[candidates]
        min_ratio = float(np.min(ratios))
        ties = [int(row) for row, ratio in zip(candidates, ratios) if ratio <= min_ratio + self.tolerance]
        return min(ties, key=lambda row: self.tableau.basic_variables[row])

    def step(self) -> EngineState:
        """Executa uma transição da máquina de estados (no máximo um pivô)."""
        if self.state != EngineState.RUNNING:
            return self.state

        # 1. Variável de entrada
        entering = self.select_entering()
        if entering is None:
            self.state = EngineState.OPTIMAL
            logging.info(f"Tableau ótimo após {self.iterations} pivôs. Objetivo: {self.tableau.objective_value:.6f}")
            return self.state

        # 2. Limite de iterações
        if self.iterations >= self.max_iterations:
            self.state = EngineState.ITERATION_LIMIT_EXCEEDED
            logging.warning(
                f"Limite de {self.max_iterations} iterações atingido. "
                f"Último objetivo: {self.tableau.objective_value:.6f}"
            )
            return self.state

        # 3. Variável de saída (teste da razão)
        pivot_row = self.select_leaving(entering)
        if pivot_row is None:
            self.state = EngineState.UNBOUNDED
            self.unbounded_column = entering
            logging.info(
                f"Problema ilimitado: a coluna {self.tableau.variable_names[entering]} "
                f"não tem coeficiente positivo."
            )
            return self.state

        # 4. Pivô
        leaving = self.tableau.basic_variables[pivot_row]
        ratio = self.tableau.rhs(pivot_row) / self.tableau.coefficient_at(pivot_row, entering)
        degenerate = ratio <= self.tolerance
        self.tableau.apply_pivot(pivot_row, entering)
        self.iterations += 1
        self.history.append(PivotRecord(pivot_row, entering, leaving, ratio, degenerate))

        names = self.tableau.variable_names
        logging.debug(
            f"Iteração {self.iterations}: entra {names[entering]}, sai {names[leaving]} "
            f"(linha {pivot_row}, razão {ratio:.6g}{', degenerado' if degenerate else ''}). "
            f"Objetivo: {self.tableau.objective_value:.6f}"
        )
        self._update_pivot_rule(degenerate)
        return self.state

    def _update_pivot_rule(self, degenerate: bool):
        """Troca a entrada para a regra de Bland após uma sequência de pivôs degenerados."""
        if self.config.pivot_rule == "bland":
            return
        if not degenerate:
            if self._use_bland:
                logging.debug("Pivô não degenerado: voltando à regra de Dantzig.")
            self._degenerate_streak = 0
            self._use_bland = False
            return

        self._degenerate_streak += 1
        limit = self.config.degenerate_pivot_limit
        if limit is not None and not self._use_bland and self._degenerate_streak >= limit:
            logging.info(f"{self._degenerate_streak} pivôs degenerados seguidos: usando a regra de Bland.")
            self._use_bland = True

    def run(self, should_stop: Optional[Callable[[], bool]] = None) -> PivotResult:
        """
        Itera até um estado terminal.

        Args:
            should_stop: Consultado entre iterações. Se retornar True, o motor
                termina em CANCELLED com o estado alcançado até ali.
        """
        logging.info(
            f"Iniciando simplex em '{self.tableau.name or 'tableau'}': "
            f"{self.tableau.num_constraints} restrições, {self.tableau.num_variables} variáveis, "
            f"regra '{self.config.pivot_rule}', limite de {self.max_iterations} iterações."
        )
        while self.state == EngineState.RUNNING:
            if should_stop is not None and should_stop():
                self.state = EngineState.CANCELLED
                logging.info(f"Execução cancelada após {self.iterations} pivôs.")
                break
            self.step()
        return self.result()

    def result(self) -> PivotResult:
        cost = self.tableau.objective_value if self.state == EngineState.OPTIMAL else None
        return PivotResult(
            state=self.state,
            basic_variables=tuple(self.tableau.basic_variables),
            cost=cost,
            iterations=self.iterations,
            tableau=self.tableau,
            last_objective_value=self.tableau.objective_value,
            unbounded_column=self.unbounded_column,
            history=list(self.history),
        )


def _as_config(config: Union[EngineConfig, Dict[str, Any], None]) -> EngineConfig:
    if isinstance(config, EngineConfig):
        return config
    return EngineConfig.from_dict(config)


def pivot_step(tableau: Tableau,
               config: Union[EngineConfig, Dict[str, Any], None] = None) -> Tuple[EngineState, Optional[PivotRecord]]:
    """
    Executa no máximo um pivô sobre `tableau` (modificado no lugar).

    Retorna RUNNING e o pivô feito, ou o estado terminal (OPTIMAL, UNBOUNDED,
    ou ITERATION_LIMIT_EXCEEDED quando max_iterations=0) e None. A tolerância
    do tableau passa a ser a da configuração. Não guarda estado entre
    chamadas, então a troca para Bland após pivôs degenerados não se aplica
    aqui; use pivot_rule='bland' se precisar.
    """
    engine = PivotEngine(tableau, _as_config(config))
    state = engine.step()
    record = engine.history[-1] if engine.history else None
    return state, record


def pivot_tableau(intableau: Union[Tableau, np.ndarray, Sequence[Sequence[float]]],
                  inbasicptr: Optional[Sequence[int]] = None,
                  config: Union[EngineConfig, Dict[str, Any], None] = None) -> PivotResult:
    """
    Resolve o tableau até um estado terminal sem modificar a entrada.

    Args:
        intableau: Tableau ou matriz (m + 1) x (n + 1) na forma padrão.
        inbasicptr: Índices básicos iniciais, um por linha de restrição. Se
            omitido, usa a base do Tableau ou detecta as colunas unitárias.
        config: EngineConfig ou dicionário com as mesmas chaves.

    Returns:
        PivotResult com `basic_variables` (basicptr) e `cost`.

    Raises:
        InvalidTableau: Se a entrada não estiver na forma padrão.
    """
    engine_config = _as_config(config)
    if isinstance(intableau, Tableau):
        tableau = Tableau(
            intableau.matrix,
            intableau.basic_variables if inbasicptr is None else inbasicptr,
            maximize=intableau.maximize,
            variable_names=intableau.variable_names,
            name=intableau.name,
            tolerance=engine_config.tolerance,
        )
    else:
        tableau = Tableau.from_array(intableau, inbasicptr, tolerance=engine_config.tolerance)

    engine = PivotEngine(tableau, engine_config)
    return engine.run()
