"""
Configuração do motor de pivoteamento.
"""
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from tableau_simplex.core.tableau import DEFAULT_TOLERANCE

PIVOT_RULES = ("dantzig", "bland")

# Limite padrão de iterações = ITERATION_LIMIT_FACTOR * linhas * colunas do tableau
ITERATION_LIMIT_FACTOR = 5
DEFAULT_DEGENERATE_PIVOT_LIMIT = 10


@dataclass
class EngineConfig:
    """
    Opções do motor de pivoteamento.

    Atributos:
        max_iterations (Optional[int]): Número máximo de pivôs executados.
            O limite é verificado antes de cada pivô, então 0 não permite
            nenhum pivô; um tableau ótimo é reportado como ótimo mesmo no
            limite. None usa ITERATION_LIMIT_FACTOR * linhas * colunas.
        tolerance (float): Tolerância ε para todas as comparações com zero,
            inclusive a do elemento pivô no tableau.
        pivot_rule (str): 'dantzig' (custo reduzido mais negativo) ou
            'bland' (menor índice com custo reduzido negativo).
        degenerate_pivot_limit (Optional[int]): Com a regra de Dantzig, número
            de pivôs degenerados seguidos a partir do qual a entrada passa a
            seguir a regra de Bland. None desliga a troca.
    """
    max_iterations: Optional[int] = None
    tolerance: float = DEFAULT_TOLERANCE
    pivot_rule: str = "dantzig"
    degenerate_pivot_limit: Optional[int] = DEFAULT_DEGENERATE_PIVOT_LIMIT

    def __post_init__(self):
        if self.max_iterations is not None and self.max_iterations < 0:
            raise ValueError("max_iterations deve ser não negativo.")
        if self.tolerance < 0:
            raise ValueError("A tolerância deve ser não negativa.")
        if self.pivot_rule not in PIVOT_RULES:
            raise ValueError(f"Regra de pivô '{self.pivot_rule}' não reconhecida. Use uma de {PIVOT_RULES}.")
        if self.degenerate_pivot_limit is not None and self.degenerate_pivot_limit < 1:
            raise ValueError("degenerate_pivot_limit deve ser pelo menos 1 (ou None para desligar).")

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]]) -> "EngineConfig":
        """Cria a configuração a partir de um dicionário de opções, rejeitando chaves desconhecidas."""
        config = config if config else {}
        known = {f.name for f in fields(cls)}
        unknown = set(config) - known
        if unknown:
            raise ValueError(f"Opções de configuração desconhecidas: {sorted(unknown)}")
        return cls(**config)

    def iteration_limit(self, rows: int, columns: int) -> int:
        if self.max_iterations is not None:
            return self.max_iterations
        return ITERATION_LIMIT_FACTOR * rows * columns
