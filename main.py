# main.py
# Ponto de entrada para resolver um tableau lido de arquivo.

import argparse
import sys

from tableau_simplex.core.errors import InvalidTableau
from tableau_simplex.lp_solver.config import EngineConfig, PIVOT_RULES
from tableau_simplex.lp_solver.pivot_engine import EngineState, PivotEngine, pivot_step
from tableau_simplex.utils.logger_config import setup_logger
from tableau_simplex.utils.tableau_reader import parse_file_to_tableau

DEFAULT_PROBLEM_PATH = "./data/exemplo_simples.txt"


def _print_result(result):
    print("-" * 60)
    print(f"Status: {result.state.value}")
    print(f"Pivôs executados: {result.iterations}")
    print(f"Base final: {list(result.basic_variables)}")
    if result.is_optimal:
        print(f"Custo ótimo: {result.cost:.6f}")
        print("Solução básica:")
        for name, value in result.tableau.solution_by_name().items():
            if abs(value) > 1e-9:
                print(f"  {name} = {value:.6f}")
    elif result.state == EngineState.UNBOUNDED:
        print(f"Direção ilimitada na coluna: {result.tableau.variable_names[result.unbounded_column]}")
    else:
        print(f"Último objetivo (não ótimo): {result.last_objective_value:.6f}")
    print("-" * 60)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Simplex primal sobre um tableau denso na forma padrão.",
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "problem_file",
        type=str,
        nargs='?',
        default=None,
        help="Caminho para o arquivo do tableau ([TABLEAU], [BASIS], ...)."
    )

    parser.add_argument(
        "--max-iterations",
        type=int,
        default=None,
        help="Número máximo de pivôs. Padrão: 5 x linhas x colunas."
    )

    parser.add_argument(
        "--tolerance",
        type=float,
        default=1e-9,
        help="Tolerância para comparações com zero."
    )

    parser.add_argument(
        "--pivot-rule",
        type=str,
        default="dantzig",
        choices=list(PIVOT_RULES),
        help="Regra de escolha da variável de entrada."
    )

    parser.add_argument(
        "--degenerate-limit",
        type=int,
        default=10,
        help="Pivôs degenerados seguidos antes de usar a regra de Bland. 0 para desligar."
    )

    parser.add_argument(
        "--step",
        action="store_true",
        help="Executa um único pivô e imprime o tableau resultante."
    )

    parser.add_argument(
        "--crosscheck",
        action="store_true",
        help="Compara o resultado com o Gurobi."
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Mostra cada pivô no log."
    )

    args = parser.parse_args(argv)
    setup_logger(verbose=args.verbose)

    final_problem_path = args.problem_file
    if final_problem_path is None:
        print(f"INFO: Nenhum arquivo fornecido. Usando o arquivo de teste padrão: {DEFAULT_PROBLEM_PATH}")
        final_problem_path = DEFAULT_PROBLEM_PATH

    try:
        config = EngineConfig(
            max_iterations=args.max_iterations,
            tolerance=args.tolerance,
            pivot_rule=args.pivot_rule,
            degenerate_pivot_limit=args.degenerate_limit or None,
        )
        tableau = parse_file_to_tableau(final_problem_path, tolerance=args.tolerance)
    except FileNotFoundError:
        print(f"ERRO: O arquivo '{final_problem_path}' não foi encontrado.", file=sys.stderr)
        return 1
    except (InvalidTableau, ValueError) as e:
        print(f"ERRO: {e}", file=sys.stderr)
        return 1

    print(tableau)

    if args.step:
        state, record = pivot_step(tableau, config)
        if record is not None:
            print(f"\nPivô na linha {record.row}, coluna {tableau.variable_names[record.column]}:")
            print(tableau)
        else:
            print(f"\nNenhum pivô executado. Estado: {state.value}")
        return 0

    reference = None
    if args.crosscheck:
        from tableau_simplex.lp_solver.reference import solve_tableau_with_gurobi
        reference = solve_tableau_with_gurobi(tableau)

    result = PivotEngine(tableau, config).run()
    _print_result(result)

    if reference is not None:
        print(f"Gurobi: status {reference['status']}, objetivo {reference['objective']}")
        if result.is_optimal and reference['status'] == 'OPTIMAL':
            if abs(reference['objective'] - result.cost) > 1e-6 * max(1.0, abs(result.cost)):
                print("AVISO: o custo difere do Gurobi.", file=sys.stderr)

    return 0 if result.state == EngineState.OPTIMAL else 2


if __name__ == "__main__":
    sys.exit(main())
