# Arquivo: tableau_simplex/utils/tableau_reader.py

import logging

import numpy as np

from tableau_simplex.core.errors import InvalidTableau
from tableau_simplex.core.tableau import DEFAULT_TOLERANCE, Tableau


def parse_file_to_tableau(file_path: str, tolerance: float = DEFAULT_TOLERANCE) -> Tableau:
    """
    Lê um arquivo de texto com um tableau já na forma padrão e o converte em
    um objeto Tableau.

    Seções reconhecidas: [NAME], [SENSE] (max/min), [VARIABLES], [TABLEAU]
    (uma linha de números por linha do tableau, a objetivo por último) e
    [BASIS]. Sem [BASIS], a base é detectada pelas colunas unitárias.
    """
    # --- ESTRUTURAS DE DADOS TEMPORÁRIAS ---
    current_section = None
    tableau_name = ""
    maximize = False
    variable_names = None
    rows = []
    basis = None

    with open(file_path, 'r') as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith('#'): continue

            if line.startswith('[') and line.endswith(']'):
                current_section = line[1:-1].upper()

            elif current_section == 'NAME':
                tableau_name = line

            elif current_section == 'SENSE':
                sense_map = {"max": True, "maximize": True, "min": False, "minimize": False}
                sense = sense_map.get(line.lower())
                if sense is None: raise InvalidTableau(f"Sentido '{line}' não reconhecido (linha {line_number}).")
                maximize = sense

            elif current_section == 'VARIABLES':
                variable_names = (variable_names or []) + line.split()

            elif current_section == 'TABLEAU':
                try:
                    rows.append([float(token) for token in line.replace(',', ' ').split()])
                except ValueError:
                    raise InvalidTableau(f"Linha {line_number} do tableau não é numérica: '{line}'")

            elif current_section == 'BASIS':
                try:
                    basis = (basis or []) + [int(token) for token in line.replace(',', ' ').split()]
                except ValueError:
                    raise InvalidTableau(f"Índices da base inválidos na linha {line_number}: '{line}'")

            else:
                raise InvalidTableau(f"Conteúdo fora de uma seção conhecida na linha {line_number}: '{line}'")

    # --- MONTAGEM FINAL DO TABLEAU ---
    if not rows:
        raise InvalidTableau(f"Nenhuma seção [TABLEAU] encontrada em '{file_path}'.")
    widths = {len(row) for row in rows}
    if len(widths) != 1:
        raise InvalidTableau(f"As linhas do tableau têm tamanhos diferentes: {sorted(widths)}")

    matrix = np.array(rows, dtype=float)
    tableau = Tableau.from_array(
        matrix,
        basis,
        maximize=maximize,
        variable_names=variable_names,
        name=tableau_name,
        tolerance=tolerance,
    )
    logging.info(
        f"Tableau '{tableau.name}' carregado: {tableau.num_constraints} restrições, "
        f"{tableau.num_variables} variáveis, base {tableau.basic_variables}."
    )
    return tableau
