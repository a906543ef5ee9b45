"""
Exceções do núcleo do simplex em tableau.
"""


class InvalidTableau(ValueError):
    """O tableau fornecido não está na forma padrão (base identidade, RHS não negativo)."""
    pass


class DivisionByZero(ZeroDivisionError):
    """
    Elemento pivô nulo (ou abaixo da tolerância).

    Indica um erro na seleção do pivô: o teste da razão nunca escolhe um
    elemento desses, então isso não é um resultado esperado para o usuário.
    """
    pass
