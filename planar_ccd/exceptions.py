"""
Exceções do manipulador planar.
"""


class InvalidArgument(ValueError):
    """Argumento inválido (comprimentos, ângulos, alvo ou opções do solver)."""
