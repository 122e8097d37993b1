"""
Operações básicas com vetores 2D usadas pela cinemática e pelo solver CCD.
"""

import numpy as np

from .exceptions import InvalidArgument

# Vetores com norma abaixo deste valor não definem direção
EPS = 1e-9


def as_point(value, name: str = "ponto") -> np.ndarray:
    """
    Converte um valor em ponto 2D.

    Args:
        value: Sequência (x, y) de números finitos
        name: Nome usado na mensagem de erro

    Returns:
        Array numpy de shape (2,)

    Raises:
        InvalidArgument: Se o valor não for um ponto 2D válido
    """
    try:
        point = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError):
        raise InvalidArgument(f"{name} deve ser [x, y], recebido {value!r}")
    if point.shape != (2,) or not np.all(np.isfinite(point)):
        raise InvalidArgument(f"{name} deve ser [x, y], recebido {value!r}")
    return point


def length(v: np.ndarray) -> float:
    return float(np.hypot(v[0], v[1]))


def sub(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.array([a[0] - b[0], a[1] - b[1]], dtype=np.float64)


def dot(a: np.ndarray, b: np.ndarray) -> float:
    return float(a[0] * b[0] + a[1] * b[1])


def cross_z(a: np.ndarray, b: np.ndarray) -> float:
    """Componente z do produto vetorial (a_x*b_y - a_y*b_x)."""
    return float(a[0] * b[1] - a[1] * b[0])


def angle_between(a: np.ndarray, b: np.ndarray) -> float:
    """
    Ângulo com sinal que leva o vetor a até o vetor b.

    Returns:
        Ângulo em radianos no intervalo [-π, π]. Retorna 0 se algum
        dos vetores tiver norma menor que EPS.
    """
    len_a = length(a)
    len_b = length(b)
    if len_a < EPS or len_b < EPS:
        return 0.0

    cos_angle = np.clip(dot(a, b) / (len_a * len_b), -1.0, 1.0)
    angle = float(np.arccos(cos_angle))
    return -angle if cross_z(a, b) < 0 else angle
