"""
Modelo da cadeia cinemática planar.

Mantém os comprimentos dos links (fixos) e os ângulos das juntas
(mutáveis), e calcula as posições das juntas por cinemática direta.
"""

import logging
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np

from .exceptions import InvalidArgument
from .vector2d import as_point, length, sub

logger = logging.getLogger(__name__)


class Chain:
    """
    Manipulador planar serial com N links e N juntas rotacionais.

    Cada ângulo é relativo à orientação acumulada dos links anteriores,
    ou seja, a orientação do link i é a soma dos ângulos 0..i.

    Attributes:
        lengths: Comprimentos dos links, da base ao efetuador
        angles: Ângulos das juntas em radianos
        origin: Posição da base
        joint_positions: Cache (N+1, 2) das posições das juntas, ou None
            antes do primeiro cálculo
    """

    def __init__(self, lengths: Sequence[float], origin: Sequence[float] = (0.0, 0.0)):
        """
        Inicializa a cadeia com todos os ângulos em zero.

        Args:
            lengths: Comprimentos positivos dos links
            origin: Posição (x, y) da base

        Raises:
            InvalidArgument: Se a lista estiver vazia ou tiver comprimento
                não positivo
        """
        self.lengths: Tuple[float, ...] = self._validate_lengths(lengths)
        self.origin: np.ndarray = as_point(origin, "origin")
        self.angles: np.ndarray = np.zeros(len(self.lengths), dtype=np.float64)
        self.joint_positions: Optional[np.ndarray] = None

    @staticmethod
    def _validate_lengths(lengths) -> Tuple[float, ...]:
        try:
            values = np.asarray(lengths, dtype=np.float64)
        except (TypeError, ValueError):
            raise InvalidArgument(f"lengths deve ser uma lista de números, recebido {lengths!r}")
        if values.ndim != 1 or values.size == 0:
            raise InvalidArgument("lengths deve ser uma lista não vazia")
        if not np.all(np.isfinite(values)) or np.any(values <= 0):
            raise InvalidArgument(f"Comprimentos dos links devem ser positivos: {list(values)}")
        return tuple(float(v) for v in values)

    @property
    def num_links(self) -> int:
        return len(self.lengths)

    @property
    def reach(self) -> float:
        """Alcance máximo (cadeia totalmente esticada)."""
        return float(sum(self.lengths))

    @property
    def min_reach(self) -> float:
        """Raio interno do espaço de trabalho."""
        return max(0.0, 2.0 * max(self.lengths) - self.reach)

    def set_angles(self, angles: Sequence[float]) -> np.ndarray:
        """
        Substitui os ângulos das juntas e recalcula as posições.

        Args:
            angles: N ângulos em radianos

        Returns:
            Posições das juntas (N+1, 2)

        Raises:
            InvalidArgument: Se o número de ângulos for diferente de N
        """
        try:
            values = np.array(angles, dtype=np.float64)
        except (TypeError, ValueError):
            raise InvalidArgument(f"angles deve ser uma lista de números, recebido {angles!r}")
        if values.shape != (self.num_links,):
            raise InvalidArgument(
                f"Número de ângulos incompatível: {values.size} recebidos, {self.num_links} esperados"
            )
        if not np.all(np.isfinite(values)):
            raise InvalidArgument(f"Ângulos devem ser finitos: {list(values)}")

        self.angles = values
        logger.debug(f"Ângulos definidos: {np.round(self.angles, 4).tolist()}")
        return self.forward_kinematics()

    def forward_kinematics(self) -> np.ndarray:
        """
        Recalcula as posições de todas as juntas a partir da origem.

        Returns:
            Array (N+1, 2): linha 0 é a origem, linha i é a ponta do link i

        Raises:
            InvalidArgument: Se `angles` foi alterado para um tamanho diferente de N
        """
        if len(self.angles) != self.num_links:
            raise InvalidArgument(
                f"Número de ângulos incompatível: {len(self.angles)} presentes, {self.num_links} esperados"
            )
        positions = np.empty((self.num_links + 1, 2), dtype=np.float64)
        positions[0] = self.origin
        x, y = self.origin
        theta_cum = 0.0
        for i, theta in enumerate(self.angles):
            theta_cum += theta
            x += self.lengths[i] * np.cos(theta_cum)
            y += self.lengths[i] * np.sin(theta_cum)
            positions[i + 1] = (x, y)

        self.joint_positions = positions
        return positions

    def get_end_effector(self) -> np.ndarray:
        """
        Posição do efetuador final.

        Usa o cache de posições; só calcula a cinemática direta se o cache
        estiver vazio. Após alterar `angles` diretamente, chame
        `forward_kinematics()` antes de consultar.
        """
        if self.joint_positions is None:
            self.forward_kinematics()
        return self.joint_positions[-1].copy()

    def distance_to(self, target: Sequence[float]) -> float:
        """Distância euclidiana entre o efetuador e o alvo."""
        target = as_point(target, "target")
        return length(sub(target, self.get_end_effector()))

    def is_reachable(self, target: Sequence[float]) -> bool:
        """Verifica se o alvo está dentro do espaço de trabalho."""
        offset = sub(as_point(target, "target"), self.origin)
        return self.min_reach <= length(offset) <= self.reach

    def reset(self) -> np.ndarray:
        """Volta todas as juntas para zero (cadeia esticada ao longo de x)."""
        self.angles = np.zeros(self.num_links, dtype=np.float64)
        logger.debug("Ângulos da cadeia resetados")
        return self.forward_kinematics()

    def get_state(self) -> Dict[str, Any]:
        """
        Retorna o estado atual da cadeia.

        Returns:
            Dicionário com comprimentos, ângulos, posições e efetuador
        """
        if self.joint_positions is None:
            self.forward_kinematics()
        return {
            "lengths": list(self.lengths),
            "angles": self.angles.tolist(),
            "joint_positions": self.joint_positions.tolist(),
            "end_effector": self.get_end_effector().tolist(),
        }

    def __repr__(self):
        return f"<Chain: {self.num_links} links, reach={self.reach:g}>"
