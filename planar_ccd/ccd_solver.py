"""
Solver de cinemática inversa por Cyclic Coordinate Descent (CCD).

A cada passada, as juntas são corrigidas da ponta para a base: cada junta
gira o efetuador em direção ao alvo, e a cinemática direta é recalculada
antes de corrigir a próxima junta. Juntas com massa acoplada giram menos
por passo.
"""

import dataclasses
import logging
import math
import numbers
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .chain import Chain
from .exceptions import InvalidArgument
from .vector2d import angle_between, as_point, sub

logger = logging.getLogger(__name__)


@dataclass
class SolverOptions:
    """Configuração do solver CCD."""
    max_iterations: int = 100
    tolerance: float = 1e-3
    early_exit: bool = True
    damping: float = 1.0
    joint_masses: Optional[Sequence[float]] = None
    mass_factor: float = 0.5

    def normalized(self, num_joints: int) -> "SolverOptions":
        """
        Valida as opções e preenche os valores padrão.

        Args:
            num_joints: Número de juntas da cadeia

        Returns:
            Nova instância com `joint_masses` como tupla de N floats

        Raises:
            InvalidArgument: Se alguma opção estiver fora do domínio
        """
        if isinstance(self.max_iterations, bool) or not isinstance(self.max_iterations, numbers.Integral) \
                or self.max_iterations < 1:
            raise InvalidArgument(f"max_iterations deve ser inteiro positivo: {self.max_iterations!r}")
        if not _is_finite(self.tolerance) or self.tolerance < 0:
            raise InvalidArgument(f"tolerance deve ser não negativa: {self.tolerance!r}")
        if not _is_finite(self.damping) or self.damping <= 0:
            raise InvalidArgument(f"damping deve ser positivo: {self.damping!r}")
        if not _is_finite(self.mass_factor) or self.mass_factor < 0:
            raise InvalidArgument(f"mass_factor deve ser não negativo: {self.mass_factor!r}")
        if self.damping > 1.0:
            logger.warning("damping=%s > 1: as correções podem ultrapassar o alvo", self.damping)

        if self.joint_masses is None:
            masses = (0.0,) * num_joints
        else:
            masses = tuple(self.joint_masses)
            if len(masses) != num_joints:
                raise InvalidArgument(
                    f"joint_masses deve ter {num_joints} valores, recebidos {len(masses)}"
                )
            if not all(_is_finite(m) and m >= 0 for m in masses):
                raise InvalidArgument(f"joint_masses devem ser não negativas: {list(masses)}")
            masses = tuple(float(m) for m in masses)

        return dataclasses.replace(
            self,
            max_iterations=int(self.max_iterations),
            tolerance=float(self.tolerance),
            early_exit=bool(self.early_exit),
            damping=float(self.damping),
            joint_masses=masses,
            mass_factor=float(self.mass_factor),
        )


@dataclass
class SolverResult:
    """
    Resultado de uma chamada ao solver.

    Attributes:
        success: True se a distância final ficou dentro da tolerância
        iterations: Número de passadas completas executadas
        distance: Distância final entre efetuador e alvo
        history: Distância ao fim de cada passada
    """
    success: bool
    iterations: int
    distance: float
    history: List[float] = field(default_factory=list)


def _is_finite(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def solve_ccd(
    chain: Chain,
    target: Tuple[float, float],
    options: Optional[SolverOptions] = None
) -> SolverResult:
    """
    Aproxima o efetuador do alvo ajustando os ângulos da cadeia.

    Os ângulos são alterados no próprio objeto `chain` e não são
    restaurados em caso de falha.

    Args:
        chain: Cadeia a ser ajustada
        target: Posição alvo (x, y)
        options: Opções do solver (padrões de SolverOptions se None)

    Returns:
        SolverResult com sucesso, iterações e distância final

    Raises:
        InvalidArgument: Se o alvo ou as opções forem inválidos
    """
    opts = (options or SolverOptions()).normalized(chain.num_links)
    target = as_point(target, "target")
    logger.debug(f"Resolvendo CCD para alvo {target.tolist()} com {opts}")

    scales = [1.0 / (1.0 + opts.mass_factor * mass) for mass in opts.joint_masses]
    history: List[float] = []

    chain.forward_kinematics()

    for iteration in range(opts.max_iterations):
        # Da junta mais próxima do efetuador até a base
        for i in range(chain.num_links - 1, -1, -1):
            joint_pos = chain.joint_positions[i]
            end_pos = chain.get_end_effector()
            v_eff = sub(end_pos, joint_pos)
            v_target = sub(target, joint_pos)

            correction = angle_between(v_eff, v_target)
            chain.angles[i] += correction * opts.damping * scales[i]
            chain.forward_kinematics()

        distance = chain.distance_to(target)
        history.append(distance)
        if opts.early_exit and distance <= opts.tolerance:
            logger.info(f"CCD convergiu em {iteration + 1} iterações (distância: {distance:.6f})")
            return SolverResult(True, iteration + 1, distance, history)

    distance = chain.distance_to(target)
    if opts.early_exit or distance > opts.tolerance:
        logger.warning(
            f"CCD não convergiu após {opts.max_iterations} iterações "
            f"(distância: {distance:.6f}, tolerância: {opts.tolerance})"
        )
    else:
        # Sem saída antecipada o resultado é sempre marcado como falha
        logger.info(f"CCD executou {opts.max_iterations} iterações sem saída antecipada (distância: {distance:.6f})")
    return SolverResult(False, opts.max_iterations, distance, history)
