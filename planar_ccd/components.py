"""
Componentes acoplados às juntas do manipulador.

Cada junta aceita no máximo um componente. Contrapesos têm massa e
reduzem o quanto a junta gira por passo do solver CCD.
"""

import dataclasses
import logging
import math
import numbers
from dataclasses import dataclass
from typing import Dict, List, Optional

from .ccd_solver import SolverOptions
from .chain import Chain
from .exceptions import InvalidArgument

logger = logging.getLogger(__name__)

COMPONENT_COUNTERWEIGHT = "counterweight"
COMPONENT_GRIPPER = "gripper"
COMPONENT_CAMERA = "camera"
COMPONENT_TYPES = (COMPONENT_COUNTERWEIGHT, COMPONENT_GRIPPER, COMPONENT_CAMERA)

# Fator de massa usado quando as massas vêm dos componentes
DEFAULT_COMPONENT_MASS_FACTOR = 0.8


@dataclass
class Component:
    """Componente acoplado a uma junta."""
    joint_index: int
    component_type: str
    mass: float = 0.0


class ComponentManager:
    """
    Gerencia os componentes acoplados às juntas de uma cadeia.

    Attributes:
        chain: Cadeia cujas juntas recebem os componentes
        attached: Componentes por índice de junta
    """

    def __init__(self, chain: Chain):
        self.chain = chain
        self.attached: Dict[int, Component] = {}

    def _check_joint(self, joint_index: int) -> None:
        if isinstance(joint_index, bool) or not isinstance(joint_index, numbers.Integral) \
                or not 0 <= joint_index < self.chain.num_links:
            raise InvalidArgument(
                f"Junta inválida: {joint_index!r} (cadeia com {self.chain.num_links} juntas)"
            )

    def attach(self, joint_index: int, component_type: str = COMPONENT_COUNTERWEIGHT,
               mass: float = 0.0) -> bool:
        """
        Acopla um componente a uma junta.

        Args:
            joint_index: Índice da junta (0 = base)
            component_type: Um de COMPONENT_TYPES
            mass: Massa do contrapeso (ignorada para outros tipos)

        Returns:
            False se a junta já possui um componente, True caso contrário
        """
        self._check_joint(joint_index)
        joint_index = int(joint_index)
        if component_type not in COMPONENT_TYPES:
            raise InvalidArgument(f"Tipo de componente desconhecido: {component_type!r}")
        if isinstance(mass, bool) or not isinstance(mass, numbers.Real) \
                or not math.isfinite(mass) or mass < 0:
            raise InvalidArgument(f"Massa inválida: {mass!r}")

        if joint_index in self.attached:
            logger.info(f"Junta {joint_index} já possui um componente")
            return False

        if component_type != COMPONENT_COUNTERWEIGHT:
            mass = 0.0
        self.attached[joint_index] = Component(joint_index, component_type, float(mass))
        logger.info(f"Componente '{component_type}' acoplado à junta {joint_index} (massa: {mass:.3f})")
        return True

    def detach(self, joint_index: int) -> bool:
        """Remove o componente da junta. Retorna False se não havia nenhum."""
        self._check_joint(joint_index)
        component = self.attached.pop(joint_index, None)
        if component is None:
            return False
        logger.info(f"Componente '{component.component_type}' removido da junta {joint_index}")
        return True

    def joint_masses(self) -> List[float]:
        """Massa acoplada a cada junta (somente contrapesos)."""
        masses = [0.0] * self.chain.num_links
        for component in self.attached.values():
            if component.component_type == COMPONENT_COUNTERWEIGHT:
                masses[component.joint_index] += component.mass
        return masses

    def solver_options(self, base: Optional[SolverOptions] = None) -> SolverOptions:
        """
        Opções do solver com as massas dos componentes.

        Se `base` for None, usa os padrões de SolverOptions com
        mass_factor = DEFAULT_COMPONENT_MASS_FACTOR.
        """
        if base is None:
            base = SolverOptions(mass_factor=DEFAULT_COMPONENT_MASS_FACTOR)
        return dataclasses.replace(base, joint_masses=self.joint_masses())
