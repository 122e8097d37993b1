"""
Carregamento da configuração YAML do manipulador.

O arquivo é mesclado sobre DEFAULT_CONFIG, então seções ou chaves
ausentes mantêm os valores padrão.
"""

import copy
import logging
import os
from typing import Any, Dict, Optional

import yaml

from .ccd_solver import SolverOptions
from .chain import Chain

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(__file__),
    '..',
    'config',
    'arm_config.yaml'
)

DEFAULT_CONFIG: Dict[str, Any] = {
    'chain': {
        'link_lengths': [100.0, 75.0, 50.0],
        'origin': [0.0, 0.0],
        'initial_angles': None,
    },
    'solver': {
        'max_iterations': 100,
        'tolerance': 1e-3,
        'early_exit': True,
        'damping': 1.0,
        'joint_masses': None,
        'mass_factor': 0.5,
    },
    'logging': {
        'level': 'INFO',
        'log_directory': './logs',
        'log_to_file': False,
    },
}


def _deep_update(base: Dict, update: Dict) -> None:
    for key, value in update.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_update(base[key], value)
        else:
            base[key] = value


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Carrega configuração do arquivo YAML.

    Args:
        config_path: Caminho para arquivo YAML (usa DEFAULT_CONFIG_PATH se None)

    Returns:
        Dicionário com configurações
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    config = copy.deepcopy(DEFAULT_CONFIG)
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Erro ao carregar configuração: {e}")
        raise

    if loaded:
        if not isinstance(loaded, dict):
            raise ValueError(f"Configuração inválida em {config_path}: esperado um mapeamento")
        _deep_update(config, loaded)
    logger.info(f"Configuração carregada de {config_path}")
    return config


def chain_from_config(config: Dict[str, Any]) -> Chain:
    """Cria a cadeia descrita na seção 'chain' e aplica os ângulos iniciais."""
    section = config.get('chain') or DEFAULT_CONFIG['chain']
    origin = section.get('origin')
    if origin is None:
        origin = DEFAULT_CONFIG['chain']['origin']
    chain = Chain(
        section.get('link_lengths', DEFAULT_CONFIG['chain']['link_lengths']),
        origin=origin
    )
    initial_angles = section.get('initial_angles')
    if initial_angles is not None:
        chain.set_angles(initial_angles)
    else:
        chain.forward_kinematics()
    return chain


def solver_options_from_config(config: Dict[str, Any]) -> SolverOptions:
    """Cria SolverOptions a partir da seção 'solver'."""
    section = dict(DEFAULT_CONFIG['solver'])
    section.update(config.get('solver') or {})
    return SolverOptions(
        max_iterations=section['max_iterations'],
        tolerance=section['tolerance'],
        early_exit=section['early_exit'],
        damping=section['damping'],
        joint_masses=section['joint_masses'],
        mass_factor=section['mass_factor'],
    )
