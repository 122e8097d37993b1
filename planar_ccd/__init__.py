"""
Manipulador planar serial com cinemática inversa por CCD.
"""

from .exceptions import InvalidArgument
from .chain import Chain
from .ccd_solver import SolverOptions, SolverResult, solve_ccd
from .components import ComponentManager, Component, COMPONENT_TYPES
from .config import load_config, chain_from_config, solver_options_from_config
from .logging_config import setup_logging

__all__ = [
    'InvalidArgument',
    'Chain',
    'SolverOptions', 'SolverResult', 'solve_ccd',
    'ComponentManager', 'Component', 'COMPONENT_TYPES',
    'load_config', 'chain_from_config', 'solver_options_from_config',
    'setup_logging'
]
