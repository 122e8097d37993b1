import os

import pytest

from planar_ccd import Chain

CONFIG_DIR = os.path.join(os.path.dirname(__file__), '..', 'config')


@pytest.fixture
def chain():
    """Cadeia de 3 links usada nos exemplos (alcance 225)."""
    return Chain([100, 75, 50])


@pytest.fixture
def repo_config_path():
    return os.path.join(CONFIG_DIR, 'arm_config.yaml')
