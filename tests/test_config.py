import logging

import pytest
import yaml

from planar_ccd import (InvalidArgument, SolverOptions, chain_from_config, load_config,
                        setup_logging, solve_ccd, solver_options_from_config)
from planar_ccd.config import DEFAULT_CONFIG


def write_yaml(path, text):
    path.write_text(text, encoding='utf-8')
    return str(path)


def test_load_repository_config(repo_config_path):
    config = load_config(repo_config_path)
    assert config['chain']['link_lengths'] == [100.0, 75.0, 50.0]
    assert config['solver']['max_iterations'] == 200
    assert config['solver']['tolerance'] == 0.5


def test_partial_file_keeps_defaults(tmp_path):
    path = write_yaml(tmp_path / 'arm.yaml', "solver:\n  max_iterations: 50\n")
    config = load_config(path)
    assert config['solver']['max_iterations'] == 50
    assert config['solver']['damping'] == 1.0
    assert config['chain'] == DEFAULT_CONFIG['chain']


def test_empty_file_gives_defaults(tmp_path):
    path = write_yaml(tmp_path / 'empty.yaml', "")
    assert load_config(path) == DEFAULT_CONFIG


def test_load_does_not_mutate_defaults(tmp_path):
    path = write_yaml(tmp_path / 'arm.yaml', "chain:\n  link_lengths: [1.0]\n")
    load_config(path)
    assert DEFAULT_CONFIG['chain']['link_lengths'] == [100.0, 75.0, 50.0]


def test_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        load_config(str(tmp_path / 'missing.yaml'))


def test_malformed_yaml_raises(tmp_path):
    path = write_yaml(tmp_path / 'bad.yaml', "solver: [1, 2\n")
    with pytest.raises(yaml.YAMLError):
        load_config(path)


def test_non_mapping_yaml_raises(tmp_path):
    path = write_yaml(tmp_path / 'list.yaml', "- 1\n- 2\n")
    with pytest.raises(ValueError):
        load_config(path)


def test_chain_from_config_applies_initial_angles(tmp_path):
    path = write_yaml(tmp_path / 'arm.yaml', (
        "chain:\n"
        "  link_lengths: [1.0, 1.0]\n"
        "  origin: [1.0, 0.0]\n"
        "  initial_angles: [0.0, 0.0]\n"
    ))
    chain = chain_from_config(load_config(path))
    assert chain.lengths == (1.0, 1.0)
    assert chain.get_end_effector().tolist() == [3.0, 0.0]


def test_chain_from_config_rejects_invalid_lengths():
    with pytest.raises(InvalidArgument):
        chain_from_config({'chain': {'link_lengths': [1.0, -1.0]}})


def test_solver_options_from_config(repo_config_path):
    config = load_config(repo_config_path)
    options = solver_options_from_config(config)
    assert options == SolverOptions(max_iterations=200, tolerance=0.5)

    chain = chain_from_config(config)
    assert solve_ccd(chain, (120, 50), options).success


def test_solver_options_missing_section():
    assert solver_options_from_config({}) == SolverOptions()


@pytest.fixture
def restore_logging():
    """Remove os handlers instalados por setup_logging."""
    yield
    package_logger = logging.getLogger('planar_ccd')
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)


def test_setup_logging_without_file(restore_logging):
    assert setup_logging({'logging': {'level': 'DEBUG'}}) is None
    assert logging.getLogger('planar_ccd').level == logging.DEBUG


def test_setup_logging_accepts_empty_section(tmp_path, restore_logging):
    path = write_yaml(tmp_path / 'arm.yaml', "logging:\n")
    config = load_config(path)
    assert config['logging'] is None
    assert setup_logging(config) is None
    assert logging.getLogger('planar_ccd').level == logging.INFO


def test_setup_logging_creates_log_directory(tmp_path, restore_logging):
    log_dir = tmp_path / 'logs'
    log_file = setup_logging({'logging': {'log_to_file': True, 'log_directory': str(log_dir)}})
    assert log_dir.is_dir()
    assert log_file.startswith(str(log_dir))
    assert log_file.endswith('.log')


def test_setup_logging_writes_to_file_with_existing_root_handler(tmp_path, restore_logging):
    root_handler = logging.NullHandler()
    logging.getLogger().addHandler(root_handler)
    try:
        log_file = setup_logging({'logging': {'log_to_file': True, 'log_directory': str(tmp_path)}})
    finally:
        logging.getLogger().removeHandler(root_handler)

    logging.getLogger('planar_ccd.ccd_solver').warning('mensagem de teste')
    for handler in logging.getLogger('planar_ccd').handlers:
        handler.flush()

    with open(log_file, encoding='utf-8') as f:
        content = f.read()
    assert 'mensagem de teste' in content
    assert 'planar_ccd.ccd_solver - WARNING' in content


def test_setup_logging_replaces_previous_handlers(tmp_path, restore_logging):
    config = {'logging': {'log_to_file': True, 'log_directory': str(tmp_path)}}
    setup_logging(config)
    setup_logging(config)
    handlers = logging.getLogger('planar_ccd').handlers
    assert len(handlers) == 2
    assert sum(isinstance(h, logging.FileHandler) for h in handlers) == 1
