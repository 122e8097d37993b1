"""
Configuração do sistema de logging.
"""

import logging
import os
from datetime import datetime
from typing import Any, Dict, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(config: Dict[str, Any]) -> Optional[str]:
    """
    Configura o logger 'planar_ccd' a partir da seção 'logging'.

    Os handlers são instalados no logger do pacote (não no raiz), então
    funcionam mesmo se a aplicação já configurou o logging. Chamadas
    repetidas substituem e fecham os handlers anteriores.

    Args:
        config: Dicionário de configuração (ver planar_ccd.config)

    Returns:
        Caminho do arquivo de log, ou None se log em arquivo desabilitado
    """
    section = config.get('logging') or {}
    level = getattr(logging, str(section.get('level', 'INFO')).upper(), logging.INFO)
    handlers = [logging.StreamHandler()]

    log_file = None
    if section.get('log_to_file', False):
        log_dir = section.get('log_directory', './logs')
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)

        log_file = os.path.join(
            log_dir,
            f"ccd_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
        )
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    package_logger = logging.getLogger('planar_ccd')
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return log_file
