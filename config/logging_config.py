"""
Configuration du logging du visualiseur.

Console toujours active, fichier UTF-8 en option; les deux partagent LOG_FORMAT.
"""
import logging
from typing import List, Optional

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

# Bibliothèques trop bavardes en DEBUG
QUIET_LOGGERS = ('vispy', 'PIL')


def _handlers(level: int, log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def configure_logging(log_level: str = 'INFO', log_file: Optional[str] = None) -> None:
    """
    Configure le logger racine du visualiseur.

    Args:
        log_level: Niveau de log (DEBUG, INFO, WARNING, ERROR); inconnu -> INFO
        log_file: Fichier de log UTF-8 en plus de la console (optionnel)
    """
    level = getattr(logging, str(log_level).upper(), logging.INFO)
    logging.basicConfig(level=level, handlers=_handlers(level, log_file), force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))
