import logging
import os
from dotenv import load_dotenv

# charge immédiatement le .env
load_dotenv()

ROOT_LOGGER = "passport_connectors"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_log_level() -> str:
    """PASSPORT_LOG_LEVEL prime sur LOG_LEVEL (INFO par défaut)."""
    return (os.getenv("PASSPORT_LOG_LEVEL") or os.getenv("LOG_LEVEL") or "INFO").upper()


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Retourne un logger rattaché à la hiérarchie 'passport_connectors'.

    Un nom extérieur (ex: 'demo') devient 'passport_connectors.demo' : le handler
    n'est installé qu'une fois, sur le logger racine du client, et les loggers
    de modules lui remontent leurs messages.
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"

    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        log_level = get_log_level()
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)
        root.setLevel(log_level)
        root.debug("Logger '%s' prêt (level=%s)", ROOT_LOGGER, log_level)

    return logging.getLogger(name)
