import logging
import sys


def setup_logger(verbose: bool = False):
    """
    Configura o logger raiz do projeto.

    INFO por padrão; com `verbose` mostra também cada pivô (DEBUG).
    """
    log_format = "[%(asctime)s] [%(levelname)-8s] [%(module)-15s] - %(message)s"
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if logger.hasHandlers():
        logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    # O handler aceita tudo; quem filtra é o nível do logger
    handler.setLevel(logging.DEBUG)

    formatter = logging.Formatter(log_format, datefmt='%Y-%m-%d %H:%M:%S')
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    logging.debug("Logger configurado.")
