import logging

from pickem.config import environment


def create_logger(level: int) -> logging.Logger:
    log_format = "[%(asctime)s] [%(name)s] [%(process)d] [%(levelname)s] %(message)s"
    formatter = logging.Formatter(log_format, datefmt="%Y-%m-%d %H:%M:%S %z")

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)

    logger = logging.getLogger("pickem")
    logger.setLevel(level)
    logger.addHandler(stream_handler)
    return logger


logger = create_logger(environment.get_log_level())
