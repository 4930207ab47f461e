import logging
import sys

from pythonjsonlogger import jsonlogger


def setup_logging(level: int | str = logging.INFO):
    """
    Configures structured JSON logging for an application using the client.

    Installs a single stdout stream handler with a JSON formatter carrying
    timestamp, level, logger name and message on the root logger, replacing
    any handlers already attached. Fields passed through ``extra`` are
    emitted as additional JSON keys.

    The library never calls this itself; applications opt in.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s"
    )
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []
    root_logger.addHandler(stream_handler)

    # urllib3 is chatty at DEBUG about every pooled connection
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return root_logger
