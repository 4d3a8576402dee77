import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(threadName)s %(message)s"


class Log:
    """Single process-wide logger for the ingestion pipeline.

    Worker threads share it; the thread name is part of every line so
    interleaved calls can be told apart.
    """

    _logger: logging.Logger = logging.getLogger("docingest")

    @classmethod
    def configure(cls, log_level: str) -> None:
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def exception(cls, message: str, **kwargs: object) -> None:
        """Log at ERROR with the active exception's traceback."""
        cls._logger.exception(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)
