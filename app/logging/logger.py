import logging
import sys
from typing import TextIO

_DEV_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
_PROD_FORMAT = "%(asctime)s %(name)s [%(levelname)s] %(message)s"


class Log:
    """Centralized logging for the OCR pipeline."""

    _logger: logging.Logger = logging.getLogger("receipt_ocr")

    @classmethod
    def configure(
        cls,
        log_level: str,
        app_env: str = "dev",
        stream: TextIO | None = None,
    ) -> None:
        """Set the level and attach a stream handler once.

        Logs go to stdout unless another stream is given; the CLI passes
        stderr so that stdout carries only its JSON result. Non-dev
        environments include the logger name so lines can be routed by the
        log collector.
        """
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(stream or sys.stdout)
            fmt = _DEV_FORMAT if app_env == "dev" else _PROD_FORMAT
            handler.setFormatter(logging.Formatter(fmt))
            cls._logger.addHandler(handler)

    @classmethod
    def is_debug(cls) -> bool:
        return cls._logger.isEnabledFor(logging.DEBUG)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)
