"""
Logging configuration for gitlab-api-client

The library logs under the "gitlab_api" hierarchy. A NullHandler keeps it
silent until setup_logging() is called or the host application configures
logging itself; records always propagate to the host's handlers.
"""

import logging
import sys
from pathlib import Path

ROOT_LOGGER_NAME = "gitlab_api"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


class GitlabApiLogger:
    """Attaches console and file handlers to the library logger"""

    def __init__(
        self,
        name: str = ROOT_LOGGER_NAME,
        log_file: Path | None = None,
        console_output: bool = True,
        console_level: int = logging.INFO,
    ):
        """
        Args:
            name: Logger name (usually "gitlab_api")
            log_file: File receiving DEBUG output (optional)
            console_output: Whether to print to stdout
            console_level: Minimum level printed to stdout
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)
        self._detach_handlers()

        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

        if console_output:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(console_level)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

        if not self.logger.handlers:
            self.logger.addHandler(logging.NullHandler())

    def _detach_handlers(self) -> None:
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

    def get_logger(self) -> logging.Logger:
        return self.logger


def setup_logging(
    log_file: Path | None = None, verbose: bool = True, level: int = logging.INFO
) -> logging.Logger:
    """
    Setup logging for the library

    Args:
        log_file: Optional file receiving DEBUG output (e.g., logs/requests.log)
        verbose: Whether to also print to stdout
        level: Minimum level printed to stdout

    Returns:
        Configured logger instance
    """
    return GitlabApiLogger(
        ROOT_LOGGER_NAME, log_file=log_file, console_output=verbose, console_level=level
    ).get_logger()


def reset_logging() -> logging.Logger:
    """Drop handlers added by setup_logging() and go back to the silent default"""
    return GitlabApiLogger(ROOT_LOGGER_NAME, console_output=False).get_logger()


def get_module_logger(module_name: str) -> logging.Logger:
    """
    Get logger for a specific module

    Args:
        module_name: Name of the module (e.g., 'http_client', 'request_builder')

    Returns:
        Logger instance
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{module_name}")
