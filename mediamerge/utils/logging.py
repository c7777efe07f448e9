"""Logging utilities module."""

import logging
import re
import sys
from functools import lru_cache
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import ClassVar

import colorama
from colorama import Fore, Style

from mediamerge.utils.terminal import supports_color

__all__ = ["CleanFormatter", "ColorFormatter", "Logger", "get_logger"]

QUOTED_PATTERN = re.compile(r"\$\$'((?:[^']|'(?!\$\$))*)'\$\$")
BRACED_PATTERN = re.compile(r"\$\$\{(.*?)\}\$\$")

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s\t%(message)s"
DEBUG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s\t[%(threadName)s] "
    "%(filename)s:%(lineno)d\t%(message)s"
)

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


class _MarkerFormatter(logging.Formatter):
    """Renders the ``$$'...'$$`` and ``$${...}$$`` markers of a message."""

    QUOTED: ClassVar[str] = "'\\1'"
    BRACED: ClassVar[str] = "{\\1}"

    def render_level(self, levelname: str) -> str:
        return levelname

    def format(self, record: logging.LogRecord) -> str:
        saved = record.msg, record.levelname
        if isinstance(record.msg, str):
            record.msg = BRACED_PATTERN.sub(
                self.BRACED, QUOTED_PATTERN.sub(self.QUOTED, record.msg)
            )
        record.levelname = self.render_level(record.levelname)
        try:
            return super().format(record)
        finally:
            record.msg, record.levelname = saved


class ColorFormatter(_MarkerFormatter):
    """Console formatter coloring levels by severity.

    Quoted values are shown light blue and braced values dimmed.
    """

    QUOTED = f"{Fore.LIGHTBLUE_EX}'\\1'{Style.RESET_ALL}"
    BRACED = f"{Style.DIM}{{\\1}}{Style.RESET_ALL}"
    COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": Fore.CYAN,
        "INFO": Fore.GREEN,
        "SUCCESS": Fore.GREEN + Style.BRIGHT,
        "WARNING": Fore.YELLOW,
        "ERROR": Fore.RED,
        "CRITICAL": Fore.RED + Style.BRIGHT,
    }

    def render_level(self, levelname: str) -> str:
        return f"{self.COLORS.get(levelname, '')}{levelname}{Style.RESET_ALL}"


class CleanFormatter(_MarkerFormatter):
    """Plain-text formatter that drops the markers, used for log files."""


class Logger(logging.Logger):
    """Logger with a SUCCESS level that prefixes messages with the caller's class.

    Aggregators and providers share this logger, so the prefix is what tells
    their messages apart.
    """

    SUCCESS = logging.INFO + 5

    def __init__(self, name: str, level: int = logging.NOTSET) -> None:
        super().__init__(name, level)
        if logging.getLevelName(self.SUCCESS) != "SUCCESS":
            logging.addLevelName(self.SUCCESS, "SUCCESS")

    @staticmethod
    def _caller_class(depth: int) -> str | None:
        try:
            caller = sys._getframe(depth).f_locals
        except ValueError:
            return None

        owner = caller.get("self")
        if owner is not None:
            return None if isinstance(owner, logging.Logger) else type(owner).__name__
        owner = caller.get("cls")
        return owner.__name__ if isinstance(owner, type) else None

    def _log(
        self,
        level,
        msg,
        args,
        exc_info=None,
        extra=None,
        stack_info=False,
        stacklevel=1,
    ):
        # _log <- level method <- caller
        class_name = self._caller_class(3)
        if class_name and isinstance(msg, str):
            msg = f"{class_name}: {msg}"

        super()._log(
            level,
            msg,
            args,
            exc_info=exc_info,
            extra=extra,
            stack_info=stack_info,
            stacklevel=stacklevel + 1,
        )

    def success(self, msg, *args, **kwargs):
        """Log a message with SUCCESS level."""
        self.log(self.SUCCESS, msg, *args, **kwargs)

    def setup(self, log_level: str, log_dir: str | None = None) -> None:
        """Replace the handlers with a console and an optional file handler.

        Debug output also shows the thread name and source line of each
        record, since provider fetches run on pool threads.

        Args:
            log_level (str): Logging level ('DEBUG', 'INFO', 'SUCCESS', etc.)
            log_dir (str | None): Directory for the log file; no file when None.
        """
        level = self.SUCCESS if log_level == "SUCCESS" else getattr(logging, log_level)
        self.setLevel(level)

        while self.handlers:
            handler = self.handlers[0]
            self.removeHandler(handler)
            handler.close()

        log_format = DEBUG_FORMAT if level <= logging.DEBUG else DEFAULT_FORMAT
        if log_dir is not None:
            self.addHandler(self._file_handler(Path(log_dir), log_level, log_format))
        self.addHandler(self._console_handler(log_format))

        for handler in self.handlers:
            handler.setLevel(level)

    def _file_handler(
        self, log_dir: Path, log_level: str, log_format: str
    ) -> RotatingFileHandler:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_dir / f"{self.name}.{log_level}.log",
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        handler.setFormatter(CleanFormatter(log_format, datefmt=DATE_FORMAT))
        return handler

    def _console_handler(self, log_format: str) -> logging.StreamHandler:
        formatter_cls = ColorFormatter if _enable_console_colors() else CleanFormatter
        handler = logging.StreamHandler()
        handler.setFormatter(formatter_cls(log_format, datefmt=DATE_FORMAT))
        return handler


def _enable_console_colors() -> bool:
    if not supports_color():
        return False
    try:
        if sys.platform == "win32":
            colorama.just_fix_windows_console()
        else:
            colorama.init()
    except (AttributeError, OSError):
        return False
    return True


logging.setLoggerClass(Logger)


def _get_logger(
    log_name: str, log_level: str = "INFO", log_dir: str | Path | None = None
) -> Logger:
    """Return the named logger, set up for the given level and directory.

    Loggers created before ``Logger`` was installed as the logger class are
    replaced by a fresh, unregistered instance.
    """
    logger = logging.getLogger(log_name)
    if not isinstance(logger, Logger):
        logger = Logger(log_name)

    logger.setup(log_level, None if log_dir is None else str(log_dir))
    return logger


@lru_cache(maxsize=1)
def get_logger() -> Logger:
    """The application logger, configured from the settings.

    Log files go to ``logs/`` below the data path.
    """
    from mediamerge.config.settings import get_config

    config = get_config()
    return _get_logger("MediaMerge", str(config.log_level), config.data_path / "logs")
