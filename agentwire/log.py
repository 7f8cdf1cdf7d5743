"""Logging front end with a replaceable default logger."""

from __future__ import annotations

import logging
import sys
from typing import Any, Protocol, runtime_checkable

__all__ = [
    "Logger",
    "StdLogger",
    "set_default",
    "debug",
    "debugf",
    "info",
    "infof",
    "warn",
    "warnf",
    "error",
    "errorf",
    "fatal",
    "fatalf",
]


@runtime_checkable
class Logger(Protocol):
    """Interface every logger used by the package must provide."""

    def debug(self, *args: Any) -> None: ...

    def debugf(self, format: str, *args: Any) -> None: ...

    def info(self, *args: Any) -> None: ...

    def infof(self, format: str, *args: Any) -> None: ...

    def warn(self, *args: Any) -> None: ...

    def warnf(self, format: str, *args: Any) -> None: ...

    def error(self, *args: Any) -> None: ...

    def errorf(self, format: str, *args: Any) -> None: ...

    def fatal(self, *args: Any) -> None: ...

    def fatalf(self, format: str, *args: Any) -> None: ...


def _join(args: tuple[Any, ...]) -> str:
    """Concatenate operands, adding a space between two non-string operands."""
    pieces: list[str] = []
    previous: Any = None
    for index, arg in enumerate(args):
        if index and not isinstance(arg, str) and not isinstance(previous, str):
            pieces.append(" ")
        pieces.append(str(arg))
        previous = arg
    return "".join(pieces)


def _render(format: str, args: tuple[Any, ...]) -> str:
    return format % args if args else format


class StdLogger:
    """Logger backed by the standard :mod:`logging` module.

    ``fatal`` and ``fatalf`` log at CRITICAL level and then raise ``SystemExit(1)``.
    """

    def __init__(self, logger: logging.Logger | None = None, stacklevel: int = 2) -> None:
        self._logger = logger if logger is not None else logging.getLogger("agentwire")
        self._stacklevel = stacklevel

    def _log(self, level: int, message: str) -> None:
        self._logger.log(level, message, stacklevel=self._stacklevel + 1)

    def debug(self, *args: Any) -> None:
        self._log(logging.DEBUG, _join(args))

    def debugf(self, format: str, *args: Any) -> None:
        self._log(logging.DEBUG, _render(format, args))

    def info(self, *args: Any) -> None:
        self._log(logging.INFO, _join(args))

    def infof(self, format: str, *args: Any) -> None:
        self._log(logging.INFO, _render(format, args))

    def warn(self, *args: Any) -> None:
        self._log(logging.WARNING, _join(args))

    def warnf(self, format: str, *args: Any) -> None:
        self._log(logging.WARNING, _render(format, args))

    def error(self, *args: Any) -> None:
        self._log(logging.ERROR, _join(args))

    def errorf(self, format: str, *args: Any) -> None:
        self._log(logging.ERROR, _render(format, args))

    def fatal(self, *args: Any) -> None:
        self._log(logging.CRITICAL, _join(args))
        raise SystemExit(1)

    def fatalf(self, format: str, *args: Any) -> None:
        self._log(logging.CRITICAL, _render(format, args))
        raise SystemExit(1)


def _build_default_logger() -> logging.Logger:
    logger = logging.getLogger("agentwire")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s\t%(levelname)s\t%(filename)s:%(lineno)d\t%(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S%z",
            )
        )
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


class _Registry:
    """Holds the logger that the module-level functions forward to."""

    def __init__(self, logger: Logger) -> None:
        self.current = logger

    def swap(self, logger: Logger) -> Logger:
        if not isinstance(logger, Logger):
            raise TypeError(
                f"logger must provide the Logger methods, got {type(logger).__name__}"
            )
        previous, self.current = self.current, logger
        return previous


# Module-level functions add one frame, so the caller sits one level further up.
_registry = _Registry(StdLogger(_build_default_logger(), stacklevel=3))


def set_default(logger: Logger) -> Logger:
    """Replace the default logger and return the previous one."""
    return _registry.swap(logger)


def debug(*args: Any) -> None:
    _registry.current.debug(*args)


def debugf(format: str, *args: Any) -> None:
    _registry.current.debugf(format, *args)


def info(*args: Any) -> None:
    _registry.current.info(*args)


def infof(format: str, *args: Any) -> None:
    _registry.current.infof(format, *args)


def warn(*args: Any) -> None:
    _registry.current.warn(*args)


def warnf(format: str, *args: Any) -> None:
    _registry.current.warnf(format, *args)


def error(*args: Any) -> None:
    _registry.current.error(*args)


def errorf(format: str, *args: Any) -> None:
    _registry.current.errorf(format, *args)


def fatal(*args: Any) -> None:
    _registry.current.fatal(*args)


def fatalf(format: str, *args: Any) -> None:
    _registry.current.fatalf(format, *args)