from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, Union

__all__ = ["TRACE", "LoggingDescriptor"]

_MSG_TYPE = Union[str, Callable[[], str]]


TRACE = logging.DEBUG - 6
logging.addLevelName(TRACE, "TRACE")


class LoggingDescriptor:
    """A lazily created logger whose messages may be callables.

    A callable message is only evaluated if the level is enabled::

        _logger = LoggingDescriptor(name=__name__)
        _logger.debug(lambda: f"expensive {thing!r}")
    """

    def __init__(self, *, name: str, level: int = logging.NOTSET) -> None:
        self.__name = name
        self.__level = level
        self.__logger: Optional[logging.Logger] = None

    @property
    def logger(self) -> logging.Logger:
        if self.__logger is None:
            self.__logger = logging.getLogger(self.__name)
            self.set_level(self.__level)

        return self.__logger

    def log(
        self,
        level: int,
        msg: _MSG_TYPE,
        condition: Optional[Callable[[], bool]] = None,
        *args: Any,
        stacklevel: int = 2,
        extra: Optional[Mapping[str, object]] = None,
        **kwargs: Any,
    ) -> None:
        if not self.is_enabled_for(level):
            return

        if condition is not None and not condition():
            return

        self.logger.log(level, msg() if callable(msg) else msg, *args, stacklevel=stacklevel, extra=extra, **kwargs)

    def trace(
        self,
        msg: _MSG_TYPE,
        condition: Optional[Callable[[], bool]] = None,
        *args: Any,
        stacklevel: int = 3,
        **kwargs: Any,
    ) -> None:
        return self.log(TRACE, msg, condition, *args, stacklevel=stacklevel, **kwargs)

    def debug(
        self,
        msg: _MSG_TYPE,
        condition: Optional[Callable[[], bool]] = None,
        *args: Any,
        stacklevel: int = 3,
        **kwargs: Any,
    ) -> None:
        return self.log(logging.DEBUG, msg, condition, *args, stacklevel=stacklevel, **kwargs)

    def is_enabled_for(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)

    def set_level(self, level: int) -> None:
        self.logger.setLevel(level)
