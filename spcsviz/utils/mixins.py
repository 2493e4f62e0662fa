"""Utility mixin classes"""

__all__ = ['LoggingMixin']

import logging
from typing import Optional, Set, Tuple


class LoggingMixin:  # pylint: disable=too-few-public-methods
    """
    Attaches a logger named '<module>.<Class>[.<suffix>]' to an instance, so that
    repositories, aligners and orbit runs all log beneath the 'spcsviz' logger.
    """
    logger: logging.Logger

    _WARNED_ONCE: Set[Tuple[str, str]] = set()

    def __init__(self, logstr: Optional[str] = None):
        _class = self.__class__
        name = f'{_class.__module__}.{_class.__qualname__}'
        if logstr:
            name += f'.{logstr}'

        self.logger = logging.getLogger(name)

    def warn_once(self, msg: str, *args) -> None:
        """Logs a warning only once per (logger, rendered message)"""
        key = (self.logger.name, msg % args if args else msg)
        if key in self._WARNED_ONCE:
            return

        self.logger.warning(msg, *args)
        self._WARNED_ONCE.add(key)
