"""Process wide options and logging setup.

Options change the defaults of some operations,
they can be changed permanently with :func:`set_options`
or temporarily with :func:`option_context`:

>>> from rowframe import config
>>> config.get_options().merge_suffixes
('_x', '_y')
>>> with config.option_context(merge_suffixes=("_left", "_right")):
...     config.get_options().merge_suffixes
('_left', '_right')
>>> config.get_options().merge_suffixes
('_x', '_y')

rowframe logs through ``loguru``, but its messages
are disabled by default like any library should do.
Call :func:`enable_logging` to see them.
"""

import dataclasses
import sys
from contextlib import contextmanager
from typing import Any, Iterator, TextIO

from loguru import logger

from .errors import ValidationError

__all__ = (
    "Options",
    "get_options",
    "set_options",
    "option_context",
    "enable_logging",
    "disable_logging",
)

_PACKAGE = "rowframe"


@dataclasses.dataclass(frozen=True)
class Options:
    """Defaults applied when an operation is not told otherwise.

    :ivar merge_how: Join type used by ``merge`` when ``how`` is not provided.
    :ivar merge_suffixes: Suffixes used by ``merge`` to rename colliding columns.
    :ivar typed_keys: When ``True`` grouping and join keys are compared
                      using both their type and value, so that ``1`` and ``"1"``
                      are different keys. By default keys are compared
                      by their string representation.
    """

    merge_how: str = "inner"
    merge_suffixes: tuple[str, str] = ("_x", "_y")
    typed_keys: bool = False


_options = Options()


def get_options() -> Options:
    """Get the options currently in effect."""
    return _options


def set_options(**changes: Any) -> Options:
    """Change one or more options, returns the previous options."""
    global _options

    known = {f.name for f in dataclasses.fields(Options)}
    unknown = sorted(set(changes) - known)
    if unknown:
        raise ValidationError(
            f"Unknown option '{unknown[0]}'",
            operation="set_options",
            expected=f"one of {sorted(known)}",
            actual=unknown[0],
        )

    previous = _options
    _options = dataclasses.replace(_options, **changes)
    logger.debug(f"options changed: {changes}")
    return previous


@contextmanager
def option_context(**changes: Any) -> Iterator[Options]:
    """Change options for the duration of a ``with`` block."""
    global _options

    previous = set_options(**changes)
    try:
        yield _options
    finally:
        _options = previous


def enable_logging(level: str = "DEBUG", sink: TextIO = sys.stderr) -> int:
    """Enable rowframe log messages and send them to ``sink``.

    Returns the identifier of the installed sink, which
    can be provided to :func:`disable_logging` to remove it.
    """
    logger.enable(_PACKAGE)
    return logger.add(sink, level=level, filter=_PACKAGE)


def disable_logging(sink_id: int | None = None) -> None:
    """Silence rowframe log messages, removing the sink if provided."""
    if sink_id is not None:
        logger.remove(sink_id)
    logger.disable(_PACKAGE)
