"""
Category logger

One line per event, optional key/value details drawn as a tree under it:

    [14:23:45.120] ENGINE    ✓ Status changed
                   ├─ old: NOT_STARTED
                   └─ new: PLAYING

Timestamps carry milliseconds so consecutive frames can be told apart.
Every module binds a category once at import time:

    log = get_logger().for_category(LogCategory.SCHEDULER)
"""

import traceback
from datetime import datetime
from typing import Any, Callable, Dict, List, NamedTuple, Optional

from svganimation.models.enums import LogLevel, LogCategory

Sink = Callable[[str], None]

_ESC = '\033['
RESET = f'{_ESC}0m'
DIM = f'{_ESC}2m'


class LevelStyle(NamedTuple):
    rank: int
    symbol: str
    color: str


LEVEL_STYLES: Dict[LogLevel, LevelStyle] = {
    LogLevel.DEBUG: LevelStyle(0, '·', DIM),
    LogLevel.INFO: LevelStyle(1, '✓', f'{_ESC}32m'),
    LogLevel.WARN: LevelStyle(2, '⚠', f'{_ESC}33m'),
    LogLevel.ERROR: LevelStyle(3, '✗', f'{_ESC}31m'),
}

# Animation-side categories in warm colors, plumbing in cool ones
CATEGORY_COLORS: Dict[LogCategory, str] = {
    LogCategory.ANIMATION: f'{_ESC}93m',
    LogCategory.ENGINE: f'{_ESC}96m',
    LogCategory.SCENE: f'{_ESC}92m',
    LogCategory.INTERFACE: f'{_ESC}95m',
    LogCategory.SCHEDULER: f'{_ESC}35m',
    LogCategory.TASK: f'{_ESC}94m',
    LogCategory.CONFIG: f'{_ESC}36m',
    LogCategory.SYSTEM: f'{_ESC}97m',
}

CATEGORY_WIDTH = 9


def format_value(value: Any) -> str:
    """Render a detail value; floats are trimmed to 4 decimals"""
    if isinstance(value, float):
        text = f"{value:.4f}".rstrip('0').rstrip('.')
        return text if text not in ('', '-0') else '0'
    if isinstance(value, (list, tuple)):
        return ", ".join(format_value(v) for v in value)
    return str(value)


class Logger:
    """
    Writes formatted lines to a sink (print by default).

    A single instance is shared by the package; configure_logger() and the
    tests change it in place so bound loggers never go stale.
    """

    def __init__(self, min_level: LogLevel = LogLevel.INFO, use_colors: bool = True):
        self.min_level = min_level
        self.use_colors = use_colors
        self._sink: Sink = print

    def set_sink(self, sink: Optional[Sink]) -> None:
        """Send lines somewhere else; None goes back to print"""
        self._sink = sink or print

    def enabled_for(self, level: LogLevel) -> bool:
        return LEVEL_STYLES[level].rank >= LEVEL_STYLES[self.min_level].rank

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{RESET}" if self.use_colors else text

    def _header(self, stamp: str, category: LogCategory, level: LogLevel, message: str) -> str:
        style = LEVEL_STYLES[level]
        label = self._paint(category.name.ljust(CATEGORY_WIDTH), CATEGORY_COLORS.get(category, ''))
        return f"{stamp} {label} {self._paint(style.symbol, style.color)} {self._paint(message, style.color)}"

    def _detail_lines(self, indent: str, items: List[str]) -> List[str]:
        last = len(items) - 1
        return [
            f"{indent}{self._paint('└─' if i == last else '├─', DIM)} {item}"
            for i, item in enumerate(items)
        ]

    def log(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        details: Optional[list] = None,
        exc_info: bool = False,
        **fields
    ) -> None:
        """
        Emit one event.

        Args:
            category: Subsystem the event belongs to
            message: Headline
            level: Severity, dropped when below min_level
            details: Preformatted detail strings, shown before the fields
            exc_info: Also dump the traceback of the exception being handled
            **fields: Shown as "key: value" detail lines
        """
        if not self.enabled_for(level):
            return

        stamp = datetime.now().strftime('[%H:%M:%S.%f')[:-3] + ']'
        lines = [self._header(stamp, category, level, message)]

        items = list(details or [])
        items.extend(f"{key}: {format_value(value)}" for key, value in fields.items())
        if items:
            lines.extend(self._detail_lines(" " * (len(stamp) + 1), items))

        if exc_info:
            trace = traceback.format_exc()
            if not trace.startswith("NoneType: None"):
                lines.append(self._paint(trace.rstrip(), DIM))

        for line in lines:
            self._sink(line)

    def debug(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.DEBUG, **kw)
    def info(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.INFO, **kw)
    def warn(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.WARN, **kw)
    def error(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.ERROR, **kw)

    def for_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self, category)


class BoundLogger:
    """Shortcut over Logger with the category filled in"""

    def __init__(self, base: Logger, category: LogCategory):
        self._base = base
        self._category = category

    @property
    def category(self) -> LogCategory:
        return self._category

    def log(self, message: str, level: LogLevel = LogLevel.INFO, category: Optional[LogCategory] = None, **kw):
        self._base.log(category or self._category, message, level, **kw)

    def debug(self, message: str, **kw): self.log(message, LogLevel.DEBUG, **kw)
    def info(self, message: str, **kw): self.log(message, LogLevel.INFO, **kw)
    def warn(self, message: str, **kw): self.log(message, LogLevel.WARN, **kw)
    def error(self, message: str, **kw): self.log(message, LogLevel.ERROR, **kw)

    def with_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self._base, category)


_logger = Logger()


def get_logger() -> Logger:
    return _logger


def get_category_logger(category: LogCategory) -> BoundLogger:
    return _logger.for_category(category)


def configure_logger(min_level: LogLevel = LogLevel.INFO, use_colors: bool = True) -> None:
    """Adjust the shared logger in place"""
    _logger.min_level = min_level
    _logger.use_colors = use_colors
