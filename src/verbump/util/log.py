import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

_logger = logging.getLogger(__name__)


def _create_plain_handler():
    h = logging.StreamHandler(sys.stdout)
    h.setFormatter(logging.Formatter("%(message)s"))
    return h


def _create_rich_handler():
    console = Console()
    h = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        markup=True,
    )
    h.setFormatter(logging.Formatter("%(message)s"))
    return h


_handler = _create_rich_handler()
_logger.setLevel(logging.INFO)
_logger.propagate = False
_logger.addHandler(_handler)
_max_col_width = 40


def debug(msg):
    _logger.debug(msg)


def info(msg):
    _logger.info(msg)


def warning(msg):
    _logger.warning(msg)


def error(msg):
    _logger.error(msg)


def set_default_level(level):
    _logger.setLevel(level)


def is_debug_enabled():
    return _logger.isEnabledFor(logging.DEBUG)


def use_colors(colorize: bool):
    """Swap between the rich handler and a plain stdout handler."""
    global _handler
    _logger.removeHandler(_handler)
    _handler = _create_rich_handler() if colorize else _create_plain_handler()
    _logger.addHandler(_handler)


def adjust_col_width(strings):
    if not strings:
        return
    global _max_col_width
    max_width = max(len(s) for s in strings)
    _max_col_width = max_width + 4


def format_name(name):
    return name.ljust(_max_col_width)
