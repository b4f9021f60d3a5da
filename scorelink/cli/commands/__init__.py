from . import codec
from . import exchange

from ..helpers import OutputHelper, CONSOLE_WIDTH

__all__ = [
    'codec',
    'exchange',
    'OutputHelper',
    'CONSOLE_WIDTH',
]
