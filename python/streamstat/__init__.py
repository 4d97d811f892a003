"""Numerically stable streaming statistics."""

from .config import StatisticConfig, StatisticTypeError
from .statistic import Statistic, StatisticSnapshot
from .utils import is_undefined, undefined

__version__ = "0.4.4"

__all__ = [
    "Statistic",
    "StatisticConfig",
    "StatisticSnapshot",
    "StatisticTypeError",
    "undefined",
    "is_undefined",
    "__version__",
]
