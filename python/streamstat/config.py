"""Construction-time parameters for :class:`~streamstat.statistic.Statistic`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Type

import numpy as np


class StatisticTypeError(TypeError):
    """Raised when an accumulator is configured with unusable numeric types."""


def _resolve_type(requested: Any, parameter: str) -> Type[np.generic]:
    try:
        return np.dtype(requested).type
    except TypeError as exc:
        raise StatisticTypeError(f"{parameter} is not a numpy scalar type: {requested!r}") from exc


@dataclass(frozen=True)
class StatisticConfig:
    """Value type, count type and variance tracking for one accumulator.

    ``value_type`` and ``count_type`` accept anything :func:`numpy.dtype`
    understands and are normalised to numpy scalar types. The value type
    must be floating point and the count type an unsigned integer.
    """

    value_type: Any = np.float64
    count_type: Any = np.uint32
    use_std_dev: bool = True

    def __post_init__(self) -> None:
        value_type = _resolve_type(self.value_type, "value_type")
        count_type = _resolve_type(self.count_type, "count_type")

        if not issubclass(value_type, np.floating):
            raise StatisticTypeError(
                f"value_type must be a floating point type, got {value_type.__name__}"
            )
        if not issubclass(count_type, np.unsignedinteger):
            raise StatisticTypeError(
                f"count_type must be an unsigned integer type, got {count_type.__name__}"
            )

        # frozen dataclass: normalised values go through object.__setattr__
        object.__setattr__(self, "value_type", value_type)
        object.__setattr__(self, "count_type", count_type)
        object.__setattr__(self, "use_std_dev", bool(self.use_std_dev))


__all__ = ["StatisticConfig", "StatisticTypeError"]
