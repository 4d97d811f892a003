"""Recursive one-pass statistics accumulator.

Count, sum, extremes and mean are kept directly. Variance is tracked as the
sum of squared differences from the *running* mean, updated after each
observation ``x`` (``n`` being the new count) with::

    ssqdif += n * (sum / n - x) ** 2 / (n - 1)

The sum of squares is never formed. ``Σx² − n·mean²`` subtracts two large,
nearly equal numbers once the mean dwarfs the spread of the data and drifts
to zero or below; the recursive form keeps its precision in that regime.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, Optional, Type

import numpy as np

from .config import StatisticConfig
from .utils import undefined

logger = logging.getLogger(__name__)


class _SquaredDiffTracker:
    """Sum of squared differences from the running mean."""

    __slots__ = ("ssqdif",)
    enabled = True

    def __init__(self, zero: np.floating) -> None:
        self.ssqdif = zero

    def clear(self, zero: np.floating) -> None:
        self.ssqdif = zero


class _NoTracker:
    """Tracker used when variance is disabled. Holds no state."""

    __slots__ = ()
    enabled = False

    def clear(self, zero: np.floating) -> None:
        pass


# stateless, so every untracked accumulator shares it
_NO_TRACKER = _NoTracker()


@dataclass(frozen=True)
class StatisticSnapshot:
    """Every query of a :class:`Statistic` captured at one point in time."""

    count: int
    sum: float
    minimum: float
    maximum: float
    average: float
    variance: float
    pop_stdev: float
    unbiased_stdev: float

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


class Statistic:
    """Streaming count/sum/min/max/mean and optional variance.

    ``value_type`` must be a numpy floating type and ``count_type`` a numpy
    unsigned integer type; all arithmetic happens in ``value_type``. With
    ``use_std_dev=False`` the variance family of queries always returns NaN
    and no storage is spent on it.

    Undefined results (anything divided by a zero count) are NaN, never an
    exception. The accumulator does no locking of its own.
    """

    __slots__ = ("_value_type", "_count_type", "_cnt", "_sum", "_min", "_max", "_extra")

    def __init__(
        self,
        value_type: Any = np.float64,
        count_type: Any = np.uint32,
        *,
        use_std_dev: bool = True,
    ) -> None:
        if isinstance(value_type, bool):
            warnings.warn(
                "Statistic(bool) is deprecated, use Statistic() instead",
                DeprecationWarning,
                stacklevel=2,
            )
            value_type = np.float64

        config = StatisticConfig(value_type, count_type, use_std_dev)
        self._value_type: Type[np.floating] = config.value_type
        self._count_type: Type[np.unsignedinteger] = config.count_type
        if config.use_std_dev:
            self._extra = _SquaredDiffTracker(self._value_type(0))
        else:
            self._extra = _NO_TRACKER
        self._reset()
        logger.debug(
            "Created Statistic value_type=%s count_type=%s use_std_dev=%s",
            self._value_type.__name__,
            self._count_type.__name__,
            config.use_std_dev,
        )

    @classmethod
    def from_config(cls, config: StatisticConfig) -> "Statistic":
        return cls(config.value_type, config.count_type, use_std_dev=config.use_std_dev)

    # ------------------------------------------------------------------
    @property
    def value_type(self) -> Type[np.floating]:
        return self._value_type

    @property
    def count_type(self) -> Type[np.unsignedinteger]:
        return self._count_type

    @property
    def use_std_dev(self) -> bool:
        return self._extra.enabled

    # ------------------------------------------------------------------
    def _reset(self) -> None:
        zero = self._value_type(0)
        self._cnt = self._count_type(0)
        self._sum = zero
        self._min = zero
        self._max = zero
        self._extra.clear(zero)

    def clear(self, use_std_dev: Optional[bool] = None) -> None:
        """Return to the empty state.

        Passing ``use_std_dev`` is the legacy form of this call; the argument
        is ignored.
        """
        if use_std_dev is not None:
            warnings.warn(
                "clear(bool) is deprecated, use clear() instead",
                DeprecationWarning,
                stacklevel=2,
            )
        self._reset()
        logger.debug("Cleared Statistic")

    def add(self, value: float) -> np.floating:
        """Add one observation.

        Returns ``sum_after - sum_before``: the observation itself unless the
        running sum rounded while absorbing it. Non-finite values are not
        checked and propagate into every later result.
        """
        value = self._value_type(value)
        previous_sum = self._sum

        if self._cnt == 0:
            self._min = value
            self._max = value
        elif value < self._min:
            self._min = value
        elif value > self._max:
            self._max = value

        self._sum = self._sum + value
        self._cnt = self._cnt + self._count_type(1)

        if self._extra.enabled and self._cnt > 1:
            n = self._value_type(self._cnt)
            delta = self._sum / n - value
            self._extra.ssqdif = self._extra.ssqdif + n * delta * delta / (n - 1)

        return self._sum - previous_sum

    def add_values(self, values: Iterable[float]) -> int:
        added = 0
        for value in values:
            self.add(value)
            added += 1
        return added

    # Queries --------------------------------------------------------------

    def count(self) -> np.unsignedinteger:
        return self._cnt

    def sum(self) -> np.floating:
        return self._sum

    def minimum(self) -> np.floating:
        return self._min

    def maximum(self) -> np.floating:
        return self._max

    def average(self) -> np.floating:
        if self._cnt == 0:
            return undefined(self._value_type)
        return self._sum / self._value_type(self._cnt)

    def variance(self) -> np.floating:
        """Population variance, NaN when empty or not tracked."""
        if not self._extra.enabled or self._cnt == 0:
            return undefined(self._value_type)
        return self._extra.ssqdif / self._value_type(self._cnt)

    def pop_stdev(self) -> np.floating:
        if not self._extra.enabled or self._cnt == 0:
            return undefined(self._value_type)
        return np.sqrt(self._extra.ssqdif / self._value_type(self._cnt))

    def unbiased_stdev(self) -> np.floating:
        """Sample standard deviation (divisor ``count - 1``), NaN below two values."""
        if not self._extra.enabled or self._cnt < 2:
            return undefined(self._value_type)
        return np.sqrt(self._extra.ssqdif / (self._value_type(self._cnt) - 1))

    def snapshot(self) -> StatisticSnapshot:
        return StatisticSnapshot(
            count=int(self._cnt),
            sum=float(self._sum),
            minimum=float(self._min),
            maximum=float(self._max),
            average=float(self.average()),
            variance=float(self.variance()),
            pop_stdev=float(self.pop_stdev()),
            unbiased_stdev=float(self.unbiased_stdev()),
        )

    def __len__(self) -> int:
        return int(self._cnt)

    def __repr__(self) -> str:
        return (
            f"Statistic(value_type={self._value_type.__name__}, "
            f"count_type={self._count_type.__name__}, "
            f"use_std_dev={self._extra.enabled}, "
            f"count={int(self._cnt)}, average={float(self.average())})"
        )


__all__ = ["Statistic", "StatisticSnapshot"]
