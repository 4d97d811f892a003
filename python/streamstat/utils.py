"""Helpers for the NaN sentinel used by undefined statistics."""

from __future__ import annotations

import math
from typing import Type

import numpy as np


def undefined(value_type: Type[np.floating] = np.float64) -> np.floating:
    """Return the quiet NaN reported for an undefined statistic."""
    return value_type("nan")


def is_undefined(value: float) -> bool:
    return math.isnan(value)


__all__ = ["undefined", "is_undefined"]
