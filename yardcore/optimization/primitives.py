"""
Shared numeric helpers for the scheduling, slot risk and routing models.
"""

from typing import Sequence

import numpy as np
from scipy.spatial.distance import cdist
from scipy.special import expit

MS_PER_DAY = 24 * 3600 * 1000


def euclidean(a: Sequence[float], b: Sequence[float]) -> float:
    """Straight-line distance between two planar points."""
    return float(np.hypot(a[0] - b[0], a[1] - b[1]))


def pairwise_distances(points: Sequence[Sequence[float]], target: Sequence[float]) -> np.ndarray:
    """Distances from each point to a single target point."""
    if len(points) == 0:
        return np.empty(0)
    return cdist(np.asarray(points, dtype=float), np.asarray([target], dtype=float))[:, 0]


def sigmoid(x: float) -> float:
    """Logistic function, mapping any real to (0, 1)."""
    return float(expit(x))


def half_life_weight(age: float, half_life: float) -> float:
    """
    Exponential time-decay weight.

    A record `half_life` old counts half as much as a fresh one.
    """
    return float(0.5 ** (age / half_life))


def sample_variance(values: Sequence[float]) -> float:
    """Variance with a (n - 1) denominator, floored at 1 so singletons give 0."""
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return 0.0
    return float(np.sum((arr - arr.mean()) ** 2) / max(1, arr.size - 1))
