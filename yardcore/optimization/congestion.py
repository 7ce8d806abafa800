"""
Congestion-adaptive travel-time model.

Learns per-edge travel time from telemetry with an exponentially weighted
moving average:

    estimate <- alpha * sample + (1 - alpha) * estimate

The first sample on an edge seeds the estimate. Observed edges are never
forgotten; only new samples are smoothed in.
"""

import threading
from typing import Iterable, Optional

from yardcore.domain import Telemetry

DEFAULT_ALPHA = 0.25


class TravelTimeModel:
    """
    EWMA travel-time estimates keyed by edge id.

    Owned by the host for the lifetime of a routing session and passed into
    update and route calls. Updates and reads are serialised with a lock, so a
    model may be shared between threads.

    Usage:
        model = TravelTimeModel(alpha=0.25)
        model.update(samples)
        model.estimate("E1")
    """

    def __init__(self, alpha: float = DEFAULT_ALPHA):
        if not 0.0 < alpha <= 1.0:
            raise ValueError(f"alpha must be in (0, 1], got {alpha}")
        self.alpha = alpha
        self._ewma: dict[str, float] = {}
        self._lock = threading.RLock()

    def observe(self, sample: Telemetry) -> float:
        """Fold one sample into its edge estimate and return the new estimate."""
        with self._lock:
            previous = self._ewma.get(sample.edge_id, sample.travel_s)
            estimate = self.alpha * sample.travel_s + (1.0 - self.alpha) * previous
            self._ewma[sample.edge_id] = estimate
            return estimate

    def update(self, samples: Iterable[Telemetry]) -> None:
        """Apply a batch of samples in the order supplied."""
        with self._lock:
            for sample in samples:
                self.observe(sample)

    def estimate(self, edge_id: str) -> Optional[float]:
        """Current estimate in seconds, or None if the edge was never observed."""
        with self._lock:
            return self._ewma.get(edge_id)

    def snapshot(self) -> dict[str, float]:
        """Copy of all current estimates."""
        with self._lock:
            return dict(self._ewma)

    def __contains__(self, edge_id: str) -> bool:
        with self._lock:
            return edge_id in self._ewma

    def __len__(self) -> int:
        with self._lock:
            return len(self._ewma)

    def __repr__(self) -> str:
        return f"TravelTimeModel(alpha={self.alpha}, edges={len(self)})"
