"""
Rehandle Risk Model and Slot Recommendation.

Estimates, per yard slot, the probability that a future rehandle will be needed:

1. Rehandle ratio: share of moves at the slot that were rehandles, with a
   time-decay weight (14-day half-life) so recent history dominates
2. Crowd: occupied fraction of the slot's bay/row group
3. Dwell variance: spread of dwell times in the group, normalised to ~5 days std

score = sigmoid(alpha * ratio + beta * crowd + gamma * dwell_var)

New containers are placed in the eligible slot with the lowest risk, with a
small preference for slots whose dwell time matches the container's.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import pandas as pd

from yardcore.domain import (
    Millis,
    MoveLog,
    NewContainer,
    RiskFactors,
    RiskScore,
    SlotRecommendation,
    YardSlot,
)

from .primitives import MS_PER_DAY, half_life_weight, sample_variance, sigmoid

logger = logging.getLogger(__name__)


@dataclass
class RiskModelConfig:
    """Configuration for rehandle risk scoring and recommendation."""

    half_life_days: float = 14.0

    # Score coefficients
    ratio_coef: float = 3.0
    crowd_coef: float = 1.5
    dwell_var_coef: float = 1.0

    # Variance that maps to a dwell_var factor of 1 (5-day std)
    dwell_var_scale: float = 25.0

    # Recommendation
    dwell_gap_weight: float = 0.05
    default_dwell_days: float = 3.0
    unscored_risk: float = 0.5


class RehandleRiskModel:
    """
    Per-slot rehandle risk scoring.

    Stateless: every call recomputes scores from the inventory and history given.

    Usage:
        model = RehandleRiskModel()
        scores = model.compute_risk(slots, moves, now_ms)
        best = model.recommend(slots, scores, cargo)
    """

    def __init__(self, config: Optional[RiskModelConfig] = None):
        self.config = config or RiskModelConfig()

    def compute_risk(
        self,
        slots: list[YardSlot],
        moves: list[MoveLog],
        now_ms: Millis,
    ) -> list[RiskScore]:
        """
        Score every slot.

        Returns:
            Risk scores, highest risk first
        """
        if not slots:
            return []

        history = self._move_history(moves, now_ms)
        groups = self._group_stats(slots)

        scores = []
        for slot in slots:
            total, rehandled = history.get(slot.slot_id, (0.0, 0.0))
            ratio = rehandled / total if total > 0 else 0.0
            crowd, variance = groups[slot.group_key]
            dwell_var = min(1.0, variance / self.config.dwell_var_scale)

            score = sigmoid(
                self.config.ratio_coef * ratio
                + self.config.crowd_coef * crowd
                + self.config.dwell_var_coef * dwell_var
            )
            scores.append(
                RiskScore(
                    slot_id=slot.slot_id,
                    score=score,
                    factors=RiskFactors(ratio=ratio, crowd=crowd, dwell_var=dwell_var),
                )
            )

        return sorted(scores, key=lambda s: s.score, reverse=True)

    def _move_history(self, moves: list[MoveLog], now_ms: Millis) -> dict[str, tuple[float, float]]:
        """Time-decayed (total, rehandle) move weight per slot."""
        half_life_ms = self.config.half_life_days * MS_PER_DAY
        history: dict[str, tuple[float, float]] = {}

        for move in moves:
            slot_id = move.touched_slot
            if slot_id is None:
                continue
            age = max(1.0, now_ms - move.time_ms)
            weight = half_life_weight(age, half_life_ms)
            total, rehandled = history.get(slot_id, (0.0, 0.0))
            history[slot_id] = (total + weight, rehandled + (weight if move.rehandle else 0.0))

        return history

    def _group_stats(self, slots: list[YardSlot]) -> dict[tuple[int, int], tuple[float, float]]:
        """Occupied fraction and dwell sample variance per bay/row group."""
        frame = pd.DataFrame(
            {
                "bay": [s.bay for s in slots],
                "row": [s.row for s in slots],
                "occupied": [float(s.occupied) for s in slots],
                "dwell": [s.dwell_days or 0.0 for s in slots],
            }
        )
        grouped = frame.groupby(["bay", "row"])
        crowd = grouped["occupied"].mean()
        variance = grouped["dwell"].agg(lambda values: sample_variance(values.to_numpy()))

        return {
            (int(bay), int(row)): (float(crowd.loc[(bay, row)]), float(variance.loc[(bay, row)]))
            for bay, row in crowd.index
        }

    def recommend(
        self,
        slots: list[YardSlot],
        scores: list[RiskScore],
        cargo: NewContainer,
    ) -> Optional[SlotRecommendation]:
        """
        Best slot for a new container.

        Hard constraints (free, size, reefer, weight) filter the candidates;
        among the rest, minimise risk + dwell_gap_weight * |slot dwell - cargo dwell|.

        Returns:
            SlotRecommendation, or None when no slot is eligible
        """
        score_by_slot = {s.slot_id: s.score for s in scores}
        cargo_dwell = cargo.est_dwell_days or self.config.default_dwell_days

        best: Optional[SlotRecommendation] = None
        for slot in slots:
            if not slot.fits(cargo):
                continue
            risk = score_by_slot.get(slot.slot_id, self.config.unscored_risk)
            dwell_gap = abs((slot.dwell_days or self.config.default_dwell_days) - cargo_dwell)
            total = risk + self.config.dwell_gap_weight * dwell_gap
            if best is None or total < best.total_score:
                best = SlotRecommendation(
                    slot=slot, risk_score=risk, dwell_gap=dwell_gap, total_score=total
                )

        if best is None:
            logger.debug("No eligible slot for %s container", cargo.size.value)
        return best

    def recommend_slot(
        self,
        slots: list[YardSlot],
        scores: list[RiskScore],
        cargo: NewContainer,
    ) -> Optional[YardSlot]:
        """Recommended slot only, or None."""
        recommendation = self.recommend(slots, scores, cargo)
        return recommendation.slot if recommendation else None
