"""
Slot Recommendation Service.

Scores rehandle risk across the yard inventory and recommends storage slots
for incoming containers.
"""

import logging
from typing import Optional

from yardcore.config import Settings, get_settings
from yardcore.domain import (
    Millis,
    MoveLog,
    NewContainer,
    RiskScore,
    SlotRecommendation,
    YardSlot,
)
from yardcore.errors import YardInputError
from yardcore.optimization import RehandleRiskModel, RiskModelConfig

logger = logging.getLogger(__name__)


class SlotRecommendationService:
    """
    Service for rehandle risk analysis and slot placement.

    Usage:
        service = SlotRecommendationService()
        scores = service.compute_rehandle_risk(slots, moves, now_ms)
        slot = service.recommend_slot(slots, scores, cargo)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        config: Optional[RiskModelConfig] = None,
    ):
        self.settings = settings or get_settings()
        self.model = RehandleRiskModel(
            config or RiskModelConfig(half_life_days=self.settings.risk_half_life_days)
        )

    def compute_rehandle_risk(
        self,
        slots: list[YardSlot],
        moves: list[MoveLog],
        now_ms: Millis,
    ) -> list[RiskScore]:
        """Risk score per slot, highest first."""
        self._validate_slots(slots)
        scores = self.model.compute_risk(slots, moves, now_ms)
        logger.info("Scored %d slots from %d moves", len(scores), len(moves))
        return scores

    def recommend_slot(
        self,
        slots: list[YardSlot],
        scores: list[RiskScore],
        cargo: NewContainer,
    ) -> Optional[YardSlot]:
        """Best eligible slot for the container, or None."""
        recommendation = self.recommend(slots, scores, cargo)
        return recommendation.slot if recommendation else None

    def recommend(
        self,
        slots: list[YardSlot],
        scores: list[RiskScore],
        cargo: NewContainer,
    ) -> Optional[SlotRecommendation]:
        """Best eligible slot with its ranking figures, or None."""
        self._validate_slots(slots)
        recommendation = self.model.recommend(slots, scores, cargo)
        if recommendation is None:
            logger.info("No eligible slot for %s container (reefer=%s)", cargo.size.value, cargo.reefer)
        else:
            logger.info(
                "Recommended slot %s (risk %.3f, dwell gap %.1f)",
                recommendation.slot.slot_id,
                recommendation.risk_score,
                recommendation.dwell_gap,
            )
        return recommendation

    def recommend_for(
        self,
        slots: list[YardSlot],
        moves: list[MoveLog],
        now_ms: Millis,
        cargo: NewContainer,
    ) -> Optional[SlotRecommendation]:
        """Score the yard and recommend a slot in one call."""
        scores = self.compute_rehandle_risk(slots, moves, now_ms)
        return self.recommend(slots, scores, cargo)

    def _validate_slots(self, slots: list[YardSlot]) -> None:
        slot_ids = [s.slot_id for s in slots]
        if len(slot_ids) != len(set(slot_ids)):
            raise YardInputError("slot ids must be unique")
