"""
Yard inventory domain models.

Slots are addressed by bay/row/tier. Move logs record historical container moves,
flagging unproductive rehandles. Risk scores are derived per slot.
"""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field, computed_field

from .equipment import FiniteFloat


class SlotSize(str, Enum):
    """Container size class (feet)."""

    TWENTY = "20"
    FORTY = "40"


class MoveReason(str, Enum):
    """Why a container was moved."""

    LOAD = "LOAD"
    DISCH = "DISCH"
    SHIFT = "SHIFT"
    REMOVAL = "REMOVAL"


class RiskLevel(str, Enum):
    """Coarse risk category."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class YardSlot(BaseModel):
    """
    A storage location in the yard.

    Owned by the yard inventory system; the risk engine only reads it.
    """

    slot_id: str = Field(min_length=1)  # e.g. B12-R03-T04
    bay: int
    row: int
    tier: int
    size: SlotSize
    reefer: bool = False
    max_weight: float | None = Field(default=None, ge=0)
    occupied: bool = False
    dwell_days: float | None = Field(default=None, ge=0)  # Average dwell of units stored here

    model_config = {"frozen": True}

    @property
    def group_key(self) -> tuple[int, int]:
        """Neighbourhood key: slots sharing bay and row."""
        return (self.bay, self.row)

    def fits(self, cargo: "NewContainer") -> bool:
        """Hard placement constraints: free, same size, reefer plug, weight capacity."""
        if self.occupied or self.size != cargo.size:
            return False
        if cargo.reefer and not self.reefer:
            return False
        if cargo.weight is not None and self.max_weight is not None:
            return self.max_weight >= cargo.weight
        return True


class MoveLog(BaseModel):
    """Historical container move."""

    time_ms: FiniteFloat
    from_slot: str | None = None
    to_slot: str | None = None
    reason: MoveReason
    rehandle: bool = False

    model_config = {"frozen": True}

    @property
    def touched_slot(self) -> str | None:
        """Slot this move is attributed to (destination preferred)."""
        return self.to_slot or self.from_slot


class RiskFactors(BaseModel):
    """Contributions to a slot's rehandle risk."""

    ratio: float  # Time-decayed rehandle share of moves at this slot
    crowd: float  # Occupied fraction of the bay/row group
    dwell_var: float  # Normalised dwell-time variance of the bay/row group

    model_config = {"frozen": True}


class RiskScore(BaseModel):
    """Rehandle risk for one slot."""

    slot_id: str
    score: Annotated[float, Field(ge=0.0, le=1.0)]
    factors: RiskFactors

    model_config = {"frozen": True}

    @computed_field
    @property
    def risk_level(self) -> RiskLevel:
        if self.score >= 0.75:
            return RiskLevel.HIGH
        if self.score >= 0.6:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW


class NewContainer(BaseModel):
    """Descriptor of an incoming container that needs a slot."""

    size: SlotSize
    weight: float | None = Field(default=None, ge=0)
    reefer: bool = False
    est_dwell_days: float | None = Field(default=None, ge=0)


class SlotRecommendation(BaseModel):
    """Best slot for a container, with the figures that ranked it."""

    slot: YardSlot
    risk_score: float
    dwell_gap: float
    total_score: float

    model_config = {"frozen": True}
