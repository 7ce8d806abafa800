"""
Incident domain models.

Safety and equipment incidents reported by yard staff, and the per-area
risk and container ETA figures derived from them.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field

from .yard import RiskLevel


class IncidentSeverity(str, Enum):
    """Reported severity."""

    MINOR = "minor"
    MODERATE = "moderate"
    MAJOR = "major"


class IncidentStatus(str, Enum):
    """Handling state."""

    OPEN = "open"  # Being handled
    RESOLVED = "resolved"  # Action completed


def area_key_for(location: str) -> str:
    """Yard area is the first character of the location code."""
    location = location.strip()
    return location[0] if location else "?"


class Incident(BaseModel):
    """An incident at a yard location (e.g. "A-03")."""

    incident_id: int
    title: str
    location: str = ""
    severity: IncidentSeverity = IncidentSeverity.MINOR
    status: IncidentStatus = IncidentStatus.OPEN
    occurred_at: datetime | None = None
    description: str = ""

    @property
    def area_key(self) -> str:
        return area_key_for(self.location)


class AreaRisk(BaseModel):
    """Relative incident risk of a yard area."""

    area_key: str
    score: Annotated[int, Field(ge=0, le=100)]
    level: RiskLevel

    model_config = {"frozen": True}


class ContainerEta(BaseModel):
    """Expected handling completion for a container in a given area."""

    eta: datetime
    delay_minutes: int
    total_minutes: int
    risk_level: RiskLevel

    model_config = {"frozen": True}
