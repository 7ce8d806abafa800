"""
Domain models for the Yard Operations Optimization Core.

Snapshot entities supplied by the host and the results returned to it.
All models use Pydantic for validation at the boundary.
"""

from .equipment import (
    Seconds,
    Millis,
    Point,
    ResourceType,
    JobKind,
    Resource,
    Job,
    ScheduleWeights,
    Assignment,
    OutcomeStatus,
    AssignmentOutcome,
    YardSnapshot,
    SchedulePlan,
)
from .yard import (
    SlotSize,
    MoveReason,
    RiskLevel,
    YardSlot,
    MoveLog,
    RiskFactors,
    RiskScore,
    NewContainer,
    SlotRecommendation,
)
from .routing import Node, Edge, Telemetry, Route
from .incident import IncidentSeverity, IncidentStatus, Incident, AreaRisk, ContainerEta, area_key_for

__all__ = [
    # Equipment
    "Seconds",
    "Millis",
    "Point",
    "ResourceType",
    "JobKind",
    "Resource",
    "Job",
    "ScheduleWeights",
    "Assignment",
    "OutcomeStatus",
    "AssignmentOutcome",
    "YardSnapshot",
    "SchedulePlan",
    # Yard
    "SlotSize",
    "MoveReason",
    "RiskLevel",
    "YardSlot",
    "MoveLog",
    "RiskFactors",
    "RiskScore",
    "NewContainer",
    "SlotRecommendation",
    # Routing
    "Node",
    "Edge",
    "Telemetry",
    "Route",
    # Incident
    "IncidentSeverity",
    "IncidentStatus",
    "Incident",
    "AreaRisk",
    "ContainerEta",
    "area_key_for",
]
