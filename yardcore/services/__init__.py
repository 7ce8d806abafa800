"""
Core services for the Yard Operations Optimization Core.

Host-facing layer containing:
- Scheduling: equipment assignment and incremental re-planning
- Slots: rehandle risk scoring and slot recommendation
- Routing: travel-time learning and route search
- Incidents: area risk and container ETA
"""

from .scheduling import SchedulingService
from .slots import SlotRecommendationService
from .routing import RoutingService
from .incidents import IncidentService

__all__ = [
    "SchedulingService",
    "SlotRecommendationService",
    "RoutingService",
    "IncidentService",
]
