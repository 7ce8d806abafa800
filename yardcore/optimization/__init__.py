"""
Yard optimization algorithms.

Components:
- primitives: distance, sigmoid and time-decay helpers
- scheduler: greedy ETA-based equipment assignment
- rescheduler: incremental re-planning with soft locks
- rehandle: slot rehandle risk scoring and slot recommendation
- congestion: EWMA travel-time model
- router: A* route search over the yard lane graph
- incidents: incident-based area risk and container ETA
"""

from .scheduler import ETAScheduler, SchedulerConfig, schedule_by_eta
from .rescheduler import IncrementalRescheduler, reschedule_incremental
from .rehandle import RehandleRiskModel, RiskModelConfig
from .congestion import TravelTimeModel
from .router import CongestionRouter, find_route
from .incidents import calc_area_risk, calc_container_eta

__all__ = [
    "ETAScheduler",
    "SchedulerConfig",
    "schedule_by_eta",
    "IncrementalRescheduler",
    "reschedule_incremental",
    "RehandleRiskModel",
    "RiskModelConfig",
    "TravelTimeModel",
    "CongestionRouter",
    "find_route",
    "calc_area_risk",
    "calc_container_eta",
]
