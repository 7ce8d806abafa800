"""
Yard Operations Optimization Core.

Decision algorithms for a container yard:
- Scheduling: equipment-to-job assignment with incremental re-planning
- Slot risk: rehandle risk scoring and storage slot recommendation
- Routing: congestion-adaptive travel-time model and A* route search
"""

__version__ = "0.1.0"
