"""
Incident Service.

Turns reported incidents into per-area risk and container handling ETAs.
"""

from datetime import datetime
from typing import Optional

from yardcore.domain import AreaRisk, ContainerEta, Incident
from yardcore.optimization import calc_area_risk, calc_container_eta


class IncidentService:
    """
    Service for incident-driven yard risk.

    Usage:
        service = IncidentService()
        risks = service.area_risk(incidents)
        eta = service.container_eta("B-07", incidents)
    """

    def area_risk(self, incidents: list[Incident], now: Optional[datetime] = None) -> list[AreaRisk]:
        """Risk per yard area, riskiest first."""
        return calc_area_risk(incidents, now)

    def container_eta(
        self,
        area: str,
        incidents: list[Incident],
        now: Optional[datetime] = None,
    ) -> ContainerEta:
        """Handling ETA for a container stored in `area`."""
        return calc_container_eta(area, self.area_risk(incidents, now), now)
