"""
Incident-based area risk and container ETA.

Each incident contributes severity_weight * status_factor * recency_factor to
its yard area (first character of the location code). Area totals are scaled
to 0-100 against the riskiest area and bucketed into LOW / MEDIUM / HIGH.
Container handling ETAs are padded according to the area's risk level.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Optional

from yardcore.domain import (
    AreaRisk,
    ContainerEta,
    Incident,
    IncidentSeverity,
    IncidentStatus,
    RiskLevel,
    area_key_for,
)

SEVERITY_WEIGHTS = {
    IncidentSeverity.MINOR: 1.0,
    IncidentSeverity.MODERATE: 2.0,
    IncidentSeverity.MAJOR: 3.0,
}

STATUS_FACTORS = {
    IncidentStatus.OPEN: 1.2,
    IncidentStatus.RESOLVED: 0.7,
}

HIGH_RISK_SCORE = 60
MEDIUM_RISK_SCORE = 30

BASE_HANDLING_MINUTES = 40
RISK_DELAY_MINUTES = {
    RiskLevel.HIGH: 20,
    RiskLevel.MEDIUM: 10,
    RiskLevel.LOW: 0,
}


def as_utc(moment: datetime) -> datetime:
    """Naive datetimes are read as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def recency_factor(occurred_at: Optional[datetime], now: datetime) -> float:
    """Recent incidents weigh more; unknown times count as neutral."""
    if occurred_at is None:
        return 1.0

    age_hours = (as_utc(now) - as_utc(occurred_at)).total_seconds() / 3600
    if age_hours <= 2:
        return 1.3
    if age_hours <= 24:
        return 1.0
    return 0.6


def risk_level_for(score: int) -> RiskLevel:
    if score >= HIGH_RISK_SCORE:
        return RiskLevel.HIGH
    if score >= MEDIUM_RISK_SCORE:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def calc_area_risk(incidents: list[Incident], now: Optional[datetime] = None) -> list[AreaRisk]:
    """
    Relative risk per yard area.

    Args:
        incidents: Reported incidents
        now: Reference time for recency (defaults to current UTC time)

    Returns:
        Area risks sorted by score, highest first
    """
    now = as_utc(now or datetime.now(timezone.utc))
    raw: dict[str, float] = {}

    for incident in incidents:
        contribution = (
            SEVERITY_WEIGHTS[incident.severity]
            * STATUS_FACTORS[incident.status]
            * recency_factor(incident.occurred_at, now)
        )
        raw[incident.area_key] = raw.get(incident.area_key, 0.0) + contribution

    max_score = max(raw.values(), default=0.0)
    risks = []
    for area_key, value in raw.items():
        score = math.floor(value / max_score * 100 + 0.5) if max_score > 0 else 0
        risks.append(AreaRisk(area_key=area_key, score=score, level=risk_level_for(score)))

    return sorted(risks, key=lambda r: r.score, reverse=True)


def calc_container_eta(
    area: str,
    area_risks: list[AreaRisk],
    now: Optional[datetime] = None,
) -> ContainerEta:
    """Expected handling completion for a container stored in `area`."""
    now = as_utc(now or datetime.now(timezone.utc))
    area_key = area_key_for(area)

    level = next((r.level for r in area_risks if r.area_key == area_key), RiskLevel.LOW)
    delay = RISK_DELAY_MINUTES[level]
    total = BASE_HANDLING_MINUTES + delay

    return ContainerEta(
        eta=now + timedelta(minutes=total),
        delay_minutes=delay,
        total_minutes=total,
        risk_level=level,
    )
