"""Tests for incident-based area risk and container ETA."""

from datetime import datetime, timedelta, timezone

import pytest

from yardcore.domain import Incident, IncidentSeverity, IncidentStatus, RiskLevel, area_key_for
from yardcore.optimization import calc_area_risk, calc_container_eta
from yardcore.optimization.incidents import recency_factor

NOW = datetime(2025, 10, 31, 13, 45, tzinfo=timezone.utc)


@pytest.fixture
def incidents() -> list[Incident]:
    return [
        Incident(
            incident_id=1,
            title="Spreader fault",
            location="A-03",
            severity=IncidentSeverity.MAJOR,
            status=IncidentStatus.OPEN,
            occurred_at=NOW - timedelta(hours=1),
        ),
        Incident(
            incident_id=2,
            title="Oil spill",
            location="B-11",
            severity=IncidentSeverity.MINOR,
            status=IncidentStatus.RESOLVED,
            occurred_at=NOW - timedelta(days=3),
        ),
        Incident(
            incident_id=3,
            title="Near miss",
            location="C-02",
            severity=IncidentSeverity.MODERATE,
            status=IncidentStatus.OPEN,
            occurred_at=NOW - timedelta(hours=5),
        ),
    ]


class TestAreaRisk:
    """Tests for per-area risk."""

    def test_scores_normalised_to_riskiest_area(self, incidents):
        risks = calc_area_risk(incidents, NOW)

        assert [r.area_key for r in risks] == ["A", "C", "B"]
        by_area = {r.area_key: r for r in risks}
        # A: 3 * 1.2 * 1.3, C: 2 * 1.2 * 1.0, B: 1 * 0.7 * 0.6
        assert by_area["A"].score == 100
        assert by_area["C"].score == 51
        assert by_area["B"].score == 9
        assert by_area["A"].level == RiskLevel.HIGH
        assert by_area["C"].level == RiskLevel.MEDIUM
        assert by_area["B"].level == RiskLevel.LOW

    def test_incidents_accumulate_per_area(self, incidents):
        extra = Incident(incident_id=4, title="Lashing", location="B-01", occurred_at=NOW)

        risks = calc_area_risk(incidents + [extra], NOW)

        by_area = {r.area_key: r.score for r in risks}
        assert by_area["B"] > 9

    def test_blank_location_grouped(self):
        risks = calc_area_risk([Incident(incident_id=1, title="Unknown", location="  ")], NOW)
        assert risks[0].area_key == "?"

    def test_no_incidents(self):
        assert calc_area_risk([], NOW) == []

    def test_recency_factor(self):
        assert recency_factor(None, NOW) == 1.0
        assert recency_factor(NOW - timedelta(minutes=30), NOW) == 1.3
        assert recency_factor(NOW - timedelta(hours=12), NOW) == 1.0
        assert recency_factor(NOW - timedelta(days=2), NOW) == 0.6
        # Naive timestamps are read as UTC
        assert recency_factor(datetime(2025, 10, 31, 13, 0), NOW) == 1.3

    def test_naive_reference_time_read_as_utc(self, incidents):
        naive_now = datetime(2025, 10, 31, 13, 45)

        risks = calc_area_risk(incidents, naive_now)

        by_area = {r.area_key: r.score for r in risks}
        assert by_area == {"A": 100, "C": 51, "B": 9}
        assert recency_factor(NOW - timedelta(hours=1), naive_now) == 1.3

    def test_area_key_from_location(self):
        assert area_key_for(" C-02") == "C"
        assert area_key_for("") == "?"
        assert Incident(incident_id=9, title="Trip hazard", location="D-4").area_key == "D"


class TestContainerEta:
    """Tests for container handling ETA."""

    def test_high_risk_area_adds_delay(self, incidents):
        eta = calc_container_eta("A-07", calc_area_risk(incidents, NOW), NOW)

        assert eta.risk_level == RiskLevel.HIGH
        assert eta.delay_minutes == 20
        assert eta.total_minutes == 60
        assert eta.eta == NOW + timedelta(minutes=60)

    def test_unknown_area_is_low_risk(self, incidents):
        eta = calc_container_eta("Z-01", calc_area_risk(incidents, NOW), NOW)

        assert eta.risk_level == RiskLevel.LOW
        assert eta.total_minutes == 40

    def test_naive_reference_time_read_as_utc(self, incidents):
        eta = calc_container_eta("A-07", calc_area_risk(incidents, NOW), datetime(2025, 10, 31, 13, 45))

        assert eta.eta == NOW + timedelta(minutes=60)

    def test_incident_service(self, incident_service, incidents):
        eta = incident_service.container_eta("C-02", incidents, NOW)

        assert eta.risk_level == RiskLevel.MEDIUM
        assert eta.delay_minutes == 10

    def test_incident_service_accepts_naive_now(self, incident_service, incidents):
        risks = incident_service.area_risk(incidents, datetime(2025, 10, 31, 13, 45))

        assert risks[0].area_key == "A"
        assert risks[0].score == 100
