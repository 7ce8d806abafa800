"""Pytest fixtures for yard optimization tests."""

import pytest

from yardcore.config import Settings
from yardcore.domain import (
    Edge,
    Job,
    JobKind,
    MoveLog,
    MoveReason,
    Node,
    Resource,
    ResourceType,
    SlotSize,
    YardSlot,
    YardSnapshot,
)
from yardcore.services import (
    IncidentService,
    RoutingService,
    SchedulingService,
    SlotRecommendationService,
)

NOW_MS = 1_700_000_000_000.0
NOW_S = NOW_MS / 1000
HOUR_MS = 3600 * 1000


@pytest.fixture
def now_ms() -> float:
    return NOW_MS


@pytest.fixture
def settings() -> Settings:
    """Default settings, isolated from the environment."""
    return Settings(_env_file=None)


@pytest.fixture
def resources() -> list[Resource]:
    """One quay crane, one yard crane, one tractor."""
    return [
        Resource(resource_id="QC-1", resource_type=ResourceType.QC, position=(0, 0)),
        Resource(resource_id="YC-11", resource_type=ResourceType.YC, position=(100, 10)),
        Resource(resource_id="TT-7", resource_type=ResourceType.TT, position=(60, 40)),
    ]


@pytest.fixture
def jobs() -> list[Job]:
    """Discharge, shift and removal jobs, one per equipment role."""
    return [
        Job(
            job_id="J1",
            kind=JobKind.DISCH,
            origin=(0, 0),
            destination=(100, 10),
            ready_at_s=NOW_S + 300,
            duration_s=600,
            priority=5,
            requires=[ResourceType.QC],
        ),
        Job(
            job_id="J2",
            kind=JobKind.SHIFT,
            origin=(100, 10),
            destination=(120, 20),
            ready_at_s=NOW_S + 100,
            duration_s=300,
            priority=3,
            requires=[ResourceType.YC],
        ),
        Job(
            job_id="J3",
            kind=JobKind.REMOVAL,
            origin=(80, 40),
            destination=(20, 10),
            ready_at_s=NOW_S + 30,
            duration_s=420,
            priority=4,
            rehandle_risk=0.3,
            requires=[ResourceType.TT],
        ),
    ]


@pytest.fixture
def snapshot(resources, jobs) -> YardSnapshot:
    return YardSnapshot(now_ms=NOW_MS, resources=resources, jobs=jobs)


@pytest.fixture
def slots() -> list[YardSlot]:
    """Small yard block: two stacks in bay 1 row 1, a reefer row, a 20ft slot."""
    return [
        YardSlot(slot_id="B1-R1-T1", bay=1, row=1, tier=1, size=SlotSize.FORTY, dwell_days=3),
        YardSlot(slot_id="B1-R1-T2", bay=1, row=1, tier=2, size=SlotSize.FORTY, occupied=True, dwell_days=7),
        YardSlot(slot_id="B1-R2-T1", bay=1, row=2, tier=1, size=SlotSize.FORTY, dwell_days=5, reefer=True),
        YardSlot(slot_id="B2-R1-T1", bay=2, row=1, tier=1, size=SlotSize.TWENTY, dwell_days=2),
    ]


@pytest.fixture
def moves() -> list[MoveLog]:
    return [
        MoveLog(time_ms=NOW_MS - 2 * HOUR_MS, to_slot="B1-R1-T2", reason=MoveReason.DISCH),
        MoveLog(
            time_ms=NOW_MS - 1 * HOUR_MS,
            from_slot="B1-R1-T2",
            to_slot="B1-R2-T1",
            reason=MoveReason.SHIFT,
            rehandle=True,
        ),
    ]


@pytest.fixture
def nodes() -> list[Node]:
    """Square of lanes, 50 units a side."""
    return [
        Node(node_id="A", x=0, y=0),
        Node(node_id="B", x=50, y=0),
        Node(node_id="C", x=50, y=50),
        Node(node_id="D", x=0, y=50),
    ]


@pytest.fixture
def edges() -> list[Edge]:
    """Cycle A-B-C-D plus an A-C diagonal costing more than two cycle edges."""
    return [
        Edge(edge_id="AB", source="A", target="B", base_cost=60),
        Edge(edge_id="BC", source="B", target="C", base_cost=60),
        Edge(edge_id="CD", source="C", target="D", base_cost=60),
        Edge(edge_id="DA", source="D", target="A", base_cost=60),
        Edge(edge_id="AC", source="A", target="C", base_cost=130),
    ]


@pytest.fixture
def scheduling_service(settings) -> SchedulingService:
    return SchedulingService(settings)


@pytest.fixture
def slot_service(settings) -> SlotRecommendationService:
    return SlotRecommendationService(settings)


@pytest.fixture
def routing_service(settings) -> RoutingService:
    return RoutingService(settings)


@pytest.fixture
def incident_service() -> IncidentService:
    return IncidentService()
