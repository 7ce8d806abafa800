#!/usr/bin/env python3
"""
Yard Operations Optimization Demo.

Demonstrates the core capabilities:
1. ETA-based equipment scheduling
2. Incremental rescheduling with soft locks
3. Rehandle risk analysis and slot recommendation
4. Congestion-adaptive routing
5. Incident area risk and container ETA
"""

import time
from datetime import datetime, timedelta, timezone

from yardcore.domain import (
    Edge,
    Incident,
    IncidentSeverity,
    IncidentStatus,
    Job,
    JobKind,
    MoveLog,
    MoveReason,
    NewContainer,
    Node,
    Resource,
    ResourceType,
    SlotSize,
    Telemetry,
    YardSlot,
    YardSnapshot,
)
from yardcore.logging_setup import configure_logging
from yardcore.services import (
    IncidentService,
    RoutingService,
    SchedulingService,
    SlotRecommendationService,
)


def print_section(title: str):
    """Print a section header."""
    print()
    print("=" * 60)
    print(f"  {title}")
    print("=" * 60)


def fmt_offset(ms: float, now_ms: float) -> str:
    return f"+{(ms - now_ms) / 1000:6.0f}s"


def main():
    configure_logging("WARNING")

    print()
    print("*" * 60)
    print("*     Container Yard Operations Optimization Core      *")
    print("*" * 60)

    now_ms = time.time() * 1000
    now_s = now_ms / 1000

    # 1. Scheduling
    print_section("1. ETA-based Scheduling")

    resources = [
        Resource(resource_id="QC-1", resource_type=ResourceType.QC, position=(0, 0)),
        Resource(resource_id="YC-11", resource_type=ResourceType.YC, position=(100, 10)),
        Resource(resource_id="TT-7", resource_type=ResourceType.TT, position=(60, 40)),
    ]
    jobs = [
        Job(job_id="J1", kind=JobKind.DISCH, origin=(0, 0), destination=(100, 10),
            ready_at_s=now_s + 300, duration_s=600, priority=5, requires=[ResourceType.QC]),
        Job(job_id="J2", kind=JobKind.SHIFT, origin=(100, 10), destination=(120, 20),
            ready_at_s=now_s + 100, duration_s=300, priority=3, requires=[ResourceType.YC]),
        Job(job_id="J3", kind=JobKind.REMOVAL, origin=(80, 40), destination=(20, 10),
            ready_at_s=now_s + 30, duration_s=420, priority=4, rehandle_risk=0.3,
            requires=[ResourceType.TT]),
    ]

    scheduling = SchedulingService()
    plan = scheduling.schedule_by_eta(YardSnapshot(now_ms=now_ms, resources=resources, jobs=jobs))

    for a in plan.assignments:
        print(
            f"  {a.job_id} -> {a.resource_id:6} start {fmt_offset(a.start_ms, now_ms)} "
            f"end {fmt_offset(a.end_ms, now_ms)}  cost {a.cost:7.1f}"
        )

    # 2. Rescheduling
    print_section("2. Incremental Rescheduling (+60s)")

    later_ms = now_ms + 60_000
    delayed = [j.model_copy(update={"ready_at_s": j.ready_at_s + 120}) if j.job_id == "J1" else j for j in jobs]
    replan = scheduling.reschedule_incremental(
        plan.assignments,
        YardSnapshot(now_ms=later_ms, resources=resources, jobs=delayed),
    )

    print(f"Locked: {', '.join(replan.locked_job_ids) or 'none'}")
    for a in replan.assignments:
        print(f"  {a.job_id} -> {a.resource_id:6} start {fmt_offset(a.start_ms, now_ms)}")

    # 3. Slot recommendation
    print_section("3. Rehandle Risk & Slot Recommendation")

    hour_ms = 3600 * 1000
    slots = [
        YardSlot(slot_id="B1-R1-T1", bay=1, row=1, tier=1, size=SlotSize.FORTY, dwell_days=3),
        YardSlot(slot_id="B1-R1-T2", bay=1, row=1, tier=2, size=SlotSize.FORTY, occupied=True, dwell_days=7),
        YardSlot(slot_id="B1-R2-T1", bay=1, row=2, tier=1, size=SlotSize.FORTY, dwell_days=5, reefer=True),
        YardSlot(slot_id="B2-R1-T1", bay=2, row=1, tier=1, size=SlotSize.TWENTY, dwell_days=2),
    ]
    moves = [
        MoveLog(time_ms=now_ms - 2 * hour_ms, to_slot="B1-R1-T2", reason=MoveReason.DISCH),
        MoveLog(time_ms=now_ms - hour_ms, from_slot="B1-R1-T2", to_slot="B1-R2-T1",
                reason=MoveReason.SHIFT, rehandle=True),
    ]

    slot_service = SlotRecommendationService()
    scores = slot_service.compute_rehandle_risk(slots, moves, now_ms)
    for s in scores:
        print(
            f"  {s.slot_id}: {s.score:.3f} [{s.risk_level.value:6}] "
            f"ratio={s.factors.ratio:.2f} crowd={s.factors.crowd:.2f} dwellVar={s.factors.dwell_var:.2f}"
        )

    for cargo in (
        NewContainer(size=SlotSize.FORTY, est_dwell_days=3),
        NewContainer(size=SlotSize.FORTY, reefer=True),
        NewContainer(size=SlotSize.TWENTY, reefer=True),
    ):
        slot = slot_service.recommend_slot(slots, scores, cargo)
        label = f"{cargo.size.value}ft{' reefer' if cargo.reefer else ''}"
        print(f"  {label:12} -> {slot.slot_id if slot else 'no eligible slot'}")

    # 4. Routing
    print_section("4. Congestion-Adaptive Routing")

    nodes = [
        Node(node_id="A", x=0, y=0),
        Node(node_id="B", x=50, y=0),
        Node(node_id="C", x=50, y=50),
        Node(node_id="D", x=0, y=50),
    ]
    edges = [
        Edge(edge_id="AB", source="A", target="B", base_cost=60),
        Edge(edge_id="BC", source="B", target="C", base_cost=60),
        Edge(edge_id="CD", source="C", target="D", base_cost=60),
        Edge(edge_id="DA", source="D", target="A", base_cost=60),
        Edge(edge_id="AC", source="A", target="C", base_cost=100),
    ]
    telemetry = [
        Telemetry(time_ms=now_ms - 300_000, edge_id="AB", travel_s=120),
        Telemetry(time_ms=now_ms - 120_000, edge_id="BC", travel_s=90),
        Telemetry(time_ms=now_ms - 60_000, edge_id="AC", travel_s=300),
    ]

    routing = RoutingService()
    model, route = routing.plan_route(nodes, edges, telemetry, "A", "C")

    print("Learned travel times:")
    for edge_id, seconds in model.snapshot().items():
        print(f"  {edge_id}: {seconds:.0f}s")
    print(f"Route A -> C: {' -> '.join(route.nodes)} (edges {', '.join(route.edges)}, {route.cost:.0f}s)")

    # 5. Incidents
    print_section("5. Incident Area Risk")

    now = datetime.now(timezone.utc)
    incidents = [
        Incident(incident_id=1, title="Spreader fault", location="A-03",
                 severity=IncidentSeverity.MAJOR, occurred_at=now - timedelta(hours=1)),
        Incident(incident_id=2, title="Oil spill", location="B-11",
                 status=IncidentStatus.RESOLVED, occurred_at=now - timedelta(days=2)),
    ]
    incident_service = IncidentService()
    for risk in incident_service.area_risk(incidents, now):
        print(f"  Area {risk.area_key}: {risk.score:3d} [{risk.level.value}]")
    eta = incident_service.container_eta("A-07", incidents, now)
    print(f"Container in A-07 ready by {eta.eta:%H:%M} (+{eta.delay_minutes} min risk delay)")

    print()
    print("=" * 60)
    print("  Demo Complete!")
    print("=" * 60)
    print()


if __name__ == "__main__":
    main()
