"""
ETA-based Assignment Scheduler.

Matches equipment to pending jobs with a one-pass greedy heuristic:

1. Order jobs by priority (desc), then ready time (asc)
2. For each job, score every resource of a required type:
   cost = w_wait * wait + w_move * move + w_rehandle * risk + w_priority * priority
3. Commit the cheapest resource, advancing its availability and position
   before the next job is considered

This is not a globally optimal assignment; jobs are planned in priority
order and never revisited.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from yardcore.domain import (
    Assignment,
    AssignmentOutcome,
    Job,
    Millis,
    Resource,
    ScheduleWeights,
    SchedulePlan,
    YardSnapshot,
)

from .primitives import pairwise_distances

logger = logging.getLogger(__name__)


@dataclass
class SchedulerConfig:
    """Configuration for the assignment scheduler."""

    # Travel seconds per unit of yard distance
    move_seconds_per_unit: float = 2.0


def job_order_key(job: Job) -> tuple[int, float]:
    """Higher priority first, then earlier ready time."""
    return (-job.priority, job.ready_at_s)


class ETAScheduler:
    """
    Greedy ETA-driven equipment scheduler.

    Stateless across calls: every call works on a private copy of the
    resources in the snapshot.

    Usage:
        scheduler = ETAScheduler()
        plan = scheduler.schedule(snapshot)
    """

    def __init__(
        self,
        weights: Optional[ScheduleWeights] = None,
        config: Optional[SchedulerConfig] = None,
    ):
        self.weights = weights or ScheduleWeights()
        self.config = config or SchedulerConfig()

    def schedule(self, snapshot: YardSnapshot) -> SchedulePlan:
        """
        Build a full assignment plan for the snapshot.

        Args:
            snapshot: Current time, resources and jobs. Snapshot weights, when
                set, override the scheduler's own.

        Returns:
            SchedulePlan with assignments sorted by start time and one outcome per job
        """
        weights = snapshot.weights or self.weights
        now_ms = snapshot.now_ms
        working = [r.model_copy() for r in snapshot.resources]

        outcomes = []
        for job in sorted(snapshot.jobs, key=job_order_key):
            outcome = self._assign_job(job, working, now_ms, weights)
            if outcome.assignment is None:
                logger.debug("Job %s left unassigned: %s", job.job_id, outcome.reason)
            outcomes.append(outcome)

        assignments = sorted(
            (o.assignment for o in outcomes if o.assignment is not None),
            key=lambda a: a.start_ms,
        )
        return SchedulePlan(generated_at_ms=now_ms, assignments=assignments, outcomes=outcomes)

    def _assign_job(
        self,
        job: Job,
        resources: list[Resource],
        now_ms: Millis,
        weights: ScheduleWeights,
    ) -> AssignmentOutcome:
        """Pick the cheapest eligible resource for a job and commit it."""
        candidates = [r for r in resources if job.accepts(r.resource_type)]
        if not candidates:
            required = ", ".join(t.value for t in job.requires)
            return AssignmentOutcome.unassignable(job.job_id, f"no resource of type {required}")

        # Jobs without an origin start wherever the resource already is
        if job.origin is None:
            distances = np.zeros(len(candidates))
        else:
            distances = pairwise_distances([r.position for r in candidates], job.origin)

        best: Optional[Assignment] = None
        best_resource: Optional[Resource] = None
        for resource, distance in zip(candidates, distances):
            candidate = self._evaluate(job, resource, float(distance), now_ms, weights)
            if best is None or candidate.cost < best.cost:
                best = candidate
                best_resource = resource

        best_resource.available_at_ms = best.end_ms
        if job.destination is not None:
            best_resource.position = job.destination

        return AssignmentOutcome.assigned(best)

    def _evaluate(
        self,
        job: Job,
        resource: Resource,
        distance: float,
        now_ms: Millis,
        weights: ScheduleWeights,
    ) -> Assignment:
        """Cost one resource/job pairing."""
        move_s = distance * self.config.move_seconds_per_unit
        start_ms = max(resource.free_at(now_ms), job.ready_at_ms) + move_s * 1000
        end_ms = start_ms + job.duration_s * 1000
        wait_s = max(0.0, (start_ms - now_ms) / 1000)

        cost = (
            weights.wait * wait_s
            + weights.move * move_s
            + weights.rehandle * job.rehandle_risk
            + weights.priority * job.priority
        )
        return Assignment(
            resource_id=resource.resource_id,
            job_id=job.job_id,
            start_ms=start_ms,
            end_ms=end_ms,
            cost=cost,
        )


def schedule_by_eta(
    now_ms: Millis,
    resources: list[Resource],
    jobs: list[Job],
    weights: Optional[ScheduleWeights] = None,
) -> list[Assignment]:
    """Assignments for `jobs`, at most one per job, sorted by start time."""
    snapshot = YardSnapshot(now_ms=now_ms, resources=resources, jobs=jobs, weights=weights)
    return ETAScheduler().schedule(snapshot).assignments
