"""
Incremental Rescheduler.

Re-plans on new ETAs or events without disturbing committed work. Assignments
already in progress, or starting within the lock window, are soft-locked and
carried forward unchanged; everything else is planned again from scratch.
"""

import logging
from typing import Optional

from yardcore.domain import Assignment, AssignmentOutcome, Millis, SchedulePlan, YardSnapshot

from .scheduler import ETAScheduler

logger = logging.getLogger(__name__)

DEFAULT_LOCK_WINDOW_MS = 60_000.0


def is_locked(assignment: Assignment, now_ms: Millis, lock_window_ms: Millis) -> bool:
    """In progress, or due to start within the lock window."""
    if assignment.is_in_progress(now_ms):
        return True
    return assignment.start_ms - now_ms < lock_window_ms


class IncrementalRescheduler:
    """
    Wraps ETAScheduler to keep in-flight and imminent work stable.

    The caller must serialise reschedule calls against the same previous plan.

    Usage:
        rescheduler = IncrementalRescheduler(lock_window_ms=60_000)
        plan = rescheduler.reschedule(previous.assignments, snapshot)
    """

    def __init__(
        self,
        scheduler: Optional[ETAScheduler] = None,
        lock_window_ms: Millis = DEFAULT_LOCK_WINDOW_MS,
    ):
        self.scheduler = scheduler or ETAScheduler()
        self.lock_window_ms = lock_window_ms

    def reschedule(self, previous: list[Assignment], snapshot: YardSnapshot) -> SchedulePlan:
        """
        Update a plan for a fresh snapshot.

        Args:
            previous: Assignments from the last planning cycle
            snapshot: Fresh resources, jobs and current time

        Returns:
            SchedulePlan of locked assignments plus newly planned ones, sorted by start
        """
        now_ms = snapshot.now_ms
        kept = [a for a in previous if is_locked(a, now_ms, self.lock_window_ms)]
        locked_job_ids = {a.job_id for a in kept}

        remaining = snapshot.model_copy(
            update={"jobs": [j for j in snapshot.jobs if j.job_id not in locked_job_ids]}
        )
        replanned = self.scheduler.schedule(remaining)

        logger.debug(
            "Rescheduled at %s: %d locked, %d replanned", now_ms, len(kept), len(replanned.assignments)
        )

        assignments = sorted(kept + replanned.assignments, key=lambda a: a.start_ms)
        outcomes = [AssignmentOutcome.assigned(a) for a in kept] + replanned.outcomes
        return SchedulePlan(
            generated_at_ms=now_ms,
            assignments=assignments,
            outcomes=outcomes,
            locked_job_ids=[a.job_id for a in kept],
        )


def reschedule_incremental(
    previous: list[Assignment],
    snapshot: YardSnapshot,
    lock_window_ms: Millis = DEFAULT_LOCK_WINDOW_MS,
) -> list[Assignment]:
    """Locked plus replanned assignments, sorted by start time."""
    return IncrementalRescheduler(lock_window_ms=lock_window_ms).reschedule(previous, snapshot).assignments
