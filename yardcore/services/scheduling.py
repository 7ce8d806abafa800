"""
Scheduling Service.

Host-facing entry points for equipment assignment:
- schedule_by_eta: full plan from a snapshot
- reschedule_incremental: re-plan while keeping in-flight and imminent work
"""

import logging
from typing import Optional

from yardcore.config import Settings, get_settings
from yardcore.domain import Assignment, Millis, SchedulePlan, YardSnapshot
from yardcore.errors import YardInputError
from yardcore.optimization import ETAScheduler, IncrementalRescheduler, SchedulerConfig

logger = logging.getLogger(__name__)


class SchedulingService:
    """
    Service for planning equipment-to-job assignments.

    Safe to call from several threads: each call plans on its own snapshot
    copy. Reschedule calls for the same zone must still be serialised by the host.

    Usage:
        service = SchedulingService()
        plan = service.schedule_by_eta(snapshot)
        plan = service.reschedule_incremental(plan.assignments, fresh_snapshot)
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.scheduler = ETAScheduler(
            weights=self.settings.schedule_weights,
            config=SchedulerConfig(move_seconds_per_unit=self.settings.move_seconds_per_unit),
        )

    def schedule_by_eta(self, snapshot: YardSnapshot) -> SchedulePlan:
        """
        Plan all jobs in the snapshot.

        Returns:
            SchedulePlan; jobs with no eligible resource are reported in
            `unassigned_job_ids` and omitted from `assignments`
        """
        plan = self.scheduler.schedule(snapshot)
        self._log_plan("Scheduled", plan)
        return plan

    def reschedule_incremental(
        self,
        previous: list[Assignment],
        snapshot: YardSnapshot,
        lock_window_ms: Optional[Millis] = None,
    ) -> SchedulePlan:
        """
        Re-plan against a fresh snapshot without moving locked assignments.

        Args:
            previous: Assignments from the last plan
            snapshot: Fresh snapshot
            lock_window_ms: Guard window for imminent work (defaults to settings)

        Returns:
            SchedulePlan of locked plus replanned assignments
        """
        self._validate_previous(previous)
        window = self.settings.lock_window_ms if lock_window_ms is None else lock_window_ms
        if window < 0:
            raise YardInputError(f"lock window must be non-negative, got {window}")

        rescheduler = IncrementalRescheduler(scheduler=self.scheduler, lock_window_ms=window)
        plan = rescheduler.reschedule(previous, snapshot)
        self._log_plan("Rescheduled", plan)
        return plan

    def _validate_previous(self, previous: list[Assignment]) -> None:
        """A previous plan holds at most one assignment per job."""
        seen: set[str] = set()
        for assignment in previous:
            if assignment.job_id in seen:
                raise YardInputError(f"previous plan assigns job {assignment.job_id} more than once")
            seen.add(assignment.job_id)

    def _log_plan(self, action: str, plan: SchedulePlan) -> None:
        logger.info(
            "%s %d assignments (%d locked, %d unassignable)",
            action,
            len(plan.assignments),
            len(plan.locked_job_ids),
            len(plan.unassigned_job_ids),
        )
