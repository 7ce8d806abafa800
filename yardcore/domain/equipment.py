"""
Equipment and job domain models.

Resources (cranes, tractors) are matched to jobs (discharge, load, shift, removal).

Time units differ by entity and are spelled out in field names:
- Job timing (`ready_at_s`, `duration_s`) is in epoch/duration seconds
- Resource and assignment timing (`available_at_ms`, `start_ms`, `end_ms`) is in epoch milliseconds
"""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field, computed_field, model_validator

Seconds = float
Millis = float

FiniteFloat = Annotated[float, Field(allow_inf_nan=False)]
Point = tuple[FiniteFloat, FiniteFloat]


class ResourceType(str, Enum):
    """Equipment roles."""

    QC = "QC"  # Quay crane
    YC = "YC"  # Yard crane
    TT = "TT"  # Terminal tractor


class JobKind(str, Enum):
    """Kinds of yard work."""

    LOAD = "LOAD"
    DISCH = "DISCH"  # Discharge from vessel
    SHIFT = "SHIFT"  # Re-position within the yard
    REMOVAL = "REMOVAL"  # Gate-out


class Resource(BaseModel):
    """
    An equipment unit.

    Mutable: the scheduler works on copies and advances position and
    availability as it commits simulated assignments.
    """

    resource_id: str = Field(min_length=1)
    resource_type: ResourceType
    position: Point
    available_at_ms: FiniteFloat | None = None

    model_config = {"frozen": False}

    def free_at(self, now_ms: Millis) -> Millis:
        """Earliest time this resource can take new work."""
        if self.available_at_ms is None:
            return now_ms
        return max(self.available_at_ms, now_ms)


class Job(BaseModel):
    """A unit of yard work waiting for equipment."""

    job_id: str = Field(min_length=1)
    kind: JobKind
    origin: Point | None = None
    destination: Point | None = None
    ready_at_s: Annotated[Seconds, Field(allow_inf_nan=False)]
    duration_s: Annotated[Seconds, Field(ge=0, allow_inf_nan=False)]
    priority: int = Field(default=3, ge=1, le=5)
    rehandle_risk: float = Field(default=0.0, ge=0.0, le=1.0)
    requires: list[ResourceType] = Field(default_factory=lambda: [ResourceType.YC], min_length=1)

    model_config = {"frozen": True}

    @computed_field
    @property
    def ready_at_ms(self) -> Millis:
        return self.ready_at_s * 1000.0

    def accepts(self, resource_type: ResourceType) -> bool:
        return resource_type in self.requires


class ScheduleWeights(BaseModel):
    """
    Cost weights for candidate evaluation.

    cost = wait * wait_s + move * move_s + rehandle * risk + priority * job.priority

    The priority weight is negative so urgent jobs get cheaper candidates.
    """

    wait: float = 1.0
    move: float = 0.2
    rehandle: float = 5.0
    priority: float = -2.0

    model_config = {"frozen": True}


class Assignment(BaseModel):
    """A job committed to a resource over [start_ms, end_ms]."""

    resource_id: str
    job_id: str
    start_ms: Millis
    end_ms: Millis
    cost: float

    model_config = {"frozen": True}

    @computed_field
    @property
    def duration_ms(self) -> Millis:
        return self.end_ms - self.start_ms

    def is_in_progress(self, now_ms: Millis) -> bool:
        return self.start_ms <= now_ms <= self.end_ms


class OutcomeStatus(str, Enum):
    """Per-job scheduling result."""

    ASSIGNED = "assigned"
    UNASSIGNABLE = "unassignable"


class AssignmentOutcome(BaseModel):
    """Tagged result for one job: an assignment, or the reason there is none."""

    job_id: str
    status: OutcomeStatus
    assignment: Assignment | None = None
    reason: str | None = None

    model_config = {"frozen": True}

    @classmethod
    def assigned(cls, assignment: Assignment) -> "AssignmentOutcome":
        return cls(job_id=assignment.job_id, status=OutcomeStatus.ASSIGNED, assignment=assignment)

    @classmethod
    def unassignable(cls, job_id: str, reason: str) -> "AssignmentOutcome":
        return cls(job_id=job_id, status=OutcomeStatus.UNASSIGNABLE, reason=reason)


class YardSnapshot(BaseModel):
    """
    Consistent view of yard equipment and pending work at `now_ms`.

    The host takes this snapshot from its own stores; the scheduler never
    sees live collections.
    """

    now_ms: Annotated[Millis, Field(allow_inf_nan=False)]
    resources: list[Resource] = Field(default_factory=list)
    jobs: list[Job] = Field(default_factory=list)
    weights: ScheduleWeights | None = None

    @model_validator(mode="after")
    def check_unique_ids(self) -> "YardSnapshot":
        resource_ids = [r.resource_id for r in self.resources]
        if len(resource_ids) != len(set(resource_ids)):
            raise ValueError("resource ids must be unique")
        job_ids = [j.job_id for j in self.jobs]
        if len(job_ids) != len(set(job_ids)):
            raise ValueError("job ids must be unique")
        return self


class SchedulePlan(BaseModel):
    """Output of a planning call."""

    generated_at_ms: Millis
    assignments: list[Assignment] = Field(default_factory=list)
    outcomes: list[AssignmentOutcome] = Field(default_factory=list)
    locked_job_ids: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def unassigned_job_ids(self) -> list[str]:
        return [o.job_id for o in self.outcomes if o.status == OutcomeStatus.UNASSIGNABLE]

    def assignment_for(self, job_id: str) -> Assignment | None:
        for assignment in self.assignments:
            if assignment.job_id == job_id:
                return assignment
        return None
