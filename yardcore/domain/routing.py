"""
Route graph domain models.

Nodes carry planar yard coordinates; edges carry a static baseline cost.
Telemetry reports observed travel time over one edge.
"""

from typing import Annotated

from pydantic import BaseModel, Field, computed_field

from .equipment import FiniteFloat


class Node(BaseModel):
    """Graph vertex (junction, block corner, gate)."""

    node_id: str = Field(min_length=1)
    x: FiniteFloat
    y: FiniteFloat

    model_config = {"frozen": True}


class Edge(BaseModel):
    """Lane segment between two nodes. Traversable in both directions."""

    edge_id: str = Field(min_length=1)
    source: str
    target: str
    base_cost: Annotated[float, Field(ge=0, allow_inf_nan=False)]

    model_config = {"frozen": True}


class Telemetry(BaseModel):
    """Observed travel time over an edge."""

    time_ms: FiniteFloat
    edge_id: str
    travel_s: Annotated[float, Field(ge=0, allow_inf_nan=False)]

    model_config = {"frozen": True}


class Route(BaseModel):
    """
    Lowest expected-cost path.

    Empty when no path connects start and goal.
    """

    nodes: list[str] = Field(default_factory=list)
    edges: list[str] = Field(default_factory=list)
    cost: float = 0.0

    model_config = {"frozen": True}

    @computed_field
    @property
    def found(self) -> bool:
        return len(self.nodes) > 0

    @classmethod
    def empty(cls) -> "Route":
        return cls()
