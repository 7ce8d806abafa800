"""
Routing Service.

Feeds telemetry into a host-owned travel-time model and answers route queries.
"""

import logging
from typing import Iterable, Optional

from yardcore.config import Settings, get_settings
from yardcore.domain import Edge, Node, Route, Telemetry
from yardcore.errors import YardInputError
from yardcore.optimization import CongestionRouter, TravelTimeModel

logger = logging.getLogger(__name__)


class RoutingService:
    """
    Service for congestion-adaptive routing.

    Holds no model of its own: the host creates a TravelTimeModel once per
    routing session and passes it to every call.

    Usage:
        service = RoutingService()
        model = service.create_model()
        service.update_travel_model(model, telemetry)
        route = service.find_route(nodes, edges, model, "GATE", "B12")
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def create_model(self, alpha: Optional[float] = None) -> TravelTimeModel:
        """New empty travel-time model."""
        return TravelTimeModel(alpha=self.settings.ewma_alpha if alpha is None else alpha)

    def update_travel_model(self, model: TravelTimeModel, telemetry: Iterable[Telemetry]) -> TravelTimeModel:
        """Apply samples in order; the model is updated in place and returned."""
        samples = list(telemetry)
        model.update(samples)
        logger.info("Applied %d telemetry samples (%d edges tracked)", len(samples), len(model))
        return model

    def build_router(self, nodes: list[Node], edges: list[Edge]) -> CongestionRouter:
        """Router for a validated graph; reuse it across queries on the same graph."""
        self._validate_graph(nodes, edges)
        return CongestionRouter(nodes, edges)

    def find_route(
        self,
        nodes: list[Node],
        edges: list[Edge],
        model: TravelTimeModel,
        start: str,
        goal: str,
    ) -> Route:
        """Lowest expected-cost route, or an empty Route when none exists."""
        route = self.build_router(nodes, edges).find_route(model, start, goal)
        if route.found:
            logger.info("Route %s -> %s: %d hops, cost %.1f", start, goal, len(route.edges), route.cost)
        else:
            logger.info("Route %s -> %s: no path", start, goal)
        return route

    def plan_route(
        self,
        nodes: list[Node],
        edges: list[Edge],
        telemetry: Iterable[Telemetry],
        start: str,
        goal: str,
    ) -> tuple[TravelTimeModel, Route]:
        """Fresh model trained on `telemetry`, and the route it recommends."""
        model = self.update_travel_model(self.create_model(), telemetry)
        return model, self.find_route(nodes, edges, model, start, goal)

    def _validate_graph(self, nodes: list[Node], edges: list[Edge]) -> None:
        node_ids = {n.node_id for n in nodes}
        if len(node_ids) != len(nodes):
            raise YardInputError("node ids must be unique")
        edge_ids = set()
        for edge in edges:
            if edge.edge_id in edge_ids:
                raise YardInputError(f"duplicate edge id {edge.edge_id}")
            edge_ids.add(edge.edge_id)
            if edge.source not in node_ids or edge.target not in node_ids:
                raise YardInputError(f"edge {edge.edge_id} references an unknown node")
