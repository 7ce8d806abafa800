"""
Congestion-aware route search.

A* over the yard lane graph:
- Every edge is traversable both ways; the reverse direction shares the edge id
- Edge weight is the model's EWMA estimate when the edge has been observed,
  otherwise its baseline cost, floored at 1
- Heuristic is the straight-line distance between node coordinates
- Open-set ties on f-score are broken by lowest node id, so routes are reproducible
"""

import heapq
import logging
from collections import defaultdict

from yardcore.domain import Edge, Node, Route

from .congestion import TravelTimeModel
from .primitives import euclidean

logger = logging.getLogger(__name__)

MIN_EDGE_WEIGHT = 1.0


class CongestionRouter:
    """
    Shortest expected-travel-time paths on a fixed graph.

    The adjacency is built once per graph; the travel-time model is passed
    to each query so the same router follows the model as it learns.

    Usage:
        router = CongestionRouter(nodes, edges)
        route = router.find_route(model, "GATE", "B12")
    """

    def __init__(self, nodes: list[Node], edges: list[Edge]):
        self.nodes = {n.node_id: n for n in nodes}
        self.edges = {e.edge_id: e for e in edges}
        # node -> [(neighbour, edge)]
        self._adjacency: dict[str, list[tuple[str, Edge]]] = defaultdict(list)
        for edge in edges:
            self._adjacency[edge.source].append((edge.target, edge))
            self._adjacency[edge.target].append((edge.source, edge))

    def edge_weight(self, edge: Edge, model: TravelTimeModel) -> float:
        predicted = model.estimate(edge.edge_id)
        if predicted is None:
            predicted = edge.base_cost
        return max(MIN_EDGE_WEIGHT, predicted)

    def _heuristic(self, node_id: str, goal: Node) -> float:
        node = self.nodes[node_id]
        return euclidean((node.x, node.y), (goal.x, goal.y))

    def find_route(self, model: TravelTimeModel, start: str, goal: str) -> Route:
        """
        Lowest expected-cost path from start to goal.

        Returns:
            Route with node ids and de-duplicated edge ids, or an empty Route
            when either endpoint is unknown or no path exists
        """
        if start not in self.nodes or goal not in self.nodes:
            logger.debug("Route %s -> %s: unknown endpoint", start, goal)
            return Route.empty()

        goal_node = self.nodes[goal]
        weights = {edge_id: self.edge_weight(e, model) for edge_id, e in self.edges.items()}

        g_score = {start: 0.0}
        came_from: dict[str, tuple[str, str]] = {}  # node -> (previous node, edge id)
        open_heap = [(self._heuristic(start, goal_node), start)]
        f_score = {start: open_heap[0][0]}

        while open_heap:
            f, current = heapq.heappop(open_heap)
            if f > f_score.get(current, float("inf")):
                continue  # stale entry
            if current == goal:
                return self._reconstruct(came_from, goal, g_score[goal])

            for neighbour, edge in self._adjacency.get(current, []):
                if neighbour not in self.nodes:
                    continue
                tentative = g_score[current] + weights[edge.edge_id]
                if tentative < g_score.get(neighbour, float("inf")):
                    came_from[neighbour] = (current, edge.edge_id)
                    g_score[neighbour] = tentative
                    f_score[neighbour] = tentative + self._heuristic(neighbour, goal_node)
                    heapq.heappush(open_heap, (f_score[neighbour], neighbour))

        logger.debug("Route %s -> %s: no path", start, goal)
        return Route.empty()

    def _reconstruct(self, came_from: dict[str, tuple[str, str]], goal: str, cost: float) -> Route:
        nodes = [goal]
        edge_ids = []
        while nodes[-1] in came_from:
            previous, edge_id = came_from[nodes[-1]]
            nodes.append(previous)
            edge_ids.append(edge_id)
        nodes.reverse()
        edge_ids.reverse()
        return Route(nodes=nodes, edges=list(dict.fromkeys(edge_ids)), cost=cost)


def find_route(
    nodes: list[Node],
    edges: list[Edge],
    model: TravelTimeModel,
    start: str,
    goal: str,
) -> Route:
    """One-off route query; builds the adjacency for the given graph."""
    return CongestionRouter(nodes, edges).find_route(model, start, goal)
