"""Tests for the travel-time model and route search."""

import threading

import pytest

from yardcore.domain import Edge, Node, Telemetry
from yardcore.optimization import CongestionRouter, TravelTimeModel, find_route

from .conftest import NOW_MS


def sample(edge_id: str, travel_s: float) -> Telemetry:
    return Telemetry(time_ms=NOW_MS, edge_id=edge_id, travel_s=travel_s)


class TestTravelTimeModel:
    """Tests for EWMA travel-time learning."""

    def test_first_sample_seeds_then_smooths(self):
        model = TravelTimeModel(alpha=0.25)

        model.update([sample("E", 120)])
        assert model.estimate("E") == pytest.approx(120)

        model.update([sample("E", 60)])
        assert model.estimate("E") == pytest.approx(0.25 * 60 + 0.75 * 120)

    def test_batch_applied_in_order(self):
        forward = TravelTimeModel(alpha=0.5)
        backward = TravelTimeModel(alpha=0.5)

        forward.update([sample("E", 100), sample("E", 20), sample("E", 60)])
        backward.update([sample("E", 60), sample("E", 20), sample("E", 100)])

        assert forward.estimate("E") == pytest.approx(60)
        assert backward.estimate("E") == pytest.approx(70)

    def test_only_addressed_edge_changes(self):
        model = TravelTimeModel()
        model.update([sample("A", 10), sample("B", 50)])
        model.observe(sample("A", 30))

        assert model.estimate("B") == pytest.approx(50)
        assert model.snapshot() == pytest.approx({"A": 15, "B": 50})

    def test_unobserved_edge(self):
        model = TravelTimeModel()

        assert model.estimate("missing") is None
        assert "missing" not in model
        assert len(model) == 0

    @pytest.mark.parametrize("alpha", [0.0, -0.1, 1.5])
    def test_rejects_invalid_alpha(self, alpha):
        with pytest.raises(ValueError):
            TravelTimeModel(alpha=alpha)

    def test_concurrent_updates_are_serialised(self):
        """With alpha=1 every update is a plain write, so no sample can be lost to a torn read."""
        model = TravelTimeModel(alpha=1.0)
        barrier = threading.Barrier(4)

        def feed(edge_id: str):
            barrier.wait()
            for i in range(200):
                model.observe(sample(edge_id, float(i)))

        threads = [threading.Thread(target=feed, args=(f"E{n}",)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert model.snapshot() == {f"E{n}": 199.0 for n in range(4)}


class TestCongestionRouter:
    """Tests for A* routing."""

    def test_cycle_preferred_over_expensive_shortcut(self, nodes, edges):
        """Empty model: baseline costs make two cycle edges cheaper than the diagonal."""
        route = find_route(nodes, edges, TravelTimeModel(), "A", "C")

        assert route.found
        assert route.nodes == ["A", "B", "C"]
        assert route.edges == ["AB", "BC"]
        assert route.cost == pytest.approx(120)

    def test_learned_congestion_diverts_route(self, nodes, edges):
        model = TravelTimeModel()
        model.update([sample("AB", 500)])

        route = find_route(nodes, edges, model, "A", "C")

        assert route.nodes == ["A", "D", "C"]
        assert route.edges == ["DA", "CD"]

    def test_edges_traversable_both_ways(self, nodes, edges):
        route = find_route(nodes, edges, TravelTimeModel(), "D", "A")

        assert route.nodes == ["D", "A"]
        assert route.edges == ["DA"]

    def test_telemetry_from_the_yard_demo(self, nodes, edges):
        """Observed delays on AB, BC and AC leave the direct lane as the best way to D."""
        model = TravelTimeModel()
        model.update([sample("AB", 120), sample("BC", 90), sample("AC", 300)])

        route = CongestionRouter(nodes, edges).find_route(model, "A", "D")

        assert route.nodes == ["A", "D"]
        assert route.cost == pytest.approx(60)

    def test_no_path(self, nodes, edges):
        island = nodes + [Node(node_id="Z", x=500, y=500)]

        route = find_route(island, edges, TravelTimeModel(), "A", "Z")

        assert not route.found
        assert route.nodes == []
        assert route.edges == []

    def test_unknown_endpoint(self, nodes, edges):
        route = find_route(nodes, edges, TravelTimeModel(), "A", "nowhere")
        assert not route.found

    def test_start_is_goal(self, nodes, edges):
        route = find_route(nodes, edges, TravelTimeModel(), "B", "B")

        assert route.nodes == ["B"]
        assert route.edges == []
        assert route.cost == 0.0

    def test_edge_weight_floored_at_one(self):
        nodes = [Node(node_id="A", x=0, y=0), Node(node_id="B", x=0, y=0)]
        edges = [Edge(edge_id="AB", source="A", target="B", base_cost=0)]

        route = find_route(nodes, edges, TravelTimeModel(), "A", "B")

        assert route.cost == pytest.approx(1.0)

    def test_equal_cost_paths_resolve_deterministically(self, nodes):
        """Two equal-cost ways round the square: the lower node id is expanded first."""
        edges = [
            Edge(edge_id="AB", source="A", target="B", base_cost=60),
            Edge(edge_id="BC", source="B", target="C", base_cost=60),
            Edge(edge_id="CD", source="C", target="D", base_cost=60),
            Edge(edge_id="DA", source="D", target="A", base_cost=60),
        ]

        routes = [find_route(nodes, edges, TravelTimeModel(), "A", "C") for _ in range(5)]

        assert all(r.nodes == ["A", "B", "C"] for r in routes)
