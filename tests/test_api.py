"""HTTP layer, through Flask's test client."""

import pytest

from main import app


@pytest.fixture
def client():
    app.config.update(TESTING=True)
    with app.test_client() as client:
        yield client


GRAPH = {
    "nodes": [{"id": "A"}, {"id": "B"}, {"id": "C"}],
    "edges": [
        {"id": "ab", "source": "A", "target": "B", "weight": 1},
        {"id": "bc", "source": "B", "target": "C", "weight": 2},
    ],
}


def test_list_algorithms(client):
    resp = client.get("/api/algorithms")
    assert resp.status_code == 200
    cards = resp.get_json()["algorithms"]
    assert len(cards) == 9
    astar = next(c for c in cards if c["key"] == "astar")
    assert astar["needsEnd"] is True
    assert astar["edgeMode"] == "directed"
    fw = next(c for c in cards if c["key"] == "floyd-warshall")
    assert fw["directedOption"] is True
    assert astar["directedOption"] is False


def test_code_listing(client):
    data = client.get("/api/code/bfs").get_json()
    assert data["lines"][0] == "function BFS(graph, startNode):"
    assert client.get("/api/code/nope").get_json()["lines"] == ["Algorithm not implemented"]


def test_run_returns_strict_json_with_infinity(client):
    graph = {"nodes": GRAPH["nodes"] + [{"id": "D"}], "edges": GRAPH["edges"]}
    resp = client.post("/api/run", json={"graph": graph, "algorithm": "dijkstra", "start": "A"})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["currentStep"] == 0
    assert data["isComplete"] is False
    assert data["outcome"]["distances"]["D"] == "∞"
    assert data["steps"][0]["matrix"]["A"]["D"] == "∞"
    assert b"Infinity" not in resp.data


def test_run_astar(client):
    resp = client.post("/api/run", json={
        "graph": GRAPH, "algorithm": "astar", "start": "A", "end": "C",
    })
    assert resp.get_json()["outcome"]["path"] == ["A", "B", "C"]


def test_negative_cycle_is_a_normal_response(client):
    graph = {
        "nodes": [{"id": "A"}, {"id": "B"}],
        "edges": [
            {"id": "e1", "source": "A", "target": "B", "weight": -2},
            {"id": "e2", "source": "B", "target": "A", "weight": -1},
        ],
    }
    resp = client.post("/api/run", json={"graph": graph, "algorithm": "bellman-ford"})
    assert resp.status_code == 200
    assert resp.get_json()["outcome"]["status"] == "negative_cycle"


def test_unknown_algorithm_is_404(client):
    resp = client.post("/api/run", json={"graph": GRAPH, "algorithm": "bogo"})
    assert resp.status_code == 404
    assert "bogo" in resp.get_json()["error"]


@pytest.mark.parametrize("body", [
    None,
    {"algorithm": "bfs"},
    {"graph": GRAPH},
    {"graph": {"nodes": [{"label": "no id"}]}, "algorithm": "bfs"},
])
def test_bad_body_is_400(client, body):
    resp = client.post("/api/run", json=body) if body is not None else client.post(
        "/api/run", data="not json", content_type="application/json")
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_invalid_graph_is_400(client):
    graph = {"nodes": [{"id": "A"}], "edges": [{"id": "e", "source": "A", "target": "Q"}]}
    resp = client.post("/api/run", json={"graph": graph, "algorithm": "bfs"})
    assert resp.status_code == 400
    assert "Q" in resp.get_json()["error"]


def test_unknown_start_is_400(client):
    resp = client.post("/api/run", json={"graph": GRAPH, "algorithm": "bfs", "start": "Z"})
    assert resp.status_code == 400


@pytest.mark.parametrize("node", [
    {"id": "A", "state": "bogus"},
    {"id": "A", "x": "left", "y": 0},
    {"id": "A", "x": None, "y": [0]},
])
def test_unreadable_node_field_is_400(client, node):
    graph = {"nodes": [node] + GRAPH["nodes"][1:], "edges": GRAPH["edges"]}
    resp = client.post("/api/run", json={
        "graph": graph, "algorithm": "astar", "start": "A", "end": "C",
    })
    assert resp.status_code == 400
    assert "Invalid node 'A'" in resp.get_json()["error"]


def test_numeric_string_coordinates_are_accepted(client):
    nodes = [{"id": nid, "x": str(i), "y": "0"} for i, nid in enumerate("ABC")]
    resp = client.post("/api/run", json={
        "graph": {"nodes": nodes, "edges": GRAPH["edges"]},
        "algorithm": "astar", "start": "A", "end": "C",
    })
    assert resp.status_code == 200
    assert resp.get_json()["outcome"]["path"] == ["A", "B", "C"]


def test_floyd_warshall_directed_flag(client):
    body = {"graph": GRAPH, "algorithm": "floyd-warshall"}
    symmetric = client.post("/api/run", json=body).get_json()
    directed = client.post("/api/run", json=dict(body, directed=True)).get_json()
    assert symmetric["steps"][-1]["matrix"]["C"]["A"] == 3
    assert directed["steps"][-1]["matrix"]["C"]["A"] == "∞"
    assert directed["steps"][-1]["matrix"]["A"]["C"] == 3


@pytest.mark.parametrize("algorithm, directed", [("floyd-warshall", "yes"), ("bfs", True)])
def test_bad_directed_flag_is_400(client, algorithm, directed):
    resp = client.post("/api/run", json={"graph": GRAPH, "algorithm": algorithm, "directed": directed})
    assert resp.status_code == 400
    assert "error" in resp.get_json()


class TestReplay:
    def test_graph_after_last_step(self, client):
        run = client.post("/api/run", json={"graph": GRAPH, "algorithm": "bfs"}).get_json()
        last = len(run["steps"]) - 1
        data = client.post("/api/replay", json={
            "graph": GRAPH, "algorithm": "bfs", "index": last,
        }).get_json()
        assert data["isComplete"] is True
        assert data["step"]["id"] == last
        assert {n["state"] for n in data["graph"]["nodes"]} == {"visited"}

    def test_default_index_is_untouched_graph(self, client):
        data = client.post("/api/replay", json={"graph": GRAPH, "algorithm": "bfs"}).get_json()
        assert data["index"] == -1
        assert data["step"] is None
        assert {n["state"] for n in data["graph"]["nodes"]} == {"default"}

    @pytest.mark.parametrize("index", [999, "3", True])
    def test_bad_index(self, client, index):
        resp = client.post("/api/replay", json={"graph": GRAPH, "algorithm": "bfs", "index": index})
        assert resp.status_code == 400
