"""
main.py — Graph Trace Engine Flask App
========================================
A thin JSON API over the engine.  Every request is self-contained: the
client sends the graph, the server runs the algorithm eagerly and returns
the whole trace.  Nothing is kept between requests.

Routes:
  GET  /api/algorithms          – registry cards
  GET  /api/code/<algorithm>    – pseudocode listing for the code panel
  POST /api/run                 – run an algorithm, return the execution
  POST /api/replay              – run, then return the graph as it looks
                                  after step `index`

Request body for /api/run and /api/replay:
    {
        "graph":     {"nodes": [...], "edges": [...]},
        "algorithm": "dijkstra",
        "start":     "A",          (optional)
        "end":       "F",          (optional; A* goal / flow sink)
        "directed":  true,         (optional; floyd-warshall edge mode)
        "index":     12            (/api/replay only; -1 = untouched graph)
    }

Errors come back as {"error": message}:
    400 – malformed body, invalid graph or node field, unknown start / end node
    404 – unknown algorithm

Configuration is read from GRAPH_TRACE_* environment variables, e.g.
GRAPH_TRACE_DEBUG=true or GRAPH_TRACE_PORT=8000.
"""

import logging
import math
from typing import Any, Dict

from flask import Flask, jsonify, request

from graph import Graph, GraphValidationError
from algorithms import (
    AlgorithmNotImplemented, get_algorithm_code, list_algorithms, require_algorithm,
)
from engine import AlgorithmRunner, TracePlayer

logger = logging.getLogger(__name__)


app = Flask(__name__)
app.config.update(DEBUG=False, HOST="127.0.0.1", PORT=5000)
app.config.from_prefixed_env("GRAPH_TRACE")


class InvalidRunRequest(ValueError):
    """The request body is not a usable run request."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _json_safe(value: Any) -> Any:
    """Replace ±inf with "∞" / "-∞" so the payload is strict JSON."""
    if isinstance(value, float) and math.isinf(value):
        return "∞" if value > 0 else "-∞"
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


def _read_run_request() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidRunRequest("Request body must be a JSON object")
    if not isinstance(data.get("graph"), dict):
        raise InvalidRunRequest("'graph' must be an object with 'nodes' and 'edges'")
    if not isinstance(data.get("algorithm"), str):
        raise InvalidRunRequest("'algorithm' must be a string")
    if data.get("directed") is not None and not isinstance(data["directed"], bool):
        raise InvalidRunRequest("'directed' must be true or false")
    return data


def _execute(data: Dict[str, Any]):
    # unknown keys are rejected before the graph is even parsed
    require_algorithm(data["algorithm"])
    try:
        graph = Graph.from_dict(data["graph"])
    except (KeyError, TypeError) as exc:
        raise InvalidRunRequest(f"Malformed graph: {exc}") from exc
    runner = AlgorithmRunner(graph)
    execution = runner.run(
        data["algorithm"], data.get("start"), data.get("end"), data.get("directed"),
    )
    return graph, execution


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
@app.errorhandler(InvalidRunRequest)
def handle_bad_request(exc):
    return jsonify({"error": str(exc)}), 400


@app.errorhandler(GraphValidationError)
def handle_invalid_graph(exc):
    return jsonify({"error": str(exc)}), 400


@app.errorhandler(AlgorithmNotImplemented)
def handle_unknown_algorithm(exc):
    return jsonify({"error": str(exc)}), 404


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
@app.route("/api/algorithms")
def api_algorithms():
    return jsonify({"algorithms": [info.to_dict() for info in list_algorithms()]})


@app.route("/api/code/<algorithm>")
def api_code(algorithm):
    return jsonify({"algorithm": algorithm, "lines": get_algorithm_code(algorithm)})


@app.route("/api/run", methods=["POST"])
def api_run():
    data = _read_run_request()
    _, execution = _execute(data)
    return jsonify(_json_safe(execution.to_dict()))


@app.route("/api/replay", methods=["POST"])
def api_replay():
    data = _read_run_request()
    index = data.get("index", -1)
    if not isinstance(index, int) or isinstance(index, bool):
        raise InvalidRunRequest("'index' must be an integer")

    graph, execution = _execute(data)
    player = TracePlayer(graph, execution)
    if not player.goto_step(index):
        raise InvalidRunRequest(f"Step index {index} out of range (0..{len(execution.steps) - 1})")

    step = player.current_step
    return jsonify(_json_safe({
        "index":       player.current_idx,
        "isComplete":  player.is_complete,
        "step":        step.to_dict() if step else None,
        "graph":       player.graph.to_dict(),
    }))


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Graph trace engine on http://%s:%s", app.config["HOST"], app.config["PORT"])
    app.run(debug=app.config["DEBUG"], host=app.config["HOST"], port=app.config["PORT"])
