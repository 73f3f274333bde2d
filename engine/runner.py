"""
runner.py — Algorithm Runner
=============================
The front door of the engine.  Takes a defensive copy of the caller's
graph, validates it eagerly, dispatches to the registered algorithm and
returns the finished AlgorithmExecution.

Usage:
    runner = AlgorithmRunner(graph_data)          # Graph or plain dict
    execution = runner.run("dijkstra", start="A")
    execution = runner.run_astar("A", "F")
    execution = runner.run_floyd_warshall(directed=True)

Errors:
    GraphValidationError     – dangling edge, duplicate id, unknown start/end,
                               `directed` given to a fixed-mode algorithm
    AlgorithmNotImplemented  – unknown algorithm key

Negative cycles, unreachable goals and malformed weights are NOT errors;
they come back as the trace's terminal step and `execution.outcome`.

Each call owns its own graph copy and trace builder, so one runner (or
many) can be used from concurrent playback sessions without sharing
mutable state.
"""

import logging
from typing import Any, Dict, Optional, Union

from graph import Graph, GraphValidationError
from algorithms import AlgoInfo, AlgorithmExecution, require_algorithm

logger = logging.getLogger(__name__)


class AlgorithmRunner:
    """
    Attributes:
        graph : The runner's private copy of the input graph.
    """

    def __init__(self, graph_data: Union[Graph, Dict[str, Any]]):
        if isinstance(graph_data, Graph):
            self.graph: Graph = graph_data.copy()
        else:
            self.graph = Graph.from_dict(graph_data)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def run(
        self,
        algorithm: str,
        start: Optional[str] = None,
        end: Optional[str] = None,
        directed: Optional[bool] = None,
    ) -> AlgorithmExecution:
        """
        Run `algorithm` to completion and return its trace.

        `directed` overrides the edge mode of algorithms that offer one
        (see AlgoInfo.directed_option); None keeps the algorithm default.
        """
        info = require_algorithm(algorithm)

        try:
            self.graph.validate()
            kwargs = self._build_kwargs(info, start, end, directed)
        except GraphValidationError as exc:
            logger.warning("Rejected %s run: %s", info.key, exc)
            raise

        logger.debug("Running %s with %s", info.key, kwargs)
        # each run gets a fresh copy so nothing leaks between runs
        execution = info.fn(self.graph.copy(), **kwargs)
        logger.info(
            "%s finished: %d step(s), outcome %s",
            info.key, len(execution.steps), execution.outcome.status,
        )
        return execution

    # ------------------------------------------------------------------
    # Convenience wrappers
    # ------------------------------------------------------------------
    def run_bfs(self, start: Optional[str] = None) -> AlgorithmExecution:
        return self.run("bfs", start)

    def run_dfs(self, start: Optional[str] = None) -> AlgorithmExecution:
        return self.run("dfs", start)

    def run_dijkstra(self, start: Optional[str] = None) -> AlgorithmExecution:
        return self.run("dijkstra", start)

    def run_bellman_ford(self, start: Optional[str] = None) -> AlgorithmExecution:
        return self.run("bellman-ford", start)

    def run_astar(self, start: str, end: str) -> AlgorithmExecution:
        return self.run("astar", start, end)

    def run_prims(self, start: Optional[str] = None) -> AlgorithmExecution:
        return self.run("prim", start)

    def run_kruskals(self) -> AlgorithmExecution:
        return self.run("kruskal")

    def run_floyd_warshall(self, directed: Optional[bool] = None) -> AlgorithmExecution:
        return self.run("floyd-warshall", directed=directed)

    def run_ford_fulkerson(self, source: Optional[str] = None,
                           sink: Optional[str] = None) -> AlgorithmExecution:
        return self.run("ford-fulkerson", source, sink)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _build_kwargs(self, info: AlgoInfo, start: Optional[str],
                      end: Optional[str], directed: Optional[bool] = None) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {}
        ids = self.graph.node_ids()

        if info.needs_start:
            if start is None:
                if not ids:
                    raise GraphValidationError(f"{info.label} needs at least one node")
                start = ids[0]
            self.graph.require_node(start, "start node")
            kwargs[info.start_param] = start

        if info.needs_end:
            if end is None and not info.end_optional:
                raise GraphValidationError(f"{info.label} needs an end node")
            if end is not None:
                self.graph.require_node(end, "end node")
                kwargs[info.end_param] = end

        if directed is not None:
            if not info.directed_option:
                raise GraphValidationError(
                    f"{info.label} has a fixed {info.edge_mode} edge mode"
                )
            kwargs["directed"] = bool(directed)

        return kwargs
