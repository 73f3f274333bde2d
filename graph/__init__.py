"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, GraphNode, GraphEdge
    from graph import NodeState, GraphValidationError
"""

from graph.node  import GraphNode, NodeState
from graph.edge  import GraphEdge, DEFAULT_WEIGHT
from graph.graph import Graph, GraphValidationError

__all__ = [
    "GraphNode",  "NodeState",
    "GraphEdge",  "DEFAULT_WEIGHT",
    "Graph",      "GraphValidationError",
]
