"""
graph.py — GraphData Container
==============================
The read-only snapshot every algorithm runs against, and the mutable
copy the trace player applies deltas to.

Responsibilities:
  1. CRUD on nodes & edges                  (add / get)
  2. Adjacency queries                      (neighbours, outgoing, incident_edges)
  3. Validation                             (unique ids, edges reference real nodes)
  4. Delta application                      (apply_updates)
  5. Serialisation round-trip               (to_dict / from_dict / copy)

Edge direction is decided per algorithm, not per graph:

  * `neighbours()` treats every edge as bidirectional.  BFS, DFS, Prim,
    Kruskal and Floyd-Warshall consume the graph this way.
  * `outgoing()` only follows `source → target`.  Dijkstra, Bellman-Ford,
    A* and Ford-Fulkerson consume the graph this way, so an undirected
    weighted graph needs one edge per direction for them.

Adjacency is a plain scan over the edge list in insertion order; insertion
order is the tie-break for every algorithm.
"""

from collections.abc import Hashable
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from graph.node import GraphNode
from graph.edge import GraphEdge


class GraphValidationError(ValueError):
    """The graph (or a run parameter) is unusable: a dangling or duplicate id,
    or a node field that cannot be read."""


class Graph:
    """
    Attributes:
        nodes : {node_id: GraphNode}   (insertion ordered)
        edges : {edge_id: GraphEdge}   (insertion ordered)
    """

    def __init__(self):
        self.nodes: Dict[str, GraphNode] = {}
        self.edges: Dict[str, GraphEdge] = {}

    # ==================================================================
    # CRUD
    # ==================================================================
    def add_node(self, node: GraphNode) -> GraphNode:
        if node.id in self.nodes:
            raise GraphValidationError(f"Duplicate node id: {node.id!r}")
        self.nodes[node.id] = node
        return node

    def create_node(self, node_id: str, label: Optional[str] = None,
                    x: Optional[float] = None, y: Optional[float] = None) -> GraphNode:
        """Convenience: create + add in one call."""
        return self.add_node(GraphNode(node_id, label=label, x=x, y=y))

    def add_edge(self, edge: GraphEdge) -> GraphEdge:
        if edge.id in self.edges:
            raise GraphValidationError(f"Duplicate edge id: {edge.id!r}")
        self.edges[edge.id] = edge
        return edge

    def create_edge(self, edge_id: str, source: str, target: str, weight: Any = None) -> GraphEdge:
        return self.add_edge(GraphEdge(edge_id, source, target, weight))

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        return self.nodes.get(node_id)

    def get_edge(self, edge_id: str) -> Optional[GraphEdge]:
        return self.edges.get(edge_id)

    def get_edge_between(self, source: str, target: str) -> Optional[GraphEdge]:
        """First edge oriented source → target."""
        for edge in self.edges.values():
            if edge.source == source and edge.target == target:
                return edge
        return None

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[Tuple[str, GraphEdge]]:
        """[(neighbour_id, edge)] for every edge touching node_id, either end."""
        return [
            (edge.other_end(node_id), edge)
            for edge in self.edges.values()
            if edge.touches(node_id)
        ]

    def outgoing(self, node_id: str) -> List[Tuple[str, GraphEdge]]:
        """[(target_id, edge)] for every edge whose source is node_id."""
        return [
            (edge.target, edge)
            for edge in self.edges.values()
            if edge.source == node_id
        ]

    def incident_edges(self, node_id: str) -> List[GraphEdge]:
        return [edge for edge in self.edges.values() if edge.touches(node_id)]

    # ==================================================================
    # VALIDATION
    # ==================================================================
    def validate(self) -> None:
        """Raise GraphValidationError if any edge has a dangling endpoint."""
        for edge in self.edges.values():
            for end in (edge.source, edge.target):
                if not isinstance(end, Hashable) or end not in self.nodes:
                    raise GraphValidationError(
                        f"Edge {edge.id!r} references unknown node {end!r}"
                    )

    def require_node(self, node_id: str, role: str = "node") -> None:
        if not isinstance(node_id, Hashable) or node_id not in self.nodes:
            raise GraphValidationError(f"Unknown {role} id: {node_id!r}")

    def malformed_edges(self) -> List[GraphEdge]:
        return [edge for edge in self.edges.values() if edge.malformed]

    # ==================================================================
    # DELTAS
    # ==================================================================
    def apply_updates(
        self,
        node_updates: Iterable[Mapping[str, Any]] = (),
        edge_updates: Iterable[Mapping[str, Any]] = (),
    ) -> None:
        """Shallow-merge each partial update into the node / edge with its id."""
        for update in node_updates:
            node = self.get_node(update.get("id"))
            if node is None:
                raise GraphValidationError(f"Update for unknown node: {update!r}")
            node.apply_update(update)
        for update in edge_updates:
            edge = self.get_edge(update.get("id"))
            if edge is None:
                raise GraphValidationError(f"Update for unknown edge: {update!r}")
            edge.apply_update(update)

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes.values()],
            "edges": [e.to_dict() for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Graph":
        g = cls()
        for nd in data.get("nodes", []):
            try:
                node = GraphNode.from_dict(nd)
            except ValueError as exc:
                raise GraphValidationError(f"Invalid node {nd.get('id')!r}: {exc}") from exc
            g.add_node(node)
        for ed in data.get("edges", []):
            g.add_edge(GraphEdge.from_dict(ed))
        return g

    def copy(self) -> "Graph":
        """Defensive copy: new node / edge objects, same values."""
        g = Graph()
        for node in self.nodes.values():
            g.add_node(node.copy())
        for edge in self.edges.values():
            g.add_edge(edge.copy())
        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def label_of(self, node_id: str) -> str:
        node = self.nodes.get(node_id)
        return node.label if node else str(node_id)

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"
