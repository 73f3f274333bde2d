"""
node.py — Graph Node
====================
A vertex as the algorithms and the player see it.

Design decisions:
  - Identity (`id`) is stable for the lifetime of a run.  Everything else
    (state, distance) is *presentation* state that only ever changes by
    applying a step's partial update.
  - `x` / `y` are optional.  A* reads them for its heuristic; when either
    is missing the heuristic contributes 0.
  - `to_dict()` / `apply_update()` speak the external camelCase shape so a
    step's `nodeUpdates` entries can be merged straight in.
  - `from_dict()` is strict: an unknown state or a coordinate that is not a
    number raises ValueError instead of surfacing later inside A*.
"""

import math
from enum import Enum
from numbers import Real
from typing import Optional, Dict, Any, Mapping


# ---------------------------------------------------------------------------
# Node State Enum — the palette the player renders
# ---------------------------------------------------------------------------
class NodeState(Enum):
    DEFAULT  = "default"    # untouched
    CURRENT  = "current"    # discovered / being worked on
    VISITED  = "visited"    # fully processed
    PATH     = "path"       # on the reconstructed result path
    ERROR    = "error"      # implicated in a failure (negative cycle, bad weight)


def _parse_number(field: str, raw: Any) -> Optional[float]:
    """Read an optional numeric field, accepting numeric strings like edge weights do."""
    if raw is None:
        return None
    if isinstance(raw, Real) and not isinstance(raw, bool):
        value = raw
    elif isinstance(raw, str):
        try:
            # "∞" is how infinite distances leave the JSON API
            value = float({"∞": "inf", "-∞": "-inf"}.get(raw, raw))
        except ValueError:
            raise ValueError(f"{field!r} must be a number, got {raw!r}") from None
        if value.is_integer():
            value = int(value)
    else:
        raise ValueError(f"{field!r} must be a number, got {raw!r}")
    if math.isnan(value):
        raise ValueError(f"{field!r} must be a number, got {raw!r}")
    return value


def _parse_state(raw: Any) -> NodeState:
    try:
        return NodeState(raw)
    except ValueError:
        allowed = ", ".join(s.value for s in NodeState)
        raise ValueError(f"Unknown node state {raw!r} (expected one of: {allowed})") from None


class GraphNode:
    """
    Attributes:
        id       : Unique, stable identifier.
        label    : Display name (defaults to the id).
        x, y     : Optional canvas coordinates.
        state    : NodeState.
        distance : Optional algorithm-assigned number.
    """

    __slots__ = ("id", "label", "x", "y", "state", "distance")

    def __init__(
        self,
        node_id: str,
        label: Optional[str] = None,
        x: Optional[float] = None,
        y: Optional[float] = None,
        state: NodeState = NodeState.DEFAULT,
        distance: Optional[float] = None,
    ):
        self.id:       str                = node_id
        self.label:    str                = label if label is not None else str(node_id)
        self.x:        Optional[float]    = x
        self.y:        Optional[float]    = y
        self.state:    NodeState          = state
        self.distance: Optional[float]    = distance

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def has_position(self) -> bool:
        return self.x is not None and self.y is not None

    def distance_to(self, other: "GraphNode") -> float:
        """Euclidean distance, or 0 when either node has no position."""
        if not (self.has_position and other.has_position):
            return 0.0
        return ((self.x - other.x) ** 2 + (self.y - other.y) ** 2) ** 0.5

    # ------------------------------------------------------------------
    # Step application
    # ------------------------------------------------------------------
    def apply_update(self, update: Mapping[str, Any]) -> None:
        """Shallow-merge a partial node dict (external field names)."""
        for key, value in update.items():
            if key == "id":
                continue
            if key == "state":
                self.state = NodeState(value)
            elif key in ("label", "x", "y", "distance"):
                setattr(self, key, value)
            else:
                raise KeyError(f"Unknown node field: {key!r}")

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id":    self.id,
            "label": self.label,
            "state": self.state.value,
        }
        if self.x is not None:
            data["x"] = self.x
        if self.y is not None:
            data["y"] = self.y
        if self.distance is not None:
            data["distance"] = self.distance
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GraphNode":
        return cls(
            node_id=data["id"],
            label=data.get("label"),
            x=_parse_number("x", data.get("x")),
            y=_parse_number("y", data.get("y")),
            state=_parse_state(data.get("state", NodeState.DEFAULT.value)),
            distance=_parse_number("distance", data.get("distance")),
        )

    def copy(self) -> "GraphNode":
        return GraphNode(self.id, self.label, self.x, self.y, self.state, self.distance)

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"GraphNode(id={self.id}, label={self.label}, state={self.state.value})"

    def __eq__(self, other) -> bool:
        return isinstance(other, GraphNode) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
