from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Raw definitions (as read from a graph file)
# ---------------------------------------------------------------------------

@dataclass
class NodeDef:
    name: str
    answers: List[str] = field(default_factory=list)
    root: bool = False
    attrs: Dict[str, Any] = field(default_factory=dict)


@dataclass
class EdgeDef:
    source: str
    target: str
    keywords: List[str] = field(default_factory=list)


@dataclass
class GraphDef:
    nodes: Dict[str, NodeDef]
    edges: List[EdgeDef]


# ---------------------------------------------------------------------------
# Runtime graph elements (handles are indices into ConversationGraph)
# ---------------------------------------------------------------------------

@dataclass
class GraphNode:
    """A bot utterance state. Edge lists hold edge indices, not objects."""
    index: int
    id: str
    answers: List[str] = field(default_factory=list)
    child_edges: List[int] = field(default_factory=list)
    incoming_edges: List[int] = field(default_factory=list)
    attrs: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_terminal(self) -> bool:
        return not self.child_edges


@dataclass
class GraphEdge:
    """A transition from ``parent`` to ``child`` triggered by any keyword."""
    index: int
    parent: int
    child: int
    keywords: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class EdgeScore:
    edge: GraphEdge
    keyword: str
    distance: int


@dataclass(frozen=True)
class Transition:
    source: GraphNode
    target: GraphNode
    edge: Optional[GraphEdge] = None
    keyword: Optional[str] = None
    distance: Optional[int] = None
    fallback: bool = False


@dataclass
class ValidationReport:
    ok: bool
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    root: Optional[str] = None
    terminal_nodes: List[str] = field(default_factory=list)
    unreachable_nodes: List[str] = field(default_factory=list)
    nodes_without_answers: List[str] = field(default_factory=list)
    edges_without_keywords: List[int] = field(default_factory=list)
