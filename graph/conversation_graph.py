from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

import networkx as nx

from core.exceptions import DanglingEdgeError, MissingRootError, UnknownNodeError
from .schema import GraphEdge, GraphNode

logger = logging.getLogger(__name__)


class ConversationGraph:
    """Arena of dialogue nodes and keyword edges.

    Nodes and edges refer to each other through integer handles into
    ``nodes`` and ``edges``. Only the builder calls the ``add_*`` methods;
    once built the graph is read-only and may be shared by many engines.
    """

    def __init__(self) -> None:
        self.nodes: List[GraphNode] = []
        self.edges: List[GraphEdge] = []
        self._by_id: Dict[str, int] = {}
        self._root: Optional[int] = None

    # ------------------------------
    # Construction
    # ------------------------------
    def add_node(self, node_id: str, answers: Iterable[str] = (),
                 attrs: Optional[Dict[str, Any]] = None) -> GraphNode:
        if node_id in self._by_id:
            raise ValueError(f"Duplicate node id: {node_id}")
        node = GraphNode(
            index=len(self.nodes),
            id=node_id,
            answers=list(answers),
            attrs=dict(attrs or {}),
        )
        self.nodes.append(node)
        self._by_id[node_id] = node.index
        return node

    def add_edge(self, parent_id: str, child_id: str, keywords: Iterable[str] = ()) -> GraphEdge:
        for name in (parent_id, child_id):
            if name not in self._by_id:
                raise DanglingEdgeError(f"Edge {parent_id} -> {child_id} references unknown node '{name}'")
        parent = self.nodes[self._by_id[parent_id]]
        child = self.nodes[self._by_id[child_id]]
        edge = GraphEdge(
            index=len(self.edges),
            parent=parent.index,
            child=child.index,
            keywords=list(keywords),
        )
        self.edges.append(edge)
        parent.child_edges.append(edge.index)
        child.incoming_edges.append(edge.index)
        return edge

    def set_root(self, node_id: str) -> None:
        if node_id not in self._by_id:
            raise UnknownNodeError(f"Unknown root node: {node_id}")
        self._root = self._by_id[node_id]

    # ------------------------------
    # Lookup
    # ------------------------------
    @property
    def root(self) -> GraphNode:
        if self._root is None:
            raise MissingRootError("Conversation graph has no root node")
        return self.nodes[self._root]

    @property
    def has_root(self) -> bool:
        return self._root is not None

    def has_node(self, node_id: str) -> bool:
        return node_id in self._by_id

    def node(self, node_id: str) -> GraphNode:
        try:
            return self.nodes[self._by_id[node_id]]
        except KeyError:
            raise UnknownNodeError(f"Unknown node: {node_id}") from None

    def node_at(self, index: int) -> GraphNode:
        if not 0 <= index < len(self.nodes):
            raise UnknownNodeError(f"Node handle out of range: {index}")
        return self.nodes[index]

    def edge_at(self, index: int) -> GraphEdge:
        if not 0 <= index < len(self.edges):
            raise DanglingEdgeError(f"Edge handle out of range: {index}")
        return self.edges[index]

    def owns(self, node: GraphNode) -> bool:
        return 0 <= node.index < len(self.nodes) and self.nodes[node.index] is node

    def child_edges(self, node: GraphNode) -> List[GraphEdge]:
        return [self.edge_at(i) for i in node.child_edges]

    def incoming_edges(self, node: GraphNode) -> List[GraphEdge]:
        return [self.edge_at(i) for i in node.incoming_edges]

    def child_node(self, edge: GraphEdge) -> GraphNode:
        return self.node_at(edge.child)

    def parent_node(self, edge: GraphEdge) -> GraphNode:
        return self.node_at(edge.parent)

    def children(self, node: GraphNode) -> List[GraphNode]:
        return [self.child_node(e) for e in self.child_edges(node)]

    # ------------------------------
    # Views
    # ------------------------------
    def to_networkx(self) -> nx.MultiDiGraph:
        """Export as a MultiDiGraph (parallel edges between two nodes are legal)."""
        g: nx.MultiDiGraph = nx.MultiDiGraph()
        for node in self.nodes:
            g.add_node(node.id, answers=len(node.answers), **node.attrs)
        for edge in self.edges:
            if not (0 <= edge.parent < len(self.nodes) and 0 <= edge.child < len(self.nodes)):
                logger.warning(f"Skipping dangling edge {edge.index} in networkx export")
                continue
            g.add_edge(
                self.nodes[edge.parent].id,
                self.nodes[edge.child].id,
                key=edge.index,
                keywords=list(edge.keywords),
            )
        return g

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        root = self.nodes[self._root].id if self._root is not None else None
        return f"ConversationGraph(nodes={len(self.nodes)}, edges={len(self.edges)}, root={root!r})"
