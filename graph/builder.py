from __future__ import annotations

from typing import Optional

from core.exceptions import GraphLoadError
from .conversation_graph import ConversationGraph
from .schema import GraphDef


def resolve_root(graph_def: GraphDef) -> Optional[str]:
    """Flagged root, else first node without incoming edges, else first node."""
    flagged = [name for name, node in graph_def.nodes.items() if node.root]
    if len(flagged) > 1:
        raise GraphLoadError(f"More than one root node: {flagged}")
    if flagged:
        return flagged[0]

    targets = {edge.target for edge in graph_def.edges}
    for name in graph_def.nodes:
        if name not in targets:
            return name
    return next(iter(graph_def.nodes), None)


def build_conversation_graph(graph_def: GraphDef) -> ConversationGraph:
    g = ConversationGraph()

    # add nodes
    for node_name, node_def in graph_def.nodes.items():
        g.add_node(node_name, answers=node_def.answers, attrs=node_def.attrs)

    # add edges
    for edge in graph_def.edges:
        g.add_edge(edge.source, edge.target, keywords=edge.keywords)

    root = resolve_root(graph_def)
    if root is not None:
        g.set_root(root)
    return g
