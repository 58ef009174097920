"""
Graph package: conversation graph model, loading and validation
"""

from .graph_builder import GraphBuilder
from .conversation_graph import ConversationGraph
from .schema import (
    NodeDef, EdgeDef, GraphDef, GraphNode, GraphEdge, EdgeScore, Transition, ValidationReport,
)
from .validator import validate_graph
from .preprocess import load_json, normalize_raw_to_graphdef
from .builder import build_conversation_graph, resolve_root

__all__ = [
    'GraphBuilder',
    'ConversationGraph',
    'NodeDef', 'EdgeDef', 'GraphDef', 'GraphNode', 'GraphEdge', 'EdgeScore', 'Transition',
    'ValidationReport',
    'validate_graph',
    'load_json', 'normalize_raw_to_graphdef',
    'build_conversation_graph', 'resolve_root',
]
