from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from graph.conversation_graph import ConversationGraph
from graph.graph_builder import GraphBuilder
from graph.schema import ValidationReport
from ..exceptions import GraphInvariantError, GraphLoadError


@dataclass
class GraphInfo:
    graph: ConversationGraph
    nodes_info: Dict[str, Dict[str, Any]]
    report: ValidationReport

    @property
    def root(self) -> str:
        return self.graph.root.id


def _finish(gb: GraphBuilder) -> GraphInfo:
    if not gb.build_graph():
        errors = gb.report.errors if gb.report else []
        raise GraphInvariantError(f"Graph build/validation failed: {errors}")
    return GraphInfo(graph=gb.graph, nodes_info=gb.nodes_info, report=gb.report)


def load_and_validate(json_path: str) -> GraphInfo:
    """Load a graph file, build the conversation graph, validate, and return a graph info bundle."""
    gb = GraphBuilder()
    if not gb.load_from_json(json_path):
        raise GraphLoadError(f"Invalid JSON or failed to load: {json_path}")
    return _finish(gb)


def build_and_validate(raw_config: Dict[str, Any]) -> GraphInfo:
    """Same as ``load_and_validate`` for an already parsed config dict."""
    gb = GraphBuilder()
    if not gb.load_from_dict(raw_config):
        raise GraphLoadError("Graph config is empty or not a dict")
    return _finish(gb)
