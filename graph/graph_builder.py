from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from core.exceptions import GraphError
from .builder import build_conversation_graph
from .conversation_graph import ConversationGraph
from .preprocess import load_json, normalize_raw_to_graphdef
from .schema import ValidationReport
from .validator import validate_graph

logger = logging.getLogger(__name__)


class GraphBuilder:
    def __init__(self) -> None:
        self.graph: ConversationGraph = ConversationGraph()
        self.nodes_info: Dict[str, Dict[str, Any]] = {}
        self.report: Optional[ValidationReport] = None

    @classmethod
    def from_graph(cls, graph: ConversationGraph, report: Optional[ValidationReport] = None) -> "GraphBuilder":
        gb = cls()
        gb.graph = graph
        gb.report = report
        return gb

    def load_from_json(self, json_path: str) -> bool:
        try:
            raw_config = load_json(json_path)
            if not isinstance(raw_config, dict) or not raw_config:
                logger.error("❌ JSON 파일이 비어있거나 딕셔너리 형태로 입력되지 않았습니다.")
                return False

            self.nodes_info = raw_config

            logger.info(f"✅ Graph file loaded: {json_path}")
            logger.info(f"Loaded node count: {len(self.nodes_info)}")
            return True

        except FileNotFoundError:
            logger.error(f"❌ JSON 파일을 찾을 수 없습니다: {json_path}")
            return False
        except json.JSONDecodeError as e:
            logger.error(f"❌ JSON 파싱 오류: {e}")
            return False
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"❌ 설정 로드 중 오류: {json_path}: {e}")
            return False

    def load_from_dict(self, raw_config: Dict[str, Any]) -> bool:
        if not isinstance(raw_config, dict) or not raw_config:
            logger.error("❌ Graph config is empty or not a dict")
            return False
        self.nodes_info = raw_config
        return True

    def build_graph(self) -> bool:
        if not self.nodes_info:
            logger.error("❌ No graph config loaded.")
            return False

        try:
            graph_def = normalize_raw_to_graphdef(self.nodes_info)
            self.graph = build_conversation_graph(graph_def)
        except GraphError as e:
            logger.error(f"❌ Graph build failed: {e}")
            self.report = ValidationReport(ok=False, errors=[str(e)])
            return False

        logger.info(f"✅ Graph built: {len(self.graph.nodes)} nodes, {len(self.graph.edges)} edges")

        report = validate_graph(self.graph)
        for w in report.warnings:
            logger.warning(w)
        for e in report.errors:
            logger.error(e)
        self.report = report
        return report.ok

    def get_node_info(self, node_name: str) -> Dict[str, Any]:
        if not self.graph.has_node(node_name):
            logger.warning(f"⚠️ 노드를 찾을 수 없습니다: {node_name}")
            return {}
        node = self.graph.node(node_name)
        return {
            "name": node.id,
            "answers": list(node.answers),
            "next_nodes": [
                {"name": self.graph.child_node(e).id, "keywords": list(e.keywords)}
                for e in self.graph.child_edges(node)
            ],
            **node.attrs,
        }

    def export_graph_info(self) -> Dict[str, Any]:
        nodes_payload = []
        for node in self.graph.nodes:
            nodes_payload.append({
                "name": node.id,
                "answers": len(node.answers),
                "terminal": node.is_terminal,
                **node.attrs,
            })

        edges_payload = []
        for edge in self.graph.edges:
            edges_payload.append({
                "from": self.graph.parent_node(edge).id,
                "to": self.graph.child_node(edge).id,
                "keywords": list(edge.keywords),
            })

        graph_stats = {
            "nodes": len(self.graph.nodes),
            "edges": len(self.graph.edges),
            "keywords": sum(len(e.keywords) for e in self.graph.edges),
            "root": self.graph.root.id if self.graph.has_root else None,
            "valid": bool(self.report and self.report.ok),
        }

        return {
            "nodes": nodes_payload,
            "edges": edges_payload,
            "graph_stats": graph_stats,
        }

    def get_predecessors(self, node_name: str) -> List[str]:
        if not self.graph.has_node(node_name):
            return []
        node = self.graph.node(node_name)
        return [self.graph.parent_node(e).id for e in self.graph.incoming_edges(node)]

    def get_successors(self, node_name: str) -> List[str]:
        if not self.graph.has_node(node_name):
            return []
        return [n.id for n in self.graph.children(self.graph.node(node_name))]
