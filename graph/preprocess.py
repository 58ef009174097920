from __future__ import annotations

import json
from typing import Any, Dict, List

from core.exceptions import GraphLoadError
from .schema import EdgeDef, GraphDef, NodeDef


def load_json(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _as_str_list(value: Any, what: str, node_name: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    raise GraphLoadError(f"Node '{node_name}': {what} must be a string or a list")


def _as_flag(value: Any, what: str, node_name: str) -> bool:
    if not isinstance(value, bool):
        raise GraphLoadError(f"Node '{node_name}': {what} must be true or false, got {value!r}")
    return value


def _as_successor_list(value: Any, node_name: str) -> List[Any]:
    # a single successor may be given as a name or an edge object
    if value is None:
        return []
    if isinstance(value, (str, dict)):
        return [value]
    if isinstance(value, list):
        return value
    raise GraphLoadError(f"Node '{node_name}': next_nodes must be a list, a name or an edge object")


def normalize_raw_to_graphdef(raw: Dict[str, Any]) -> GraphDef:
    if not isinstance(raw, dict) or not raw:
        raise GraphLoadError("Graph file is empty or not a JSON object")

    nodes: Dict[str, NodeDef] = {}
    edges: List[EdgeDef] = []

    for node_name, node_cfg in raw.items():
        if not isinstance(node_cfg, dict):
            raise GraphLoadError(f"Node '{node_name}' must be a JSON object")

        attrs = {
            k: v for k, v in node_cfg.items()
            if k not in ("next_nodes", "answers", "root")
        }
        nodes[node_name] = NodeDef(
            name=node_name,
            answers=_as_str_list(node_cfg.get("answers"), "answers", node_name),
            root=_as_flag(node_cfg.get("root", False), "root", node_name),
            attrs=attrs,
        )

        # Edges: source=node_name -> target=each next
        for nxt in _as_successor_list(node_cfg.get("next_nodes"), node_name):
            if isinstance(nxt, dict):
                target = nxt.get("name")
                keywords = _as_str_list(nxt.get("keywords"), "keywords", node_name)
            else:
                target = str(nxt)
                keywords = []

            if not target:
                raise GraphLoadError(f"Node '{node_name}' has an edge without a target name")

            edges.append(EdgeDef(source=node_name, target=target, keywords=keywords))

    return GraphDef(nodes=nodes, edges=edges)
