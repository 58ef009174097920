from __future__ import annotations

from typing import List, Set

import networkx as nx

from .conversation_graph import ConversationGraph
from .schema import ValidationReport


def validate_graph(graph: ConversationGraph) -> ValidationReport:
    warnings: List[str] = []
    errors: List[str] = []

    dangling = [
        e.index for e in graph.edges
        if not (0 <= e.parent < len(graph.nodes) and 0 <= e.child < len(graph.nodes))
    ]
    if dangling:
        errors.append(f"Edges pointing outside the graph: {dangling}")

    if not graph.has_root:
        errors.append("No root node could be resolved.")
        return ValidationReport(ok=False, warnings=warnings, errors=errors)

    root = graph.root
    g = graph.to_networkx()
    reachable: Set[str] = nx.descendants(g, root.id) | {root.id}

    unreachable = [n.id for n in graph.nodes if n.id not in reachable]
    if unreachable:
        warnings.append(f"Unreachable from root '{root.id}': {unreachable}")

    # every node the engine can land on must be able to answer
    without_answers = [n.id for n in graph.nodes if n.id in reachable and not n.answers]
    if without_answers:
        errors.append(f"Reachable nodes without answers: {without_answers}")

    no_keywords = [e.index for e in graph.edges if not e.keywords and e.index not in dangling]
    if no_keywords:
        labels = [f"{graph.nodes[graph.edges[i].parent].id}->{graph.nodes[graph.edges[i].child].id}" for i in no_keywords]
        warnings.append(f"Edges without keywords never match: {labels}")

    terminal = [n.id for n in graph.nodes if n.is_terminal]
    if terminal:
        warnings.append(f"Terminal nodes (next turn returns to root): {terminal}")

    return ValidationReport(
        ok=not errors,
        warnings=warnings,
        errors=errors,
        root=root.id,
        terminal_nodes=terminal,
        unreachable_nodes=unreachable,
        nodes_without_answers=without_answers,
        edges_without_keywords=no_keywords,
    )
