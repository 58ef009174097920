from __future__ import annotations

import os
import sys

from graph.graph_builder import GraphBuilder


def main() -> None:
    print("=" * 60)
    print("Conversation graph summary")
    print("=" * 60)

    base_dir = os.path.dirname(os.path.abspath(__file__))
    default_path = os.path.join(base_dir, 'config', 'sample_chatbot.json')
    config_path = sys.argv[1] if len(sys.argv) > 1 else default_path

    builder = GraphBuilder()

    if not builder.load_from_json(config_path):
        sys.exit(1)

    ok = builder.build_graph()
    if builder.report:
        for w in builder.report.warnings:
            print(f"⚠️ {w}")
        for e in builder.report.errors:
            print(f"❌ {e}")

    graph_info = builder.export_graph_info()
    stats = graph_info['graph_stats']
    print(f"\n총 노드 수: {stats['nodes']}")
    print(f"총 엣지 수: {stats['edges']}")
    print(f"키워드 수: {stats['keywords']}")
    print(f"루트 노드: {stats['root']}")
    print(f"유효성: {stats['valid']}")

    for node in graph_info['nodes']:
        successors = builder.get_successors(node['name'])
        print(f"  {node['name']} ({node['answers']} answers) -> {', '.join(successors) or '-'}")

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
