#!/usr/bin/env python3
"""
CLI keyword-graph chatbot
"""

import argparse
import json
import os
import random
import sys
import logging

# 프로젝트 경로 추가
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from core.config import load_settings
from core.dialogue_engine import DialogueEngine
from core.exceptions import ChatbotError
from core.message_sink import ConsoleSink
from core.runtime.graph_info import load_and_validate


def setup_logging(verbose: bool = False, level: str = "INFO"):
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else getattr(logging, level, logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler('chatbot.log')
        ]
    )


def print_engine_info(engine: DialogueEngine):
    """Print where the conversation currently is"""
    node = engine.current_node
    print(f"\n 세션 정보:")
    print(f"   Root Node: {engine.root_node.id}")
    print(f"   Current Node: {node.id}")
    edges = engine.graph.child_edges(node)
    if edges:
        print(f"   Next Nodes:")
        for edge in edges:
            print(f"     - {engine.graph.child_node(edge).id}: {', '.join(edge.keywords) or '(no keywords)'}")
    else:
        print(f"   Next Nodes: (none, next message returns to root)")


def validate_only(config_path: str) -> bool:
    """Validate configuration without running chatbot"""
    try:
        print(f"Validating configuration: {config_path}")
        graph_info = load_and_validate(config_path)
        print(f"✅ Configuration validation completed successfully!")
        print(f"   Total nodes: {len(graph_info.graph.nodes)}")
        print(f"   Total edges: {len(graph_info.graph.edges)}")
        print(f"   Root node: {graph_info.root}")
        for w in graph_info.report.warnings:
            print(f"   ⚠️ {w}")
        return True
    except ChatbotError as e:
        print(f"❌ Configuration validation failed: {e}")
        return False


def main():
    """Main CLI function"""
    settings = load_settings()

    parser = argparse.ArgumentParser(
        description="Keyword graph chatbot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Basic usage
  python cli/chatbot.py --config config/sample_chatbot.json

  # Validation only
  python cli/chatbot.py --config config/sample_chatbot.json --validate-only

  # Reproducible answers, strict matching
  python cli/chatbot.py --seed 42 --max-distance 3
        """
    )

    parser.add_argument(
        '--config',
        default=settings.config_path,
        help='Path to graph JSON file (default: $CHATBOT_CONFIG or bundled sample)'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=settings.seed,
        help='Seed for answer selection (default: $CHATBOT_SEED or random)'
    )

    parser.add_argument(
        '--max-distance',
        type=int,
        default=settings.max_distance,
        help='Return to root when the best keyword is farther than this'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    parser.add_argument(
        '--info',
        action='store_true',
        help='Show graph position info after every answer'
    )

    parser.add_argument(
        '--validate-only',
        action='store_true',
        help='Validate configuration and exit (no chatbot execution)'
    )

    args = parser.parse_args()

    # Setup logging
    setup_logging(args.verbose, settings.log_level)
    logger = logging.getLogger(__name__)

    # Handle validation-only mode
    if args.validate_only:
        success = validate_only(args.config)
        sys.exit(0 if success else 1)

    try:
        logger.info(f"Loading graph from: {args.config}")
        graph_info = load_and_validate(args.config)
        logger.info(f"Loaded {len(graph_info.graph.nodes)} nodes")

        rng = random.Random(args.seed) if args.seed is not None else random.Random()
        engine = DialogueEngine(graph_info.graph, ConsoleSink(), rng=rng, max_distance=args.max_distance)

        print("\n" + "="*60)
        print("챗봇 시작")
        print("   명령어:")
        print("   - 'quit', 'exit', 'q': 종료")
        print("   - 'reset': 처음으로")
        print("   - 'info': 현재 위치 표시")
        print("="*60)
        engine.start()

        # Main chat loop
        while True:
            try:
                user_input = input("\n 사용자> ").strip()

                if user_input.lower() in ['quit', 'exit', 'q']:
                    print("\n 채팅을 종료합니다.")
                    break

                elif user_input.lower() == 'reset':
                    engine.reset()
                    continue

                elif user_input.lower() == 'info':
                    print_engine_info(engine)
                    continue

                transition = engine.receive_message(user_input)

                if args.verbose:
                    print(f"   [Debug] {transition.source.id} -> {transition.target.id}")
                    print(f"   [Debug] Keyword: {transition.keyword} (distance={transition.distance})")
                    print(f"   [Debug] Fallback: {transition.fallback}")
                if args.info:
                    print_engine_info(engine)

            except KeyboardInterrupt:
                print("\n\n 채팅을 종료합니다.")
                break
            except EOFError:
                print("\n\n입력 종료.")
                break

    except FileNotFoundError as e:
        print(f"파일을 찾을 수 없습니다: {e}")
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"JSON 파일 형식 오류: {e}")
        sys.exit(1)
    except ChatbotError as e:
        logger.error(f"Initialization failed: {e}")
        print(f"초기화 실패: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
