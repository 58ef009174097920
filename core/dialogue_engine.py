from __future__ import annotations

import logging
import random
from typing import List, Optional

from graph.conversation_graph import ConversationGraph
from graph.schema import EdgeScore, GraphNode, Transition
from .exceptions import EmptyAnswersError, UnknownNodeError
from .message_sink import MessageSink
from .string_distance import distance

logger = logging.getLogger(__name__)


class DialogueEngine:
    """Walks a conversation graph one user message at a time.

    The engine only reads the graph. Its sole mutable state is the current
    node, changed through ``set_current_node``. Answers are chosen with the
    injected ``rng`` and handed to ``message_sink``.
    """

    def __init__(self, graph: ConversationGraph, message_sink: MessageSink,
                 rng: Optional[random.Random] = None, max_distance: Optional[int] = None):
        self.graph = graph
        self.message_sink = message_sink
        self.rng = rng if rng is not None else random.Random()
        self.max_distance = max_distance
        self.root_node: GraphNode = graph.root
        self.current_node: GraphNode = self.root_node

    def start(self) -> str:
        """Position at root and say the greeting."""
        return self.set_current_node(self.root_node)

    def reset(self) -> str:
        logger.debug("Conversation reset to root")
        return self.set_current_node(self.root_node)

    def score_edges(self, message: str) -> List[EdgeScore]:
        """Distance of ``message`` to every keyword on the current node's edges, in edge then keyword order."""
        scores: List[EdgeScore] = []
        for edge in self.graph.child_edges(self.current_node):
            for keyword in edge.keywords:
                scores.append(EdgeScore(edge=edge, keyword=keyword, distance=distance(keyword, message)))
        return scores

    def receive_message(self, message: str) -> Transition:
        source = self.current_node
        scores = self.score_edges(message)
        logger.debug(
            f"[Match] node={source.id} message={message!r} scores="
            f"{[(s.keyword, s.distance) for s in scores]}"
        )

        best: Optional[EdgeScore] = None
        if scores:
            # stable sort: first pair with the minimal distance wins ties
            best = sorted(scores, key=lambda s: s.distance)[0]

        if best is None:
            logger.info(f"No keyword edges on '{source.id}', returning to root '{self.root_node.id}'")
            transition = Transition(source=source, target=self.root_node, fallback=True)
        elif self.max_distance is not None and best.distance > self.max_distance:
            logger.info(
                f"Best keyword {best.keyword!r} at distance {best.distance} exceeds "
                f"max_distance={self.max_distance}, returning to root '{self.root_node.id}'"
            )
            transition = Transition(
                source=source,
                target=self.root_node,
                keyword=best.keyword,
                distance=best.distance,
                fallback=True,
            )
        else:
            transition = Transition(
                source=source,
                target=self.graph.child_node(best.edge),
                edge=best.edge,
                keyword=best.keyword,
                distance=best.distance,
            )

        logger.debug(f"노드 전환: '{source.id}' → '{transition.target.id}'")
        self.set_current_node(transition.target)
        return transition

    def set_current_node(self, node: GraphNode) -> str:
        if not self.graph.owns(node):
            raise UnknownNodeError(f"Node '{node.id}' does not belong to this graph")
        if not node.answers:
            raise EmptyAnswersError(node.id)

        self.current_node = node
        answer = self.rng.choice(node.answers)
        self.message_sink.send_message(answer)
        return answer
