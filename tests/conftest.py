import random
from typing import List

import pytest

from core.message_sink import MessageSink
from graph.conversation_graph import ConversationGraph


class RecordingSink(MessageSink):
    def __init__(self):
        self.sent: List[str] = []

    def send_message(self, text: str) -> None:
        self.sent.append(text)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def yes_no_graph():
    g = ConversationGraph()
    g.add_node("start", answers=["Do you like tea?"])
    g.add_node("likes", answers=["Great, me too."])
    g.add_node("dislikes", answers=["Coffee then?"])
    g.add_edge("start", "likes", keywords=["yes", "sure"])
    g.add_edge("start", "dislikes", keywords=["no", "nope"])
    g.set_root("start")
    return g


@pytest.fixture
def sample_config():
    return {
        "welcome": {
            "root": True,
            "answers": ["Hello!"],
            "next_nodes": [
                {"name": "weather", "keywords": ["weather", "rain"]},
                {"name": "bye", "keywords": "bye"},
            ],
        },
        "weather": {
            "answers": ["It is sunny."],
            "next_nodes": [{"name": "welcome", "keywords": ["back"]}],
        },
        "bye": {"answers": ["Goodbye!"]},
    }
