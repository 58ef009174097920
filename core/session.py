from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import List

from .dialogue_engine import DialogueEngine
from .message_sink import BufferedSink
from .models import SessionState, Speaker


@dataclass
class ChatSession:
    """One conversation: its engine, the sink the engine speaks into, and state.

    ``lock`` serializes turns; an engine must never be driven concurrently.
    """
    state: SessionState
    engine: DialogueEngine
    sink: BufferedSink
    lock: threading.Lock = field(default_factory=threading.Lock)

    @property
    def session_id(self) -> str:
        return self.state.session_id

    def collect_answers(self) -> List[str]:
        answers = self.sink.drain()
        for text in answers:
            self.state.add_message(Speaker.BOT, text, node=self.engine.current_node.id)
        return answers
