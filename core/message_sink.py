from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List
import logging

logger = logging.getLogger(__name__)


class MessageSink(ABC):
    """Receives the answers the engine chooses to say."""

    @abstractmethod
    def send_message(self, text: str) -> None:
        pass


class ConsoleSink(MessageSink):
    """Prints answers for the interactive CLI."""

    def __init__(self, prefix: str = "챗봇> "):
        self.prefix = prefix

    def send_message(self, text: str) -> None:
        print(f"{self.prefix}{text}")


class BufferedSink(MessageSink):
    """Collects answers until the caller drains them."""

    def __init__(self) -> None:
        self.messages: List[str] = []

    def send_message(self, text: str) -> None:
        logger.debug(f"Buffered answer: {text!r}")
        self.messages.append(text)

    def drain(self) -> List[str]:
        out, self.messages = self.messages, []
        return out
