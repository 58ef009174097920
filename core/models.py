from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import List, Optional, Annotated
from uuid import uuid4

from pydantic import BaseModel, Field, ConfigDict


# ============================================================================
# Base Configuration
# ============================================================================

class BaseConfig(BaseModel):
    """Base configuration with common settings"""
    model_config = ConfigDict(
        validate_assignment=True,
    )


# ============================================================================
# Conversation History
# ============================================================================

class Speaker(str, Enum):
    USER = "user"
    BOT = "bot"


class HistoryEntry(BaseConfig):
    speaker: Speaker
    text: str
    node: Optional[str] = None
    at: datetime = Field(default_factory=datetime.now)


class MatchInfo(BaseConfig):
    """How the last user message was routed"""
    keyword: Optional[str] = None
    distance: Optional[int] = None
    fallback: bool = False


# ============================================================================
# Session State
# ============================================================================

class SessionState(BaseConfig):
    """Snapshot of one conversation, kept next to its engine"""
    # Session info
    session_id: str = Field(default_factory=lambda: str(uuid4()))
    current_node: Optional[str] = None
    previous_node: Optional[str] = None

    # Counters
    turn_count: Annotated[int, Field(ge=0)] = 0
    fallback_count: Annotated[int, Field(ge=0)] = 0

    # Routing
    last_match: Optional[MatchInfo] = None
    history: List[HistoryEntry] = Field(default_factory=list)
    history_limit: Annotated[int, Field(ge=0)] = 50

    # Timestamps
    started_at: datetime = Field(default_factory=datetime.now)
    last_updated: datetime = Field(default_factory=datetime.now)

    # ========================================
    # Node Management
    # ========================================

    def update_node(self, node_name: str):
        """Record a move to ``node_name``"""
        self.previous_node = self.current_node
        self.current_node = node_name
        self.last_updated = datetime.now()

    # ========================================
    # History
    # ========================================

    def add_message(self, speaker: Speaker, text: str, node: Optional[str] = None):
        self.history.append(HistoryEntry(speaker=speaker, text=text, node=node))
        if self.history_limit and len(self.history) > self.history_limit:
            del self.history[: len(self.history) - self.history_limit]
        self.last_updated = datetime.now()

    def last_bot_message(self) -> Optional[str]:
        for entry in reversed(self.history):
            if entry.speaker == Speaker.BOT:
                return entry.text
        return None

    # ========================================
    # Session Management
    # ========================================

    def increment_turn(self):
        """Increment turn counter"""
        self.turn_count += 1
        self.last_updated = datetime.now()


def create_session_state(session_id: Optional[str] = None, history_limit: int = 50) -> SessionState:
    """Create new SessionState with optional session ID"""
    return SessionState(session_id=session_id or str(uuid4()), history_limit=history_limit)
