from __future__ import annotations

from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field


class MatchSummary(BaseModel):
    keyword: Optional[str] = None
    distance: Optional[int] = None
    fallback: bool = False


class HistoryItem(BaseModel):
    speaker: str
    text: str
    node: Optional[str] = None
    at: datetime


class NodeState(BaseModel):
    current: Optional[str] = None
    previous: Optional[str] = None
    successors: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)
    root: Optional[str] = None


class SessionInfo(BaseModel):
    id: str
    turn_count: int
    fallback_count: int
    started_at: datetime
    last_updated: datetime


class Message(BaseModel):
    text: str


class APIData(BaseModel):
    message: Message
    session: SessionInfo
    node: NodeState
    match: Optional[MatchSummary] = None
    history: List[HistoryItem] = Field(default_factory=list)


class APIResponse(BaseModel):
    data: APIData


class GraphSummary(BaseModel):
    nodes: List[Dict[str, Any]]
    edges: List[Dict[str, Any]]
    graph_stats: Dict[str, Any]
