from __future__ import annotations

from .models import APIResponse, APIData, Message, SessionInfo, NodeState, MatchSummary, HistoryItem, GraphSummary
from .builders import build_api_response

__all__ = [
    'APIResponse', 'APIData', 'Message', 'SessionInfo', 'NodeState', 'MatchSummary', 'HistoryItem',
    'GraphSummary',
    'build_api_response'
]
