from __future__ import annotations

from typing import List, Optional

from .models import APIResponse, APIData, Message, SessionInfo, NodeState, MatchSummary, HistoryItem
from ..models import SessionState


def build_api_response(
    session_state: SessionState,
    response_text: str,
    root: Optional[str],
    successors: Optional[List[str]],
    keywords: Optional[List[str]] = None,
    include_history: bool = False,
) -> APIResponse:
    node_state = NodeState(
        current=session_state.current_node,
        previous=session_state.previous_node,
        successors=successors or [],
        keywords=keywords or [],
        root=root,
    )

    session_info = SessionInfo(
        id=session_state.session_id,
        turn_count=session_state.turn_count,
        fallback_count=session_state.fallback_count,
        started_at=session_state.started_at,
        last_updated=session_state.last_updated,
    )

    match = None
    if session_state.last_match is not None:
        match = MatchSummary(**session_state.last_match.model_dump())

    history = []
    if include_history:
        history = [
            HistoryItem(speaker=h.speaker.value, text=h.text, node=h.node, at=h.at)
            for h in session_state.history
        ]

    return APIResponse(
        data=APIData(
            message=Message(text=response_text or ""),
            session=session_info,
            node=node_state,
            match=match,
            history=history,
        )
    )
