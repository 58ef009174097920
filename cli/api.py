from __future__ import annotations

from typing import Any, Dict, List, Optional
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from fastapi.responses import RedirectResponse

from core.config import load_settings
from core.runtime.graph_info import load_and_validate
from core.session_manager import SessionManager
from core.api import APIResponse, GraphSummary
from graph.graph_builder import GraphBuilder


class StartSessionReq(BaseModel):
    session_id: Optional[str] = None


class SendMessageReq(BaseModel):
    session_id: Optional[str] = None
    message: str


def _unwrap(result: Dict[str, Any]) -> Dict[str, Any]:
    if result.get('error'):
        if result.get('not_found'):
            status = 404
        elif result.get('conflict'):
            status = 409
        else:
            status = 500
        raise HTTPException(status_code=status, detail=result['response'])
    return result.get('data') or {}


def create_app(manager: Optional[SessionManager] = None) -> FastAPI:
    if manager is None:
        settings = load_settings()
        graph_info = load_and_validate(settings.config_path)
        manager = SessionManager(
            graph_info=graph_info,
            seed=settings.seed,
            max_distance=settings.max_distance,
            session_ttl=settings.session_ttl,
            history_limit=settings.history_limit,
        )

    app = FastAPI(title="Keyword Graph Chatbot API")
    app.state.manager = manager

    @app.get("/", include_in_schema=False)
    def root() -> RedirectResponse:
        return RedirectResponse(url="/docs")

    @app.post("/sessions", response_model=APIResponse)
    def start_session(body: StartSessionReq) -> Dict[str, Any]:
        return _unwrap(manager.start_session(session_id=body.session_id))

    @app.get("/sessions", response_model=List[str])
    def list_sessions() -> List[str]:
        return manager.list_sessions()

    @app.post("/sessions/{session_id}/messages", response_model=APIResponse)
    def send_message(session_id: str, body: SendMessageReq) -> Dict[str, Any]:
        if body.session_id and body.session_id != session_id:
            raise HTTPException(status_code=400, detail="session_id mismatch")
        return _unwrap(manager.process_turn(session_id=session_id, user_message=body.message))

    @app.get("/sessions/{session_id}", response_model=APIResponse)
    def get_session(session_id: str) -> Dict[str, Any]:
        return _unwrap(manager.get_session_info(session_id))

    @app.post("/sessions/{session_id}/reset", response_model=APIResponse)
    def reset_session(session_id: str) -> Dict[str, Any]:
        return _unwrap(manager.reset_session(session_id))

    @app.delete("/sessions/{session_id}")
    def end_session(session_id: str) -> Dict[str, Any]:
        if not manager.end_session(session_id):
            raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
        return {"ok": True}

    @app.get("/graph", response_model=GraphSummary)
    def graph_summary() -> Dict[str, Any]:
        return GraphBuilder.from_graph(manager.graph, manager.runtime.report).export_graph_info()

    @app.get("/health")
    def health() -> Dict[str, Any]:
        return {"ok": True}

    return app


app = create_app()
