from typing import Dict, Any, List, Optional
import logging
import random
import uuid

from .dialogue_engine import DialogueEngine
from .exceptions import ChatbotError, SessionExistsError, SessionNotFoundError
from .message_sink import BufferedSink
from .models import MatchInfo, Speaker, create_session_state
from .runtime.graph_info import GraphInfo
from .session import ChatSession
from .api import build_api_response
from storage.session_store import SessionStore


logger = logging.getLogger(__name__)


class SessionManager:
    """Owns conversations: one DialogueEngine per session over a shared graph."""

    def __init__(self, graph_info: GraphInfo, seed: Optional[int] = None,
                 max_distance: Optional[int] = None, session_ttl: int = 3600,
                 history_limit: int = 50, store: Optional[SessionStore] = None):
        self.runtime = graph_info
        self.graph = graph_info.graph
        self.seed = seed
        self.max_distance = max_distance
        self.history_limit = history_limit
        self.store = store or SessionStore(session_ttl=session_ttl)
        logger.info(f"Session manager initialized. Root node: {self.graph.root.id}")

    def _new_rng(self) -> random.Random:
        # same seed for every session keeps each conversation reproducible
        return random.Random(self.seed) if self.seed is not None else random.Random()

    def _require(self, session_id: str) -> ChatSession:
        session = self.store.load(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def start_session(self, session_id: str = None) -> Dict[str, Any]:
        """Start a conversation at root. A live session id is never reused."""
        try:
            if session_id and self.store.load(session_id) is not None:
                raise SessionExistsError(session_id)
            state = create_session_state(session_id or str(uuid.uuid4()), self.history_limit)
            sink = BufferedSink()
            engine = DialogueEngine(self.graph, sink, rng=self._new_rng(), max_distance=self.max_distance)
            session = ChatSession(state=state, engine=engine, sink=sink)

            with session.lock:
                engine.start()
                state.update_node(engine.current_node.id)
                answers = session.collect_answers()
            self.store.save(session)
            logger.info(f"세션 시작: {state.session_id}")
            return self._build_result(session, " ".join(answers))
        except SessionExistsError as e:
            logger.warning(str(e))
            return self._create_error_response(str(e), conflict=True)
        except ChatbotError as e:
            logger.error(f"Failed to start session: {e}")
            return self._create_error_response(str(e))

    def process_turn(self, session_id: str, user_message: str) -> Dict[str, Any]:
        try:
            session = self._require(session_id)
            with session.lock:
                state = session.state
                logger.debug(f"사용자 입력: '{user_message}' (세션: {session_id})")
                source_node = state.current_node
                transition = session.engine.receive_message(user_message)

                # only a completed transition counts as a turn
                state.add_message(Speaker.USER, user_message, node=source_node)
                state.increment_turn()

                state.last_match = MatchInfo(
                    keyword=transition.keyword,
                    distance=transition.distance,
                    fallback=transition.fallback,
                )
                if transition.fallback:
                    state.fallback_count += 1
                state.update_node(transition.target.id)
                answers = session.collect_answers()
            self.store.save(session)
            return self._build_result(session, " ".join(answers))
        except SessionNotFoundError as e:
            logger.warning(str(e))
            return self._create_error_response(str(e), not_found=True)
        except ChatbotError as e:
            logger.error(f"Error processing turn: {e}")
            return self._create_error_response("처리 중 오류가 발생했습니다.")

    def reset_session(self, session_id: str) -> Dict[str, Any]:
        try:
            session = self._require(session_id)
            with session.lock:
                session.engine.reset()
                session.state.update_node(session.engine.current_node.id)
                session.state.last_match = None
                answers = session.collect_answers()
            self.store.save(session)
            logger.info(f"세션 리셋: {session_id}")
            return self._build_result(session, " ".join(answers))
        except SessionNotFoundError as e:
            return self._create_error_response(str(e), not_found=True)
        except ChatbotError as e:
            logger.error(f"Error resetting session: {e}")
            return self._create_error_response("세션 리셋 중 오류가 발생했습니다.")

    def end_session(self, session_id: str) -> bool:
        ended = self.store.delete(session_id)
        if ended:
            logger.info(f"세션 종료: {session_id}")
        return ended

    def get_session_info(self, session_id: str) -> Dict[str, Any]:
        try:
            session = self._require(session_id)
            return self._build_result(session, session.state.last_bot_message() or "", include_history=True)
        except SessionNotFoundError as e:
            return self._create_error_response(str(e), not_found=True)

    def list_sessions(self) -> List[str]:
        return self.store.list_sessions()

    def _build_result(self, session: ChatSession, response_text: str,
                      include_history: bool = False) -> Dict[str, Any]:
        state = session.state
        node = session.engine.current_node
        successors = [n.id for n in self.graph.children(node)]
        keywords = [k for e in self.graph.child_edges(node) for k in e.keywords]
        api_resp = build_api_response(
            session_state=state,
            response_text=response_text,
            root=self.graph.root.id,
            successors=successors,
            keywords=keywords,
            include_history=include_history,
        )
        return {
            'response': response_text,
            'session_id': state.session_id,
            'current_node': state.current_node,
            'turn_count': state.turn_count,
            'fallback': bool(state.last_match and state.last_match.fallback),
            'data': api_resp.model_dump(),
        }

    def _create_error_response(self, message: str, not_found: bool = False,
                               conflict: bool = False) -> Dict[str, Any]:
        return {
            'response': message,
            'session_id': None,
            'current_node': None,
            'turn_count': 0,
            'fallback': False,
            'error': True,
            'not_found': not_found,
            'conflict': conflict,
        }
