from typing import Dict, Any, Optional, List
import logging
import threading
from datetime import datetime, timedelta

from core.session import ChatSession

logger = logging.getLogger(__name__)


class SessionStore:
    """In-memory session store with TTL expiry.

    Sessions hold live engines, so nothing here is serialized and nothing
    survives a process restart.
    """

    def __init__(self, session_ttl: int = 3600):  # 1 hour TTL
        self.session_ttl = session_ttl
        self.memory_store: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()
        logger.info("Using in-memory storage for sessions")

    def _expiry(self) -> datetime:
        return datetime.now() + timedelta(seconds=self.session_ttl)

    def save(self, session: ChatSession) -> None:
        """Save (or refresh) a session"""
        with self._lock:
            self.memory_store[session.session_id] = {
                'session': session,
                'expires_at': self._expiry(),
            }
        logger.debug(f"Saved session: {session.session_id}")

    def load(self, session_id: str) -> Optional[ChatSession]:
        """Load a session, dropping it if expired"""
        with self._lock:
            entry = self.memory_store.get(session_id)
            if not entry:
                return None
            if datetime.now() < entry['expires_at']:
                return entry['session']
            # Session expired, remove it
            del self.memory_store[session_id]
        logger.debug(f"Session {session_id} expired and removed")
        return None

    def delete(self, session_id: str) -> bool:
        """Delete a session; False if it did not exist"""
        with self._lock:
            existed = self.memory_store.pop(session_id, None) is not None
        logger.debug(f"Deleted session: {session_id} (existed={existed})")
        return existed

    def list_sessions(self) -> List[str]:
        """List all active sessions"""
        self.cleanup_expired()
        with self._lock:
            return list(self.memory_store)

    def cleanup_expired(self) -> int:
        """Remove expired sessions and return how many were dropped"""
        current_time = datetime.now()
        with self._lock:
            expired_sessions = [
                sid for sid, entry in self.memory_store.items()
                if current_time >= entry['expires_at']
            ]
            for session_id in expired_sessions:
                del self.memory_store[session_id]

        if expired_sessions:
            logger.info(f"Cleaned up {len(expired_sessions)} expired sessions")
        return len(expired_sessions)

    def get_expiry(self, session_id: str) -> Optional[Dict[str, Any]]:
        """TTL information without touching the session"""
        with self._lock:
            entry = self.memory_store.get(session_id)
        if entry and datetime.now() < entry['expires_at']:
            return {
                'session_id': session_id,
                'expires_at': entry['expires_at'],
                'ttl_seconds': int((entry['expires_at'] - datetime.now()).total_seconds()),
            }
        return None
