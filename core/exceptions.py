"""Exceptions raised by the graph layer, the dialogue engine and sessions."""


class ChatbotError(Exception):
    """Base exception for all chatbot errors."""
    pass


class GraphError(ChatbotError):
    """Base exception for conversation graph errors."""
    pass


class GraphLoadError(GraphError):
    """Raised when a graph file cannot be read or has the wrong shape."""
    pass


class GraphInvariantError(GraphError):
    """Raised when a built graph breaks a structural invariant."""
    pass


class EmptyAnswersError(GraphInvariantError):
    """Raised when the engine reaches a node that has no answers."""

    def __init__(self, node_id: str):
        super().__init__(f"Node '{node_id}' has no answers")
        self.node_id = node_id


class DanglingEdgeError(GraphInvariantError):
    """Raised when an edge points at a node outside the graph."""
    pass


class MissingRootError(GraphInvariantError):
    """Raised when no root node can be resolved."""
    pass


class UnknownNodeError(GraphError):
    """Raised when a node id or handle does not belong to the graph."""
    pass


class SessionError(ChatbotError):
    """Base exception for session errors."""
    pass


class SessionNotFoundError(SessionError):
    """Raised when a session id is unknown or expired."""

    def __init__(self, session_id: str):
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id


class SessionExistsError(SessionError):
    """Raised when starting a session under an id that is still live."""

    def __init__(self, session_id: str):
        super().__init__(f"Session already exists: {session_id}")
        self.session_id = session_id
