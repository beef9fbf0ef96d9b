"""
Dependency injection for API routes.
"""
from typing import Optional

from ..core.session import PlaybackSession
from ..core.state import SharedState

# Global shared state instance
_shared: Optional[SharedState] = None


def get_shared() -> SharedState:
    """Get the global shared state."""
    global _shared
    if _shared is None:
        _shared = SharedState()
    return _shared


def set_shared(shared: SharedState):
    """Set the global shared state (app startup, tests)."""
    global _shared
    _shared = shared


def get_session() -> PlaybackSession:
    """Get the playback session from shared state."""
    return get_shared().session
