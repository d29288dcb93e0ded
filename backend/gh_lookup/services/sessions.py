import secrets
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from loguru import logger

from .controller import LookupController


class SessionRegistry:
    """One LookupController per browser session, least recently used evicted first."""

    def __init__(self, factory: Callable[[], LookupController], max_sessions: int = 1000):
        self.factory = factory
        self.max_sessions = max_sessions
        self.controllers: "OrderedDict[str, LookupController]" = OrderedDict()

    def __len__(self) -> int:
        return len(self.controllers)

    def get(self, session_id: Optional[str]) -> Tuple[str, LookupController]:
        """Return the controller for ``session_id``, opening a new session if it is unknown."""
        if session_id and session_id in self.controllers:
            self.controllers.move_to_end(session_id)
            return session_id, self.controllers[session_id]

        session_id = secrets.token_urlsafe(16)
        controller = self.factory()
        self.controllers[session_id] = controller
        while len(self.controllers) > self.max_sessions:
            evicted, _ = self.controllers.popitem(last=False)
            logger.info(f"Evicted lookup session {evicted[:6]}...")
        return session_id, controller
