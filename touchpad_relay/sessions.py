import logging

from .channel import ConnectionSession
from .settings import SettingsStore

logger = logging.getLogger(__name__)


class SessionManager:
    """Tracks connected sessions and owns the process-wide settings.

    The relays receive ``settings`` by reference, so an update made through any
    session is seen by all of them on the next event.
    """

    def __init__(self, server, settings=None):
        self._server = server
        self.settings = settings if settings is not None else SettingsStore()
        self._sessions = {}

    def open(self, sid):
        session = ConnectionSession(self._server, sid)
        self._sessions[sid] = session
        logger.info('Client connected: %s', sid)
        return session

    def close(self, sid):
        session = self._sessions.pop(sid, None)
        logger.info('Client disconnected: %s', sid)
        return session

    def get(self, sid):
        session = self._sessions.get(sid)
        if session is None:
            # Events can race the connect handler; the sid is all a session needs.
            session = self.open(sid)
        return session

    def __len__(self):
        return len(self._sessions)
