import logging
import threading

from . import config
from .errors import MalformedEvent

logger = logging.getLogger(__name__)


class SettingsStore:
    """Mouse settings shared by every session of one host process.

    Updates are a shallow merge of the partial object over the current one;
    fields left out keep their value. Values are accepted as sent, bounds are
    enforced by the client. Concurrent updates are last-write-wins.
    """

    def __init__(self, initial=None):
        self._lock = threading.Lock()
        self._settings = dict(config.DEFAULT_SETTINGS)
        if initial:
            self._settings.update(initial)

    def get(self):
        with self._lock:
            return dict(self._settings)

    def update(self, partial):
        if not isinstance(partial, dict):
            raise MalformedEvent('settings update must be an object')
        with self._lock:
            self._settings = {**self._settings, **partial}
            merged = dict(self._settings)
        logger.info('Settings updated: %s', merged)
        return merged

    @property
    def sensitivity(self):
        return self._settings['sensitivity']

    @property
    def smoothing(self):
        return bool(self._settings['smoothing'])
