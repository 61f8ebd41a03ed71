"""
Both ends of the Socket.IO channel between one handheld client and the host.

Socket.IO keeps a single ordered stream per connection, so events emitted in
sequence by one side arrive in that order. Emits are fire-and-forget: nothing
is acknowledged, and nothing emitted while disconnected is buffered.
"""

import logging
from collections import defaultdict

import socketio
from socketio.exceptions import ConnectionError as SocketIOConnectionError, SocketIOError

from . import events
from .errors import TransportError

logger = logging.getLogger(__name__)


class ConnectionSession:
    """Host-side view of one connected client, keyed by its Socket.IO sid.

    Holds no state beyond the socket identity; settings are process-wide.
    """

    def __init__(self, server, sid):
        self._server = server
        self.sid = sid

    def emit(self, event, payload=None):
        self._server.emit(event, payload, to=self.sid)

    def report_error(self, message):
        self.emit(events.ERROR, {'message': message})

    def __repr__(self):
        return f'<ConnectionSession sid={self.sid}>'


class ClientChannel:
    """Client end of the channel.

    ``emit`` silently drops the event when the channel is not connected and
    returns whether it was handed to the transport. Handlers registered with
    ``on`` receive the payload; the lifecycle events ``connect``,
    ``disconnect`` and ``error`` are surfaced the same way. A failed
    ``connect()`` raises ``TransportError``; connection errors reported by the
    transport at any other time arrive as ``error``.
    """

    LIFECYCLE_EVENTS = ('connect', 'disconnect')

    def __init__(self, url, client=None):
        self.url = url
        self._client = client if client is not None else socketio.Client(
            reconnection=False, logger=False, engineio_logger=False)
        self._handlers = defaultdict(list)
        self._connecting = False
        self._client.on('connect', self._on_connect)
        self._client.on('disconnect', self._on_disconnect)
        self._client.on('connect_error', self._on_connect_error)

    @property
    def connected(self):
        return bool(self._client.connected)

    def connect(self):
        self._connecting = True
        try:
            self._client.connect(self.url)
        except SocketIOConnectionError as e:
            raise TransportError(f'Failed to connect to {self.url}: {e}') from e
        finally:
            self._connecting = False

    def disconnect(self):
        if self.connected:
            self._client.disconnect()

    def on(self, event, handler):
        if event not in self.LIFECYCLE_EVENTS and event not in self._handlers:
            self._client.on(event, self._dispatcher(event))
        self._handlers[event].append(handler)

    def emit(self, event, payload=None):
        if not self.connected:
            logger.debug('Not connected, dropping %s', event)
            return False
        try:
            self._client.emit(event, payload)
        except SocketIOError as e:
            logger.debug('Emit of %s failed, dropping: %s', event, e)
            return False
        return True

    def _dispatcher(self, event):
        def dispatch(data=None):
            self._fire(event, data)
        return dispatch

    def _fire(self, event, *args):
        for handler in list(self._handlers.get(event, ())):
            try:
                handler(*args)
            except Exception:
                logger.exception('Handler for %s failed', event)

    def _on_connect(self):
        logger.info('Connected to %s', self.url)
        self._fire('connect')

    def _on_disconnect(self, *args):
        logger.info('Disconnected from %s', self.url)
        self._fire('disconnect')

    def _on_connect_error(self, data=None):
        message = data.get('message') if isinstance(data, dict) else str(data)
        logger.warning('Connection error: %s', message)
        if self._connecting:
            # connect() raises TransportError for this one
            return
        self._fire(events.ERROR, {'message': message})
