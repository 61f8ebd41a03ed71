import logging

logger = logging.getLogger(__name__)


class BackgroundScheduler:
    """Runs callbacks after a delay without blocking the caller.

    Each call is an independent background task on the Socket.IO async
    backend (a thread, or a green thread under eventlet/gevent). Scheduled
    callbacks cannot be cancelled; callers that need to abandon work check a
    token when the callback fires. Returns the started background task.
    """

    def __init__(self, socketio):
        self._socketio = socketio

    def call_later(self, delay, callback, *args):
        def runner():
            self._socketio.sleep(delay)
            try:
                callback(*args)
            except Exception:
                logger.exception('Deferred callback %r failed', callback)

        return self._socketio.start_background_task(runner)
