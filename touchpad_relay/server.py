import functools
import logging

from flask import Flask, jsonify, request
from flask_socketio import SocketIO

from . import config, events
from .actions import ActionRelay
from .motion import MotionRelay
from .scheduler import BackgroundScheduler
from .sessions import SessionManager
from .settings import SettingsStore

logger = logging.getLogger(__name__)


def init_socketio(app, async_mode=None):
    """Bind Flask-SocketIO to ``app`` on the first async backend that initializes.

    ``async_mode`` pins a backend; otherwise eventlet, gevent and threading are
    tried in that order.
    """
    candidates = [async_mode] if async_mode else config.ASYNC_CANDIDATES
    last_error = None
    for mode in candidates:
        try:
            socketio = SocketIO(app, cors_allowed_origins=config.CORS_ALLOWED_ORIGINS, async_mode=mode,
                                logger=False, engineio_logger=False)
            logger.info('SocketIO initialized with async_mode=%s', mode)
            return socketio
        except Exception as e:
            logger.debug('SocketIO init failed for async_mode=%s: %s', mode, e)
            last_error = e
    raise RuntimeError(f'No usable SocketIO async mode among {candidates}') from last_error


def create_app(pointer=None, scheduler=None, async_mode=config.ASYNC_MODE, settings=None,
               serialize_motion=config.SERIALIZE_MOTION):
    """Build the Flask app and its Socket.IO server.

    ``pointer`` defaults to the pyautogui desktop pointer and ``scheduler`` to
    background tasks on the Socket.IO backend. Returns ``(app, socketio)``.
    """
    app = Flask(__name__)
    socketio = init_socketio(app, async_mode)

    if pointer is None:
        from .desktop import PyAutoGUIPointer
        pointer = PyAutoGUIPointer()
    if scheduler is None:
        scheduler = BackgroundScheduler(socketio)
    if not isinstance(settings, SettingsStore):
        settings = SettingsStore(settings)

    sessions = SessionManager(socketio, settings)
    motion = MotionRelay(pointer, sessions.settings, scheduler, serialize=serialize_motion)
    actions = ActionRelay(pointer, scheduler, motion=motion)
    app.extensions['touchpad_relay'] = {
        'sessions': sessions,
        'pointer': pointer,
        'motion': motion,
        'actions': actions,
    }

    @app.route('/health')
    def health():
        return jsonify({'status': 'healthy'})

    @app.route('/settings')
    def get_settings():
        return jsonify(sessions.settings.get())

    def guarded(failure_message, detail=False):
        """Run a per-event handler; any failure goes back to that client as ``error``."""
        def decorator(f):
            @functools.wraps(f)
            def wrapper(data=None):
                session = sessions.get(request.sid)
                try:
                    f(data, session)
                except Exception as e:
                    logger.exception('Error handling %s', f.__name__)
                    message = f'{failure_message}: {e}' if detail else failure_message
                    session.report_error(message)
            return wrapper
        return decorator

    @socketio.on('connect')
    def on_connect(auth=None):
        session = sessions.open(request.sid)
        session.emit(events.SETTINGS_UPDATED, sessions.settings.get())

    @socketio.on('disconnect')
    def on_disconnect(reason=None):
        session = sessions.close(request.sid)
        if session is not None:
            motion.release(session)

    @socketio.on(events.MOVE)
    @guarded('Failed to move mouse')
    def on_move(data, session):
        motion.handle_move(data, session)

    @socketio.on(events.CLICK)
    @guarded('Failed to click mouse')
    def on_click(data, session):
        actions.handle_click(data, session)

    @socketio.on(events.SCROLL)
    @guarded('Failed to scroll', detail=True)
    def on_scroll(data, session):
        actions.handle_scroll(data, session)

    @socketio.on(events.DRAG)
    @guarded('Failed to drag')
    def on_drag(data, session):
        actions.handle_drag(data, session)

    @socketio.on(events.UPDATE_SETTINGS)
    @guarded('Failed to update settings')
    def on_update_settings(data, session):
        session.emit(events.SETTINGS_UPDATED, sessions.settings.update(data))

    return app, socketio
