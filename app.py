import logging
import socket

from touchpad_relay import config
from touchpad_relay.server import create_app


def configure_logging(level=config.LOG_LEVEL):
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    # Suppress verbose Werkzeug access logs to keep console clean
    logging.getLogger('werkzeug').setLevel(logging.WARNING)


def local_ip():
    try:
        return socket.gethostbyname(socket.gethostname())
    except OSError:
        return '127.0.0.1'


def main():
    configure_logging()
    app, socketio = create_app()
    pointer = app.extensions['touchpad_relay']['pointer']

    print("Starting touchpad server...")
    print(f"Connect your phone to: http://{local_ip()}:{config.PORT}")
    print(f"Or access locally at: http://localhost:{config.PORT}")
    left, top, width, height = pointer.bounds
    print(f"Virtual screen detected: left={left}, top={top}, size={width}x{height}")

    socketio.run(app, host=config.HOST, port=config.PORT, log_output=False, allow_unsafe_werkzeug=True)


if __name__ == '__main__':
    main()
