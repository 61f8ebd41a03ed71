import pytest
from socketio.exceptions import BadNamespaceError, ConnectionError as SocketIOConnectionError

from touchpad_relay.channel import ClientChannel, ConnectionSession
from touchpad_relay.errors import TransportError

URL = 'http://192.168.1.20:3000'


class RecordingServer:
    def __init__(self):
        self.emitted = []

    def emit(self, event, payload=None, to=None):
        self.emitted.append((event, payload, to))


@pytest.fixture
def channel(socket_client):
    return ClientChannel(URL, client=socket_client)


def test_session_emits_to_its_own_sid():
    server = RecordingServer()
    session = ConnectionSession(server, 'abc')

    session.emit('settingsUpdated', {'sensitivity': 2})
    session.report_error('Failed to drag')

    assert server.emitted == [
        ('settingsUpdated', {'sensitivity': 2}, 'abc'),
        ('error', {'message': 'Failed to drag'}, 'abc'),
    ]


def test_emit_while_disconnected_is_dropped(channel, socket_client):
    assert channel.emit('move', {'dx': 1, 'dy': 1}) is False
    assert socket_client.sent == []


def test_emits_are_sent_in_order(channel, socket_client):
    channel.connect()

    assert channel.emit('move', {'dx': 1, 'dy': 0})
    assert channel.emit('click', {'button': 'left', 'double': False})
    assert channel.emit('move', {'dx': 0, 'dy': 1})

    assert [event for event, _ in socket_client.sent] == ['move', 'click', 'move']


def test_nothing_is_buffered_across_a_disconnect(channel, socket_client):
    channel.connect()
    channel.disconnect()
    channel.emit('scroll', {'scrollAmount': 1})

    socket_client.connect(URL)
    assert socket_client.sent == []


def test_emit_failure_in_transport_is_dropped(channel, socket_client):
    channel.connect()

    def broken_emit(event, data=None):
        raise BadNamespaceError('/ is not a connected namespace.')
    socket_client.emit = broken_emit

    assert channel.emit('move', {'dx': 1, 'dy': 1}) is False


def test_lifecycle_handlers(channel, socket_client):
    seen = []
    channel.on('connect', lambda: seen.append('connect'))
    channel.on('disconnect', lambda: seen.append('disconnect'))

    channel.connect()
    channel.disconnect()

    assert seen == ['connect', 'disconnect']


def test_host_events_reach_every_handler(channel, socket_client):
    first, second = [], []
    channel.on('settingsUpdated', first.append)
    channel.on('settingsUpdated', second.append)

    socket_client.receive('settingsUpdated', {'sensitivity': 3})

    assert first == second == [{'sensitivity': 3}]


def test_connect_error_is_surfaced_as_error(channel, socket_client):
    errors = []
    channel.on('error', errors.append)

    socket_client.receive('connect_error', {'message': 'Connection refused'})
    socket_client.receive('error', {'message': 'Failed to move mouse'})

    assert errors == [{'message': 'Connection refused'}, {'message': 'Failed to move mouse'}]


def test_failing_handler_does_not_stop_others(channel, socket_client):
    seen = []

    def broken(data):
        raise RuntimeError('boom')
    channel.on('settingsUpdated', broken)
    channel.on('settingsUpdated', seen.append)

    socket_client.receive('settingsUpdated', {'smoothing': False})

    assert seen == [{'smoothing': False}]


def test_connect_failure_raises_transport_error(channel, socket_client):
    socket_client.fail_connect = SocketIOConnectionError('Connection refused by the server')

    with pytest.raises(TransportError):
        channel.connect()
    assert not channel.connected


def test_failed_connect_is_reported_once(channel, socket_client):
    errors = []
    channel.on('error', errors.append)

    def refuse(url):
        socket_client.handlers['connect_error']('Connection refused by the server')
        raise SocketIOConnectionError('Connection refused by the server')
    socket_client.connect = refuse

    with pytest.raises(TransportError):
        channel.connect()
    assert errors == []
