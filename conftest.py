import pytest

from touchpad_relay.errors import PointerActionFailure, ScrollPrimitiveUnavailable
from touchpad_relay.pointer import Pointer
from touchpad_relay.settings import SettingsStore


class MockPointer(Pointer):
    """Records every primitive call as ``(name, *args)`` and tracks a position."""

    def __init__(self, x=500, y=400):
        self.x = x
        self.y = y
        self.calls = []
        self.failing = set()

    def fail(self, *names):
        self.failing.update(names)

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.failing:
            if name == 'scroll':
                raise ScrollPrimitiveUnavailable(f'mock {name} failure')
            raise PointerActionFailure(f'mock {name} failure')

    def position(self):
        if 'position' in self.failing:
            raise PointerActionFailure('mock position failure')
        return self.x, self.y

    def move_absolute(self, x, y):
        self._record('move', x, y)
        self.x, self.y = x, y

    def click(self, button):
        self._record('click', button)

    def scroll(self, amount):
        self._record('scroll', amount)

    def set_button_state(self, state, button='left'):
        self._record('button', state)

    def key_tap(self, key):
        self._record('key', key)

    def moves(self):
        return [call[1:] for call in self.calls if call[0] == 'move']


class MockScheduler:
    """Collects deferred callbacks; ``run_all`` fires them in due-time order."""

    def __init__(self):
        self.now = 0.0
        self.pending = []
        self._seq = 0

    def call_later(self, delay, callback, *args):
        self._seq += 1
        self.pending.append((self.now + delay, self._seq, callback, args))

    @property
    def delays(self):
        return [due - self.now for due, _, _, _ in self.pending]

    def advance(self, seconds):
        """Move the clock forward, running everything that falls due."""
        deadline = self.now + seconds
        while True:
            due = sorted(p for p in self.pending if p[0] <= deadline + 1e-9)
            if not due:
                break
            item = due[0]
            self.pending.remove(item)
            self.now = item[0]
            item[2](*item[3])
        self.now = deadline

    def run_all(self):
        while self.pending:
            self.advance(max(p[0] for p in self.pending) - self.now)


class MockSession:
    def __init__(self, sid='sid-1'):
        self.sid = sid
        self.emitted = []

    def emit(self, event, payload=None):
        self.emitted.append((event, payload))

    def report_error(self, message):
        self.emit('error', {'message': message})

    @property
    def errors(self):
        return [payload['message'] for event, payload in self.emitted if event == 'error']


class MockSocketClient:
    """Stands in for ``socketio.Client``."""

    def __init__(self):
        self.connected = False
        self.handlers = {}
        self.sent = []
        self.fail_connect = None

    def on(self, event, handler):
        self.handlers[event] = handler

    def connect(self, url):
        if self.fail_connect is not None:
            raise self.fail_connect
        self.connected = True
        self.handlers['connect']()

    def disconnect(self):
        self.connected = False
        self.handlers['disconnect']()

    def emit(self, event, data=None):
        self.sent.append((event, data))

    def receive(self, event, data=None):
        """Simulate an event pushed by the host."""
        self.handlers[event](data)


@pytest.fixture
def pointer():
    return MockPointer()


@pytest.fixture
def scheduler():
    return MockScheduler()


@pytest.fixture
def session():
    return MockSession()


@pytest.fixture
def settings():
    return SettingsStore()


@pytest.fixture
def socket_client():
    return MockSocketClient()


@pytest.fixture
def make_session():
    return MockSession
