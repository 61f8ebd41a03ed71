"""
Wire events exchanged over the Socket.IO channel.

Client -> host: ``move``, ``click``, ``scroll``, ``drag``, ``updateSettings``.
Host -> client: ``settingsUpdated``, ``error``.

Payloads travel as plain JSON objects; the classes here parse them on the host
and build them on the client.
"""

from dataclasses import dataclass
from enum import Enum

from .errors import MalformedEvent

MOVE = 'move'
CLICK = 'click'
SCROLL = 'scroll'
DRAG = 'drag'
UPDATE_SETTINGS = 'updateSettings'
SETTINGS_UPDATED = 'settingsUpdated'
ERROR = 'error'


def _number(payload, key):
    try:
        value = payload[key]
    except (KeyError, TypeError):
        raise MalformedEvent(f'missing field {key!r}')
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedEvent(f'field {key!r} must be a number, got {value!r}')
    return value


class MouseButton(str, Enum):
    LEFT = 'left'
    RIGHT = 'right'


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    @classmethod
    def from_payload(cls, payload):
        return cls(_number(payload, 'x'), _number(payload, 'y'))

    def to_payload(self):
        return {'x': self.x, 'y': self.y}


@dataclass(frozen=True)
class GestureDelta:
    """Relative displacement for one sampling tick, already pre-scaled by the client."""
    dx: float
    dy: float

    @classmethod
    def from_payload(cls, payload):
        return cls(_number(payload, 'dx'), _number(payload, 'dy'))

    def to_payload(self):
        return {'dx': self.dx, 'dy': self.dy}


@dataclass(frozen=True)
class ClickEvent:
    button: MouseButton = MouseButton.LEFT
    double: bool = False

    @classmethod
    def from_payload(cls, payload):
        if not isinstance(payload, dict):
            raise MalformedEvent('click payload must be an object')
        try:
            button = MouseButton(payload.get('button', 'left'))
        except ValueError:
            raise MalformedEvent(f"unknown button {payload.get('button')!r}")
        return cls(button, bool(payload.get('double', False)))

    def to_payload(self):
        return {'button': self.button.value, 'double': self.double}


@dataclass(frozen=True)
class ScrollEvent:
    """Direction-only scroll signal: negative is up, positive is down."""
    scroll_amount: float

    @classmethod
    def from_payload(cls, payload):
        return cls(_number(payload, 'scrollAmount'))

    def to_payload(self):
        return {'scrollAmount': self.scroll_amount}


@dataclass(frozen=True)
class DragEvent:
    start: Point
    end: Point

    @classmethod
    def from_payload(cls, payload):
        if not isinstance(payload, dict):
            raise MalformedEvent('drag payload must be an object')
        return cls(Point.from_payload(payload.get('start')),
                   Point.from_payload(payload.get('end')))

    def to_payload(self):
        return {'start': self.start.to_payload(), 'end': self.end.to_payload()}
