"""
Client side: turn touchpad interactions into channel events.

The handheld UI calls into ``GestureEncoder``; rendering is left to the UI.
Everything emitted goes through ``ClientChannel.emit``, so interactions while
disconnected are dropped, never queued.
"""

import logging

from . import config, events
from .errors import TransportError
from .events import ClickEvent, DragEvent, GestureDelta, MouseButton, Point, ScrollEvent

logger = logging.getLogger(__name__)


def _no_vibrate(duration_ms):
    logger.debug('vibrate %sms', duration_ms)


def _log_alert(title, message):
    logger.warning('%s: %s', title, message)


class GestureEncoder:
    def __init__(self, channel, vibrate=None, alert=None, base_scale=config.CLIENT_BASE_SCALE):
        self.channel = channel
        self.vibrate = vibrate or _no_vibrate
        self.alert = alert or _log_alert
        self.base_scale = base_scale
        self.settings = dict(config.DEFAULT_SETTINGS)

        channel.on('connect', self._on_connect)
        channel.on('disconnect', self._on_disconnect)
        channel.on(events.ERROR, self._on_error)
        channel.on(events.SETTINGS_UPDATED, self._on_settings_updated)

    @property
    def connected(self):
        return self.channel.connected

    def start(self):
        """Connect to the host. A failure is shown to the user, not retried."""
        try:
            self.channel.connect()
        except TransportError as e:
            logger.error('%s', e)
            self.alert('Connection Error', 'Failed to connect to server')
            return False
        return True

    def stop(self):
        self.channel.disconnect()

    # Continuous touch

    def touch_start(self):
        self.vibrate(config.HAPTIC_PULSE_MS)

    def touch_move(self, dx, dy):
        """Send one movement sample; ``dx``/``dy`` are raw touch pixels for this tick."""
        if not self.connected:
            return False
        delta = GestureDelta(dx * self.base_scale, dy * self.base_scale)
        return self.channel.emit(events.MOVE, delta.to_payload())

    def touch_end(self):
        self.vibrate(config.HAPTIC_PULSE_MS)

    # Buttons

    def click(self, button, double=False):
        if not self.connected:
            return False
        sent = self.channel.emit(events.CLICK, ClickEvent(MouseButton(button), double).to_payload())
        self.vibrate(config.HAPTIC_PULSE_MS)
        return sent

    def tap_primary(self):
        return self.click(MouseButton.LEFT)

    def long_press_primary(self):
        return self.click(MouseButton.LEFT, double=True)

    def tap_secondary(self):
        return self.click(MouseButton.RIGHT)

    def scroll(self, direction):
        """``direction`` is ``'up'`` or ``'down'``; one event per button press."""
        if not self.connected:
            logger.debug('Socket not connected')
            return False
        amount = -1 if direction == 'up' else 1
        sent = self.channel.emit(events.SCROLL, ScrollEvent(amount).to_payload())
        self.vibrate(config.HAPTIC_PULSE_MS)
        return sent

    def scroll_up(self):
        return self.scroll('up')

    def scroll_down(self):
        return self.scroll('down')

    def drag(self, start, end):
        if not self.connected:
            return False
        event = DragEvent(Point(*start), Point(*end))
        return self.channel.emit(events.DRAG, event.to_payload())

    # Settings

    def update_settings(self, new_settings):
        """Send ``new_settings`` to the host and show them locally right away.

        Sensitivity is clamped to its allowed range before sending.
        """
        if not self.connected:
            return False
        new_settings = dict(new_settings)
        if 'sensitivity' in new_settings:
            new_settings['sensitivity'] = min(config.SENSITIVITY_MAX,
                                              max(config.SENSITIVITY_MIN, new_settings['sensitivity']))
        sent = self.channel.emit(events.UPDATE_SETTINGS, new_settings)
        self.settings = {**self.settings, **new_settings}
        return sent

    def increase_sensitivity(self):
        return self.update_settings({**self.settings,
                                     'sensitivity': self.settings['sensitivity'] + config.SENSITIVITY_STEP})

    def decrease_sensitivity(self):
        return self.update_settings({**self.settings,
                                     'sensitivity': self.settings['sensitivity'] - config.SENSITIVITY_STEP})

    def set_smoothing(self, enabled):
        return self.update_settings({**self.settings, 'smoothing': bool(enabled)})

    # Channel events

    def _on_connect(self):
        self.vibrate(config.HAPTIC_CONNECT_MS)

    def _on_disconnect(self):
        self.alert('Disconnected', 'Lost connection to server')

    def _on_error(self, data=None):
        message = data.get('message') if isinstance(data, dict) else str(data)
        self.alert('Error', message)

    def _on_settings_updated(self, settings):
        if isinstance(settings, dict):
            self.settings = dict(settings)
