"""
Pointer capability.

The OS pointer is a single external resource. Relays only touch it through
this narrow interface so the desktop backend can be swapped (or mocked).
Coordinates are absolute screen pixels; scroll amounts are negative for up.
"""

BUTTON_DOWN = 'down'
BUTTON_UP = 'up'


class Pointer:
    def position(self):
        """Return the current pointer position as ``(x, y)``."""
        raise NotImplementedError

    def move_absolute(self, x, y):
        raise NotImplementedError

    def click(self, button):
        raise NotImplementedError

    def scroll(self, amount):
        raise NotImplementedError

    def set_button_state(self, state, button='left'):
        raise NotImplementedError

    def key_tap(self, key):
        raise NotImplementedError
