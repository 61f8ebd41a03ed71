import logging
import platform

import pyautogui

from . import config
from .errors import PointerActionFailure, ScrollPrimitiveUnavailable
from .pointer import Pointer, BUTTON_DOWN, BUTTON_UP

logger = logging.getLogger(__name__)

# Win32 GetSystemMetrics indices for the virtual screen
SM_XVIRTUALSCREEN = 76
SM_YVIRTUALSCREEN = 77
SM_CXVIRTUALSCREEN = 78
SM_CYVIRTUALSCREEN = 79


def detect_screen_bounds():
    """Return ``(left, top, width, height)`` of the area the cursor may reach.

    On Windows this is the virtual screen spanning every monitor; elsewhere the
    primary screen reported by pyautogui with origin 0,0.
    """
    if platform.system() == 'Windows':
        try:
            import ctypes
            user32 = ctypes.windll.user32
            return (int(user32.GetSystemMetrics(SM_XVIRTUALSCREEN)),
                    int(user32.GetSystemMetrics(SM_YVIRTUALSCREEN)),
                    int(user32.GetSystemMetrics(SM_CXVIRTUALSCREEN)),
                    int(user32.GetSystemMetrics(SM_CYVIRTUALSCREEN)))
        except Exception:
            logger.warning('Virtual screen query failed, using primary screen', exc_info=True)
    w, h = pyautogui.size()
    return 0, 0, int(w), int(h)


class PyAutoGUIPointer(Pointer):
    """Drives the real OS pointer through pyautogui."""

    def __init__(self, failsafe=config.PYAUTOGUI_FAILSAFE, pause=config.PYAUTOGUI_PAUSE,
                 clamp=config.CLAMP_TO_SCREEN):
        pyautogui.FAILSAFE = failsafe  # Move mouse to corner to stop
        pyautogui.PAUSE = pause
        self.clamp = clamp
        self.bounds = detect_screen_bounds()

    def _clamped(self, x, y):
        if not self.clamp:
            return x, y
        left, top, width, height = self.bounds
        x = max(left, min(left + width - 1, x))
        y = max(top, min(top + height - 1, y))
        return x, y

    def position(self):
        try:
            x, y = pyautogui.position()
        except Exception as e:
            raise PointerActionFailure(f'could not read pointer position: {e}') from e
        return x, y

    def move_absolute(self, x, y):
        x, y = self._clamped(x, y)
        try:
            pyautogui.moveTo(x, y)
        except Exception as e:
            raise PointerActionFailure(f'move to ({x}, {y}) failed: {e}') from e

    def click(self, button):
        try:
            pyautogui.click(button=button)
        except Exception as e:
            raise PointerActionFailure(f'{button} click failed: {e}') from e

    def scroll(self, amount):
        # pyautogui scrolls up for positive clicks
        try:
            pyautogui.scroll(-int(amount))
        except Exception as e:
            raise ScrollPrimitiveUnavailable(f'scroll by {amount} failed: {e}') from e

    def set_button_state(self, state, button='left'):
        try:
            if state == BUTTON_DOWN:
                pyautogui.mouseDown(button=button)
            elif state == BUTTON_UP:
                pyautogui.mouseUp(button=button)
            else:
                raise ValueError(f'unknown button state {state!r}')
        except Exception as e:
            raise PointerActionFailure(f'{button} button {state} failed: {e}') from e

    def key_tap(self, key):
        try:
            pyautogui.press(key)
        except Exception as e:
            raise PointerActionFailure(f'key {key!r} failed: {e}') from e
