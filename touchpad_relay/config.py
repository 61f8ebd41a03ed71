import os


def _env_bool(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


# Network address the host binds to. Phone and host must share a network.
HOST = os.environ.get('TOUCHPAD_HOST', '0.0.0.0')
PORT = int(os.environ.get('TOUCHPAD_PORT', '3000'))
CORS_ALLOWED_ORIGINS = os.environ.get('TOUCHPAD_CORS_ORIGINS', '*')

# Pin a Socket.IO async backend; when empty the first candidate that
# initializes is used.
ASYNC_MODE = os.environ.get('TOUCHPAD_ASYNC_MODE') or None
ASYNC_CANDIDATES = ['eventlet', 'gevent', 'threading']

LOG_LEVEL = os.environ.get('TOUCHPAD_LOG_LEVEL', 'INFO').upper()

# Settings every host process starts with. Never persisted.
DEFAULT_SETTINGS = {
    'sensitivity': 2,
    'scrollSensitivity': 1,
    'smoothing': True,
}

# Smoothed moves are split into this many linear sub-steps, one per frame.
SMOOTHING_STEPS = 5
SMOOTHING_FRAME_INTERVAL = 1.0 / 60
# One motion animation per session: a new delta retargets the running one
# instead of starting an independent timer chain. False keeps overlapping
# sequences independent.
SERIALIZE_MOTION = _env_bool('TOUCHPAD_SERIALIZE_MOTION', True)

# Delay before the second click of a double click (seconds).
DOUBLE_CLICK_DELAY = 0.1
# The client only sends a direction (+1 / -1); the host supplies magnitude.
SCROLL_MULTIPLIER = 100

# pyautogui: move the mouse into a screen corner to abort.
PYAUTOGUI_FAILSAFE = _env_bool('TOUCHPAD_FAILSAFE', True)
PYAUTOGUI_PAUSE = 0.0001
CLAMP_TO_SCREEN = _env_bool('TOUCHPAD_CLAMP_TO_SCREEN', True)

# Client side
CLIENT_BASE_SCALE = 0.5
SENSITIVITY_MIN = 1
SENSITIVITY_MAX = 4
SENSITIVITY_STEP = 0.5
HAPTIC_CONNECT_MS = 100
HAPTIC_PULSE_MS = 50
