"""
Pointer motion from gesture deltas.

Every delta is scaled by the current sensitivity and applied relative to the
pointer position read when the event is handled.

Direct mode issues one absolute move. Smoothed mode splits the displacement
into ``steps`` linear sub-steps, each scheduled one frame apart as its own
deferred callback; sub-step ``i`` lands on
``round(start + displacement / steps * i)``.

With ``serialize=True`` each session owns a single animation slot. A delta
arriving mid-animation supersedes the pending sub-steps and retargets to the
unreached target plus the new displacement, starting from wherever the pointer
is now. A direct move made while sub-steps are pending cancels them and lands
on the unreached target plus its own displacement. With ``serialize=False``
overlapping animations run independently and may interleave.
"""

import logging
import math
import threading

from . import config
from .events import GestureDelta

logger = logging.getLogger(__name__)


def round_half_up(value):
    return math.floor(value + 0.5)


class MotionAnimation:
    """The motion slot of one session."""

    def __init__(self):
        self.lock = threading.Lock()
        self.generation = 0
        self.target = None

    def supersede(self):
        """Invalidate pending sub-steps. Caller holds ``lock``."""
        self.generation += 1
        self.target = None


class MotionRelay:
    def __init__(self, pointer, settings, scheduler, steps=config.SMOOTHING_STEPS,
                 frame_interval=config.SMOOTHING_FRAME_INTERVAL, serialize=config.SERIALIZE_MOTION):
        self.pointer = pointer
        self.settings = settings
        self.scheduler = scheduler
        self.steps = steps
        self.frame_interval = frame_interval
        self.serialize = serialize
        self._animations = {}
        self._animations_lock = threading.Lock()

    def handle_move(self, payload, session):
        delta = GestureDelta.from_payload(payload)
        sensitivity = self.settings.sensitivity
        scaled_dx = delta.dx * sensitivity
        scaled_dy = delta.dy * sensitivity

        if not self.settings.smoothing:
            if self.serialize:
                self._move_serialized(scaled_dx, scaled_dy, session)
            else:
                x, y = self.pointer.position()
                self.pointer.move_absolute(x + scaled_dx, y + scaled_dy)
            return

        if self.serialize:
            self._animate_serialized(scaled_dx, scaled_dy, session)
        else:
            x, y = self.pointer.position()
            self._schedule(x, y, x + scaled_dx, y + scaled_dy, session)

    def interrupt(self, session):
        """Drop any pending smoothing sub-steps of ``session``."""
        animation = self._animations.get(session.sid)
        if animation is None:
            return
        with animation.lock:
            animation.supersede()

    def release(self, session):
        """Forget the session's animation slot; pending sub-steps become no-ops."""
        with self._animations_lock:
            animation = self._animations.pop(session.sid, None)
        if animation is not None:
            with animation.lock:
                animation.supersede()

    def _animation(self, session):
        with self._animations_lock:
            animation = self._animations.get(session.sid)
            if animation is None:
                animation = self._animations[session.sid] = MotionAnimation()
            return animation

    def _move_serialized(self, scaled_dx, scaled_dy, session):
        animation = self._animations.get(session.sid)
        if animation is None:
            x, y = self.pointer.position()
            self.pointer.move_absolute(x + scaled_dx, y + scaled_dy)
            return
        # A direct move lands on the unreached animation target plus the delta.
        with animation.lock:
            if animation.target is not None:
                x, y = animation.target
            else:
                x, y = self.pointer.position()
            animation.supersede()
            self.pointer.move_absolute(x + scaled_dx, y + scaled_dy)

    def _animate_serialized(self, scaled_dx, scaled_dy, session):
        animation = self._animation(session)
        with animation.lock:
            start_x, start_y = self.pointer.position()
            if animation.target is not None:
                target_x, target_y = animation.target
            else:
                target_x, target_y = start_x, start_y
            target_x += scaled_dx
            target_y += scaled_dy
            animation.supersede()
            animation.target = (target_x, target_y)
            token = (animation, animation.generation)
        self._schedule(start_x, start_y, target_x, target_y, session, token)

    def _schedule(self, start_x, start_y, target_x, target_y, session, token=None):
        step_x = (target_x - start_x) / self.steps
        step_y = (target_y - start_y) / self.steps
        for i in range(1, self.steps + 1):
            self.scheduler.call_later(
                i * self.frame_interval, self._sub_step,
                round_half_up(start_x + step_x * i), round_half_up(start_y + step_y * i),
                i == self.steps, session, token)

    def _sub_step(self, x, y, last, session, token):
        if token is None:
            self._move(x, y, session)
            return
        animation, generation = token
        with animation.lock:
            if animation.generation != generation:
                return
            if last:
                animation.target = None
            self._move(x, y, session)

    def _move(self, x, y, session):
        try:
            self.pointer.move_absolute(x, y)
        except Exception:
            logger.exception('Smoothed move to (%s, %s) failed', x, y)
            session.report_error('Failed to move mouse')
