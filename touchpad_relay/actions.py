import logging

from . import config
from .errors import PointerActionFailure
from .events import ClickEvent, ScrollEvent, DragEvent
from .pointer import BUTTON_DOWN, BUTTON_UP

logger = logging.getLogger(__name__)


class ActionRelay:
    """Turns click, scroll and drag events into discrete pointer actions."""

    def __init__(self, pointer, scheduler, motion=None, double_click_delay=config.DOUBLE_CLICK_DELAY,
                 scroll_multiplier=config.SCROLL_MULTIPLIER):
        self.pointer = pointer
        self.scheduler = scheduler
        self.motion = motion
        self.double_click_delay = double_click_delay
        self.scroll_multiplier = scroll_multiplier

    def handle_click(self, payload, session):
        event = ClickEvent.from_payload(payload)
        button = event.button.value
        self.pointer.click(button)
        if event.double:
            self.scheduler.call_later(self.double_click_delay, self._second_click, button, session)

    def _second_click(self, button, session):
        try:
            self.pointer.click(button)
        except Exception:
            logger.exception('Second click of double %s click failed', button)
            session.report_error('Failed to click mouse')

    def handle_scroll(self, payload, session):
        """Scroll by the direction signal times the multiplier.

        If the wheel primitive fails, page up/down is tapped instead. Failures
        on either path are only logged; the client is not told.
        """
        event = ScrollEvent.from_payload(payload)
        direction = event.scroll_amount
        if direction == 0:
            logger.debug('Ignoring zero scroll')
            return
        amount = direction * self.scroll_multiplier
        logger.debug('Scrolling by %s', amount)
        try:
            self.pointer.scroll(amount)
            return
        except PointerActionFailure as e:
            logger.error('Scroll failed, falling back to paging keys: %s', e)

        key = 'pagedown' if direction > 0 else 'pageup'
        try:
            self.pointer.key_tap(key)
            logger.warning('Scrolled with %s key', key)
        except PointerActionFailure as e:
            logger.error('Key scroll fallback failed: %s', e)

    def handle_drag(self, payload, session):
        """Press, move straight to ``end`` and release.

        ``start`` is parsed but the pointer is not moved there first; the drag
        begins wherever the pointer is.
        """
        event = DragEvent.from_payload(payload)
        if self.motion is not None:
            self.motion.interrupt(session)
        self.pointer.set_button_state(BUTTON_DOWN)
        try:
            self.pointer.move_absolute(event.end.x, event.end.y)
        finally:
            self.pointer.set_button_state(BUTTON_UP)
