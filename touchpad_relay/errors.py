class RelayError(Exception):
    """Base class for all touchpad relay errors."""


class MalformedEvent(RelayError, ValueError):
    """An event payload is missing fields or carries the wrong types."""


class PointerActionFailure(RelayError):
    """A pointer primitive (move, click, scroll, button toggle, key tap) failed."""


class ScrollPrimitiveUnavailable(PointerActionFailure):
    """The wheel scroll primitive failed; callers fall back to paging keys."""


class TransportError(RelayError):
    """The client could not reach the host."""
