"""Navigation highlighting driven by the scroll position."""

from .scroll_spy import ScrollSpy, Section, NavState
from .throttling import throttle

__all__ = ["ScrollSpy", "Section", "NavState", "throttle"]
