"""
Scroll-driven navigation highlight state machine.
"""

import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from config.security_config import SECURITY_CONFIG, NavigationConfig
from formguard.logging.security_logger import SecurityLogger, SecurityEventType
from formguard.navigation.throttling import throttle


@dataclass(frozen=True)
class Section:
    """A page section that can be highlighted."""
    id: str
    offset_top: float


@dataclass(frozen=True)
class NavState:
    """Which nav link is active and whether the floating call-to-action is hidden."""
    active_section: str = ""
    active_links: tuple = ()
    floating_cta_hidden: bool = False


@dataclass
class ScrollSpy:
    """
    Tracks the section under the reader and the floating CTA visibility.

    The active section is the last one (in page order) whose top, lifted
    by the configured offset, is at or above the scroll position. The
    floating CTA is hidden once the contact section enters the viewport.
    """

    sections: Sequence[Section]
    nav_links: Sequence[str]
    config: NavigationConfig = field(default_factory=lambda: SECURITY_CONFIG.navigation)
    logger: Optional[SecurityLogger] = None
    state: NavState = field(default_factory=NavState)

    def compute(
        self,
        scroll_y: float,
        contact_top: Optional[float] = None,
        viewport_height: Optional[float] = None
    ) -> NavState:
        """Compute the state for a scroll position without changing the tracked one."""
        current = ""
        for section in self.sections:
            if scroll_y >= section.offset_top - self.config.section_offset_px:
                current = section.id

        active: List[str] = [href for href in self.nav_links if href == f"#{current}"]

        cta_hidden = self.state.floating_cta_hidden
        if contact_top is not None and viewport_height is not None:
            cta_hidden = contact_top < viewport_height

        return NavState(
            active_section=current,
            active_links=tuple(active),
            floating_cta_hidden=cta_hidden
        )

    def update(
        self,
        scroll_y: float,
        contact_top: Optional[float] = None,
        viewport_height: Optional[float] = None
    ) -> bool:
        """
        Move to the state for a scroll position.

        Args:
            scroll_y: Vertical scroll offset of the page
            contact_top: Contact section top relative to the viewport, if any
            viewport_height: Height of the viewport

        Returns:
            True if the highlighted link or the CTA visibility changed
        """
        new_state = self.compute(scroll_y, contact_top, viewport_height)
        changed = new_state != self.state
        self.state = new_state

        if changed and self.logger is not None:
            self.logger.log_event(
                event_type=SecurityEventType.NAVIGATION_CHANGED,
                form_id="navigation",
                details={
                    "active_section": new_state.active_section,
                    "floating_cta_hidden": new_state.floating_cta_hidden
                },
                severity="debug"
            )
        return changed

    def scroll_handler(self, clock: Callable[[], float] = time.monotonic):
        """Return ``update`` throttled to the configured scroll interval."""
        return throttle(self.config.scroll_throttle_ms, clock=clock)(self.update)
