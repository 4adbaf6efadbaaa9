"""Scroll tracking for the message list.

Hides the auto-scroll policy: every change in the number of visible
messages or in the busy flag pulls the view to the bottom, whether or not
the viewer was already there. The near-bottom flag only decides whether
the manual "scroll to bottom" control is shown.
"""

from collections.abc import Callable

from .config import NEAR_BOTTOM_THRESHOLD


class ViewSynchronizer:
    """Keeps the message list view in step with the conversation.

    Widget-agnostic: callers feed it viewport geometry and log/busy
    observations, and it calls scroll_to_bottom when the view must move.
    """

    def __init__(
        self,
        scroll_to_bottom: Callable[[], None],
        threshold: float = NEAR_BOTTOM_THRESHOLD,
    ) -> None:
        self._scroll_to_bottom = scroll_to_bottom
        self._threshold = threshold
        self._is_near_bottom = True
        self._last_observation: tuple[int, bool] | None = None

    @property
    def is_near_bottom(self) -> bool:
        return self._is_near_bottom

    @property
    def show_jump_control(self) -> bool:
        """Whether the manual scroll-to-bottom control should be visible."""
        return not self._is_near_bottom

    def update_viewport(
        self,
        scroll_offset: float,
        viewport_height: float,
        content_height: float,
    ) -> bool:
        """Recompute the near-bottom flag after a scroll or resize.

        Returns:
            The new near-bottom value
        """
        remaining = content_height - scroll_offset - viewport_height
        self._is_near_bottom = remaining < self._threshold
        return self._is_near_bottom

    def observe(self, visible_length: int, busy: bool) -> bool:
        """Record the current log length and busy flag.

        Scrolls to the bottom if either differs from the previous
        observation. The first observation establishes the baseline and
        scrolls as well.

        Returns:
            True if a scroll was issued
        """
        observation = (visible_length, busy)
        if observation == self._last_observation:
            return False
        self._last_observation = observation
        self._scroll_to_bottom()
        return True

    def jump_to_bottom(self) -> None:
        """Manual scroll-to-bottom action."""
        self._scroll_to_bottom()
