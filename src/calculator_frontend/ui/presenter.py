"""Render the expression on a display surface."""
import asyncio
from enum import Enum
import re
from typing import Callable, Optional, Protocol, Tuple

from calculator_frontend.common.formatter import format_number
from calculator_frontend.common.settings import CalculatorSettings

# Upper length bound of each size tier, from largest font to smallest.
# Text longer than the last bound gets the last tier.
SIZE_TIER_LIMITS: Tuple[int, ...] = (8, 10, 12, 16, 20, 25, 30)
SMALLEST_TIER: int = len(SIZE_TIER_LIMITS)

# A whole expression that is a plain number is formatted before display
PLAIN_NUMBER: re.Pattern = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")


class VisualStyle(str, Enum):
    """Transient styles a display surface can show on top of the text."""

    HIGHLIGHT = "highlight"
    ERROR = "error"


class DisplaySurface(Protocol):
    """What the presenter needs from a UI toolkit's display widget."""

    def show(self, text: str, tier: int) -> None:
        """Replace the text and activate exactly one size tier."""

    def add_style(self, style: VisualStyle) -> None:
        ...

    def remove_style(self, style: VisualStyle) -> None:
        ...


class Cancellable(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        ...


class AsyncioScheduler:
    """Schedule callbacks on the running event loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)


def size_tier(text: str) -> int:
    """
    Pick the size tier for a text, the first tier whose length bound fits wins.

    :param str text: Displayed text

    :return: Tier index, 0 for the largest font
    :rtype: int
    """
    length: int = len(text)
    for tier, limit in enumerate(SIZE_TIER_LIMITS):
        if length <= limit:
            return tier
    return SMALLEST_TIER


def display_text(expression: str) -> str:
    """
    Text shown for an expression.

    :param str expression: Current expression

    :return: The formatted number if the expression is a plain number, else the expression itself
    :rtype: str
    """
    if PLAIN_NUMBER.fullmatch(expression):
        return format_number(expression)
    return expression


class TransientStyle:
    """
    A visual style that removes itself from the surface after a fixed duration.

    States:
        - inactive: no pending removal
        - active: style shown, removal scheduled

    Triggering an active style cancels the pending removal and schedules a new one.
    """

    def __init__(
        self, surface: DisplaySurface, scheduler: Scheduler, style: VisualStyle, duration: float
    ) -> None:
        self.surface = surface
        self.scheduler = scheduler
        self.style = style
        self.duration = duration
        self._removal: Optional[Cancellable] = None

    @property
    def active(self) -> bool:
        return self._removal is not None

    def trigger(self) -> None:
        if self._removal is not None:
            self._removal.cancel()
        self.surface.add_style(self.style)
        self._removal = self.scheduler.call_later(self.duration, self._expire)

    def cancel(self) -> None:
        """Remove the style immediately."""
        if self._removal is not None:
            self._removal.cancel()
            self._expire()

    def _expire(self) -> None:
        self._removal = None
        self.surface.remove_style(self.style)


class DisplayPresenter:
    """
    Derives the display state from the expression and pushes it to the surface.

    The displayed text and its size tier are recomputed on every render, the
    presenter keeps no state besides its transient styles.
    """

    def __init__(
        self,
        surface: DisplaySurface,
        scheduler: Optional[Scheduler] = None,
        settings: Optional[CalculatorSettings] = None,
    ) -> None:
        settings = settings or CalculatorSettings()
        scheduler = scheduler or AsyncioScheduler()

        self.surface = surface
        self.highlight = TransientStyle(surface, scheduler, VisualStyle.HIGHLIGHT, settings.highlight_duration)
        self.error = TransientStyle(surface, scheduler, VisualStyle.ERROR, settings.error_duration)

    def render(self, expression: str) -> str:
        """
        Show an expression on the surface.

        :param str expression: Current expression

        :return: Displayed text
        :rtype: str
        """
        text: str = display_text(expression)
        self.surface.show(text, size_tier(text))
        return text

    def flash_highlight(self) -> None:
        self.highlight.trigger()

    def flash_error(self) -> None:
        self.error.trigger()
