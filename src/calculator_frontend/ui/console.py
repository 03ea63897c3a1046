"""Display surface writing to a text stream."""
from typing import Optional, Set, TextIO

from calculator_frontend.common.logger import logger
from calculator_frontend.ui.presenter import VisualStyle


class ConsoleDisplay:
    """
    Display surface for terminals and headless runs.

    Keeps the shown text, the active size tier and the active transient styles.
    With a stream, every render is echoed as one line, e.g. ``[tier 0] 2+2``.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream
        self.text: str = ""
        self.tier: int = 0
        self.styles: Set[VisualStyle] = set()

    def show(self, text: str, tier: int) -> None:
        """Replace the shown text and tier, echoing the render to the stream if any."""
        self.text = text
        self.tier = tier
        logger.debug(f"🖼️ Display: {text!r} (tier {tier})")
        if self.stream is not None:
            self.stream.write(f"{self}\n")
            self.stream.flush()

    def add_style(self, style: VisualStyle) -> None:
        """Activate a transient style, adding an active one again is a no-op."""
        self.styles.add(style)

    def remove_style(self, style: VisualStyle) -> None:
        """Deactivate a transient style, removing an inactive one is a no-op."""
        self.styles.discard(style)

    def __str__(self) -> str:
        """One-line rendition: tier, active styles sorted by name, then the text."""
        styles = "".join(f" <{style.value}>" for style in sorted(self.styles, key=lambda s: s.value))
        return f"[tier {self.tier}]{styles} {self.text}"
