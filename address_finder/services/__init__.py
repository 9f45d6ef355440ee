"""Presentation-side services: rendering, clipboard and logging."""

from .clipboard import ClipboardUnavailable, CommandClipboard
from .render import clipboard_text, map_url, render_state, render_summary, state_payload

__all__ = [
    "ClipboardUnavailable",
    "CommandClipboard",
    "clipboard_text",
    "map_url",
    "render_state",
    "render_summary",
    "state_payload",
]
