"""Clipboard sink backed by the platform's clipboard command."""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from typing import List, Optional, Protocol, Sequence

logger = logging.getLogger(__name__)

_CANDIDATE_COMMANDS: Sequence[Sequence[str]] = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
    ("clip",),
)


class ClipboardUnavailable(RuntimeError):
    """Raised when no clipboard command can be found or it fails."""


class ClipboardSink(Protocol):
    def copy(self, text: str) -> None:
        """Place ``text`` on the clipboard."""


def detect_clipboard_command() -> Optional[List[str]]:
    for candidate in _CANDIDATE_COMMANDS:
        if shutil.which(candidate[0]):
            return list(candidate)
    return None


class CommandClipboard:
    """Pipe text to a clipboard command such as ``pbcopy`` or ``xclip``."""

    def __init__(self, command: Optional[str] = None) -> None:
        self.command = shlex.split(command) if command else detect_clipboard_command()

    def copy(self, text: str) -> None:
        if not self.command:
            raise ClipboardUnavailable("No clipboard command found on this system")
        try:
            subprocess.run(
                self.command,
                input=text.encode("utf-8"),
                check=True,
                timeout=5,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            raise ClipboardUnavailable(f"Clipboard command failed: {exc}") from exc
        logger.debug("Copied %d characters to clipboard", len(text))


__all__ = ["ClipboardSink", "ClipboardUnavailable", "CommandClipboard", "detect_clipboard_command"]
