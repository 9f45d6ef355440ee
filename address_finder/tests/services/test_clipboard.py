from __future__ import annotations

import subprocess

import pytest

from address_finder.services import clipboard
from address_finder.services.clipboard import ClipboardUnavailable, CommandClipboard


def test_explicit_command_receives_text(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []

    def fake_run(command, input, check, timeout):
        calls.append((command, input))
        return subprocess.CompletedProcess(command, 0)

    monkeypatch.setattr(clipboard.subprocess, "run", fake_run)

    CommandClipboard("xclip -selection clipboard").copy("Address: تهران")

    assert calls == [(["xclip", "-selection", "clipboard"], "Address: تهران".encode("utf-8"))]


def test_detects_first_available_command(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        clipboard.shutil,
        "which",
        lambda name: "/usr/bin/wl-copy" if name == "wl-copy" else None,
    )
    assert CommandClipboard().command == ["wl-copy"]


def test_no_command_available(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(clipboard.shutil, "which", lambda name: None)

    with pytest.raises(ClipboardUnavailable):
        CommandClipboard().copy("text")


def test_command_failure_is_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(command, input, check, timeout):
        raise subprocess.CalledProcessError(1, command)

    monkeypatch.setattr(clipboard.subprocess, "run", fake_run)

    with pytest.raises(ClipboardUnavailable):
        CommandClipboard("pbcopy").copy("text")
