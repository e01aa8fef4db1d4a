"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from svgsprite.models.options import SpriteOptions


CHECK_SVG = '<svg viewBox="0 0 20 20" width="20" height="20"><path d="M1 1"/></svg>'

CLOSE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2">
  <path d="M18 6 6 18"/>
  <path d="m6 6 12 12"/>
</svg>'''

# No viewBox: falls back to 0 0 24 24
PLUS_SVG = '<svg xmlns="http://www.w3.org/2000/svg" fill="currentColor"><path d="M11 5h2v14h-2zM5 11h14v2H5z"/></svg>'

GRADIENT_SVG = '''<?xml version="1.0" encoding="UTF-8"?>
<!-- Licensed under MIT, do not copy into every instance -->
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">
  <defs>
    <linearGradient id="g1"><stop offset="0" stop-color="#fff"/></linearGradient>
  </defs>
  <circle cx="12" cy="12" r="10" fill="url(#g1)"/>
</svg>'''

BROKEN_SVG = '<svg viewBox="0 0 24 24"><path d="M1 1"'

NOT_SVG = '<html><body>not an icon</body></html>'


class _Timer:
    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class VirtualClock:
    """Scheduler whose time only moves when the test calls ``advance``."""

    def __init__(self) -> None:
        self.now = 0.0
        self._timers: list[_Timer] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> _Timer:
        timer = _Timer(self.now + delay, callback)
        self._timers.append(timer)
        return timer

    @property
    def active(self) -> int:
        return sum(1 for t in self._timers if not t.cancelled)

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = sorted(
            (t for t in self._timers if not t.cancelled and t.when <= self.now),
            key=lambda t: t.when,
        )
        for timer in due:
            self._timers.remove(timer)
            timer.callback()
        self._timers = [t for t in self._timers if not t.cancelled]


def write_icon(root: Path, relative: str, markup: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(markup, encoding="utf-8")
    return path


@pytest.fixture
def icon_dir(tmp_path) -> Path:
    """icons/solid/{check,close}.svg plus a stray non-icon file."""
    root = tmp_path / "icons"
    write_icon(root, "solid/check.svg", CHECK_SVG)
    write_icon(root, "solid/close.svg", CLOSE_SVG)
    write_icon(root, "solid/README.md", "# not an icon")
    return root


@pytest.fixture
def options(icon_dir) -> SpriteOptions:
    return SpriteOptions(include=[str(icon_dir)], cwd=str(icon_dir.parent))


@pytest.fixture
def clock() -> VirtualClock:
    return VirtualClock()
