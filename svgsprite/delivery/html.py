"""Inject the sprite's root element into an HTML document."""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_BODY_OPEN_RE = re.compile(r"<body\b[^>]*>", re.IGNORECASE)
_BODY_CLOSE_RE = re.compile(r"</body\s*>", re.IGNORECASE)

POSITIONS = ("body-first", "body-last")


def inject_sprite(html: str, sprite_markup: str, position: str | None, dom_id: str | None = None) -> str:
    """Insert ``sprite_markup`` at the start or end of <body>, exactly once.

    A document that already contains an element with ``dom_id`` is returned
    unchanged, as is one without a <body>.
    """
    if position is None:
        return html
    if position not in POSITIONS:
        raise ValueError(f"Unknown inject position: {position!r}")

    if dom_id and re.search(rf'(?<![\w:-])id\s*=\s*["\']{re.escape(dom_id)}["\']', html):
        logger.debug("Sprite #%s already present, skipping injection", dom_id)
        return html

    if position == "body-first":
        m = _BODY_OPEN_RE.search(html)
        if m is None:
            logger.warning("No <body> found, sprite not injected")
            return html
        return html[: m.end()] + sprite_markup + html[m.end():]

    # Insert before the last </body>
    matches = list(_BODY_CLOSE_RE.finditer(html))
    if not matches:
        logger.warning("No </body> found, sprite not injected")
        return html
    m = matches[-1]
    return html[: m.start()] + sprite_markup + html[m.start():]
