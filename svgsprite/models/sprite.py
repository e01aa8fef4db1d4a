"""Compiled symbol and assembled sprite models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from xml.sax.saxutils import quoteattr

DEFAULT_VIEWBOX = "0 0 24 24"
SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def format_attrs(attributes: dict[str, str]) -> str:
    """Render attributes in insertion order as ` key="value"` pairs."""
    return "".join(f" {k}={quoteattr(v)}" for k, v in attributes.items())


@dataclass(frozen=True)
class Symbol:
    """One icon file compiled into a reusable <symbol>."""

    id: str
    source: Path
    view_box: str = DEFAULT_VIEWBOX
    # Root attributes copied from the source, width/height/id/viewBox excluded
    attributes: dict[str, str] = field(default_factory=dict)
    # Serialized children of the original root, <defs> removed
    inner: str = ""
    # Serialized children of any hoisted <defs>
    defs: str = ""

    @property
    def markup(self) -> str:
        attrs = {"id": self.id, "viewBox": self.view_box, **self.attributes}
        return f"<symbol{format_attrs(attrs)}>{self.inner}</symbol>"


@dataclass(frozen=True)
class SpriteDocument:
    """The assembled sprite. Replaced as a whole, never mutated."""

    content: str
    hash: str
    symbols: tuple[Symbol, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.symbols

    @property
    def symbol_ids(self) -> list[str]:
        return [s.id for s in self.symbols]
