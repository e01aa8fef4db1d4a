"""Optimizer interface and the baseline cleanup pass.

The optimizer is a pure function ``(markup, config) -> markup``. Any real SVG
optimizer can be plugged in; ``cleanup_svg`` is the default and only removes
content that must never reach the sprite (comments, metadata, editor cruft).
Paths are never merged: icon authors rely on path identity for theming and
animation hooks.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any

OptimizerConfig = dict[str, Any]
Optimizer = Callable[[str, OptimizerConfig], str]

DEFAULT_OPTIMIZER_CONFIG: OptimizerConfig = {
    "multipass": True,
    "remove_comments": True,
    "remove_metadata": True,
    "remove_editor_data": True,
    "collapse_whitespace": True,
    "merge_paths": False,
}

# Upper bound on multipass iterations
MAX_PASSES = 10

_XML_DECL_RE = re.compile(r"<\?xml[^>]*\?>", re.IGNORECASE)
_DOCTYPE_RE = re.compile(r"<!DOCTYPE[^>\[]*(\[[^\]]*\])?\s*>", re.IGNORECASE)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_METADATA_RE = re.compile(r"<\s*metadata[^>]*>.*?</\s*metadata\s*>", re.DOTALL | re.IGNORECASE)
_METADATA_SELFCLOSE_RE = re.compile(r"<\s*metadata[^>]*/\s*>", re.IGNORECASE)

# Inkscape / Sodipodi namespaced elements and attributes
_EDITOR_ELEMENT_RE = re.compile(
    r"<\s*(?:sodipodi|inkscape):\w+[^>]*?(?:/\s*>|>.*?</\s*(?:sodipodi|inkscape):\w+\s*>)",
    re.DOTALL,
)
_EDITOR_ATTR_RE = re.compile(r'\s+(?:sodipodi|inkscape):[\w-]+\s*=\s*"[^"]*"')
_EDITOR_XMLNS_RE = re.compile(r'\s+xmlns:(?:sodipodi|inkscape)\s*=\s*"[^"]*"')
_INTER_TAG_WS_RE = re.compile(r">\s+<")
# Whitespace between tags inside <text> is rendered
_TEXT_BLOCK_RE = re.compile(r"<text\b[^>]*/\s*>|<text\b.*?</text\s*>", re.DOTALL)


def resolve_optimizer_config(overrides: Mapping[str, Any] | None = None) -> OptimizerConfig:
    """Merge caller overrides onto the baseline configuration.

    Comment removal is always forced. Multipass is forced unless the caller
    sets ``multipass`` explicitly.
    """
    config = dict(DEFAULT_OPTIMIZER_CONFIG)
    overrides = dict(overrides or {})
    explicit_multipass = "multipass" in overrides
    config.update(overrides)
    config["remove_comments"] = True
    if not explicit_multipass:
        config["multipass"] = True
    return config


def cleanup_svg(markup: str, config: OptimizerConfig) -> str:
    """Default optimizer. Deterministic for a given input and config."""
    result = _single_pass(markup, config)
    if not config.get("multipass"):
        return result
    for _ in range(MAX_PASSES):
        next_result = _single_pass(result, config)
        if next_result == result:
            break
        result = next_result
    return result


def _single_pass(markup: str, config: OptimizerConfig) -> str:
    text = _XML_DECL_RE.sub("", markup)
    text = _DOCTYPE_RE.sub("", text)
    if config.get("remove_comments", True):
        text = _COMMENT_RE.sub("", text)
    if config.get("remove_metadata", True):
        text = _METADATA_RE.sub("", text)
        text = _METADATA_SELFCLOSE_RE.sub("", text)
    if config.get("remove_editor_data", True):
        text = _EDITOR_ELEMENT_RE.sub("", text)
        text = _EDITOR_ATTR_RE.sub("", text)
        text = _EDITOR_XMLNS_RE.sub("", text)
    if config.get("collapse_whitespace", True):
        text = _collapse_whitespace(text)
    return text.strip()


def _collapse_whitespace(text: str) -> str:
    """Drop whitespace between tags, leaving text content elements untouched."""
    parts: list[str] = []
    last = 0
    for m in _TEXT_BLOCK_RE.finditer(text):
        parts.append(_INTER_TAG_WS_RE.sub("><", text[last:m.start()]))
        parts.append(m.group(0))
        last = m.end()
    parts.append(_INTER_TAG_WS_RE.sub("><", text[last:]))
    return "".join(parts)
