"""Compile one icon file's markup → one <symbol>.

Steps: optimize, parse, read viewBox (default ``0 0 24 24``), copy root
attributes except width/height, assign the templated id, move the root's
children into the symbol and hoist any <defs> out of it.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from svgsprite.errors import CompileError
from svgsprite.models.sprite import DEFAULT_VIEWBOX, SVG_NAMESPACE, Symbol
from svgsprite.svg.optimizer import Optimizer, OptimizerConfig, cleanup_svg, resolve_optimizer_config
from svgsprite.svg.symbol_id import make_symbol_id

logger = logging.getLogger(__name__)

XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
_ATTR_PREFIXES = {XLINK_NAMESPACE: "xlink", XML_NAMESPACE: "xml"}

# Attributes that conflict with reuse at arbitrary sizes
DROPPED_ATTRS = {"width", "height"}
# Set on the symbol by the compiler itself
RESERVED_ATTRS = {"id", "viewBox"}

ET.register_namespace("xlink", XLINK_NAMESPACE)


def _strip_ns(tag: str) -> str:
    return tag.split("}")[-1] if "}" in tag else tag


def _attr_name(key: str) -> str | None:
    """Map a Clark-notation attribute key back to its prefixed form."""
    if not key.startswith("{"):
        return key
    uri, _, local = key[1:].partition("}")
    prefix = _ATTR_PREFIXES.get(uri)
    return f"{prefix}:{local}" if prefix else None


def _normalize_tags(root: ET.Element) -> None:
    """Drop the default SVG namespace from element tags so output stays prefix-free."""
    prefix = "{" + SVG_NAMESPACE + "}"
    for el in root.iter():
        if isinstance(el.tag, str) and el.tag.startswith(prefix):
            el.tag = el.tag[len(prefix):]


def _serialize_children(el: ET.Element) -> str:
    parts = [el.text or ""]
    for child in el:
        parts.append(ET.tostring(child, encoding="unicode"))
    return "".join(parts)


def _hoist_defs(root: ET.Element) -> str:
    """Remove every <defs> below ``root`` and return their serialized children."""
    collected: list[str] = []
    parents = {child: parent for parent in root.iter() for child in parent}

    def _inside_defs(el: ET.Element) -> bool:
        parent = parents.get(el)
        while parent is not None and parent is not root:
            if _strip_ns(parent.tag) == "defs":
                return True
            parent = parents.get(parent)
        return False

    # Nested <defs> travel with their outermost <defs>
    outer = [el for el in root.iter() if el is not root and _strip_ns(el.tag) == "defs" and not _inside_defs(el)]
    for defs in outer:
        parent = parents.get(defs)
        if parent is None:
            continue
        collected.append(_serialize_children(defs))
        # Keep the text that followed the removed element
        tail = defs.tail or ""
        index = list(parent).index(defs)
        if tail:
            if index > 0:
                prev = parent[index - 1]
                prev.tail = (prev.tail or "") + tail
            else:
                parent.text = (parent.text or "") + tail
        parent.remove(defs)
    return "".join(collected)


def compile_symbol(
    markup: str,
    path: str | Path,
    symbol_id: str,
    optimizer: Optimizer | None = None,
    optimizer_config: OptimizerConfig | None = None,
) -> Symbol:
    """Compile raw icon markup into a Symbol.

    Raises CompileError when the optimizer fails or no <svg> root is found.
    Compiling the same markup twice with the same config is byte-identical.
    """
    optimize = optimizer or cleanup_svg
    config = optimizer_config if optimizer_config is not None else resolve_optimizer_config()

    try:
        optimized = optimize(markup, config)
    except Exception as e:
        raise CompileError(path, f"optimizer failed: {e}") from e

    try:
        root = ET.fromstring(optimized)
    except ET.ParseError as e:
        raise CompileError(path, f"invalid markup: {e}") from e

    if _strip_ns(root.tag) != "svg":
        raise CompileError(path, f"no <svg> root element (found <{_strip_ns(root.tag)}>)")

    _normalize_tags(root)

    view_box = root.get("viewBox") or DEFAULT_VIEWBOX
    attributes: dict[str, str] = {}
    for key, value in root.attrib.items():
        name = _attr_name(key)
        if name is None:
            logger.debug("Dropping foreign attribute %s on %s", key, path)
            continue
        if name in DROPPED_ATTRS or name in RESERVED_ATTRS:
            continue
        attributes[name] = value

    defs = _hoist_defs(root)
    inner = _serialize_children(root)

    symbol = Symbol(
        id=make_symbol_id(symbol_id, path),
        source=Path(path),
        view_box=view_box,
        attributes=attributes,
        inner=inner,
        defs=defs,
    )
    logger.debug("Compiled %s → #%s", path, symbol.id)
    return symbol
