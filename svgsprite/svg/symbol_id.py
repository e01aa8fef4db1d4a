"""Symbol id templates with ``[dir]`` and ``[name]`` placeholders."""

from __future__ import annotations

from pathlib import Path

from svgsprite.errors import ConfigurationError


def validate_template(template: str) -> str:
    if "[name]" not in template:
        raise ConfigurationError("Option symbol_id must contain [name] substring.")
    return template


def make_symbol_id(template: str, path: str | Path) -> str:
    """Substitute the parent directory's name and the file stem into ``template``.

    >>> make_symbol_id("[dir]-[name]", "/icons/solid/check.svg")
    'solid-check'
    """
    p = Path(path)
    return template.replace("[dir]", p.parent.name).replace("[name]", p.stem)
