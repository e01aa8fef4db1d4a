"""Validated sprite options consumed by the engine."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from svgsprite.config import Settings
from svgsprite.errors import ConfigurationError
from svgsprite.svg.symbol_id import validate_template

DEFAULT_SYMBOL_ID = "[dir]-[name]"
SPRITE_STYLE = "position:absolute;width:0;height:0;"


class SpriteOptions(BaseModel):
    """Everything the pipeline needs to know, checked before any file is read."""

    include: list[str] = Field(..., min_length=1, description="Icon root directories")
    symbol_id: str = Field(default=DEFAULT_SYMBOL_ID, description="Template with [dir] and [name]")
    svg_dom_id: str = Field(default="svg-sprite", description="id of the sprite's root <svg>")
    inject: Literal["body-first", "body-last"] | None = None
    optimizer_config: dict[str, Any] = Field(default_factory=dict)
    file_path: str | None = Field(default=None, description="Output file pattern, may contain [hash]")
    assets_dir: str = "assets"
    entry: str | None = Field(default=None, description="File touched after each rebuild")
    debounce_ms: int = Field(default=100, ge=0)
    cwd: str | None = Field(default=None, description="Base for relative paths, defaults to os.getcwd()")

    @field_validator("include", mode="before")
    @classmethod
    def _coerce_include(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("symbol_id")
    @classmethod
    def _require_name_placeholder(cls, value: str) -> str:
        return validate_template(value)

    @property
    def sprite_attributes(self) -> dict[str, str]:
        """Attributes applied to the sprite root after the namespace declaration."""
        return {"style": SPRITE_STYLE, "id": self.svg_dom_id}

    @classmethod
    def from_settings(cls, settings: Settings) -> SpriteOptions:
        return load_options(
            include=settings.include,
            symbol_id=settings.symbol_id,
            svg_dom_id=settings.svg_dom_id,
            inject=settings.inject or None,
            file_path=settings.file_path or None,
            assets_dir=settings.assets_dir,
            entry=settings.entry or None,
            debounce_ms=settings.debounce_ms,
        )


def load_options(**values: Any) -> SpriteOptions:
    """Validate raw option values, raising ConfigurationError on any problem."""
    try:
        return SpriteOptions(**values)
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e
