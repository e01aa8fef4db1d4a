"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    svgsprite_env: str = "development"
    svgsprite_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Sprite
    include: list[str] = ["icons"]
    symbol_id: str = "[dir]-[name]"
    svg_dom_id: str = "svg-sprite"
    inject: str | None = None
    file_path: str | None = None
    assets_dir: str = "assets"
    entry: str | None = None
    debounce_ms: int = 100

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
