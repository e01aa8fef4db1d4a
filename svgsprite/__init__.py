"""SVG sprite assembly with incremental rebuilds."""
