"""Consumers of the current sprite: virtual module, HTML, disk, rebuild triggers."""
