"""Settings discovery and parsing."""

from plane_viewer.core.config import ViewerConfig, config_from_sections, load_config

__all__ = ["ViewerConfig", "config_from_sections", "load_config"]
