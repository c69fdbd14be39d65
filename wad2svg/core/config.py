"""
Style configuration for SVG rendering.

Loads colours, opacities and marker sizes from JSON files so the map
appearance can change without touching the renderer.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional
from loguru import logger

DEFAULT_STYLE_PATH = Path(__file__).parent / "default_style.json"

_FALLBACK_REGION_STYLE = {"fill": "white", "stroke": "black", "opacity": "1.0"}


class StyleConfig:
    """Display styling for regions, special lines and things."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize style configuration.

        Args:
            config_path: Path to JSON style file. If None, uses the bundled default.
        """
        if config_path is None:
            config_path = DEFAULT_STYLE_PATH

        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        if not self.config_path.exists():
            raise FileNotFoundError(f"Style file not found: {self.config_path}")

        with open(self.config_path, 'r') as f:
            self._config = json.load(f)

        logger.debug(f"Loaded style: {self._config.get('name', 'Unknown')}")

    def region_style(self, region_type: int) -> Dict[str, str]:
        """
        Get fill, stroke and opacity for a region type.

        Args:
            region_type: Region type code

        Returns:
            Dict with "fill", "stroke" and "opacity" keys; the default style
            for types beyond the table
        """
        regions = self._config.get("regions", {})
        default = {**_FALLBACK_REGION_STYLE, **regions.get("default", {})}
        by_type = regions.get("by_type", [])
        if 0 <= region_type < len(by_type):
            return {**default, **by_type[region_type]}
        return default

    def region_stroke_width(self) -> int:
        return self._config.get("regions", {}).get("stroke_width", 1)

    def special_line_colour(self, category: str) -> str:
        """
        Get the stroke colour of a special line category.

        Args:
            category: "door", "teleporter", "lift", "exit", "secret" or "other"
        """
        colours = self._config.get("special_lines", {}).get("colours", {})
        return colours.get(category, colours.get("other", "orange"))

    def special_line_width(self) -> int:
        return self._config.get("special_lines", {}).get("stroke_width", 3)

    def thing_colour(self, category: str, default: str = "black") -> str:
        return self._config.get("things", {}).get("colours", {}).get(category, default)

    def thing_marker_size(self) -> int:
        return self._config.get("things", {}).get("marker_size", 20)

    def image_default(self, param_name: str, default: Any = None) -> Any:
        """
        Get a default image parameter ("width" or "height").

        Args:
            param_name: Parameter name
            default: Default value if not found
        """
        return self._config.get("image", {}).get(param_name, default)


# Global default style instance
_default_style: Optional[StyleConfig] = None


def get_default_style() -> StyleConfig:
    """Get the default global style instance."""
    global _default_style
    if _default_style is None:
        _default_style = StyleConfig()
    return _default_style


def load_style(config_path: str) -> StyleConfig:
    """
    Load styling from a specific file.

    Args:
        config_path: Path to JSON style file

    Returns:
        StyleConfig instance
    """
    return StyleConfig(config_path)
