"""
PPT Studio - Theme Palettes
One fixed six-slot palette per theme; unknown names use the professional palette
"""

import logging
from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping

from ppt_studio.models import Theme, theme_name

logger = logging.getLogger(__name__)

WHITE = "FFFFFF"
PANEL_GRAY = "F9FAFB"


@dataclass(frozen=True)
class ThemeConfig:
    """Resolved palette, RGB hex without '#'"""

    primary: str
    secondary: str
    accent: str
    text: str
    light: str
    dark: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


THEME_CONFIGS: Mapping[str, ThemeConfig] = MappingProxyType({
    Theme.PROFESSIONAL.value: ThemeConfig(
        primary="1E3A8A",
        secondary="3B82F6",
        accent="60A5FA",
        text="1F2937",
        light="F0F9FF",
        dark="0F172A",
    ),
    Theme.MODERN.value: ThemeConfig(
        primary="6366F1",
        secondary="8B5CF6",
        accent="A78BFA",
        text="1F2937",
        light="F5F3FF",
        dark="1E1B4B",
    ),
    Theme.CREATIVE.value: ThemeConfig(
        primary="DC2626",
        secondary="F59E0B",
        accent="FBBF24",
        text="1F2937",
        light="FEF3C7",
        dark="7C2D12",
    ),
    Theme.MINIMAL.value: ThemeConfig(
        primary="111827",
        secondary="374151",
        accent="6B7280",
        text="1F2937",
        light="F9FAFB",
        dark="030712",
    ),
})


def resolve_theme(name: Any, themes: Mapping[str, ThemeConfig] = THEME_CONFIGS) -> ThemeConfig:
    """
    Resolve a theme name to its palette

    Args:
        name: Theme name (case-insensitive)
        themes: Palette table to look in

    Returns:
        The matching ThemeConfig, or the professional palette
    """
    key = theme_name(name).lower()
    config = themes.get(key)
    if config is None:
        logger.warning(f"⚠️ Unknown theme '{name}', using {Theme.PROFESSIONAL.value}")
        config = themes.get(Theme.PROFESSIONAL.value, THEME_CONFIGS[Theme.PROFESSIONAL.value])
    return config
