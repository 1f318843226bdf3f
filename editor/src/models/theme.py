"""Theme model: named color tables for the UI."""
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from constants import DEFAULT_THEME, THEMES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Theme:
    """A theme id plus its color properties (hex strings keyed by role)."""
    id: str
    props: Dict[str, str] = field(default_factory=dict)

    def __getitem__(self, key):
        return self.props[key]


def lookup_theme(theme_id: str) -> Optional[Theme]:
    """Look up a theme by id, or None if it does not exist."""
    props = THEMES.get(theme_id)
    if props is None:
        return None
    return Theme(id=theme_id, props=dict(props))


def default_theme() -> Theme:
    return lookup_theme(DEFAULT_THEME)


def switch_theme(current: Theme, theme_id: str) -> Theme:
    """Return the requested theme, or keep the current one if the id is unknown."""
    theme = lookup_theme(theme_id)
    if theme is None:
        logger.error("Theme '%s' not found in list of defined themes", theme_id)
        return current
    return theme
