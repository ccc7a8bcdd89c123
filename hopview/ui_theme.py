"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (status row, cursor, jump labels). Syntax
highlighting style for source code remains a separate pygments setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    cursor: str
    jump_label: str
    status_bar: str
    status_prompt: str
    status_message: str
    help_row: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    cursor="\033[7m",
    jump_label="\033[1;7m",
    status_bar="\033[2m",
    status_prompt="\033[1;38;5;81m",
    status_message="\033[38;5;229m",
    help_row="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    cursor="\033[7m",
    jump_label="\033[1;38;5;16;48;5;45m",
    status_bar="\033[2;38;5;31m",
    status_prompt="\033[1;38;5;45m",
    status_message="\033[38;5;153m",
    help_row="\033[2;38;5;110m",
)

# Reverse video is an attribute, not a color: labels and cursor stay visible.
PLAIN_THEME = UITheme(
    name="plain",
    reset="\033[0m",
    cursor="\033[7m",
    jump_label="\033[1;7m",
    status_bar="",
    status_prompt="",
    status_message="",
    help_row="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
