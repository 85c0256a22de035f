"""Style resolution: attribute tags to terminal styles.

Styles come from a static theme map, optionally overridden by an
``LS_COLORS`` database for node-kind indicators and file-name globs.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Final, Optional

from rich.color import Color, ColorSystem
from rich.style import Style

from neols import NeolsError, ThemeError
from neols.elem import ALL_TAGS, Dir, Elem, File, INode, Links, Tag, has_suid
from neols.lscolors import ColorDatabase, LsColors

logger = logging.getLogger(__name__)

SUID_BACKGROUND: Final = Style(bgcolor=Color.from_ansi(124))  # Red3

ThemeMap = dict[Tag, Optional[int]]


class ColorMode(Enum):
    """Whether to color, and whether ``LS_COLORS`` takes part."""

    NO_COLOR = "no-color"
    THEME = "theme"
    THEME_AND_LSCOLORS = "lscolors"


class ColorTheme(Enum):
    DARK = "dark"
    LIGHT = "light"
    MINIMAL = "minimal"

    @classmethod
    def from_name(cls, name: str) -> ColorTheme:
        """Return the theme called ``name``.

        Raises:
            NeolsError: If ``name`` is not a known theme.
        """
        try:
            return cls(name.lower())
        except ValueError:
            known = ", ".join(t.value for t in cls)
            raise NeolsError(
                f"Unknown color theme '{name}'. Known themes: {known}"
            ) from None


# Colors are 256-color palette indexes.
DARK_THEME: Final[ThemeMap] = {
    Elem.USER: 230,
    Elem.GROUP: 187,
    Elem.READ: 2,
    Elem.WRITE: 3,
    Elem.EXEC: 1,
    Elem.EXEC_STICKY: 5,
    Elem.NO_ACCESS: 245,
    File(exec=False, uid=False): 184,
    File(exec=False, uid=True): 184,
    File(exec=True, uid=False): 40,
    File(exec=True, uid=True): 40,
    Dir(uid=False): 33,
    Dir(uid=True): 33,
    Elem.PIPE: 44,
    Elem.SYMLINK: 44,
    Elem.BROKEN_SYMLINK: 124,
    Elem.BLOCK_DEVICE: 44,
    Elem.CHAR_DEVICE: 172,
    Elem.SOCKET: 44,
    Elem.SPECIAL: 44,
    Elem.HOUR_OLD: 40,
    Elem.DAY_OLD: 42,
    Elem.OLDER: 36,
    Elem.NON_FILE: 245,
    Elem.FILE_SMALL: 229,
    Elem.FILE_MEDIUM: 216,
    Elem.FILE_LARGE: 172,
    INode(valid=True): 13,
    INode(valid=False): 245,
    Links(valid=True): 13,
    Links(valid=False): 245,
}

LIGHT_THEME: Final[ThemeMap] = {
    Elem.USER: None,
    Elem.GROUP: None,
    Elem.READ: None,
    Elem.WRITE: None,
    Elem.EXEC: None,
    Elem.EXEC_STICKY: None,
    Elem.NO_ACCESS: 8,  # Grey
    File(exec=False, uid=False): None,
    File(exec=False, uid=True): 8,
    File(exec=True, uid=False): 8,
    File(exec=True, uid=True): 8,
    Dir(uid=False): 26,  # DodgerBlue3
    Dir(uid=True): 3,
    Elem.PIPE: 44,  # DarkTurquoise
    Elem.SYMLINK: 37,
    Elem.BROKEN_SYMLINK: 124,  # Red3
    Elem.BLOCK_DEVICE: 44,
    Elem.CHAR_DEVICE: 172,  # Orange3
    Elem.SOCKET: 44,
    Elem.SPECIAL: 44,
    Elem.HOUR_OLD: None,
    Elem.DAY_OLD: None,
    Elem.OLDER: 245,
    Elem.NON_FILE: 250,
    Elem.FILE_SMALL: 245,
    Elem.FILE_MEDIUM: None,
    Elem.FILE_LARGE: None,
    INode(valid=True): None,
    INode(valid=False): 245,
    Links(valid=True): None,
    Links(valid=False): 245,
}

MINIMAL_THEME: Final[ThemeMap] = {
    **{tag: None for tag in ALL_TAGS},
    Elem.NO_ACCESS: 245,
    File(exec=True, uid=False): 40,
    File(exec=True, uid=True): 40,
    Dir(uid=False): 33,
    Dir(uid=True): 33,
    Elem.SYMLINK: 44,
    Elem.BROKEN_SYMLINK: 124,
}

THEMES: Final[dict[ColorTheme, ThemeMap]] = {
    ColorTheme.DARK: DARK_THEME,
    ColorTheme.LIGHT: LIGHT_THEME,
    ColorTheme.MINIMAL: MINIMAL_THEME,
}


def check_theme_coverage(themes: dict[ColorTheme, ThemeMap]) -> None:
    """Verify every theme defines an entry for every tag.

    Raises:
        ThemeError: If any theme lacks a tag.
    """
    for theme, mapping in themes.items():
        missing = [tag for tag in ALL_TAGS if tag not in mapping]
        if missing:
            raise ThemeError(f"Theme '{theme.value}' has no style for {missing!r}")


check_theme_coverage(THEMES)


def _indicator_for(tag: Tag) -> str | None:
    """Translate a tag into the ``LS_COLORS`` indicator vocabulary."""
    match tag:
        case File(uid=True) | Dir(uid=True):
            return None
        case File(exec=True):
            return "ex"
        case File():
            return "fi"
        case Dir():
            return "di"
        case Elem.SYMLINK:
            return "ln"
        case Elem.PIPE:
            return "pi"
        case Elem.SOCKET:
            return "so"
        case Elem.BLOCK_DEVICE:
            return "bd"
        case Elem.CHAR_DEVICE:
            return "cd"
        case Elem.BROKEN_SYMLINK:
            return "or"
        case INode(valid=True) | Links(valid=True):
            return "so"
        case INode() | Links():
            return "no"
        case _:
            return None


def _theme_style(tag: Tag, color: int | None) -> Style:
    style = Style() if color is None else Style(color=Color.from_ansi(color))
    if has_suid(tag):
        return style + SUID_BACKGROUND
    return style


class Colors:
    """Resolve attribute tags and paths to styles, and paint text with them.

    Immutable after construction; one instance can serve a whole listing.
    """

    def __init__(
        self,
        mode: ColorMode = ColorMode.THEME,
        theme: ColorTheme = ColorTheme.DARK,
        database: ColorDatabase | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            mode: Color mode. ``NO_COLOR`` disables all styling.
            theme: Theme selecting the static tag map.
            database: External database for ``THEME_AND_LSCOLORS`` mode.
                When omitted in that mode, ``LS_COLORS`` is read from the
                environment.
        """
        self._styles: dict[Tag, Style] | None = None
        self._database: ColorDatabase | None = None

        if mode is ColorMode.NO_COLOR:
            return

        self._styles = {
            tag: _theme_style(tag, color) for tag, color in THEMES[theme].items()
        }
        if mode is ColorMode.THEME_AND_LSCOLORS:
            self._database = database if database is not None else LsColors.from_env()
            if self._database is None:
                logger.debug("No color database, using theme '%s' only", theme.value)

    def style(self, tag: Tag) -> Style:
        """Resolve a tag to a style.

        The database style for the tag's indicator wins over the theme.

        Raises:
            KeyError: If the active theme has no entry for ``tag``.
        """
        if self._styles is None:
            return Style()
        if self._database is not None:
            indicator = _indicator_for(tag)
            if indicator is not None:
                style = self._database.style_for_indicator(indicator)
                if style is not None:
                    return style
        return self._styles[tag]

    def style_from_path(self, path: Path) -> Style | None:
        """Return the database style for ``path``, or ``None`` when unmatched."""
        if self._styles is None or self._database is None:
            return None
        return self._database.style_for_path(path)

    def colorize(self, text: str, tag: Tag) -> str:
        return _paint(self.style(tag), text)

    def colorize_using_path(self, text: str, path: Path, tag: Tag) -> str:
        """Paint ``text`` with the path style, falling back to the tag style."""
        style = self.style_from_path(path)
        if style is None:
            style = self.style(tag)
        return _paint(style, text)


def _paint(style: Style, text: str) -> str:
    return style.render(text, color_system=ColorSystem.TRUECOLOR)
