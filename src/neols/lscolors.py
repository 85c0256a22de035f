"""LS_COLORS integration — path and indicator styles from the environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final, Protocol

from pathspec import GitIgnoreSpec
from rich.ansi import AnsiDecoder
from rich.style import Style

logger = logging.getLogger(__name__)

ENV_VAR: Final = "LS_COLORS"

# dircolors indicator vocabulary; any other key is a file-name glob.
INDICATORS: Final[frozenset[str]] = frozenset(
    "no fi rs di ln mh pi so do bd cd or mi su sg ca tw ow st ex lc rc ec cl".split()
)


class ColorDatabase(Protocol):
    """Protocol for an external path/indicator color database.

    Keeps the style resolver decoupled from the database format.
    """

    def style_for_path(self, path: Path) -> Style | None: ...

    def style_for_indicator(self, indicator: str) -> Style | None: ...


def parse_sgr(codes: str) -> Style | None:
    """Decode an SGR parameter string such as ``01;34`` into a style.

    Args:
        codes: Semicolon separated SGR parameters.

    Returns:
        The decoded style, or ``None`` when the codes select no styling.
    """
    text = AnsiDecoder().decode_line(f"\x1b[{codes}m#")
    for span in text.spans:
        style = span.style
        return style if isinstance(style, Style) else Style.parse(style)
    return None


class LsColors:
    """Parsed ``LS_COLORS`` database.

    Glob entries are matched against file names in definition order,
    the last matching definition winning.
    """

    def __init__(
        self,
        indicators: Mapping[str, Style],
        patterns: list[tuple[GitIgnoreSpec, Style]],
    ) -> None:
        self._indicators: dict[str, Style] = dict(indicators)
        self._patterns: list[tuple[GitIgnoreSpec, Style]] = list(patterns)

    @classmethod
    def from_string(cls, value: str) -> LsColors:
        """Build a database from a colon-separated ``key=codes`` list.

        Args:
            value: Raw ``LS_COLORS`` value.

        Returns:
            LsColors: Parsed database. Malformed entries are skipped.
        """
        indicators: dict[str, Style] = {}
        patterns: list[tuple[GitIgnoreSpec, Style]] = []

        for item in value.split(":"):
            if not item:
                continue
            key, sep, codes = item.partition("=")
            if not sep or not key:
                logger.debug("Skipping malformed LS_COLORS entry: %r", item)
                continue

            style = parse_sgr(codes)
            if style is None:
                logger.debug("No style in LS_COLORS entry: %r", item)
                continue

            if key in INDICATORS:
                indicators[key] = style
            else:
                patterns.append((GitIgnoreSpec.from_lines([key]), style))

        return cls(indicators, patterns)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> LsColors | None:
        """Load the database from the ``LS_COLORS`` environment variable.

        Args:
            environ: Environment mapping. Defaults to ``os.environ``.

        Returns:
            A parsed database when the variable is set and non-empty,
            otherwise ``None``.
        """
        env = os.environ if environ is None else environ
        value = env.get(ENV_VAR, "")
        if not value:
            logger.debug("%s is not set", ENV_VAR)
            return None
        return cls.from_string(value)

    def style_for_path(self, path: Path) -> Style | None:
        """Return the style of the last glob matching the file name of ``path``."""
        name = Path(path).name
        for spec, style in reversed(self._patterns):
            if spec.match_file(name):
                return style
        return None

    def style_for_indicator(self, indicator: str) -> Style | None:
        return self._indicators.get(indicator)
