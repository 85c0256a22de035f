"""Tests for neols.color — theme maps and style resolution."""

from __future__ import annotations

from pathlib import Path

import pytest
from rich.style import Style

from neols import NeolsError, ThemeError
from neols.color import (
    THEMES,
    ColorMode,
    Colors,
    ColorTheme,
    check_theme_coverage,
)
from neols.elem import ALL_TAGS, Dir, Elem, File, INode, Links, has_suid

RED = Style(color="red")
GREEN = Style(color="green")


class FakeDatabase:
    def __init__(
        self,
        indicators: dict[str, Style] | None = None,
        path_style: Style | None = None,
    ) -> None:
        self.indicators = indicators or {}
        self.path_style = path_style
        self.queried: list[str] = []

    def style_for_path(self, path: Path) -> Style | None:
        return self.path_style

    def style_for_indicator(self, indicator: str) -> Style | None:
        self.queried.append(indicator)
        return self.indicators.get(indicator)


class TestThemeCoverage:
    def test_tag_space_size(self) -> None:
        assert len(ALL_TAGS) == 31
        assert len(set(ALL_TAGS)) == 31

    @pytest.mark.parametrize("theme", list(ColorTheme))
    def test_every_theme_covers_every_tag(self, theme: ColorTheme) -> None:
        assert set(THEMES[theme]) == set(ALL_TAGS)

    def test_incomplete_theme_is_rejected(self) -> None:
        partial = dict(THEMES[ColorTheme.DARK])
        del partial[Elem.USER]
        with pytest.raises(ThemeError, match="dark"):
            check_theme_coverage({ColorTheme.DARK: partial})

    def test_unknown_tag_fails_loudly(self, dark: Colors) -> None:
        with pytest.raises(KeyError):
            dark.style("not-a-tag")  # type: ignore[arg-type]


class TestThemeStyles:
    def test_dark_directory(self, dark: Colors) -> None:
        assert dark.colorize("b", Dir()) == "\x1b[38;5;33mb\x1b[0m"

    def test_uncolored_tag_renders_plain(self) -> None:
        colors = Colors(ColorMode.THEME, ColorTheme.LIGHT)
        assert colors.colorize("a.txt", File()) == "a.txt"

    def test_themes_differ(self) -> None:
        dark = Colors(ColorMode.THEME, ColorTheme.DARK)
        light = Colors(ColorMode.THEME, ColorTheme.LIGHT)
        assert dark.style(Dir()) != light.style(Dir())

    @pytest.mark.parametrize("theme", list(ColorTheme))
    @pytest.mark.parametrize("tag", [File(uid=True), File(exec=True, uid=True), Dir(uid=True)])
    def test_suid_background(self, theme: ColorTheme, tag: File | Dir) -> None:
        style = Colors(ColorMode.THEME, theme).style(tag)
        assert style.bgcolor is not None
        assert style.bgcolor.number == 124

    def test_suid_background_keeps_foreground(self, dark: Colors) -> None:
        assert dark.style(Dir(uid=True)).color == dark.style(Dir()).color

    def test_non_suid_has_no_background(self, dark: Colors) -> None:
        for tag in ALL_TAGS:
            if not has_suid(tag):
                assert dark.style(tag).bgcolor is None

    def test_suid_painted_text(self) -> None:
        colors = Colors(ColorMode.THEME, ColorTheme.LIGHT)
        assert "48;5;124" in colors.colorize("x", File(uid=True))


class TestNoColor:
    @pytest.mark.parametrize("tag", ALL_TAGS)
    def test_every_tag_is_unstyled(self, no_color: Colors, tag: object) -> None:
        assert no_color.colorize("text", tag) == "text"  # type: ignore[arg-type]

    def test_database_is_never_consulted(self) -> None:
        database = FakeDatabase({"di": RED}, path_style=RED)
        colors = Colors(ColorMode.NO_COLOR, database=database)
        assert colors.colorize("b", Dir()) == "b"
        assert colors.style_from_path(Path("a.tar")) is None
        assert database.queried == []


class TestDatabaseOverride:
    def _colors(self, database: FakeDatabase) -> Colors:
        return Colors(ColorMode.THEME_AND_LSCOLORS, ColorTheme.DARK, database)

    def test_indicator_style_wins(self) -> None:
        colors = self._colors(FakeDatabase({"di": RED}))
        assert colors.style(Dir()) == RED

    @pytest.mark.parametrize(
        ("tag", "indicator"),
        [
            (File(), "fi"),
            (File(exec=True), "ex"),
            (Dir(), "di"),
            (Elem.SYMLINK, "ln"),
            (Elem.BROKEN_SYMLINK, "or"),
            (Elem.PIPE, "pi"),
            (Elem.SOCKET, "so"),
            (Elem.BLOCK_DEVICE, "bd"),
            (Elem.CHAR_DEVICE, "cd"),
            (INode(valid=True), "so"),
            (INode(valid=False), "no"),
            (Links(valid=True), "so"),
            (Links(valid=False), "no"),
        ],
    )
    def test_indicator_vocabulary(self, tag: object, indicator: str) -> None:
        database = FakeDatabase()
        self._colors(database).style(tag)  # type: ignore[arg-type]
        assert database.queried == [indicator]

    @pytest.mark.parametrize(
        "tag",
        [File(uid=True), Dir(uid=True), Elem.READ, Elem.USER, Elem.OLDER, Elem.FILE_LARGE],
    )
    def test_tags_without_indicator_use_theme(self, dark: Colors, tag: object) -> None:
        database = FakeDatabase({"fi": RED, "di": RED, "ex": RED})
        assert self._colors(database).style(tag) == dark.style(tag)  # type: ignore[arg-type]
        assert database.queried == []

    def test_unmatched_indicator_falls_back_to_theme(self, dark: Colors) -> None:
        colors = self._colors(FakeDatabase({"di": RED}))
        assert colors.style(Elem.PIPE) == dark.style(Elem.PIPE)

    def test_path_style_wins_over_tag(self) -> None:
        colors = self._colors(FakeDatabase({"fi": RED}, path_style=GREEN))
        painted = colors.colorize_using_path("a.tar", Path("a.tar"), File())
        assert painted == GREEN.render("a.tar")

    def test_unmatched_path_uses_tag(self) -> None:
        colors = self._colors(FakeDatabase({"fi": RED}))
        assert colors.style_from_path(Path("a.txt")) is None
        assert colors.colorize_using_path("a.txt", Path("a.txt"), File()) == RED.render(
            "a.txt"
        )

    def test_theme_mode_ignores_database(self, dark: Colors) -> None:
        database = FakeDatabase({"di": RED}, path_style=GREEN)
        colors = Colors(ColorMode.THEME, ColorTheme.DARK, database)
        assert colors.style(Dir()) == dark.style(Dir())
        assert colors.style_from_path(Path("a.tar")) is None


class TestDatabaseFromEnvironment:
    def test_reads_ls_colors(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LS_COLORS", "di=01;34")
        style = Colors(ColorMode.THEME_AND_LSCOLORS).style(Dir())
        assert style.bold
        assert style.color is not None
        assert style.color.number == 4

    def test_unset_variable_uses_theme(self, dark: Colors) -> None:
        colors = Colors(ColorMode.THEME_AND_LSCOLORS, ColorTheme.DARK)
        assert colors.style(Dir()) == dark.style(Dir())


class TestColorThemeFromName:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [("dark", ColorTheme.DARK), ("Light", ColorTheme.LIGHT), ("MINIMAL", ColorTheme.MINIMAL)],
    )
    def test_known(self, name: str, expected: ColorTheme) -> None:
        assert ColorTheme.from_name(name) is expected

    def test_unknown(self) -> None:
        with pytest.raises(NeolsError, match="Known themes"):
            ColorTheme.from_name("solarized")
