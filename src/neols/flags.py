"""Rendering options supplied by the caller."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Literal

from neols import NeolsError


class Block(Enum):
    """A display field, one column of a listing row."""

    INODE = "inode"
    LINKS = "links"
    PERMISSION = "permission"
    USER = "user"
    GROUP = "group"
    SIZE = "size"
    SIZE_VALUE = "size_value"
    DATE = "date"
    NAME = "name"


class Layout(Enum):
    """How rows are arranged.

    ``FIXED_GRID`` is the long listing: one row per entry, one column per
    block, symlink targets included.
    """

    ONE_LINE = "oneline"
    FIXED_GRID = "fixed-grid"
    GRID = "grid"
    TREE = "tree"


class SizeFlag(Enum):
    """How sizes are written: ``1.5 KB``, ``1.5K`` or ``1536``."""

    DEFAULT = "default"
    SHORT = "short"
    BYTES = "bytes"


LONG_BLOCKS: Final[tuple[Block, ...]] = (
    Block.PERMISSION,
    Block.USER,
    Block.GROUP,
    Block.SIZE,
    Block.DATE,
    Block.NAME,
)


@dataclass(frozen=True, slots=True)
class Flags:
    """Options controlling field selection and layout.

    Attributes:
        blocks: Ordered fields shown for every entry.
        layout: ``ONE_LINE``, ``FIXED_GRID``, width-fitted ``GRID`` or
            ``TREE``.
        size: Size notation.
        directory_only: Show directories given at the top level as rows
            instead of listing their contents.
        display_indicators: Append ``/``, ``*``, ``@``, ``|`` or ``=`` to names.
        no_symlink: Never show symlink targets.
        dereference: Entries describe symlink targets; never show targets.
        icon_separator: Text between an icon and the name.
        charset: Tree connector character set, ``unicode`` or ``ascii``.
    """

    blocks: tuple[Block, ...] = (Block.NAME,)
    layout: Layout = Layout.GRID
    size: SizeFlag = SizeFlag.DEFAULT
    directory_only: bool = False
    display_indicators: bool = False
    no_symlink: bool = False
    dereference: bool = False
    icon_separator: str = " "
    charset: Literal["unicode", "ascii"] = "unicode"

    def __post_init__(self) -> None:
        if not self.blocks:
            raise NeolsError("At least one block must be displayed")
        object.__setattr__(self, "blocks", tuple(self.blocks))

    @property
    def show_symlink_target(self) -> bool:
        """Whether the name block carries the ``⇒ target`` suffix.

        Shown in ``FIXED_GRID`` and ``TREE``; one-line and width-fitted grid
        layouts never show it.
        """
        if self.no_symlink or self.dereference:
            return False
        return self.layout not in (Layout.ONE_LINE, Layout.GRID)
