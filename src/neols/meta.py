"""Display entries: pre-collected per-file attributes and their renderers.

A :class:`Meta` is built by the caller from its own stat data; this module
only reads it. Each attribute knows how to render itself as a styled
fragment given a :class:`~neols.color.Colors` resolver.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Final

from neols.elem import Dir, Elem, File, INode, Links, Tag
from neols.flags import SizeFlag

if TYPE_CHECKING:
    from neols.color import Colors
    from neols.icon import Icons


class Kind(Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    PIPE = "pipe"
    BLOCK_DEVICE = "block-device"
    CHAR_DEVICE = "char-device"
    SOCKET = "socket"
    SPECIAL = "special"


_KIND_TAGS: Final[dict[Kind, Elem]] = {
    Kind.SYMLINK: Elem.SYMLINK,
    Kind.PIPE: Elem.PIPE,
    Kind.BLOCK_DEVICE: Elem.BLOCK_DEVICE,
    Kind.CHAR_DEVICE: Elem.CHAR_DEVICE,
    Kind.SOCKET: Elem.SOCKET,
    Kind.SPECIAL: Elem.SPECIAL,
}

_KIND_CHARS: Final[dict[Kind, str]] = {
    Kind.FILE: ".",
    Kind.DIRECTORY: "d",
    Kind.SYMLINK: "l",
    Kind.PIPE: "|",
    Kind.BLOCK_DEVICE: "b",
    Kind.CHAR_DEVICE: "c",
    Kind.SOCKET: "s",
    Kind.SPECIAL: "?",
}


@dataclass(frozen=True, slots=True)
class FileType:
    """Node kind with its flags.

    Attributes:
        kind: Node kind.
        exec: Regular file with an execute bit set.
        uid: Regular file or directory with setuid/setgid set.
        is_dir: Symlink whose target is a directory.
    """

    kind: Kind
    exec: bool = False
    uid: bool = False
    is_dir: bool = False

    @classmethod
    def file(cls, exec: bool = False, uid: bool = False) -> FileType:
        return cls(Kind.FILE, exec=exec, uid=uid)

    @classmethod
    def directory(cls, uid: bool = False) -> FileType:
        return cls(Kind.DIRECTORY, uid=uid)

    @classmethod
    def symlink(cls, is_dir: bool = False) -> FileType:
        return cls(Kind.SYMLINK, is_dir=is_dir)

    def tag(self) -> Tag:
        if self.kind is Kind.FILE:
            return File(exec=self.exec, uid=self.uid)
        if self.kind is Kind.DIRECTORY:
            return Dir(uid=self.uid)
        return _KIND_TAGS[self.kind]

    def is_dir_like(self) -> bool:
        """Directory, or symlink pointing at one."""
        return self.kind is Kind.DIRECTORY or (
            self.kind is Kind.SYMLINK and self.is_dir
        )

    def render(self, colors: Colors) -> str:
        return colors.colorize(_KIND_CHARS[self.kind], self.tag())


@dataclass(frozen=True, slots=True)
class Permissions:
    """Decoded permission bits."""

    user_read: bool = False
    user_write: bool = False
    user_execute: bool = False
    group_read: bool = False
    group_write: bool = False
    group_execute: bool = False
    other_read: bool = False
    other_write: bool = False
    other_execute: bool = False
    sticky: bool = False
    setgid: bool = False
    setuid: bool = False

    def render(self, colors: Colors) -> str:
        """Render ``rwxr-xr-x`` style text, one style per character."""

        def bit(is_set: bool, char: str, tag: Tag) -> str:
            if is_set:
                return colors.colorize(char, tag)
            return colors.colorize("-", Elem.NO_ACCESS)

        def special(execute: bool, is_set: bool, char: str) -> str:
            if is_set:
                return colors.colorize(
                    char if execute else char.upper(), Elem.EXEC_STICKY
                )
            return bit(execute, "x", Elem.EXEC)

        return "".join(
            (
                bit(self.user_read, "r", Elem.READ),
                bit(self.user_write, "w", Elem.WRITE),
                special(self.user_execute, self.setuid, "s"),
                bit(self.group_read, "r", Elem.READ),
                bit(self.group_write, "w", Elem.WRITE),
                special(self.group_execute, self.setgid, "s"),
                bit(self.other_read, "r", Elem.READ),
                bit(self.other_write, "w", Elem.WRITE),
                special(self.other_execute, self.sticky, "t"),
            )
        )


@dataclass(frozen=True, slots=True)
class Owner:
    user: str = "-"
    group: str = "-"

    def render_user(self, colors: Colors) -> str:
        return colors.colorize(self.user, Elem.USER)

    def render_group(self, colors: Colors) -> str:
        return colors.colorize(self.group, Elem.GROUP)


_UNITS: Final = ("B", "KB", "MB", "GB", "TB")
_SHORT_UNITS: Final = ("B", "K", "M", "G", "T")


def _unit_index(bytes_: int) -> int:
    index = 0
    while index < len(_UNITS) - 1 and bytes_ >= 1024 ** (index + 1):
        index += 1
    return index


@dataclass(frozen=True, slots=True)
class Size:
    """Size in bytes; ``None`` for anything that is not a regular file."""

    bytes: int | None = None

    def tag(self) -> Elem:
        if self.bytes is None:
            return Elem.NON_FILE
        index = _unit_index(self.bytes)
        if index <= 1:
            return Elem.FILE_SMALL
        if index == 2:
            return Elem.FILE_MEDIUM
        return Elem.FILE_LARGE

    def value_string(self, flag: SizeFlag) -> str:
        """Return the unpadded numeric part, e.g. ``1.5`` or ``-``."""
        if self.bytes is None:
            return "-"
        index = _unit_index(self.bytes)
        if flag is SizeFlag.BYTES or index == 0:
            return str(self.bytes)
        value = round(self.bytes / 1024**index, 1)
        return str(int(value)) if value.is_integer() else str(value)

    def unit_string(self, flag: SizeFlag) -> str:
        if self.bytes is None or flag is SizeFlag.BYTES:
            return ""
        units = _SHORT_UNITS if flag is SizeFlag.SHORT else _UNITS
        return units[_unit_index(self.bytes)]

    def render_value(self, colors: Colors, flag: SizeFlag) -> str:
        return colors.colorize(self.value_string(flag), self.tag())

    def render(self, colors: Colors, flag: SizeFlag, value_alignment: int) -> str:
        """Render the value right-justified to ``value_alignment``, then the unit."""
        value = self.value_string(flag)
        parts = [" " * max(0, value_alignment - len(value)), self.render_value(colors, flag)]
        unit = self.unit_string(flag)
        if unit:
            if flag is not SizeFlag.SHORT:
                parts.append(" ")
            parts.append(colors.colorize(unit, self.tag()))
        return "".join(parts)


class Recency(Enum):
    HOUR_OLD = "hour-old"
    DAY_OLD = "day-old"
    OLDER = "older"


_RECENCY_TAGS: Final[dict[Recency, Elem]] = {
    Recency.HOUR_OLD: Elem.HOUR_OLD,
    Recency.DAY_OLD: Elem.DAY_OLD,
    Recency.OLDER: Elem.OLDER,
}


@dataclass(frozen=True, slots=True)
class Date:
    """Pre-formatted modification time and its recency bucket."""

    text: str = "-"
    recency: Recency = Recency.OLDER

    def render(self, colors: Colors) -> str:
        return colors.colorize(self.text, _RECENCY_TAGS[self.recency])


@dataclass(frozen=True, slots=True)
class InodeNumber:
    value: int | None = None

    def render(self, colors: Colors) -> str:
        if self.value is None:
            return colors.colorize("-", INode(valid=False))
        return colors.colorize(str(self.value), INode(valid=True))


@dataclass(frozen=True, slots=True)
class LinkCount:
    value: int | None = None

    def render(self, colors: Colors) -> str:
        if self.value is None:
            return colors.colorize("-", Links(valid=False))
        return colors.colorize(str(self.value), Links(valid=True))


@dataclass(frozen=True, slots=True)
class SymLink:
    """Symlink target as it should be displayed.

    Attributes:
        target: Target path text.
        valid: Whether the target exists.
    """

    target: str
    valid: bool = True

    def tag(self) -> Elem:
        return Elem.SYMLINK if self.valid else Elem.BROKEN_SYMLINK

    def render(self, colors: Colors) -> str:
        return " ⇒ " + colors.colorize(self.target, self.tag())


@dataclass(frozen=True, slots=True)
class Meta:
    """One filesystem node with everything needed to render it.

    Attributes:
        name: Display name.
        path: Path of the node; used for ``LS_COLORS`` globs and shebangs.
        file_type: Node kind and flags.
        content: Ordered children for a directory being listed, else ``None``.
    """

    name: str
    path: Path
    file_type: FileType
    permissions: Permissions = Permissions()
    owner: Owner = Owner()
    size: Size = Size()
    date: Date = Date()
    inode: InodeNumber = InodeNumber()
    links: LinkCount = LinkCount()
    symlink: SymLink | None = None
    content: list[Meta] | None = field(default=None, compare=False)

    def name_tag(self) -> Tag:
        if self.symlink is not None and not self.symlink.valid:
            return Elem.BROKEN_SYMLINK
        return self.file_type.tag()

    def render_name(self, colors: Colors, icons: Icons, separator: str = " ") -> str:
        """Render icon and name in the node's style.

        Plain regular files may be styled by an ``LS_COLORS`` glob.
        """
        icon = icons.get(self)
        content = self.name if icon is None else f"{icon}{separator}{self.name}"
        file_type = self.file_type
        if file_type.kind is Kind.FILE and not file_type.uid:
            return colors.colorize_using_path(content, self.path, self.name_tag())
        return colors.colorize(content, self.name_tag())

    def render_indicator(self) -> str:
        file_type = self.file_type
        if file_type.kind is Kind.DIRECTORY:
            return "/"
        if file_type.kind is Kind.FILE and file_type.exec:
            return "*"
        if file_type.kind is Kind.SYMLINK:
            return "@"
        if file_type.kind is Kind.PIPE:
            return "|"
        if file_type.kind is Kind.SOCKET:
            return "="
        return ""
