"""Semantic attribute tags used to key style lookups.

A tag is either a payload-free :class:`Elem` member or one of the flagged
variants (:class:`File`, :class:`Dir`, :class:`INode`, :class:`Links`).
``ALL_TAGS`` enumerates every concrete value so theme maps can be checked
for total coverage.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Union


class Elem(Enum):
    """Tags that carry no flags."""

    # Node type
    SYMLINK = "symlink"
    BROKEN_SYMLINK = "broken-symlink"
    PIPE = "pipe"
    BLOCK_DEVICE = "block-device"
    CHAR_DEVICE = "char-device"
    SOCKET = "socket"
    SPECIAL = "special"

    # Permissions
    READ = "read"
    WRITE = "write"
    EXEC = "exec"
    EXEC_STICKY = "exec-sticky"
    NO_ACCESS = "no-access"

    # Last time modified
    HOUR_OLD = "hour-old"
    DAY_OLD = "day-old"
    OLDER = "older"

    # User / group name
    USER = "user"
    GROUP = "group"

    # File size
    NON_FILE = "non-file"
    FILE_SMALL = "file-small"
    FILE_MEDIUM = "file-medium"
    FILE_LARGE = "file-large"


@dataclass(frozen=True, slots=True)
class File:
    """Regular file, flagged executable and/or setuid/setgid."""

    exec: bool = False
    uid: bool = False


@dataclass(frozen=True, slots=True)
class Dir:
    """Directory, flagged setuid/setgid."""

    uid: bool = False


@dataclass(frozen=True, slots=True)
class INode:
    valid: bool = True


@dataclass(frozen=True, slots=True)
class Links:
    valid: bool = True


Tag = Union[Elem, File, Dir, INode, Links]

_FLAGS: Final = (False, True)

ALL_TAGS: Final[tuple[Tag, ...]] = (
    *Elem,
    *(File(exec=e, uid=u) for e in _FLAGS for u in _FLAGS),
    *(Dir(uid=u) for u in _FLAGS),
    *(INode(valid=v) for v in _FLAGS),
    *(Links(valid=v) for v in _FLAGS),
)


def has_suid(tag: Tag) -> bool:
    """Return whether the tag denotes a setuid/setgid file or directory."""
    match tag:
        case File(uid=True) | Dir(uid=True):
            return True
        case _:
            return False
