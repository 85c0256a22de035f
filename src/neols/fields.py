"""Field formatting: one styled fragment per requested block.

Rendering a sibling group is two-phase: :func:`compute_padding` over the
whole group first, then :func:`render_fields` per entry with the result.
"""

from __future__ import annotations

from collections.abc import Sequence

from neols.color import Colors
from neols.flags import Block, Flags
from neols.icon import Icons
from neols.meta import Meta

PaddingRules = dict[Block, int]


def compute_padding(metas: Sequence[Meta], flags: Flags) -> PaddingRules:
    """Compute column padding shared by a sibling group.

    Args:
        metas: Every entry that will be rendered in the group.
        flags: Rendering flags.

    Returns:
        PaddingRules: ``SIZE_VALUE`` width when ``SIZE`` is displayed.
    """
    rules: PaddingRules = {}
    if Block.SIZE in flags.blocks:
        rules[Block.SIZE_VALUE] = max(
            (len(meta.size.value_string(flags.size)) for meta in metas),
            default=0,
        )
    return rules


def _render_name_block(
    meta: Meta, colors: Colors, icons: Icons, flags: Flags
) -> str:
    parts = [meta.render_name(colors, icons, flags.icon_separator)]
    if flags.display_indicators:
        parts.append(meta.render_indicator())
    if flags.show_symlink_target and meta.symlink is not None:
        parts.append(meta.symlink.render(colors))
    return "".join(parts)


def render_fields(
    meta: Meta,
    colors: Colors,
    icons: Icons,
    flags: Flags,
    padding_rules: PaddingRules,
) -> list[str]:
    """Render the blocks of ``flags.blocks`` for one entry, in order.

    Args:
        meta: Entry to render.
        colors: Style resolver.
        icons: Icon resolver.
        flags: Rendering flags.
        padding_rules: Result of :func:`compute_padding` for the entry's group.

    Returns:
        list[str]: One styled fragment per block.

    Raises:
        KeyError: If ``SIZE`` is requested and ``padding_rules`` were not
            computed for it.
    """
    fragments: list[str] = []
    for block in flags.blocks:
        match block:
            case Block.INODE:
                fragments.append(meta.inode.render(colors))
            case Block.LINKS:
                fragments.append(meta.links.render(colors))
            case Block.PERMISSION:
                fragments.append(
                    meta.file_type.render(colors) + meta.permissions.render(colors)
                )
            case Block.USER:
                fragments.append(meta.owner.render_user(colors))
            case Block.GROUP:
                fragments.append(meta.owner.render_group(colors))
            case Block.SIZE:
                fragments.append(
                    meta.size.render(
                        colors, flags.size, padding_rules[Block.SIZE_VALUE]
                    )
                )
            case Block.SIZE_VALUE:
                fragments.append(meta.size.render_value(colors, flags.size))
            case Block.DATE:
                fragments.append(meta.date.render(colors))
            case Block.NAME:
                fragments.append(_render_name_block(meta, colors, icons, flags))
    return fragments
