"""List grouper: folds adjacent list items into list containers."""

from __future__ import annotations

from collections.abc import Iterable

from chatmark.schemas.blocks import Block, ListGroup, ListItem, Renderable


def group_lists(blocks: Iterable[Block]) -> list[Renderable]:
    """Replace every maximal run of same-kind list items with one ListGroup.

    A change of kind starts a new group, so ``- a`` followed by ``1. b``
    yields two containers back to back. Item order is preserved.
    """
    grouped: list[Renderable] = []
    for block in blocks:
        if not isinstance(block, ListItem):
            grouped.append(block)
            continue

        last = grouped[-1] if grouped else None
        if isinstance(last, ListGroup) and last.list_kind == block.list_kind:
            last.items.append(block)
        else:
            grouped.append(ListGroup(list_kind=block.list_kind, items=[block]))

    return grouped
