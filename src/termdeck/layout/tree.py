"""Split-tree algebra

Pure functions over immutable trees. Each returns a new tree and hands back
the very same object when nothing matched, so callers can detect a no-op
with ``new is old``.

Leaf ids are unique within one tree; stale or unknown ids are a no-op,
never an error.
"""

from collections.abc import Iterator, Sequence

from .. import config
from .types import Direction, Node, Split, even_sizes, is_split


# === Queries ===


def iter_leaves[L](tree: Node[L]) -> Iterator[L]:
    """Leaves in canonical order: pre-order, depth-first, left to right."""
    if is_split(tree):
        for child in tree.children:
            yield from iter_leaves(child)
    else:
        yield tree


def iter_splits[L](tree: Node[L]) -> Iterator[Split[L]]:
    """Split nodes, parents before children."""
    if is_split(tree):
        yield tree
        for child in tree.children:
            yield from iter_splits(child)


def collect_leaf_ids[L](tree: Node[L]) -> list[str]:
    """Leaf ids in canonical order (used for focus cycling)."""
    return [leaf.id for leaf in iter_leaves(tree)]


def count_leaves[L](tree: Node[L]) -> int:
    return sum(1 for _ in iter_leaves(tree))


def find_leaf[L](tree: Node[L], leaf_id: str) -> L | None:
    for leaf in iter_leaves(tree):
        if leaf.id == leaf_id:
            return leaf
    return None


def contains_leaf[L](tree: Node[L], leaf_id: str) -> bool:
    return find_leaf(tree, leaf_id) is not None


def find_split[L](tree: Node[L], split_id: str) -> Split[L] | None:
    for split in iter_splits(tree):
        if split.id == split_id:
            return split
    return None


# === Mutations ===


def split_leaf[L](
    tree: Node[L],
    target_leaf_id: str,
    direction: Direction | str,
    new_leaf: L,
    split_id: str,
) -> Node[L]:
    """Replace a leaf with a split holding ``[old_leaf, new_leaf]``.

    Args:
        tree: tree to edit
        target_leaf_id: leaf to split
        direction: axis of the new split
        new_leaf: leaf placed after the old one
        split_id: id of the new split node

    Returns:
        New tree, or ``tree`` itself if the target was not found
    """
    direction = Direction(direction)

    if not is_split(tree):
        if tree.id != target_leaf_id:
            return tree
        return Split(
            id=split_id,
            direction=direction,
            children=(tree, new_leaf),
            sizes=tuple(config.DEFAULT_SPLIT_SIZES),
        )

    children = tuple(
        split_leaf(child, target_leaf_id, direction, new_leaf, split_id)
        for child in tree.children
    )
    if all(new is old for new, old in zip(children, tree.children)):
        return tree
    return Split(id=tree.id, direction=tree.direction, children=children, sizes=tree.sizes)


def close_leaf[L](tree: Node[L], target_leaf_id: str) -> Node[L] | None:
    """Remove a leaf and restructure around the hole.

    A split left with one child collapses into that child; a split left
    with none disappears from its parent. A split whose child count
    changed gets even sizes, other splits keep theirs.

    Returns:
        New tree; ``tree`` itself if the target was not found; None only
        when the target was the last leaf (the caller must then destroy
        the whole container)
    """
    if not is_split(tree):
        return None if tree.id == target_leaf_id else tree

    results = [close_leaf(child, target_leaf_id) for child in tree.children]
    if all(new is old for new, old in zip(results, tree.children)):
        return tree

    children = tuple(child for child in results if child is not None)
    if not children:
        return None
    if len(children) == 1:
        return children[0]

    sizes = tree.sizes if len(children) == len(tree.children) else even_sizes(len(children))
    return Split(id=tree.id, direction=tree.direction, children=children, sizes=sizes)


def resize_split[L](tree: Node[L], split_id: str, new_sizes: Sequence[float]) -> Node[L]:
    """Set the sizes of one split.

    Sizes are stored as given; normalizing them is the input layer's job.
    """
    if not is_split(tree):
        return tree

    if tree.id == split_id:
        return Split(
            id=tree.id,
            direction=tree.direction,
            children=tree.children,
            sizes=tuple(new_sizes),
        )

    children = tuple(resize_split(child, split_id, new_sizes) for child in tree.children)
    if all(new is old for new, old in zip(children, tree.children)):
        return tree
    return Split(id=tree.id, direction=tree.direction, children=children, sizes=tree.sizes)


def replace_leaf[L](tree: Node[L], leaf_id: str, new_leaf: L) -> Node[L]:
    """Swap one leaf for another in the same position."""
    if not is_split(tree):
        return new_leaf if tree.id == leaf_id else tree

    children = tuple(replace_leaf(child, leaf_id, new_leaf) for child in tree.children)
    if all(new is old for new, old in zip(children, tree.children)):
        return tree
    return Split(id=tree.id, direction=tree.direction, children=children, sizes=tree.sizes)
