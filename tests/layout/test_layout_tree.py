"""Split-tree algebra tests"""

from dataclasses import dataclass

import pytest

from termdeck.layout import (
    Direction,
    Split,
    close_leaf,
    collect_leaf_ids,
    count_leaves,
    find_leaf,
    find_split,
    iter_splits,
    replace_leaf,
    resize_split,
    split_leaf,
)


@dataclass(frozen=True)
class Leaf:
    id: str


def split(sid, direction, *children, sizes=None):
    sizes = sizes or tuple(100.0 / len(children) for _ in children)
    return Split(id=sid, direction=Direction(direction), children=tuple(children), sizes=tuple(sizes))


def assert_well_formed(tree):
    """Every split has >= 2 children and one size per child"""
    for node in iter_splits(tree):
        assert len(node.children) >= 2
        assert len(node.sizes) == len(node.children)


class TestSplitLeaf:
    """split_leaf"""

    def test_split_single_leaf(self):
        a = Leaf("a")
        tree = split_leaf(a, "a", "horizontal", Leaf("b"), "s1")
        assert tree == split("s1", "horizontal", a, Leaf("b"), sizes=(50.0, 50.0))

    def test_new_leaf_placed_after_target(self):
        tree = split("s1", "vertical", Leaf("a"), Leaf("b"))
        tree = split_leaf(tree, "a", Direction.HORIZONTAL, Leaf("c"), "s2")
        assert collect_leaf_ids(tree) == ["a", "c", "b"]
        assert find_split(tree, "s2").direction is Direction.HORIZONTAL

    def test_untouched_siblings_keep_sizes(self):
        tree = split("s1", "vertical", Leaf("a"), Leaf("b"), sizes=(30.0, 70.0))
        tree = split_leaf(tree, "b", "vertical", Leaf("c"), "s2")
        assert tree.sizes == (30.0, 70.0)
        assert tree.children[1].sizes == (50.0, 50.0)

    def test_unknown_target_returns_same_tree(self):
        tree = split("s1", "vertical", Leaf("a"), Leaf("b"))
        assert split_leaf(tree, "zzz", "vertical", Leaf("c"), "s2") is tree

    def test_leaf_count_grows_by_one(self):
        tree = Leaf("a")
        for i in range(5):
            target = collect_leaf_ids(tree)[-1]
            before = count_leaves(tree)
            tree = split_leaf(tree, target, "vertical", Leaf(f"n{i}"), f"s{i}")
            assert count_leaves(tree) == before + 1
            assert_well_formed(tree)


class TestCloseLeaf:
    """close_leaf"""

    def test_sole_leaf_returns_none(self):
        assert close_leaf(Leaf("a"), "a") is None

    def test_non_sole_leaf_never_returns_none(self):
        tree = split("s1", "vertical", Leaf("a"), split("s2", "horizontal", Leaf("b"), Leaf("c")))
        for leaf_id in ("a", "b", "c"):
            assert close_leaf(tree, leaf_id) is not None

    def test_collapse_to_sibling(self):
        tree = split("s1", "vertical", Leaf("a"), Leaf("b"))
        assert close_leaf(tree, "a") == Leaf("b")

    def test_nested_collapse(self):
        inner = split("s2", "horizontal", Leaf("b"), Leaf("c"))
        tree = split("s1", "vertical", Leaf("a"), inner, sizes=(40.0, 60.0))
        result = close_leaf(tree, "c")
        assert result == split("s1", "vertical", Leaf("a"), Leaf("b"), sizes=(40.0, 60.0))

    def test_child_count_change_resets_sizes(self):
        tree = split("s1", "vertical", Leaf("a"), Leaf("b"), Leaf("c"), sizes=(20.0, 30.0, 50.0))
        result = close_leaf(tree, "b")
        assert result.children == (Leaf("a"), Leaf("c"))
        assert result.sizes == (50.0, 50.0)

    def test_unknown_target_returns_same_tree(self):
        tree = split("s1", "vertical", Leaf("a"), Leaf("b"))
        assert close_leaf(tree, "zzz") is tree
        assert close_leaf(Leaf("a"), "zzz") == Leaf("a")

    def test_split_then_close_restores_tree(self):
        tree = split("s1", "vertical", Leaf("a"), split("s2", "horizontal", Leaf("b"), Leaf("c")))
        for target in ("a", "b", "c"):
            grown = split_leaf(tree, target, "horizontal", Leaf("new"), "s9")
            assert close_leaf(grown, "new") == tree

    def test_leaf_count_shrinks_by_one(self):
        tree = split(
            "s1", "vertical",
            Leaf("a"),
            split("s2", "horizontal", Leaf("b"), Leaf("c"), Leaf("d")),
        )
        while count_leaves(tree) > 1:
            before = count_leaves(tree)
            tree = close_leaf(tree, collect_leaf_ids(tree)[0])
            assert count_leaves(tree) == before - 1
            assert_well_formed(tree)


class TestResizeAndReplace:
    """resize_split / replace_leaf"""

    def test_resize_nested_split(self):
        tree = split("s1", "vertical", Leaf("a"), split("s2", "horizontal", Leaf("b"), Leaf("c")))
        result = resize_split(tree, "s2", [25.0, 75.0])
        assert find_split(result, "s2").sizes == (25.0, 75.0)
        assert result.sizes == tree.sizes

    def test_resize_unknown_split(self):
        tree = split("s1", "vertical", Leaf("a"), Leaf("b"))
        assert resize_split(tree, "nope", [10.0, 90.0]) is tree
        leaf = Leaf("a")
        assert resize_split(leaf, "s1", [1.0]) is leaf

    def test_replace_leaf_keeps_position(self):
        tree = split("s1", "vertical", Leaf("a"), Leaf("b"))
        result = replace_leaf(tree, "a", Leaf("x"))
        assert collect_leaf_ids(result) == ["x", "b"]
        assert find_leaf(result, "a") is None

    def test_replace_unknown_leaf(self):
        tree = split("s1", "vertical", Leaf("a"), Leaf("b"))
        assert replace_leaf(tree, "zzz", Leaf("x")) is tree


class TestQueries:
    """Canonical order"""

    @pytest.fixture
    def tree(self):
        return split(
            "s1", "vertical",
            split("s2", "horizontal", Leaf("a"), Leaf("b")),
            Leaf("c"),
        )

    def test_pre_order(self, tree):
        assert collect_leaf_ids(tree) == ["a", "b", "c"]

    def test_iter_splits_parents_first(self, tree):
        assert [s.id for s in iter_splits(tree)] == ["s1", "s2"]

    def test_find_leaf(self, tree):
        assert find_leaf(tree, "b") == Leaf("b")
        assert find_leaf(tree, "zzz") is None
