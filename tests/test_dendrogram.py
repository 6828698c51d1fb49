"""Tests for the dendrogram tree."""

import pytest

from girvan_newman import LEAF_SENTINEL, Dendrogram, show_dendrogram


def sample_tree():
    """((0, 1), (2, 3))"""
    return Dendrogram.split(
        Dendrogram.split(Dendrogram.leaf(0), Dendrogram.leaf(1)),
        Dendrogram.split(Dendrogram.leaf(2), Dendrogram.leaf(3)),
    )


class TestDendrogram:
    """Tests for dendrogram structure and helpers."""

    def test_leaf(self):
        leaf = Dendrogram.leaf(5)
        assert leaf.is_leaf
        assert leaf.left is None and leaf.right is None
        assert leaf.leaves() == [5]
        assert leaf.to_nested() == 5

    def test_internal_node(self):
        tree = sample_tree()
        assert not tree.is_leaf
        assert tree.vertex == LEAF_SENTINEL
        assert tree.leaves() == [0, 1, 2, 3]
        assert tree.to_nested() == ((0, 1), (2, 3))
        assert tree.size() == 7
        assert tree.depth() == 2

    def test_equality(self):
        assert sample_tree() == sample_tree()
        assert Dendrogram.leaf(1) != Dendrogram.leaf(2)

    def test_cut(self):
        tree = sample_tree()
        assert tree.cut(1) == [[0, 1, 2, 3]]
        assert tree.cut(2) == [[0, 1], [2, 3]]
        assert tree.cut(3) == [[0], [1], [2, 3]]
        assert tree.cut(4) == [[0], [1], [2], [3]]

    def test_cut_out_of_range(self):
        with pytest.raises(ValueError):
            sample_tree().cut(0)
        with pytest.raises(ValueError):
            sample_tree().cut(5)

    def test_release_detaches_children(self):
        tree = sample_tree()
        left = tree.left
        tree.release()
        assert tree.left is None and tree.right is None
        assert left.left is None

    def test_show(self, capsys):
        show_dendrogram(sample_tree())
        out = capsys.readouterr().out
        assert "+ split (4 vertices)" in out
        assert "- 3" in out
