"""Unit tests for run-length encoded adjacency bins."""

import pytest

from vgaanalysis.grid.adjacency import (
    BIN_COUNT,
    AdjacencyNode,
    Bin,
    PixelRun,
    bin_direction,
)
from vgaanalysis.grid.pixel import (
    HORIZONTAL,
    NEGDIAGONAL,
    POSDIAGONAL,
    VERTICAL,
    PixelRef,
)


class TestBinDirection:
    """Test the scan axis assigned to each angular sector."""

    @pytest.mark.parametrize("index", [4, 20])
    def test_positive_diagonals(self, index):
        """Test the two north-east/south-west sectors scan along the positive diagonal."""
        assert bin_direction(index) == POSDIAGONAL

    @pytest.mark.parametrize("index", [12, 28])
    def test_negative_diagonals(self, index):
        """Test the two north-west/south-east sectors scan along the negative diagonal."""
        assert bin_direction(index) == NEGDIAGONAL

    @pytest.mark.parametrize("index", [0, 1, 3, 13, 16, 19, 29, 31])
    def test_horizontal_sectors(self, index):
        """Test sectors near the x axis scan along rows."""
        assert bin_direction(index) == HORIZONTAL

    @pytest.mark.parametrize("index", [5, 8, 11, 21, 24, 27])
    def test_vertical_sectors(self, index):
        """Test sectors near the y axis scan along columns."""
        assert bin_direction(index) == VERTICAL

    @pytest.mark.parametrize("index", [-1, BIN_COUNT])
    def test_out_of_range(self, index):
        """Test bin indices outside the 32 sectors are rejected."""
        with pytest.raises(ValueError, match="Bin index"):
            bin_direction(index)


class TestBin:
    """Test run validation."""

    def test_direction_follows_index(self):
        """Test a bin derives its scan axis from its index."""
        bin_ = Bin(8, (PixelRun(PixelRef(2, 1), PixelRef(2, 4)),))

        assert bin_.direction == VERTICAL
        assert bin_.is_diagonal is False
        assert bin_.pixel_count() == 4

    def test_backwards_run_rejected(self):
        """Test a run whose end precedes its start is rejected."""
        with pytest.raises(ValueError, match="backwards"):
            Bin(0, (PixelRun(PixelRef(3, 0), PixelRef(1, 0)),))

    def test_misaligned_run_rejected(self):
        """Test a run leaving the bin's scan line is rejected."""
        with pytest.raises(ValueError, match="not aligned"):
            Bin(0, (PixelRun(PixelRef(0, 0), PixelRef(2, 1)),))

    def test_negative_diagonal_run_walks_up_the_columns(self):
        """Test negative diagonal runs advance in x while y decreases."""
        run = PixelRun(PixelRef(1, 2), PixelRef(3, 0))
        bin_ = Bin(28, (run,))

        assert bin_.is_diagonal is True
        assert list(run.pixels(bin_.direction)) == [
            PixelRef(1, 2),
            PixelRef(2, 1),
            PixelRef(3, 0),
        ]


class TestAdjacencyNode:
    """Test node construction and encoding of visible cells."""

    def test_requires_all_bins(self):
        """Test a node with fewer than 32 bins is rejected."""
        with pytest.raises(ValueError, match="exactly 32 bins"):
            AdjacencyNode(tuple(Bin(i) for i in range(31)))

    def test_bins_must_be_in_index_order(self):
        """Test bins out of index order are rejected."""
        bins = [Bin(i) for i in range(BIN_COUNT)]
        bins[0], bins[1] = bins[1], bins[0]

        with pytest.raises(ValueError, match="position 0"):
            AdjacencyNode(tuple(bins))

    def test_empty_node(self):
        """Test the empty node has 32 bins and no cells."""
        node = AdjacencyNode.empty()

        assert len(node.bins) == BIN_COUNT
        assert node.pixel_count() == 0
        assert list(node.iter_pixels()) == []

    def test_east_row_becomes_single_run(self):
        """Test a contiguous row to the east is stored as one run."""
        origin = PixelRef(0, 0)
        node = AdjacencyNode.from_pixels(origin, [PixelRef(x, 0) for x in range(1, 6)])

        assert node.bins[0].runs == (PixelRun(PixelRef(1, 0), PixelRef(5, 0)),)
        assert node.pixel_count() == 5

    def test_north_column_becomes_vertical_run(self):
        """Test a contiguous column is stored as one vertical run."""
        node = AdjacencyNode.from_pixels(PixelRef(0, 0), [PixelRef(0, y) for y in (1, 2, 3)])

        assert node.bins[8].runs == (PixelRun(PixelRef(0, 1), PixelRef(0, 3)),)

    def test_diagonals(self):
        """Test diagonal cells land in the diagonal bins."""
        pos = AdjacencyNode.from_pixels(PixelRef(0, 0), [PixelRef(i, i) for i in (1, 2, 3)])
        neg = AdjacencyNode.from_pixels(
            PixelRef(0, 3), [PixelRef(1, 2), PixelRef(2, 1), PixelRef(3, 0)]
        )

        assert pos.bins[4].runs == (PixelRun(PixelRef(1, 1), PixelRef(3, 3)),)
        assert neg.bins[28].runs == (PixelRun(PixelRef(1, 2), PixelRef(3, 0)),)

    def test_gap_splits_run(self):
        """Test a missing cell splits a row into two runs."""
        node = AdjacencyNode.from_pixels(
            PixelRef(0, 0), [PixelRef(1, 0), PixelRef(2, 0), PixelRef(4, 0)]
        )

        assert node.bins[0].runs == (
            PixelRun(PixelRef(1, 0), PixelRef(2, 0)),
            PixelRun(PixelRef(4, 0), PixelRef(4, 0)),
        )

    def test_origin_and_duplicates_dropped(self):
        """Test the origin and repeated cells are not encoded."""
        origin = PixelRef(2, 2)
        node = AdjacencyNode.from_pixels(
            origin, [origin, PixelRef(3, 2), PixelRef(3, 2), (1, 2)]
        )

        assert sorted(node.iter_pixels()) == [PixelRef(1, 2), PixelRef(3, 2)]

    def test_encodes_every_visible_cell_exactly_once(self):
        """Test every visible cell appears in exactly one bin."""
        origin = PixelRef(3, 3)
        visible = [
            PixelRef(x, y)
            for x in range(7)
            for y in range(7)
            if (x, y) != (3, 3) and (x + y) % 3 != 0
        ]

        node = AdjacencyNode.from_pixels(origin, visible)
        encoded = list(node.iter_pixels())

        assert len(encoded) == len(visible)
        assert set(encoded) == set(visible)
