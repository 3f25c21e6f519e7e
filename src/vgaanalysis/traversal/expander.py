"""Frontier expansion over run-length encoded adjacency."""

from __future__ import annotations

from typing import List

from vgaanalysis.grid.adjacency import AdjacencyNode
from vgaanalysis.grid.pixel import PixelRef

from .workspace import ScratchWorkspace


def extract_unseen(
    node: AdjacencyNode,
    frontier: List[PixelRef],
    workspace: ScratchWorkspace,
) -> None:
    """Append every cell of ``node`` not yet seen this episode to ``frontier``.

    Newly found cells are tagged with the bin that reached them.  For
    horizontal and vertical bins the scan of a run stops at the first cell
    whose extent already covers the run's end, since everything beyond it was
    expanded by an earlier scan through that cell.  Diagonal bins do not keep
    a monotonic extent and are always scanned in full.
    """

    for bin_ in node.bins:
        direction = bin_.direction
        diagonal = bin_.is_diagonal
        for run in bin_.runs:
            end = run.end.col(direction)
            pix = run.start
            while pix.col(direction) <= end:
                if workspace.is_unseen(pix):
                    frontier.append(pix)
                    workspace.discover(pix, bin_.index)
                if not diagonal and workspace.claim_extent(pix, direction, end):
                    break
                pix = pix.moved(direction)


__all__ = ["extract_unseen"]
