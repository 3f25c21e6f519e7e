"""Breadth-first traversal of the visibility graph from a single root."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

from vgaanalysis.config import RADIUS_UNLIMITED
from vgaanalysis.grid.pixel import PixelRef

from .expander import extract_unseen
from .workspace import ScratchWorkspace

if TYPE_CHECKING:
    from vgaanalysis.grid.pointmap import PointMap


@dataclass
class TraversalResult:
    """Totals gathered by one traversal episode.

    ``total_nodes`` includes the root; ``distribution[k]`` is the number of
    cells counted at depth ``k``.
    """

    total_nodes: int = 0
    total_depth: int = 0
    distribution: List[int] = field(default_factory=list)


def traverse_from(
    point_map: "PointMap",
    root: PixelRef,
    radius: int,
    workspace: ScratchWorkspace,
) -> TraversalResult:
    """Run one episode rooted at ``root`` and return its depth statistics.

    The workspace is reset first.  A cell is counted the first time it is
    processed; it is expanded when the radius is unlimited, or when its depth
    is below ``radius`` and it is either not context-filled or passes the
    parity test.  Expanding a cell also expands its merge partner into the
    same next level, which brings the partner in one step deeper.
    Raises ``ValueError`` when ``root`` is not a filled cell.
    """

    root = PixelRef(*root)
    if not point_map.point(root).filled:
        raise ValueError(f"Traversal root {root} is not a filled cell")

    workspace.reset()
    result = TraversalResult()

    level = 0
    current: List[PixelRef] = [root]
    while current:
        following: List[PixelRef] = []
        result.distribution.append(0)
        for ref in current:
            point = point_map.point(ref)
            if not point.filled or workspace.is_consumed(ref):
                continue

            result.total_depth += level
            result.total_nodes += 1
            result.distribution[-1] += 1

            expand = radius == RADIUS_UNLIMITED or (
                level < radius and (not point.context_filled or ref.is_even())
            )
            if expand:
                extract_unseen(point.node, following, workspace)
                if point.merge_pixel is not None:
                    _expand_merge_partner(point_map, point.merge_pixel, following, workspace)
            workspace.consume(ref)
        current = following
        level += 1

    return result


def _expand_merge_partner(
    point_map: "PointMap",
    partner: PixelRef,
    following: List[PixelRef],
    workspace: ScratchWorkspace,
) -> None:
    if workspace.is_consumed(partner):
        return
    if workspace.is_unseen(partner):
        following.append(partner)
        workspace.discover_via_merge(partner)
    extract_unseen(point_map.point(partner).node, following, workspace)


__all__ = ["TraversalResult", "traverse_from"]
