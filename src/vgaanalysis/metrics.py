"""Integration, mean depth and entropy measures for a single root.

Formulas follow Depthmap: d-value and p-value normalisations from the
Depthmap 4 manual, Teklenburg integration, and relativised entropy against a
Poisson reference (Turner 2001).  Node counts include the root itself, as in
Hillier & Hanson's mean depth (The Social Logic of Space, p.108).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

SENTINEL = -1.0
"""Value reported when a measure is undefined for the root."""


def dvalue(nodes: int) -> float:
    """Diamond-shaped graph normalisation of relative asymmetry."""

    n = float(nodes)
    return float(2.0 * (n * (np.log2((n + 2.0) / 3.0) - 1.0) + 1.0) / ((n - 1.0) * (n - 2.0)))


def pvalue(nodes: int) -> float:
    """Pyramid-shaped graph normalisation of relative asymmetry."""

    n = float(nodes)
    return float(2.0 * (n - np.log2(n) - 1.0) / ((n - 1.0) * (n - 2.0)))


def tekl_integration(nodes: int, total_depth: int) -> float:
    """Teklenburg integration; undefined unless ``total_depth - nodes + 1 > 1``."""

    return float(np.log(0.5 * (nodes - 2.0)) / np.log(float(total_depth - nodes + 1)))


@dataclass(frozen=True)
class VisualMetrics:
    """Measures derived from one traversal episode."""

    node_count: int
    mean_depth: float = SENTINEL
    integration_hh: float = SENTINEL
    integration_pvalue: float = SENTINEL
    integration_tekl: float = SENTINEL
    entropy: float = SENTINEL
    relativised_entropy: float = SENTINEL


def compute_visual_metrics(
    total_nodes: int,
    total_depth: int,
    distribution: Sequence[int],
) -> VisualMetrics:
    """Return the metric tuple for a root reaching ``total_nodes`` cells.

    Args:
        total_nodes: Cells counted in the episode, root included (>= 1)
        total_depth: Sum of the depths of all counted cells
        distribution: Counted cells per depth, ``distribution[0]`` being the root

    Returns:
        VisualMetrics with ``SENTINEL`` for every measure that is undefined.
    """
    if total_nodes <= 1:
        return VisualMetrics(node_count=total_nodes)

    mean_depth = total_depth / (total_nodes - 1)

    integ_hh = integ_pv = integ_tk = SENTINEL
    # more than two nodes, otherwise the asymmetry divides by zero
    if total_nodes > 2 and mean_depth > 1.0:
        ra = 2.0 * (mean_depth - 1.0) / (total_nodes - 2)
        integ_hh = 1.0 / (ra / dvalue(total_nodes))
        integ_pv = 1.0 / (ra / pvalue(total_nodes))
        if total_depth - total_nodes + 1 > 1:
            integ_tk = tekl_integration(total_nodes, total_depth)

    entropy, rel_entropy = _entropies(distribution, total_nodes, mean_depth)

    return VisualMetrics(
        node_count=total_nodes,
        mean_depth=mean_depth,
        integration_hh=integ_hh,
        integration_pvalue=integ_pv,
        integration_tekl=integ_tk,
        entropy=entropy,
        relativised_entropy=rel_entropy,
    )


def _entropies(
    distribution: Sequence[int],
    total_nodes: int,
    mean_depth: float,
) -> Tuple[float, float]:
    # depth 0 is the root itself and is left out of both sums
    counts = np.asarray(distribution, dtype=float)[1:]
    depths = np.arange(1, counts.size + 1)
    nonzero = counts > 0
    counts = counts[nonzero]
    depths = depths[nonzero]
    if counts.size == 0:
        return 0.0, 0.0

    prob = counts / float(total_nodes - 1)
    entropy = -float(np.sum(prob * np.log2(prob)))

    # factorial advances only on contributing depths, starting from 2
    factorial = np.cumprod(depths + 1.0)
    q = (np.power(mean_depth, depths.astype(float)) / factorial) * np.exp(-mean_depth)
    single_prob = prob.astype(np.float32).astype(float)
    rel_entropy = float(np.sum(single_prob * np.log2(prob / q)))
    return entropy, rel_entropy


__all__ = [
    "SENTINEL",
    "VisualMetrics",
    "compute_visual_metrics",
    "dvalue",
    "pvalue",
    "tekl_integration",
]
