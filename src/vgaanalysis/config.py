"""Configuration for global visibility graph analysis.

One frozen options record drives a run: the traversal radius, which roots are
analysed and which columns are produced, and how progress is reported.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral

RADIUS_UNLIMITED = -1
"""Radius sentinel meaning traversal is not bounded by hop count."""


@dataclass(frozen=True)
class VisualGlobalConfig:
    """Options for :func:`vgaanalysis.pipeline.run_visual_global`."""

    # ============================================================================
    # TRAVERSAL
    # ============================================================================

    radius: int = RADIUS_UNLIMITED
    """Maximum hop count expanded from each root, or ``RADIUS_UNLIMITED``."""

    # ============================================================================
    # ROOT SELECTION & OUTPUT
    # ============================================================================

    gates_only: bool = False
    """Skip traversal for every cell; cells are only counted for progress."""

    simple_version: bool = False
    """Produce only the ``Visual Integration [HH]`` column."""

    # ============================================================================
    # PROGRESS REPORTING
    # ============================================================================

    show_progress: bool = False
    """Show a progress bar when the caller does not supply a communicator."""

    progress_interval_seconds: float = 0.5
    """Minimum wall-clock time between progress posts and cancellation checks."""

    # ============================================================================
    # VALIDATION
    # ============================================================================

    def __post_init__(self) -> None:
        """Validate configuration consistency."""
        # bool is an Integral but never a meaningful radius
        if isinstance(self.radius, bool) or not isinstance(self.radius, Integral):
            raise ValueError(
                "radius must be an integer hop count or RADIUS_UNLIMITED, got %r"
                % (self.radius,)
            )
        if self.radius < 0 and self.radius != RADIUS_UNLIMITED:
            raise ValueError(
                "radius must be non-negative or RADIUS_UNLIMITED (-1), got %s"
                % (self.radius,)
            )

        if self.progress_interval_seconds < 0:
            raise ValueError(
                "progress_interval_seconds must be >= 0, got %s"
                % (self.progress_interval_seconds,)
            )

    @property
    def is_radius_bounded(self) -> bool:
        return self.radius != RADIUS_UNLIMITED

    @property
    def radius_suffix(self) -> str:
        """Column name suffix for bounded runs, e.g. ``" R3"``."""

        if not self.is_radius_bounded:
            return ""
        return " R%d" % int(self.radius)
