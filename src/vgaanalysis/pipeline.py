"""High-level entry point for global visibility graph analysis."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from vgaanalysis.communicator import (
    AnalysisCancelled,
    Communicator,
    PollOutcome,
    ProgressPoller,
    TqdmCommunicator,
)
from vgaanalysis.config import RADIUS_UNLIMITED, VisualGlobalConfig
from vgaanalysis.grid.attributes import AttributeTable
from vgaanalysis.grid.pointmap import PointMap
from vgaanalysis.metrics import VisualMetrics, compute_visual_metrics
from vgaanalysis.traversal.engine import traverse_from
from vgaanalysis.traversal.workspace import ScratchWorkspace

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

ENTROPY_COLUMN = "Visual Entropy"
INTEGRATION_HH_COLUMN = "Visual Integration [HH]"
INTEGRATION_PVALUE_COLUMN = "Visual Integration [P-value]"
INTEGRATION_TEKL_COLUMN = "Visual Integration [Tekl]"
MEAN_DEPTH_COLUMN = "Visual Mean Depth"
NODE_COUNT_COLUMN = "Visual Node Count"
RELATIVISED_ENTROPY_COLUMN = "Visual Relativised Entropy"

# Alphabetical: the attribute table keeps columns sorted, so indices handed
# out during registration stay valid only if names arrive in this order.
_FULL_COLUMNS = (
    (ENTROPY_COLUMN, "entropy"),
    (INTEGRATION_HH_COLUMN, "integration_hh"),
    (INTEGRATION_PVALUE_COLUMN, "integration_pvalue"),
    (INTEGRATION_TEKL_COLUMN, "integration_tekl"),
    (MEAN_DEPTH_COLUMN, "mean_depth"),
    (NODE_COUNT_COLUMN, "node_count"),
    (RELATIVISED_ENTROPY_COLUMN, "relativised_entropy"),
)
_SIMPLE_COLUMNS = ((INTEGRATION_HH_COLUMN, "integration_hh"),)


@dataclass
class VisualGlobalResult:
    """Outcome of a run.

    Values already written to the attribute table remain valid when the run
    was cancelled; nothing is rolled back.
    """

    columns: Dict[str, int] = field(default_factory=dict)
    processed: int = 0
    analysed: int = 0
    cancelled: bool = False
    displayed_column: Optional[int] = None

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise AnalysisCancelled(
                f"Visibility graph analysis cancelled after {self.processed} cells"
            )


def visual_global_column_names(
    radius: int = RADIUS_UNLIMITED,
    simple_version: bool = False,
) -> List[str]:
    """Return the column names a run registers, in registration order."""

    config = VisualGlobalConfig(radius=radius, simple_version=simple_version)
    return [name + config.radius_suffix for name, _ in _column_fields(config)]


def run_visual_global(
    point_map: PointMap,
    config: Optional[VisualGlobalConfig] = None,
    communicator: Optional[Communicator] = None,
) -> VisualGlobalResult:
    """Compute visual integration, depth and entropy for every filled cell.

    Cells are visited column by column.  Context-filled cells failing the
    parity test, and every cell in gates-only mode, are counted for progress
    but not analysed.  After the last root the workspace state of that final
    episode is copied into each point's ``misc``/``extent`` fields, and the
    HH integration column becomes the displayed attribute.

    Args:
        point_map: Grid with filled cells and their adjacency
        config: Run options; defaults to an unbounded full run
        communicator: Optional progress/cancellation channel

    Returns:
        VisualGlobalResult describing the columns written and whether the run
        was cancelled.
    """
    if config is None:
        config = VisualGlobalConfig()

    owned: Optional[TqdmCommunicator] = None
    if communicator is None and config.show_progress:
        owned = TqdmCommunicator()
        communicator = owned

    try:
        return _run(point_map, config, communicator)
    finally:
        if owned is not None:
            owned.close()


def _run(
    point_map: PointMap,
    config: VisualGlobalConfig,
    communicator: Optional[Communicator],
) -> VisualGlobalResult:
    attributes = point_map.attributes
    columns = _register_columns(attributes, config)
    result = VisualGlobalResult(columns={name: index for name, (index, _) in columns.items()})

    total = point_map.filled_point_count()
    logger.info(
        "Running visual global analysis over %d cells (radius=%s, %s%s)",
        total,
        config.radius if config.is_radius_bounded else "n",
        "simple" if config.simple_version else "full",
        ", gates only" if config.gates_only else "",
    )

    poller = ProgressPoller(communicator, config.progress_interval_seconds)
    poller.start(total)

    workspace = ScratchWorkspace(point_map.cols, point_map.rows)

    for ref in point_map.iter_refs():
        point = point_map.point(ref)
        if not point.filled:
            continue

        excluded = (point.context_filled and not ref.is_even()) or config.gates_only
        if not excluded:
            traversal = traverse_from(point_map, ref, config.radius, workspace)
            metrics = compute_visual_metrics(
                traversal.total_nodes,
                traversal.total_depth,
                traversal.distribution,
            )
            _write_metrics(attributes, attributes.get_row_id(ref), columns, metrics)
            result.analysed += 1

        result.processed += 1
        if poller.poll(result.processed) is PollOutcome.CANCELLED:
            logger.info(
                "Visual global analysis cancelled after %d of %d cells",
                result.processed,
                total,
            )
            result.cancelled = True
            return result

    _persist_workspace(point_map, workspace)

    displayed = columns[INTEGRATION_HH_COLUMN + config.radius_suffix][0]
    attributes.set_displayed_column(displayed)
    result.displayed_column = displayed

    poller.finish(result.processed)
    logger.info(
        "Visual global analysis finished: %d cells analysed, %d skipped",
        result.analysed,
        result.processed - result.analysed,
    )
    return result


def _column_fields(config: VisualGlobalConfig):
    return _SIMPLE_COLUMNS if config.simple_version else _FULL_COLUMNS


def _register_columns(attributes: AttributeTable, config: VisualGlobalConfig):
    columns = {}
    for name, metric_field in _column_fields(config):
        full_name = name + config.radius_suffix
        columns[full_name] = (attributes.insert_column(full_name), metric_field)
        logger.debug("Registered column %r at index %d", full_name, columns[full_name][0])
    return columns


def _write_metrics(
    attributes: AttributeTable,
    row: int,
    columns,
    metrics: VisualMetrics,
) -> None:
    for index, metric_field in columns.values():
        attributes.set_value(row, index, getattr(metrics, metric_field))


def _persist_workspace(point_map: PointMap, workspace: ScratchWorkspace) -> None:
    # Only the final episode's scratch state survives into the points.
    for ref in point_map.iter_refs():
        point = point_map.point(ref)
        point.misc = workspace.marker(ref)
        point.extent = workspace.extent(ref)


__all__ = [
    "ENTROPY_COLUMN",
    "INTEGRATION_HH_COLUMN",
    "INTEGRATION_PVALUE_COLUMN",
    "INTEGRATION_TEKL_COLUMN",
    "MEAN_DEPTH_COLUMN",
    "NODE_COUNT_COLUMN",
    "RELATIVISED_ENTROPY_COLUMN",
    "VisualGlobalResult",
    "run_visual_global",
    "visual_global_column_names",
]
