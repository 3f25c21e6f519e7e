"""Per-root traversal of the visibility graph."""

from .engine import TraversalResult, traverse_from  # noqa: F401
from .expander import extract_unseen  # noqa: F401
from .workspace import ScratchWorkspace, VisitedMarker  # noqa: F401
