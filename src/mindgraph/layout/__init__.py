"""Raw layout strategies and the normalization pass."""

from mindgraph.layout.engine import compute_layout
from mindgraph.layout.normalize import (
    assign_branches,
    min_distance,
    normalization_ratio,
)
from mindgraph.layout.strategies import (
    LAYOUTS,
    ClusterLayout,
    LayoutResult,
    LayoutStrategy,
    TreeLayout,
)

__all__ = [
    "LAYOUTS",
    "ClusterLayout",
    "LayoutResult",
    "LayoutStrategy",
    "TreeLayout",
    "assign_branches",
    "compute_layout",
    "min_distance",
    "normalization_ratio",
]
