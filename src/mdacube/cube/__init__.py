"""
Cube module: sparse attribute store and its lazily resolved row view.
"""

from mdacube.cube.schema import (
    ABSENT, Dimension, OrderedDimension, AggregatedAttribute, Row, coordinates_key
)
from mdacube.cube.enumerator import (
    RowEnumerator, EnumeratorConfig, EnumeratorState, ResolutionPolicy, TraversalStatus
)
from mdacube.cube.store import Cube, new, set_attribute, count
from mdacube.cube.engine import CubeResult, materialize, coordinates_frame

__all__ = [
    "ABSENT", "Dimension", "OrderedDimension", "AggregatedAttribute", "Row",
    "coordinates_key",
    "RowEnumerator", "EnumeratorConfig", "EnumeratorState",
    "ResolutionPolicy", "TraversalStatus",
    "Cube", "new", "set_attribute", "count",
    "CubeResult", "materialize", "coordinates_frame",
]
