"""
Cube Engine: materializes row windows as pandas DataFrames.

This module handles the tabular side of a cube:
- Row windows as DataFrames (one column per dimension and attribute)
- Per-attribute summary statistics over resolved values
- The bare coordinate grid of a snapshot
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import numbers

import numpy as np
import pandas as pd

from mdacube.cube.schema import ABSENT, Row
from mdacube.cube.enumerator import EnumeratorConfig, RowEnumerator
from mdacube.cube.store import Cube


@dataclass
class CubeResult:
    """
    Result of materializing a window of cube rows.

    Attributes:
        data: DataFrame with dimension columns followed by attribute columns
        row_count: Number of rows in the window
        statistics: Attribute label -> {mean, std, min, max, count}
    """
    data: pd.DataFrame
    row_count: int
    statistics: Dict[Any, Dict[str, float]]

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics of the window."""
        return {
            "row_count": self.row_count,
            "columns": list(self.data.columns),
            "attributes": self.statistics,
        }


def _is_numeric(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def rows_to_frame(rows: List[Row], dimensions: List[str], labels: List[Any]) -> pd.DataFrame:
    """
    Build a DataFrame from rows; ABSENT values become NaN.

    An attribute labelled like a dimension gets an '_attr' suffixed column so
    the coordinate column is kept intact.
    """
    coordinates = pd.DataFrame.from_records(
        [{name: row.coordinates[name] for name in dimensions} for row in rows],
        columns=list(dimensions)
    )
    attributes = pd.DataFrame.from_records(
        [
            {
                label: np.nan if row.attributes.get(label, ABSENT) is ABSENT
                else row.attributes[label]
                for label in labels
            }
            for row in rows
        ],
        columns=list(labels)
    )
    return coordinates.join(attributes, rsuffix="_attr")


def compute_statistics(rows: List[Row], labels: List[Any]) -> Dict[Any, Dict[str, float]]:
    """
    Summary statistics for every attribute whose present values are numeric.

    Absent values are left out; attributes with no present value or with any
    non-numeric value are skipped.
    """
    statistics = {}
    for label in labels:
        values = [
            row.attributes[label] for row in rows
            if row.attributes.get(label, ABSENT) is not ABSENT
        ]
        if not values or not all(_is_numeric(v) for v in values):
            continue
        data = np.asarray(values, dtype=float)
        statistics[label] = {
            "mean": float(np.mean(data)),
            "std": float(np.std(data, ddof=1)) if len(data) > 1 else 0.0,
            "min": float(np.min(data)),
            "max": float(np.max(data)),
            "count": int(len(data)),
        }
    return statistics


def materialize(cube: Cube, start: int = 0, length: Optional[int] = None,
                config: Optional[EnumeratorConfig] = None) -> CubeResult:
    """
    Materialize rows [start, start + length) of a cube.

    Args:
        cube: Cube to read
        start: First row index
        length: Number of rows, None for every row from `start`
        config: Enumeration settings, defaults to the cube's own
    """
    enumerator = RowEnumerator(cube, config or cube.config)
    if length is None:
        length = max(0, len(enumerator) - start)
    rows = enumerator.slice(start, length)

    dimensions = [d.name for d in enumerator.dimensions]
    labels = sorted((a.label for a in enumerator.attributes), key=str)
    return CubeResult(
        data=rows_to_frame(rows, dimensions, labels),
        row_count=len(rows),
        statistics=compute_statistics(rows, labels),
    )


def coordinates_frame(enumerator: RowEnumerator) -> pd.DataFrame:
    """Every coordinate tuple of the snapshot, in traversal order."""
    names = [d.name for d in enumerator.dimensions]
    if enumerator.total == 0:
        return pd.DataFrame(columns=names)
    digits = np.unravel_index(np.arange(enumerator.total), enumerator.shape)
    return pd.DataFrame({
        d.name: [d.members[i] for i in column]
        for d, column in zip(enumerator.dimensions, digits)
    }, columns=names)
