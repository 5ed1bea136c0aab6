"""
MDACube: Multi-Dimensional Attribute Cube

Attributes are written against partial coordinates, so every member of an
unspecified dimension shares the value, and read back as a dense, lazily
resolved sequence of rows over the cartesian product of all members.
"""

__version__ = "0.1.0"
__author__ = "MDACube Team"

from mdacube.cube.schema import ABSENT, Row
from mdacube.cube.store import Cube, new, set_attribute, count
from mdacube.cube.enumerator import RowEnumerator, EnumeratorConfig, ResolutionPolicy
from mdacube.cube.engine import CubeResult, materialize

__all__ = [
    "ABSENT",
    "Row",
    "Cube",
    "new",
    "set_attribute",
    "count",
    "RowEnumerator",
    "EnumeratorConfig",
    "ResolutionPolicy",
    "CubeResult",
    "materialize",
]
