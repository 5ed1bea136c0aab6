"""
Cube Store: the dimension registry and per-attribute fact tables.

Cubes are values. `Cube.set` never mutates the receiver; it returns a new
cube that shares every untouched dimension and facts table with the old one,
so an older cube can keep being read while newer ones are built.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from mdacube.cube.schema import (
    CoordinatesKey, Dimension, Row, coordinates_key, validate_coordinates
)
from mdacube.cube.enumerator import EnumeratorConfig, RowEnumerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Cube:
    """
    Multi-dimensional attribute cube C = <D, A>.

    Attributes:
        dimensions: Dimension name -> Dimension (member set)
        attributes: Attribute label -> facts table (fact key -> value)
        config: Enumeration settings used by the sequence protocol
    """
    dimensions: Dict[str, Dimension] = field(default_factory=dict)
    attributes: Dict[Any, Dict[CoordinatesKey, Any]] = field(default_factory=dict)
    config: EnumeratorConfig = field(default_factory=EnumeratorConfig, compare=False)

    # dict fields, compared by value only
    __hash__ = None

    @classmethod
    def new(cls, config: Optional[EnumeratorConfig] = None) -> "Cube":
        """Create an empty cube."""
        if config is None:
            return cls()
        return cls(config=config)

    def set(self, coordinates: Mapping[str, Any], attribute_label: Any, value: Any) -> "Cube":
        """
        Record `value` for `attribute_label` at (possibly partial) coordinates.

        Args:
            coordinates: Non-empty mapping of dimension name -> member
            attribute_label: Attribute to write
            value: Value stored under the exact coordinates

        Returns:
            A new cube; this one is left unchanged.

        Raises:
            TypeError: coordinates is not a mapping
            ValueError: coordinates is empty
        """
        validate_coordinates(coordinates)
        key = coordinates_key(coordinates)

        facts = dict(self.attributes.get(attribute_label, {}))
        facts[key] = value
        attributes = dict(self.attributes)
        attributes[attribute_label] = facts

        dimensions = dict(self.dimensions)
        for name, member in coordinates.items():
            dimension = dimensions.get(name) or Dimension(name)
            dimensions[name] = dimension.with_member(member)

        logger.debug("set %r at %r -> %r", attribute_label, dict(coordinates), value)
        return replace(self, dimensions=dimensions, attributes=attributes)

    def count(self) -> int:
        """Number of cells: product of member counts, 0 without dimensions."""
        if not self.dimensions:
            return 0
        total = 1
        for dimension in self.dimensions.values():
            total *= dimension.cardinality
        return total

    @property
    def dimension_names(self) -> List[str]:
        return sorted(self.dimensions)

    @property
    def attribute_labels(self) -> List[Any]:
        return list(self.attributes)

    def members(self, dimension: str) -> List[Any]:
        """Sorted members of a dimension (empty if the dimension is unknown)."""
        if dimension not in self.dimensions:
            return []
        return sorted(self.dimensions[dimension].members)

    def facts(self, attribute_label: Any) -> List[Tuple[Dict[str, Any], Any]]:
        """Recorded (coordinates, value) pairs of an attribute in write order."""
        return [
            (dict(key), value)
            for key, value in self.attributes.get(attribute_label, {}).items()
        ]

    def with_config(self, config: EnumeratorConfig) -> "Cube":
        return replace(self, config=config)

    def enumerate(self) -> RowEnumerator:
        """Build a fresh row enumerator over the current state of the cube."""
        return RowEnumerator(self, self.config)

    def slice(self, start: int, length: int) -> List[Row]:
        return self.enumerate().slice(start, length)

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[Row]:
        return iter(self.enumerate())

    def __contains__(self, row: Any) -> bool:
        return self.enumerate().member(row)

    def __getitem__(self, index: Union[int, slice]):
        enumerator = self.enumerate()
        if isinstance(index, slice):
            start, stop, step = index.indices(len(enumerator))
            if step != 1:
                raise ValueError("cube slices only support a step of 1")
            return enumerator.slice(start, max(0, stop - start))
        total = len(enumerator)
        if index < 0:
            index += total
        if not 0 <= index < total:
            raise IndexError(f"row index out of range for a cube of {total} rows")
        return enumerator.row_at(index)


def new(config: Optional[EnumeratorConfig] = None) -> Cube:
    """Create an empty cube."""
    return Cube.new(config)


def set_attribute(cube: Cube, coordinates: Mapping[str, Any],
                  attribute_label: Any, value: Any) -> Cube:
    """Functional form of `Cube.set`."""
    return cube.set(coordinates, attribute_label, value)


def count(cube: Cube) -> int:
    """Functional form of `Cube.count`."""
    return cube.count()
