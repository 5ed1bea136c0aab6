"""
Cube data model: dimensions, coordinates, attributes and rows.

A cube C = <D, A> holds dimensions D (name -> growing member set) and
attributes A (label -> facts table keyed by possibly partial coordinates).
Rows are points of the cartesian product of all dimension members with every
attribute resolved against the recorded facts.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Tuple
from collections.abc import Mapping as MappingABC


CoordinatesKey = FrozenSet[Tuple[str, Any]]
KeyShape = Tuple[str, ...]


class _Absent:
    """Marker for an attribute with no applicable fact in a row."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "ABSENT"

    def __bool__(self):
        return False

    def __reduce__(self):
        return (_Absent, ())


ABSENT = _Absent()


def validate_coordinates(coordinates: Any) -> None:
    """
    Check that coordinates are a non-empty mapping of dimension -> member.

    Raises:
        TypeError: coordinates is not a mapping
        ValueError: coordinates is an empty mapping
    """
    if not isinstance(coordinates, MappingABC):
        raise TypeError(
            f"coordinates must be a mapping of dimension to member, "
            f"got {type(coordinates).__name__}"
        )
    if not coordinates:
        raise ValueError("coordinates must name at least one dimension")


def coordinates_key(coordinates: Mapping[str, Any]) -> CoordinatesKey:
    """Hashable fact key; two keys are equal iff the mappings are equal."""
    return frozenset(coordinates.items())


def key_shape(key: CoordinatesKey) -> KeyShape:
    """Sorted dimension names used by a fact key."""
    return tuple(sorted(dimension for dimension, _ in key))


def project(coordinates: Mapping[str, Any], shape: KeyShape):
    """
    Project full coordinates onto a key shape.

    Returns None when the coordinates do not cover every dimension of the
    shape, since such a projection cannot match any recorded fact.
    """
    try:
        return frozenset((dimension, coordinates[dimension]) for dimension in shape)
    except KeyError:
        return None


@dataclass(frozen=True)
class Dimension:
    """
    A named axis and the distinct members observed for it.

    Attributes:
        name: Dimension name (e.g., 'region', 'product')
        members: Every member value written against this dimension
    """
    name: str
    members: FrozenSet[Any] = frozenset()

    def with_member(self, member: Any) -> "Dimension":
        """Return a dimension whose member set also contains `member`."""
        if member in self.members:
            return self
        return Dimension(self.name, self.members | {member})

    @property
    def cardinality(self) -> int:
        return len(self.members)


@dataclass(frozen=True)
class OrderedDimension:
    """
    A dimension with a fixed member order, used as one radix of row indexing.

    Attributes:
        name: Dimension name
        members: Members sorted ascending
        members_count: Number of members (the radix)
    """
    name: str
    members: Tuple[Any, ...]
    members_count: int

    @classmethod
    def from_dimension(cls, dimension: Dimension) -> "OrderedDimension":
        members = tuple(sorted(dimension.members))
        return cls(name=dimension.name, members=members, members_count=len(members))


@dataclass
class AggregatedAttribute:
    """
    An attribute's facts together with every key shape used to write them.

    Attributes:
        label: Attribute label (e.g., 'price')
        facts: Facts table, fact key -> stored value, in write order
        subsets: Distinct key shapes in the order they are tried on lookup
    """
    label: Any
    facts: Dict[CoordinatesKey, Any]
    subsets: List[KeyShape] = field(default_factory=list)

    @classmethod
    def from_facts(cls, label: Any, facts: Dict[CoordinatesKey, Any]) -> "AggregatedAttribute":
        """Collect key shapes in first-observed order."""
        subsets: List[KeyShape] = []
        seen = set()
        for key in facts:
            shape = key_shape(key)
            if shape not in seen:
                seen.add(shape)
                subsets.append(shape)
        return cls(label=label, facts=facts, subsets=subsets)

    def get(self, coordinates: Mapping[str, Any]) -> Any:
        """Value of the first subset whose projection was recorded, else ABSENT."""
        for shape in self.subsets:
            projected = project(coordinates, shape)
            if projected is not None and projected in self.facts:
                return self.facts[projected]
        return ABSENT


@dataclass
class Row:
    """
    One point of the cube with its resolved attributes.

    Attributes:
        coordinates: Full coordinates, dimension -> member
        attributes: Attribute label -> resolved value or ABSENT
    """
    coordinates: Dict[str, Any]
    attributes: Dict[Any, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "coordinates": dict(self.coordinates),
            "attributes": dict(self.attributes),
        }
