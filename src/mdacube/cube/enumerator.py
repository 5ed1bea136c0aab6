"""
Row Enumerator: a read-only, lazily computed view over a cube snapshot.

Rows are numbered 0..total-1. Index i maps to coordinates by mixed-radix
decomposition over the sorted dimensions, the last dimension being the
least significant digit. Each attribute of a row is then resolved by trying
the attribute's recorded key shapes in policy order and taking the first
projection of the row's coordinates that has a recorded fact.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Mapping, Optional, Tuple

from mdacube.cube.schema import AggregatedAttribute, OrderedDimension, Row

if TYPE_CHECKING:
    from mdacube.cube.store import Cube

logger = logging.getLogger(__name__)


class ResolutionPolicy(Enum):
    """Order in which an attribute's key shapes are tried."""
    MOST_SPECIFIC = "most_specific"    # more dimensions first, then first observed
    FIRST_OBSERVED = "first_observed"  # order of first write


class TraversalStatus(Enum):
    ACTIVE = "active"
    DONE = "done"
    HALTED = "halted"


@dataclass
class EnumeratorConfig:
    """Configuration for row enumeration."""
    resolution: ResolutionPolicy = ResolutionPolicy.MOST_SPECIFIC
    clamp_slices: bool = True


@dataclass(frozen=True)
class EnumeratorState:
    """
    Continuation of a suspended traversal.

    Attributes:
        index: Next row index to produce
        stop: Index at which the traversal is done
        status: ACTIVE until stop is reached (DONE) or the consumer halts
    """
    index: int
    stop: int
    status: TraversalStatus = TraversalStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status is TraversalStatus.ACTIVE

    def halt(self) -> "EnumeratorState":
        if not self.is_active:
            return self
        return replace(self, status=TraversalStatus.HALTED)


class RowEnumerator:
    """
    Enumerates and resolves the rows of one cube snapshot.

    The ordered dimensions and aggregated attributes are computed once at
    construction; later writes produce new cubes and are not visible here.
    Iterating the enumerator itself is single-use, while `row_at`, `slice`,
    `start`/`resume` and `member` may be called any number of times.
    """

    def __init__(self, cube: "Cube", config: Optional[EnumeratorConfig] = None):
        self.config = config or EnumeratorConfig()
        self.dimensions: List[OrderedDimension] = [
            OrderedDimension.from_dimension(cube.dimensions[name])
            for name in sorted(cube.dimensions)
        ]
        self.attributes: List[AggregatedAttribute] = [
            self._aggregate(label, facts) for label, facts in cube.attributes.items()
        ]
        self.total = cube.count()
        self._state: Optional[EnumeratorState] = None
        logger.debug(
            "enumerator over %d rows, %d dimensions, %d attributes (%s)",
            self.total, len(self.dimensions), len(self.attributes),
            self.config.resolution.value
        )

    def _aggregate(self, label: Any, facts: Dict) -> AggregatedAttribute:
        attribute = AggregatedAttribute.from_facts(label, facts)
        if self.config.resolution is ResolutionPolicy.MOST_SPECIFIC:
            # sorted() is stable, so equal-sized shapes stay in first-observed order
            attribute.subsets = sorted(attribute.subsets, key=len, reverse=True)
        return attribute

    @property
    def shape(self) -> Tuple[int, ...]:
        """Member count of each ordered dimension."""
        return tuple(d.members_count for d in self.dimensions)

    def count(self) -> int:
        return self.total

    def __len__(self) -> int:
        return self.total

    def members_indexes(self, index: int) -> List[int]:
        """Mixed-radix digits of a row index, one per ordered dimension."""
        if not 0 <= index < self.total:
            raise IndexError(f"row index {index} out of range [0, {self.total})")
        digits = []
        for dimension in reversed(self.dimensions):
            index, digit = divmod(index, dimension.members_count)
            digits.append(digit)
        digits.reverse()
        return digits

    def coordinates_at(self, index: int) -> Dict[str, Any]:
        return {
            dimension.name: dimension.members[digit]
            for dimension, digit in zip(self.dimensions, self.members_indexes(index))
        }

    def resolve(self, coordinates: Mapping[str, Any]) -> Dict[Any, Any]:
        """Resolved value (or ABSENT) of every attribute at the coordinates."""
        return {attribute.label: attribute.get(coordinates) for attribute in self.attributes}

    def row_at(self, index: int) -> Row:
        coordinates = self.coordinates_at(index)
        return Row(coordinates=coordinates, attributes=self.resolve(coordinates))

    def start(self, index: int = 0, stop: Optional[int] = None) -> EnumeratorState:
        """Initial state of a traversal over rows [index, stop)."""
        if stop is None:
            stop = self.total
        if not 0 <= index <= stop <= self.total:
            raise IndexError(
                f"traversal window [{index}, {stop}) outside [0, {self.total}]"
            )
        status = TraversalStatus.ACTIVE if index < stop else TraversalStatus.DONE
        return EnumeratorState(index=index, stop=stop, status=status)

    def resume(self, state: EnumeratorState) -> Optional[Tuple[Row, EnumeratorState]]:
        """
        Produce the next row of a suspended traversal.

        Returns:
            (row, next_state), or None once the traversal is done or halted.
        """
        if not state.is_active:
            return None
        if state.index >= state.stop:
            return None
        row = self.row_at(state.index)
        index = state.index + 1
        status = TraversalStatus.ACTIVE if index < state.stop else TraversalStatus.DONE
        return row, EnumeratorState(index=index, stop=state.stop, status=status)

    def traverse(self, state: Optional[EnumeratorState] = None) -> Iterator[Row]:
        """Lazily yield rows from a state until it is done."""
        if state is None:
            state = self.start()
        step = self.resume(state)
        while step is not None:
            row, state = step
            yield row
            step = self.resume(state)

    def __iter__(self) -> Iterator[Row]:
        if self._state is None:
            self._state = self.start()
        step = self.resume(self._state)
        while step is not None:
            row, self._state = step
            yield row
            step = self.resume(self._state)

    def slice(self, start: int, length: int) -> List[Row]:
        """
        Rows [start, start + length) computed without walking earlier rows.

        Windows running past the last row are clamped, or rejected with
        IndexError when `clamp_slices` is disabled.
        """
        if start < 0 or length < 0:
            raise ValueError(f"slice start and length must be >= 0, got {start}, {length}")
        stop = start + length
        if stop > self.total:
            if not self.config.clamp_slices:
                raise IndexError(
                    f"slice [{start}, {stop}) exceeds cube of {self.total} rows"
                )
            logger.warning(
                "slice [%d, %d) clamped to cube of %d rows", start, stop, self.total
            )
            start = min(start, self.total)
            stop = self.total
        return list(self.traverse(self.start(start, stop)))

    def member(self, row: Any) -> bool:
        """True iff `row` is a point of this snapshot with the same resolved attributes."""
        if not isinstance(row, Row):
            return False
        coordinates = row.coordinates
        if len(coordinates) != len(self.dimensions):
            return False
        for dimension in self.dimensions:
            if dimension.name not in coordinates:
                return False
            if coordinates[dimension.name] not in dimension.members:
                return False
        return self.resolve(coordinates) == row.attributes
