# medoids/domain/point.py
"""
Domain models for 2D points and the named datasets that contribute them.
"""
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple, Union

Coordinate = Union[int, float]


@dataclass(frozen=True)
class Point:
    """
    An immutable 2D point.

    Equality and hashing are structural on (x, y), so two points with the
    same coordinates compare equal even if they are distinct pool entries.

    Attributes:
        x: Horizontal coordinate
        y: Vertical coordinate
    """
    x: Coordinate
    y: Coordinate

    def as_tuple(self) -> Tuple[Coordinate, Coordinate]:
        """Return the coordinates as a plain (x, y) tuple."""
        return (self.x, self.y)

    def __iter__(self) -> Iterator[Coordinate]:
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"Point({self.x}, {self.y})"


@dataclass
class Dataset:
    """
    A named, ordered sequence of points contributed to a clustering session.

    Attributes:
        name: Display name (e.g., "Dataset 1")
        points: Points in insertion order
    """
    name: str
    points: List[Point] = field(default_factory=list)

    def __post_init__(self):
        """Validate dataset data after initialization."""
        if not self.name:
            raise ValueError("Dataset name cannot be empty")

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_empty(self) -> bool:
        """Check if the dataset contributes no points."""
        return not self.points
