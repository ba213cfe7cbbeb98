"""
TSP problem model and data structures.
Defines points and the problem instance consumed by the GA.
"""

import math
import random
from dataclasses import dataclass
from typing import List, Dict, Tuple, Optional, Sequence

import numpy as np


@dataclass(frozen=True)
class Point:
    """A point in the plane."""
    x: float
    y: float

    def distance_to(self, other: 'Point') -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)


class TSPInstance:
    """Represents a Euclidean TSP instance: a fixed list of points."""

    def __init__(self,
                 points: List[Point],
                 name: str = "tsp",
                 scenario: Optional[str] = None,
                 optimal_length: Optional[float] = None):
        """
        Initialize TSP instance.

        Args:
            points: Point coordinates, indexed 0..N-1
            name: Instance name used in reports
            scenario: Layout the points were generated with (uniform/circle)
            optimal_length: Known optimal tour length, if the layout has one
        """
        self.points = list(points)
        self.name = name
        self.scenario = scenario
        self.optimal_length = optimal_length
        self.distance_matrix = self._build_distance_matrix()

    def _build_distance_matrix(self) -> np.ndarray:
        if not self.points:
            return np.zeros((0, 0))
        coords = np.array([(p.x, p.y) for p in self.points], dtype=float)
        deltas = coords[:, np.newaxis, :] - coords[np.newaxis, :, :]
        return np.hypot(deltas[..., 0], deltas[..., 1])

    def size(self) -> int:
        """Number of points."""
        return len(self.points)

    def get_distance(self, from_idx: int, to_idx: int) -> float:
        """Distance between two points by index."""
        return float(self.distance_matrix[from_idx, to_idx])

    def tour_length(self, tour: Sequence[int]) -> float:
        """
        Cyclic length of a tour: consecutive legs plus the leg back to the start.

        Args:
            tour: Visiting order (permutation of point indices)

        Returns:
            Total distance, 0.0 for an empty tour
        """
        if len(tour) == 0:
            return 0.0
        order = np.asarray(tour, dtype=int)
        return float(self.distance_matrix[order, np.roll(order, -1)].sum())

    def random_tour(self, rng: random.Random) -> List[int]:
        """Uniform random permutation of [0, N) drawn from rng."""
        tour = list(range(self.size()))
        rng.shuffle(tour)
        return tour

    def is_valid_tour(self, tour: Sequence[int]) -> bool:
        """Check that tour visits every point exactly once."""
        n = self.size()
        if len(tour) != n:
            return False
        seen = [False] * n
        for index in tour:
            if index < 0 or index >= n or seen[index]:
                return False
            seen[index] = True
        return True

    def get_point(self, index: int) -> Point:
        return self.points[index]

    def get_coordinates(self) -> List[Tuple[float, float]]:
        """Get list of point coordinates."""
        return [(p.x, p.y) for p in self.points]

    def get_problem_info(self) -> Dict:
        """Get problem summary information."""
        return {
            'name': self.name,
            'scenario': self.scenario,
            'num_points': self.size(),
            'optimal_length': self.optimal_length,
        }

    def __repr__(self):
        return f"TSPInstance(name={self.name!r}, size={self.size()}, scenario={self.scenario!r})"


def create_tsp_instance_from_coordinates(coordinates: Sequence[Tuple[float, float]],
                                         name: str = "tsp",
                                         **kwargs) -> TSPInstance:
    """
    Build a TSP instance from raw (x, y) pairs.

    Args:
        coordinates: Sequence of (x, y) tuples
        name: Instance name

    Returns:
        TSPInstance
    """
    points = [Point(float(x), float(y)) for x, y in coordinates]
    return TSPInstance(points, name=name, **kwargs)
