"""
Instance generator for TSP problems.
Creates uniform-random and circular point layouts.
"""

import math
from typing import Dict, Optional, Tuple

import numpy as np

from config import PROBLEM_CONFIG
from tspga.core.exceptions import InvalidConfigurationError
from tspga.models.tsp_model import Point, TSPInstance


class InstanceGenerator:
    """Generates synthetic TSP instances."""

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize generator with configuration.

        Args:
            config: Configuration dictionary, uses PROBLEM_CONFIG if None
        """
        self.config = PROBLEM_CONFIG.copy()
        if config:
            self.config.update(config)

    def generate_uniform(self, n_points: int, seed: int = 42) -> TSPInstance:
        """
        Generate points uniformly distributed in [0, 1] x [0, 1].

        Args:
            n_points: Number of points
            seed: Seed for the coordinate generator

        Returns:
            TSP instance without a known optimum
        """
        rng = np.random.default_rng(seed)
        coords = rng.uniform(0.0, 1.0, size=(n_points, 2))
        points = [Point(float(x), float(y)) for x, y in coords]
        return TSPInstance(points, name=f"uniform_{n_points}_s{seed}", scenario='uniform')

    def generate_circle(self, n_points: int,
                        radius: Optional[float] = None,
                        start_angle: Optional[float] = None,
                        center: Optional[Tuple[float, float]] = None) -> TSPInstance:
        """
        Generate points equally spaced on a circle.

        Visiting the points in angular order is optimal, so the instance carries
        its optimal length: n chords of length 2 * r * sin(pi / n).

        Args:
            n_points: Number of points
            radius: Circle radius (config default 1.0)
            start_angle: Angle of point 0 in radians
            center: Circle center (config default (0.5, 0.5))

        Returns:
            TSP instance with `optimal_length` set
        """
        radius = self.config['radius'] if radius is None else radius
        start_angle = self.config['start_angle'] if start_angle is None else start_angle
        cx, cy = self.config['center'] if center is None else center

        points = []
        for i in range(n_points):
            angle = start_angle + 2.0 * math.pi * i / n_points
            points.append(Point(cx + radius * math.cos(angle), cy + radius * math.sin(angle)))

        return TSPInstance(
            points,
            name=f"circle_{n_points}",
            scenario='circle',
            optimal_length=circle_tour_length(n_points, radius)
        )

    def generate(self, scenario: Optional[str] = None, n_points: Optional[int] = None,
                 seed: int = 42) -> TSPInstance:
        """Generate an instance for the configured (or given) scenario."""
        if scenario is None:
            scenario = self.config['scenario']
        if n_points is None:
            n_points = self.config['n_points']

        if scenario == 'uniform':
            return self.generate_uniform(n_points, seed)
        if scenario == 'circle':
            return self.generate_circle(n_points)

        raise InvalidConfigurationError(
            parameter='scenario',
            value=scenario,
            expected="One of ['uniform', 'circle']"
        )


def circle_tour_length(n_points: int, radius: float = 1.0) -> float:
    """Perimeter of the regular n-gon inscribed in a circle of the given radius."""
    if n_points < 2:
        return 0.0
    return n_points * 2.0 * radius * math.sin(math.pi / n_points)


def generate_instance(scenario: str = 'uniform', n_points: int = 50,
                      seed: int = 42, radius: float = 1.0) -> TSPInstance:
    """
    Convenience function to generate a TSP instance.

    Args:
        scenario: 'uniform' or 'circle'
        n_points: Number of points
        seed: Coordinate seed (uniform scenario only)
        radius: Circle radius (circle scenario only)

    Returns:
        Generated TSP instance
    """
    generator = InstanceGenerator({'radius': radius})
    return generator.generate(scenario, n_points, seed)
