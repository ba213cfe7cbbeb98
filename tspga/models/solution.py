"""
Solution representation for TSP.
Defines Individual and Population classes for GA.
"""

from typing import List, Dict, Optional
from dataclasses import dataclass, field

import numpy as np


@dataclass
class Individual:
    """A tour paired with its cached fitness (cyclic length, lower is better)."""
    tour: List[int] = field(default_factory=list)
    fitness: float = float('inf')

    def copy(self) -> 'Individual':
        """Create a copy that owns its own tour list."""
        return Individual(tour=self.tour.copy(), fitness=self.fitness)

    def get_size(self) -> int:
        return len(self.tour)

    def is_empty(self) -> bool:
        return len(self.tour) == 0

    def is_valid_for(self, n: int) -> bool:
        """Check the tour is a permutation of [0, n)."""
        return len(self.tour) == n and set(self.tour) == set(range(n))

    def to_dict(self) -> Dict:
        """Convert individual to dictionary."""
        return {
            'tour': list(self.tour),
            'fitness': float(self.fitness),
            'size': self.get_size(),
        }


def sort_key(individual: Individual) -> float:
    """Ascending-fitness ordering key (best first)."""
    return individual.fitness


class Population:
    """Represents a population of individuals in the GA."""

    def __init__(self, individuals: Optional[List[Individual]] = None):
        """
        Initialize population.

        Args:
            individuals: List of individuals (empty if None)
        """
        self.individuals = individuals or []
        self.generation = 0

    def add_individual(self, individual: Individual):
        """Add an individual to the population."""
        self.individuals.append(individual)

    def get_individual(self, index: int) -> Optional[Individual]:
        """Get individual by index."""
        if 0 <= index < len(self.individuals):
            return self.individuals[index]
        return None

    def get_best_individual(self) -> Optional[Individual]:
        """Get the individual with the lowest fitness (first one on ties)."""
        if not self.individuals:
            return None
        return min(self.individuals, key=sort_key)

    def get_worst_individual(self) -> Optional[Individual]:
        """Get the individual with the highest fitness."""
        if not self.individuals:
            return None
        return max(self.individuals, key=sort_key)

    def sort_by_fitness(self):
        """Sort individuals by ascending fitness. Stable on ties."""
        self.individuals.sort(key=sort_key)

    def get_fitness_values(self) -> List[float]:
        """Get list of fitness values."""
        return [ind.fitness for ind in self.individuals]

    def get_best_fitness(self) -> float:
        if not self.individuals:
            return float('inf')
        return min(ind.fitness for ind in self.individuals)

    def get_avg_fitness(self) -> float:
        if not self.individuals:
            return 0.0
        return sum(ind.fitness for ind in self.individuals) / len(self.individuals)

    def get_worst_fitness(self) -> float:
        if not self.individuals:
            return float('inf')
        return max(ind.fitness for ind in self.individuals)

    def get_size(self) -> int:
        """Get population size."""
        return len(self.individuals)

    def is_empty(self) -> bool:
        """Check if population is empty."""
        return len(self.individuals) == 0

    def next_generation(self):
        """Move to next generation."""
        self.generation += 1

    def get_statistics(self) -> Dict:
        """Get population statistics."""
        return {
            'size': self.get_size(),
            'generation': self.generation,
            'best_fitness': self.get_best_fitness(),
            'avg_fitness': self.get_avg_fitness(),
            'worst_fitness': self.get_worst_fitness(),
            'fitness_std': float(np.std(self.get_fitness_values())) if self.individuals else 0.0
        }

    def apply_elitism(self, elite_count: int) -> List[Individual]:
        """
        Select elite individuals for next generation.

        Args:
            elite_count: Number of elite individuals to select

        Returns:
            Copies of the best `elite_count` individuals, best first
        """
        if not self.individuals or elite_count <= 0:
            return []

        sorted_individuals = sorted(self.individuals, key=sort_key)
        elite_count = min(elite_count, len(sorted_individuals))

        return [ind.copy() for ind in sorted_individuals[:elite_count]]

    def replace_individuals(self, new_individuals: List[Individual]):
        """
        Replace current individuals with new ones.

        Args:
            new_individuals: List of new individuals
        """
        self.individuals = new_individuals

    def copy(self) -> 'Population':
        """Create a deep copy of the population."""
        new_pop = Population([ind.copy() for ind in self.individuals])
        new_pop.generation = self.generation
        return new_pop

    def to_dict(self) -> Dict:
        """Convert population to dictionary."""
        return {
            'size': self.get_size(),
            'generation': self.generation,
            'statistics': self.get_statistics(),
            'individuals': [ind.to_dict() for ind in self.individuals]
        }
