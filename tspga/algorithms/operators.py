"""
Genetic Algorithm operators for TSP.
Implements selection, crossover, and mutation operators.

Every operator draws from the random.Random instance it is given, so a run
seeded once reproduces exactly.
"""

import random
from enum import Enum
from typing import List, Tuple

from tspga.models.solution import Individual
from tspga.core.exceptions import EmptyPopulationError


class SelectionMethod(str, Enum):
    TOURNAMENT = 'tournament'
    ROULETTE = 'roulette'


class CrossoverMethod(str, Enum):
    OX = 'ox'
    PMX = 'pmx'


class SelectionOperator:
    """Selection operators for GA. The population is never modified."""

    @staticmethod
    def tournament_selection(population: List[Individual],
                             rng: random.Random,
                             tournament_size: int = 3) -> Individual:
        """
        Tournament selection operator.

        Draws `tournament_size` individuals uniformly with replacement and
        keeps the one with the lowest fitness. A size of 1 is uniform
        random selection.

        Args:
            population: List of individuals
            rng: Random source of the run
            tournament_size: Number of draws

        Returns:
            Copy of the tournament winner
        """
        if not population:
            raise EmptyPopulationError("tournament selection")

        best = population[rng.randrange(len(population))]
        for _ in range(1, tournament_size):
            candidate = population[rng.randrange(len(population))]
            if candidate.fitness < best.fitness:
                best = candidate

        return best.copy()

    @staticmethod
    def roulette_wheel_selection(population: List[Individual],
                                 rng: random.Random) -> Individual:
        """
        Roulette wheel (fitness-proportional) selection operator.

        Fitness is minimized, so each individual gets weight
        (max_fitness - fitness) + 1.0. The worst individual keeps weight 1.0
        and a population of equal fitness becomes a uniform draw.

        Args:
            population: List of individuals
            rng: Random source of the run

        Returns:
            Copy of the selected individual
        """
        if not population:
            raise EmptyPopulationError("roulette selection")
        if len(population) == 1:
            return population[0].copy()

        max_fitness = max(ind.fitness for ind in population)
        weights = [(max_fitness - ind.fitness) + 1.0 for ind in population]
        total = sum(weights)

        spin = rng.uniform(0.0, total)
        cumulative = 0.0
        for individual, weight in zip(population, weights):
            cumulative += weight
            if cumulative >= spin:
                return individual.copy()

        # Floating point rounding can leave cumulative a hair below spin
        return population[-1].copy()


class CrossoverOperator:
    """Permutation crossover operators for TSP tours."""

    @staticmethod
    def _cut_points(n: int, rng: random.Random) -> Tuple[int, int]:
        start = rng.randrange(n)
        end = rng.randrange(n)
        if start > end:
            start, end = end, start
        return start, end

    @staticmethod
    def order_crossover(parent1: List[int], parent2: List[int],
                        rng: random.Random) -> List[int]:
        """
        Order Crossover (OX) operator.

        Args:
            parent1: First parent tour
            parent2: Second parent tour
            rng: Random source of the run

        Returns:
            Child tour
        """
        if len(parent1) != len(parent2):
            raise ValueError("Parents must have same tour length")

        n = len(parent1)
        if n == 0:
            return []

        start, end = CrossoverOperator._cut_points(n, rng)
        return CrossoverOperator.create_ox_child(parent1, parent2, start, end)

    @staticmethod
    def create_ox_child(parent1: List[int], parent2: List[int],
                        start: int, end: int) -> List[int]:
        """
        Create a child using Order Crossover with fixed cut points.

        Parent1's slice [start, end] is kept in place. The remaining positions,
        walking circularly from end + 1, take parent2's cities in parent2's
        circular order from end + 1, skipping cities already in the child.
        """
        n = len(parent1)
        child = [-1] * n
        placed = set()

        for i in range(start, end + 1):
            child[i] = parent1[i]
            placed.add(parent1[i])

        child_pos = (end + 1) % n
        for offset in range(n):
            city = parent2[(end + 1 + offset) % n]
            if city in placed:
                continue
            child[child_pos] = city
            placed.add(city)
            child_pos = (child_pos + 1) % n

        return child

    @staticmethod
    def partially_mapped_crossover(parent1: List[int], parent2: List[int],
                                   rng: random.Random) -> List[int]:
        """
        Partially Mapped Crossover (PMX) operator.

        Args:
            parent1: First parent tour
            parent2: Second parent tour
            rng: Random source of the run

        Returns:
            Child tour
        """
        if len(parent1) != len(parent2):
            raise ValueError("Parents must have same tour length")

        n = len(parent1)
        if n == 0:
            return []

        start, end = CrossoverOperator._cut_points(n, rng)
        return CrossoverOperator.create_pmx_child(parent1, parent2, start, end)

    @staticmethod
    def create_pmx_child(parent1: List[int], parent2: List[int],
                         start: int, end: int) -> List[int]:
        """
        Create a child using Partially Mapped Crossover with fixed cut points.

        The child starts as parent1 with positions [start, end] overwritten by
        parent2. Each segment position pairs parent2[i] with parent1[i]; a city
        outside the segment that collides with a city now in the segment is
        replaced by following those pairs until it reaches a city the segment
        does not contain.

        The chain always terminates: the pairs form an injective map whose
        values all lie in parent1's segment, and the starting city lies outside
        it, so no chain can revisit a city.
        """
        n = len(parent1)
        child = parent1.copy()

        mapping = {}
        for i in range(start, end + 1):
            child[i] = parent2[i]
            mapping[parent2[i]] = parent1[i]

        for i in range(n):
            if start <= i <= end:
                continue
            city = parent1[i]
            while city in mapping:
                city = mapping[city]
            child[i] = city

        return child


class MutationOperator:
    """Mutation operators for TSP tours."""

    @staticmethod
    def swap_mutation(tour: List[int], mutation_rate: float,
                      rng: random.Random) -> List[int]:
        """
        Swap mutation operator.

        One probability draw per tour. On success two positions are drawn
        independently; they may coincide, which leaves the tour unchanged.

        Args:
            tour: Tour to mutate
            mutation_rate: Probability of mutation
            rng: Random source of the run

        Returns:
            Mutated copy of the tour
        """
        mutated = tour.copy()
        if not mutated or rng.random() >= mutation_rate:
            return mutated

        pos1 = rng.randrange(len(mutated))
        pos2 = rng.randrange(len(mutated))
        mutated[pos1], mutated[pos2] = mutated[pos2], mutated[pos1]

        return mutated


def select_parent(method: SelectionMethod, population: List[Individual],
                  rng: random.Random, tournament_size: int = 3) -> Individual:
    """Select one parent with the configured strategy."""
    method = SelectionMethod(method)
    if method is SelectionMethod.TOURNAMENT:
        return SelectionOperator.tournament_selection(population, rng, tournament_size)
    return SelectionOperator.roulette_wheel_selection(population, rng)


_CROSSOVER_MAP = {
    CrossoverMethod.OX: CrossoverOperator.order_crossover,
    CrossoverMethod.PMX: CrossoverOperator.partially_mapped_crossover,
}


def crossover(method: CrossoverMethod, parent1: List[int], parent2: List[int],
              rng: random.Random) -> List[int]:
    """Recombine two parent tours with the configured operator."""
    return _CROSSOVER_MAP[CrossoverMethod(method)](parent1, parent2, rng)
