"""
Main Genetic Algorithm engine for TSP.
Implements the complete GA workflow with population management and
patience-based early stopping.
"""

import json
import logging
import random
import time
from enum import Enum
from typing import Callable, List, Dict, Optional, Tuple

from config import GA_CONFIG
from tspga.models.solution import Individual, Population
from tspga.models.tsp_model import TSPInstance
from tspga.algorithms.operators import (
    SelectionMethod, CrossoverMethod, MutationOperator, select_parent, crossover
)
from tspga.core.exceptions import EmptyPopulationError, RunStateError
from tspga.core.validators import ConfigValidator, DataValidator, TourValidator

logger = logging.getLogger(__name__)


class RunState(str, Enum):
    NOT_STARTED = 'not_started'
    RUNNING = 'running'
    STOPPED = 'stopped'


GenerationCallback = Callable[[int, Individual], None]


class GeneticAlgorithm:
    """Main Genetic Algorithm engine for TSP optimization."""

    def __init__(self, problem: TSPInstance, config: Optional[Dict] = None):
        """
        Initialize GA engine.

        Args:
            problem: TSP problem instance
            config: GA configuration; missing keys fall back to GA_CONFIG

        Raises:
            InvalidConfigurationError: If the merged configuration is invalid
            DegenerateInstanceError: If the instance has fewer than 2 points
        """
        self.problem = problem
        self.config = GA_CONFIG.copy()
        if config:
            self.config.update(config)

        ConfigValidator.validate_ga_config(self.config)
        DataValidator.validate_problem(problem)

        self.selection = SelectionMethod(str(self.config['selection']).lower())
        self.crossover = CrossoverMethod(str(self.config['crossover']).lower())
        self.rng = random.Random(self.config['seed'])

        # GA state
        self.state = RunState.NOT_STARTED
        self.population = Population()
        self.generation = 0
        self.best_solution: Optional[Individual] = None
        self.initial_best_fitness: Optional[float] = None
        self.generations_without_improvement = 0
        self.early_stopped = False
        self.execution_time = 0.0

        # Statistics, one entry per completed generation
        self.stats = {
            'total_evaluations': 0,
            'best_fitness_history': [],
            'avg_fitness_history': [],
            'worst_fitness_history': [],
            'best_ever_history': [],
            'convergence_generation': None
        }

    @property
    def generations_run(self) -> int:
        """Number of generations actually executed."""
        return len(self.stats['best_fitness_history'])

    def initialize_population(self) -> Population:
        """
        Seed the population with independently shuffled tours.

        Returns:
            Initialized population
        """
        population_size = self.config['population_size']
        self.population = Population()

        for _ in range(population_size):
            tour = self.problem.random_tour(self.rng)
            self.population.add_individual(self._make_individual(tour))

        if self.population.is_empty():
            raise EmptyPopulationError("initialization")

        self.best_solution = self.population.get_best_individual().copy()
        self.initial_best_fitness = self.best_solution.fitness
        self.generations_without_improvement = 0

        logger.debug(f"Initial population of {population_size}: "
                     f"best length = {self.initial_best_fitness:.6f}")

        return self.population

    def _make_individual(self, tour: List[int]) -> Individual:
        if self.config.get('validate_offspring'):
            TourValidator.validate_tour(tour, self.problem.size())
        self.stats['total_evaluations'] += 1
        return Individual(tour=tour, fitness=self.problem.tour_length(tour))

    def evolve_generation(self) -> bool:
        """
        Create the next generation and update the best-ever individual.

        Returns:
            True if the best-ever individual improved
        """
        self.population.sort_by_fitness()

        new_individuals = self.population.apply_elitism(self.config['alpha_count'])

        population_size = self.config['population_size']
        mutation_rate = self.config['mutation_rate']
        tournament_size = self.config['tournament_size']
        parents = self.population.individuals

        while len(new_individuals) < population_size:
            parent1 = select_parent(self.selection, parents, self.rng, tournament_size)
            parent2 = select_parent(self.selection, parents, self.rng, tournament_size)

            child = crossover(self.crossover, parent1.tour, parent2.tour, self.rng)
            child = MutationOperator.swap_mutation(child, mutation_rate, self.rng)

            new_individuals.append(self._make_individual(child))

        self.population.replace_individuals(new_individuals)
        self.population.next_generation()

        return self._update_best()

    def _update_best(self) -> bool:
        """Single place where the best-ever individual changes."""
        current_best = self.population.get_best_individual()
        if current_best.fitness < self.best_solution.fitness:
            self.best_solution = current_best.copy()
            self.generations_without_improvement = 0
            return True

        self.generations_without_improvement += 1
        return False

    def evolve(self, max_generations: Optional[int] = None,
               generation_callback: Optional[GenerationCallback] = None
               ) -> Tuple[Individual, List[Dict]]:
        """
        Run GA evolution process.

        Args:
            max_generations: Maximum number of generations (default num_epochs)
            generation_callback: Called with (generation, best_solution) after
                each completed generation

        Returns:
            Tuple of (best_solution, evolution_data)

        Raises:
            RunStateError: If the run has already stopped
        """
        if self.state is RunState.STOPPED:
            raise RunStateError(self.state.value, "evolve")

        if max_generations is None:
            max_generations = self.config['num_epochs']
        patience = self.config['patience']
        log_interval = self.config.get('log_interval', 0)
        start_time = time.time()

        if self.population.is_empty():
            self.initialize_population()

        self.state = RunState.RUNNING
        evolution_data = []

        for _ in range(max_generations):
            self.generation += 1
            generation = self.generation
            self.evolve_generation()

            gen_data = self._record_statistics(generation)
            evolution_data.append(gen_data)

            if generation_callback is not None:
                generation_callback(generation, self.best_solution)

            if log_interval and generation % log_interval == 0:
                logger.info(f"Generation {generation} | best: {gen_data['best_fitness']:.6f} "
                            f"| best ever: {self.best_solution.fitness:.6f}")

            if self.generations_without_improvement >= patience:
                self.early_stopped = True
                self.stats['convergence_generation'] = generation
                logger.info(f"Early stop at generation {generation} "
                            f"(no improvement for {patience} generations)")
                break

        self.state = RunState.STOPPED
        self.execution_time = time.time() - start_time

        logger.info(f"GA finished: {self.generations_run} generations, "
                    f"best length = {self.best_solution.fitness:.6f}, "
                    f"time = {self.execution_time:.2f}s")

        return self.best_solution, evolution_data

    def _record_statistics(self, generation: int) -> Dict:
        """Append best/mean/worst of the sorted population."""
        self.population.sort_by_fitness()
        stats = self.population.get_statistics()

        self.stats['best_fitness_history'].append(stats['best_fitness'])
        self.stats['avg_fitness_history'].append(stats['avg_fitness'])
        self.stats['worst_fitness_history'].append(stats['worst_fitness'])
        self.stats['best_ever_history'].append(self.best_solution.fitness)

        return {
            'generation': generation,
            'best_fitness': stats['best_fitness'],
            'avg_fitness': stats['avg_fitness'],
            'worst_fitness': stats['worst_fitness'],
            'std_fitness': stats['fitness_std'],
            'best_ever_fitness': self.best_solution.fitness,
            'generations_without_improvement': self.generations_without_improvement
        }

    def get_statistics(self) -> Dict:
        """Get GA execution statistics."""
        return {
            'state': self.state.value,
            'generations': self.generations_run,
            'total_evaluations': self.stats['total_evaluations'],
            'execution_time': self.execution_time,
            'early_stopped': self.early_stopped,
            'convergence_generation': self.stats['convergence_generation'],
            'initial_best_fitness': self.initial_best_fitness,
            'best_fitness': self.best_solution.fitness if self.best_solution else None,
            'avg_fitness': self.population.get_avg_fitness(),
            'worst_fitness': self.population.get_worst_fitness(),
            'population_size': self.population.get_size()
        }

    def get_convergence_data(self) -> Dict:
        """Get convergence data for visualization and export."""
        return {
            'generations': list(range(1, self.generations_run + 1)),
            'best_fitness': list(self.stats['best_fitness_history']),
            'avg_fitness': list(self.stats['avg_fitness_history']),
            'worst_fitness': list(self.stats['worst_fitness_history']),
            'best_ever_fitness': list(self.stats['best_ever_history'])
        }

    def save_best_solution(self, filepath: str):
        """Save best solution to file."""
        if self.best_solution is None:
            raise ValueError("No solution to save")

        solution_data = {
            'tour': self.best_solution.tour,
            'fitness': self.best_solution.fitness,
            'problem': self.problem.get_problem_info(),
            'config': {k: self.config[k] for k in sorted(self.config)},
            'statistics': self.get_statistics()
        }

        with open(filepath, 'w') as f:
            json.dump(solution_data, f, indent=2)

    def load_solution(self, filepath: str) -> Individual:
        """Load a saved solution, recomputing its length on this instance."""
        with open(filepath, 'r') as f:
            solution_data = json.load(f)

        tour = [int(city) for city in solution_data['tour']]
        TourValidator.validate_tour(tour, self.problem.size())

        return Individual(tour=tour, fitness=self.problem.tour_length(tour))


def run_genetic_algorithm(problem: TSPInstance,
                          config: Optional[Dict] = None,
                          max_generations: Optional[int] = None) -> Tuple[Individual, Dict, List[Dict]]:
    """
    Convenience function to run GA.

    Args:
        problem: TSP problem instance
        config: GA configuration
        max_generations: Maximum generations

    Returns:
        Tuple of (best_solution, statistics, evolution_data)
    """
    ga = GeneticAlgorithm(problem, config)
    best_solution, evolution_data = ga.evolve(max_generations)
    statistics = ga.get_statistics()

    return best_solution, statistics, evolution_data
