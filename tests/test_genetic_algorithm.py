"""
Unit tests for the Genetic Algorithm engine.
Tests initialization, generation steps, early stopping and persistence.
"""

import json
import os
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tspga.algorithms.genetic_algorithm import GeneticAlgorithm, RunState, run_genetic_algorithm
from tspga.core.exceptions import (
    InvalidConfigurationError, DegenerateInstanceError, InvalidTourError, RunStateError
)
from tspga.data_processing.generator import InstanceGenerator
from tspga.models.tsp_model import create_tsp_instance_from_coordinates


def small_config(**overrides):
    config = {
        'population_size': 30,
        'num_epochs': 40,
        'mutation_rate': 0.1,
        'tournament_size': 3,
        'alpha_count': 2,
        'patience': 1000,
        'selection': 'tournament',
        'crossover': 'ox',
        'seed': 42,
        'log_interval': 0,
    }
    config.update(overrides)
    return config


class TestGeneticAlgorithmSetup(unittest.TestCase):
    """Test GA construction and initialization."""

    def setUp(self):
        """Set up instance."""
        self.problem = InstanceGenerator().generate_uniform(12, seed=1)

    def test_invalid_config_raises(self):
        """Test invalid parameters are rejected before running."""
        bad_configs = [
            small_config(population_size=0),
            small_config(num_epochs=0),
            small_config(mutation_rate=1.5),
            small_config(mutation_rate=-0.1),
            small_config(tournament_size=0),
            small_config(tournament_size=31),
            small_config(alpha_count=-1),
            small_config(alpha_count=31),
            small_config(patience=0),
            small_config(selection='rank'),
            small_config(crossover='cx'),
        ]
        for config in bad_configs:
            with self.assertRaises(InvalidConfigurationError):
                GeneticAlgorithm(self.problem, config)

    def test_degenerate_instance_raises(self):
        """Test instances below two points are rejected."""
        single = create_tsp_instance_from_coordinates([(0.0, 0.0)])
        with self.assertRaises(DegenerateInstanceError):
            GeneticAlgorithm(single, small_config())
        empty = create_tsp_instance_from_coordinates([])
        with self.assertRaises(DegenerateInstanceError):
            GeneticAlgorithm(empty, small_config())

    def test_missing_keys_use_defaults(self):
        """Test partial configuration is merged over defaults."""
        ga = GeneticAlgorithm(self.problem, {'population_size': 10, 'tournament_size': 2})
        self.assertEqual(ga.config['population_size'], 10)
        self.assertIn('patience', ga.config)
        self.assertEqual(ga.state, RunState.NOT_STARTED)

    def test_initialize_population(self):
        """Test initial population is valid and evaluated."""
        ga = GeneticAlgorithm(self.problem, small_config())
        population = ga.initialize_population()

        self.assertEqual(population.get_size(), 30)
        for individual in population.individuals:
            self.assertTrue(individual.is_valid_for(12))
            self.assertAlmostEqual(individual.fitness, self.problem.tour_length(individual.tour))
        self.assertEqual(ga.best_solution.fitness, population.get_best_fitness())
        self.assertEqual(ga.initial_best_fitness, ga.best_solution.fitness)
        self.assertEqual(ga.stats['total_evaluations'], 30)


class TestGeneticAlgorithmEvolution(unittest.TestCase):
    """Test GA evolution behaviour."""

    def setUp(self):
        """Set up instance."""
        self.problem = InstanceGenerator().generate_uniform(15, seed=2)

    def test_evolve_generation_keeps_population_valid(self):
        """Test one generation keeps size and permutations."""
        ga = GeneticAlgorithm(self.problem, small_config(validate_offspring=True))
        ga.initialize_population()
        ga.evolve_generation()

        self.assertEqual(ga.population.get_size(), 30)
        self.assertEqual(ga.population.generation, 1)
        for individual in ga.population.individuals:
            self.assertTrue(individual.is_valid_for(15))

    def test_elites_survive(self):
        """Test the best individuals carry over unchanged for several generations."""
        ga = GeneticAlgorithm(self.problem, small_config(mutation_rate=1.0, alpha_count=3))
        ga.initialize_population()

        for _ in range(10):
            ga.population.sort_by_fitness()
            elites = [(list(ind.tour), ind.fitness) for ind in ga.population.individuals[:3]]

            ga.evolve_generation()

            survivors = [(ind.tour, ind.fitness) for ind in ga.population.individuals]
            self.assertEqual(survivors[:3], elites)
            for tour, fitness in elites:
                self.assertIn((tour, fitness), survivors)
                self.assertEqual(fitness, self.problem.tour_length(tour))
            self.assertLessEqual(ga.population.get_best_fitness(), elites[0][1])

    def test_best_ever_never_increases(self):
        """Test best-ever length is non-increasing across generations."""
        for selection in ('tournament', 'roulette'):
            for crossover_name in ('ox', 'pmx'):
                ga = GeneticAlgorithm(self.problem, small_config(
                    selection=selection, crossover=crossover_name, alpha_count=0))
                best, _ = ga.evolve()

                history = ga.stats['best_ever_history']
                self.assertEqual(len(history), 40)
                for previous, current in zip(history, history[1:]):
                    self.assertLessEqual(current, previous)
                self.assertLessEqual(best.fitness, ga.initial_best_fitness)
                self.assertLessEqual(best.fitness, min(ga.stats['best_fitness_history']))
                self.assertTrue(best.is_valid_for(15))
                self.assertAlmostEqual(best.fitness, self.problem.tour_length(best.tour))

    def test_deterministic_with_seed(self):
        """Test identical seeds reproduce the run exactly."""
        runs = []
        for _ in range(2):
            ga = GeneticAlgorithm(self.problem, small_config(seed=123, crossover='pmx'))
            best, _ = ga.evolve()
            runs.append((best.tour, ga.stats['best_ever_history'],
                         ga.stats['best_fitness_history'],
                         ga.stats['avg_fitness_history'],
                         ga.stats['worst_fitness_history']))
        self.assertEqual(runs[0], runs[1])

    def test_different_seeds_differ(self):
        """Test different seeds give different histories."""
        a = GeneticAlgorithm(self.problem, small_config(seed=1))
        b = GeneticAlgorithm(self.problem, small_config(seed=2))
        a.evolve()
        b.evolve()
        self.assertNotEqual(a.stats['avg_fitness_history'], b.stats['avg_fitness_history'])

    def test_generation_callback(self):
        """Test the callback sees every generation in order."""
        seen = []
        ga = GeneticAlgorithm(self.problem, small_config(num_epochs=10))
        ga.evolve(generation_callback=lambda gen, best: seen.append((gen, best.fitness)))

        self.assertEqual([gen for gen, _ in seen], list(range(1, 11)))
        self.assertEqual(seen[-1][1], ga.best_solution.fitness)

    def test_evolution_data(self):
        """Test per-generation records match the statistics."""
        ga = GeneticAlgorithm(self.problem, small_config(num_epochs=5))
        _, evolution_data = ga.evolve()

        self.assertEqual(len(evolution_data), 5)
        for record in evolution_data:
            self.assertLessEqual(record['best_fitness'], record['avg_fitness'])
            self.assertLessEqual(record['avg_fitness'], record['worst_fitness'])
            self.assertLessEqual(record['best_ever_fitness'], record['best_fitness'])
        self.assertEqual(ga.state, RunState.STOPPED)

    def test_stopped_run_cannot_resume(self):
        """Test a finished run rejects further evolution and keeps its statistics."""
        ga = GeneticAlgorithm(self.problem, small_config(num_epochs=5))
        ga.evolve()

        with self.assertRaises(RunStateError):
            ga.evolve(3)
        with self.assertRaises(RunStateError):
            ga.evolve()

        self.assertEqual(ga.state, RunState.STOPPED)
        self.assertEqual(ga.generations_run, 5)
        self.assertEqual(ga.generation, 5)

    def test_zero_generations(self):
        """Test evolve(0) runs no generations."""
        ga = GeneticAlgorithm(self.problem, small_config(num_epochs=5))
        best, evolution_data = ga.evolve(0)

        self.assertEqual(evolution_data, [])
        self.assertEqual(ga.generations_run, 0)
        self.assertEqual(best.fitness, ga.initial_best_fitness)
        self.assertEqual(ga.state, RunState.STOPPED)


class TestEarlyStopping(unittest.TestCase):
    """Test patience-based early stopping."""

    def test_stops_when_no_improvement_is_possible(self):
        """Test two-point instance stops after exactly `patience` generations."""
        problem = create_tsp_instance_from_coordinates([(0.0, 0.0), (3.0, 4.0)])
        ga = GeneticAlgorithm(problem, small_config(
            population_size=4, tournament_size=2, alpha_count=1, patience=3, num_epochs=50))
        best, evolution_data = ga.evolve()

        self.assertTrue(ga.early_stopped)
        self.assertEqual(ga.generations_run, 3)
        self.assertEqual(len(evolution_data), 3)
        self.assertEqual(ga.stats['convergence_generation'], 3)
        self.assertAlmostEqual(best.fitness, 10.0)

        convergence = ga.get_convergence_data()
        self.assertEqual(convergence['generations'], [1, 2, 3])
        for key in ('best_fitness', 'avg_fitness', 'worst_fitness', 'best_ever_fitness'):
            self.assertEqual(len(convergence[key]), 3)

        with self.assertRaises(RunStateError):
            ga.evolve(20)
        self.assertEqual(ga.generations_run, 3)
        self.assertEqual(len(ga.stats['best_ever_history']), 3)

    def test_runs_all_generations_without_stop(self):
        """Test the run reaches the cap when patience is never exhausted."""
        problem = InstanceGenerator().generate_uniform(10, seed=4)
        ga = GeneticAlgorithm(problem, small_config(num_epochs=12, patience=100))
        ga.evolve()

        self.assertFalse(ga.early_stopped)
        self.assertIsNone(ga.stats['convergence_generation'])
        self.assertEqual(ga.generations_run, 12)

    def test_circle_run(self):
        """Test an 8-point circle run approaches the known optimum."""
        problem = InstanceGenerator().generate_circle(8)
        config = small_config(population_size=50, num_epochs=200, mutation_rate=0.05,
                              tournament_size=3, alpha_count=2, patience=50,
                              crossover='ox', seed=42)
        best, statistics, evolution_data = run_genetic_algorithm(problem, config)

        self.assertLessEqual(best.fitness, statistics['initial_best_fitness'])
        self.assertGreaterEqual(best.fitness, problem.optimal_length - 1e-9)
        self.assertLessEqual(best.fitness, problem.optimal_length * 1.2)
        self.assertLessEqual(len(evolution_data), 200)
        self.assertEqual(len(evolution_data), statistics['generations'])
        self.assertTrue(best.is_valid_for(8))


class TestSolutionPersistence(unittest.TestCase):
    """Test saving and loading solutions."""

    def setUp(self):
        """Set up a finished run."""
        self.problem = InstanceGenerator().generate_uniform(9, seed=8)
        self.ga = GeneticAlgorithm(self.problem, small_config(num_epochs=5))
        self.ga.evolve()
        self.temp_dir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.temp_dir.name, 'best.json')

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_save_and_load(self):
        """Test a saved solution loads with the same tour and length."""
        self.ga.save_best_solution(self.path)
        loaded = self.ga.load_solution(self.path)

        self.assertEqual(loaded.tour, self.ga.best_solution.tour)
        self.assertAlmostEqual(loaded.fitness, self.ga.best_solution.fitness)

        with open(self.path) as f:
            data = json.load(f)
        self.assertEqual(data['statistics']['generations'], 5)
        self.assertEqual(data['problem']['num_points'], 9)

    def test_load_invalid_tour(self):
        """Test a corrupted tour is rejected on load."""
        with open(self.path, 'w') as f:
            json.dump({'tour': [0, 1, 1, 2, 3, 4, 5, 6, 7], 'fitness': 1.0}, f)
        with self.assertRaises(InvalidTourError):
            self.ga.load_solution(self.path)

    def test_save_without_solution(self):
        """Test saving before running raises."""
        ga = GeneticAlgorithm(self.problem, small_config())
        with self.assertRaises(ValueError):
            ga.save_best_solution(self.path)


if __name__ == '__main__':
    unittest.main(verbosity=2)
