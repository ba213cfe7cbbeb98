"""
Main application entry point for TSP-GA.
Provides CLI interface for generating an instance, evolving tours and
writing plots, frames and metrics.
"""

import argparse
import logging
import os
import sys
import time
from typing import Dict, Tuple

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from tspga.algorithms.genetic_algorithm import GeneticAlgorithm
from tspga.core.exceptions import TSPGAException, InvalidConfigurationError
from tspga.core.logger import setup_logger, get_logger
from tspga.core.validators import ConfigValidator
from tspga.data_processing.generator import InstanceGenerator
from tspga.evaluation.metrics import KPICalculator
from tspga.evaluation.result_exporter import ResultExporter
from tspga.visualization.mapper import TourMapper, frame_interval
from tspga.visualization.plotter import Plotter
from config import GA_CONFIG, CHECK_CONFIG, PROBLEM_CONFIG, OUTPUT_CONFIG


def main(argv=None):
    """Main application entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logger = setup_logger('tspga', level=level, log_dir=args.log_dir)
    logger.info("=" * 60)
    logger.info("TSP-GA Starting")
    logger.info("=" * 60)

    try:
        ga_config, problem_config = build_configs(args)
        run_optimization(args, ga_config, problem_config)
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        print("\nOperation cancelled by user.")
        sys.exit(1)
    except InvalidConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print(f"Error: {e}")
        sys.exit(1)
    except TSPGAException as e:
        logger.error(f"TSP-GA error: {e}", exc_info=True)
        print(f"Error: {e}")
        sys.exit(1)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        description="TSP-GA: Euclidean Traveling Salesman solver using a Genetic Algorithm",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Uniform random cities with more generations and mutation
  python main.py --scenario uniform --points 60 --epochs 800 --mutation-rate 0.08

  # Cities on a circle (known optimum) with four elites
  python main.py --scenario circle --points 80 --epochs 1200 --alpha 4

  # Roulette selection with PMX
  python main.py --selection roulette --crossover pmx

  # Quick validation run
  python main.py --check
        """
    )

    # Problem options
    parser.add_argument('--scenario', type=str, default=PROBLEM_CONFIG['scenario'],
                        choices=['uniform', 'circle'],
                        help=f"Point layout (default: {PROBLEM_CONFIG['scenario']})")
    parser.add_argument('--points', type=int, default=PROBLEM_CONFIG['n_points'],
                        help=f"Number of points (default: {PROBLEM_CONFIG['n_points']}, "
                             f"minimum {PROBLEM_CONFIG['min_points']})")

    # GA parameters
    parser.add_argument('--epochs', type=int, default=GA_CONFIG['num_epochs'],
                        help=f"Number of generations (default: {GA_CONFIG['num_epochs']})")
    parser.add_argument('--population', type=int, default=GA_CONFIG['population_size'],
                        help=f"Population size (default: {GA_CONFIG['population_size']})")
    parser.add_argument('--mutation-rate', type=float, default=GA_CONFIG['mutation_rate'],
                        help=f"Mutation rate (default: {GA_CONFIG['mutation_rate']})")
    parser.add_argument('--selection', type=str, default=GA_CONFIG['selection'],
                        choices=['tournament', 'roulette'],
                        help=f"Selection method (default: {GA_CONFIG['selection']})")
    parser.add_argument('--tournament-size', type=int, default=GA_CONFIG['tournament_size'],
                        help=f"Tournament size (default: {GA_CONFIG['tournament_size']})")
    parser.add_argument('--crossover', type=str, default=GA_CONFIG['crossover'],
                        choices=['ox', 'pmx'],
                        help=f"Crossover operator (default: {GA_CONFIG['crossover']})")
    parser.add_argument('--alpha', type=int, default=GA_CONFIG['alpha_count'],
                        help=f"Elite count (default: {GA_CONFIG['alpha_count']})")
    parser.add_argument('--patience', type=int, default=GA_CONFIG['patience'],
                        help=f"Generations without improvement before stopping "
                             f"(default: {GA_CONFIG['patience']})")
    parser.add_argument('--seed', type=int, default=GA_CONFIG['seed'],
                        help=f"Random seed (default: {GA_CONFIG['seed']})")

    # Output options
    parser.add_argument('--output', type=str, default=OUTPUT_CONFIG['output_dir'],
                        help=f"Output directory (default: {OUTPUT_CONFIG['output_dir']})")
    parser.add_argument('--frames', type=str, default=OUTPUT_CONFIG['frames_dir'],
                        help=f"Frames directory (default: {OUTPUT_CONFIG['frames_dir']})")
    parser.add_argument('--log-dir', type=str, default=OUTPUT_CONFIG['log_dir'],
                        help=f"Log directory (default: {OUTPUT_CONFIG['log_dir']})")
    parser.add_argument('--no-plots', action='store_true',
                        help='Skip generating tour and convergence plots')
    parser.add_argument('--no-frames', action='store_true',
                        help='Skip generating per-generation frames')

    # Run modes
    parser.add_argument('--check', action='store_true',
                        help='Quick validation run (30 epochs, 20 points, population 50)')
    parser.add_argument('--verbose', action='store_true',
                        help='Verbose output')

    return parser


def build_configs(args) -> Tuple[Dict, Dict]:
    """
    Merge CLI arguments over the configuration defaults and validate them.

    Returns:
        Tuple of (ga_config, problem_config)

    Raises:
        InvalidConfigurationError: If any parameter is invalid
    """
    ga_config = GA_CONFIG.copy()
    ga_config.update({
        'population_size': args.population,
        'num_epochs': args.epochs,
        'mutation_rate': args.mutation_rate,
        'tournament_size': args.tournament_size,
        'alpha_count': args.alpha,
        'patience': args.patience,
        'selection': args.selection,
        'crossover': args.crossover,
        'seed': args.seed,
    })

    problem_config = PROBLEM_CONFIG.copy()
    problem_config.update({
        'scenario': args.scenario,
        'n_points': args.points,
    })

    if args.check:
        get_logger('tspga.cli').info("Running in CHECK mode (quick validation)")
        ga_config['num_epochs'] = CHECK_CONFIG['num_epochs']
        ga_config['population_size'] = CHECK_CONFIG['population_size']
        problem_config['n_points'] = CHECK_CONFIG['n_points']

    ConfigValidator.validate_problem_config(problem_config)
    ConfigValidator.validate_ga_config(ga_config)

    return ga_config, problem_config


def print_configuration(ga_config: Dict, problem_config: Dict, args):
    """Print the final configuration."""
    print("\n=== TSP Genetic Algorithm Configuration ===")
    print(f"  Scenario:          {problem_config['scenario']}")
    print(f"  Points:            {problem_config['n_points']}")
    print(f"  Epochs:            {ga_config['num_epochs']}")
    print(f"  Population Size:   {ga_config['population_size']}")
    print(f"  Mutation Rate:     {ga_config['mutation_rate']}")
    print(f"  Selection:         {ga_config['selection']}")
    if ga_config['selection'] == 'tournament':
        print(f"  Tournament Size:   {ga_config['tournament_size']}")
    print(f"  Crossover:         {ga_config['crossover']}")
    print(f"  Alpha Count:       {ga_config['alpha_count']}")
    print(f"  Patience:          {ga_config['patience']}")
    print(f"  Seed:              {ga_config['seed']}")
    print(f"  Output Directory:  {args.output}")
    print(f"  Frames Directory:  {args.frames}")
    print("=" * 43 + "\n")


def run_optimization(args, ga_config: Dict, problem_config: Dict) -> GeneticAlgorithm:
    """Run the optimization process and write all outputs."""
    logger = get_logger('tspga.cli')
    print_configuration(ga_config, problem_config, args)

    os.makedirs(args.output, exist_ok=True)

    generator = InstanceGenerator(problem_config)
    problem = generator.generate(seed=ga_config['seed'])
    logger.info(f"Generated {problem.size()} points ({problem.scenario})")

    ga = GeneticAlgorithm(problem, ga_config)
    mapper = TourMapper(problem)

    callback = None
    if not args.no_frames:
        interval = frame_interval(ga_config['num_epochs'])
        num_epochs = ga_config['num_epochs']

        def callback(generation, best):
            if generation % interval == 0 or generation == num_epochs:
                mapper.save_frame(best, generation, args.frames)

    logger.info("Starting Genetic Algorithm...")
    start_time = time.time()

    ga.initialize_population()
    if not args.no_frames:
        mapper.save_frame(ga.best_solution, 0, args.frames)

    best, _ = ga.evolve(generation_callback=callback)
    execution_time = time.time() - start_time

    if ga.early_stopped and not args.no_frames:
        mapper.save_frame(best, ga.generations_run, args.frames)

    kpis = KPICalculator(problem).calculate_kpis(ga, execution_time)

    print(f"\nGA completed in {execution_time:.2f} seconds")
    print(f"Epochs executed: {ga.generations_run}")
    if ga.early_stopped:
        print(f"Early stop at epoch {ga.generations_run} (patience reached)")
    print(f"Best tour length: {best.fitness:.6f}")
    if kpis['gap_pct'] is not None:
        print(f"Known optimum:    {kpis['reference_length']:.6f} (gap {kpis['gap_pct']:.2f}%)")

    save_outputs(args, ga, mapper, kpis)

    if args.check:
        print("\nCHECK mode completed successfully")

    return ga


def save_outputs(args, ga: GeneticAlgorithm, mapper: TourMapper, kpis: Dict):
    """Write plots, tour text, metrics CSV and solution JSON."""
    print("\nSaving outputs...")
    exporter = ResultExporter(args.output)
    best = ga.best_solution

    if not args.no_plots:
        tour_path = os.path.join(args.output, OUTPUT_CONFIG['best_tour_plot'])
        fig = mapper.plot_individual(best, save_path=tour_path)
        plt.close(fig)
        print(f"  Saved: {tour_path}")

        convergence_path = os.path.join(args.output, OUTPUT_CONFIG['convergence_plot'])
        fig = Plotter().plot_convergence(ga.get_convergence_data(), save_path=convergence_path)
        plt.close(fig)
        print(f"  Saved: {convergence_path}")

    paths = [
        exporter.export_best_tour(best, OUTPUT_CONFIG['best_tour_text']),
        exporter.export_metrics_csv(ga.get_convergence_data(), ga.config['mutation_rate'],
                                    ga.config['seed'], OUTPUT_CONFIG['metrics_csv']),
        exporter.export_solution_json(ga, kpis, OUTPUT_CONFIG['solution_json']),
    ]
    for path in paths:
        print(f"  Saved: {path}")

    if not args.no_frames:
        print(f"  Frames saved in: {args.frames}/")


if __name__ == '__main__':
    main()
