# Configuration parameters for the TSP-GA engine
# CLI defaults: 500 epochs, population 200.

# Genetic Algorithm Configuration
GA_CONFIG = {
    'population_size': 200,      # Individuals per generation
    'num_epochs': 500,           # Maximum number of generations
    'mutation_rate': 0.05,       # Probability of one swap per child
    'tournament_size': 3,        # Draws per tournament (with replacement)
    'alpha_count': 2,            # Elites copied unchanged into the next generation
    'patience': 100,             # Stop after this many generations without improvement
    'selection': 'tournament',   # tournament | roulette
    'crossover': 'ox',           # ox | pmx
    'seed': 42,                  # Seed of the run's random.Random

    'log_interval': 50,          # Log progress every N generations (0 disables)
    'validate_offspring': False, # Check every child tour is a permutation (slow)
}

# Quick validation run (--check)
CHECK_CONFIG = {
    'num_epochs': 30,
    'n_points': 20,
    'population_size': 50,
}

# Problem Instance Configuration
PROBLEM_CONFIG = {
    'scenario': 'uniform',       # uniform | circle
    'n_points': 50,
    'min_points': 8,             # Smallest instance accepted from the CLI
    'radius': 1.0,               # Circle scenario radius
    'center': (0.5, 0.5),        # Circle scenario center
    'start_angle': 0.0,
}

# Visualization Configuration
VIZ_CONFIG = {
    'figure_size': (10, 8),
    'dpi': 100,
    'tour_color': '#0066cc',
    'city_color': '#ff6600',
    'best_color': '#cc0000',
    'mean_color': '#2ca02c',
    'worst_color': '#7f7f7f',
    'marker_size': 36,
    'line_width': 2,
    'font_size': 12,
    'max_frames': 200,           # Upper bound on per-generation frames
    'frame_format': 'svg',
}

# Output files
OUTPUT_CONFIG = {
    'output_dir': './outputs',
    'frames_dir': './frames',
    'log_dir': 'logs',
    'best_tour_plot': 'best_tour.svg',
    'best_tour_text': 'best_tour.txt',
    'convergence_plot': 'convergence.svg',
    'metrics_csv': 'metrics.csv',
    'solution_json': 'solution.json',
}
