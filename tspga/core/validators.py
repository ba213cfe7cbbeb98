"""
Validation layer for the TSP-GA engine.
Provides validators for configuration, problem instances and tours.
"""

from typing import Dict, List

from tspga.models.tsp_model import TSPInstance
from tspga.core.exceptions import (
    InvalidConfigurationError, DegenerateInstanceError, InvalidTourError
)


VALID_SELECTIONS = ['tournament', 'roulette']
VALID_CROSSOVERS = ['ox', 'pmx']
VALID_SCENARIOS = ['uniform', 'circle']


def _require_int(config: Dict, key: str, minimum: int):
    value = config[key]
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise InvalidConfigurationError(
            parameter=key,
            value=value,
            expected=f"integer >= {minimum}"
        )


class ConfigValidator:
    """Validate configuration parameters."""

    @staticmethod
    def validate_ga_config(config: Dict) -> bool:
        """
        Validate GA configuration.

        Args:
            config: GA configuration dictionary

        Returns:
            True if valid, raises InvalidConfigurationError otherwise

        Raises:
            InvalidConfigurationError: If configuration is invalid
        """
        required_keys = [
            'population_size',
            'num_epochs',
            'mutation_rate',
            'tournament_size',
            'alpha_count',
            'patience',
            'selection',
            'crossover',
            'seed'
        ]

        for key in required_keys:
            if key not in config:
                raise InvalidConfigurationError(
                    parameter=key,
                    value=None,
                    expected="Required parameter"
                )

        _require_int(config, 'population_size', 1)
        _require_int(config, 'num_epochs', 1)
        _require_int(config, 'tournament_size', 1)
        _require_int(config, 'alpha_count', 0)
        _require_int(config, 'patience', 1)

        if not isinstance(config['seed'], int) or isinstance(config['seed'], bool):
            raise InvalidConfigurationError(
                parameter='seed',
                value=config['seed'],
                expected="integer"
            )

        mutation_rate = config['mutation_rate']
        if isinstance(mutation_rate, bool) or not isinstance(mutation_rate, (int, float)) \
                or not 0 <= mutation_rate <= 1:
            raise InvalidConfigurationError(
                parameter='mutation_rate',
                value=mutation_rate,
                expected="[0, 1]"
            )

        if config['tournament_size'] > config['population_size']:
            raise InvalidConfigurationError(
                parameter='tournament_size',
                value=config['tournament_size'],
                expected=f"<= population_size ({config['population_size']})"
            )

        if config['alpha_count'] > config['population_size']:
            raise InvalidConfigurationError(
                parameter='alpha_count',
                value=config['alpha_count'],
                expected=f"<= population_size ({config['population_size']})"
            )

        if str(config['selection']).lower() not in VALID_SELECTIONS:
            raise InvalidConfigurationError(
                parameter='selection',
                value=config['selection'],
                expected=f"One of {VALID_SELECTIONS}"
            )

        if str(config['crossover']).lower() not in VALID_CROSSOVERS:
            raise InvalidConfigurationError(
                parameter='crossover',
                value=config['crossover'],
                expected=f"One of {VALID_CROSSOVERS}"
            )

        if config.get('log_interval', 0) < 0:
            raise InvalidConfigurationError(
                parameter='log_interval',
                value=config['log_interval'],
                expected=">= 0"
            )

        return True

    @staticmethod
    def validate_problem_config(config: Dict) -> bool:
        """
        Validate instance generation configuration.

        Raises:
            InvalidConfigurationError: If configuration is invalid
        """
        if config.get('scenario') not in VALID_SCENARIOS:
            raise InvalidConfigurationError(
                parameter='scenario',
                value=config.get('scenario'),
                expected=f"One of {VALID_SCENARIOS}"
            )

        min_points = config.get('min_points', 2)
        n_points = config.get('n_points')
        if isinstance(n_points, bool) or not isinstance(n_points, int) or n_points < min_points:
            raise InvalidConfigurationError(
                parameter='n_points',
                value=n_points,
                expected=f">= {min_points}"
            )

        if 'radius' in config and config['radius'] <= 0:
            raise InvalidConfigurationError(
                parameter='radius',
                value=config['radius'],
                expected="> 0"
            )

        return True


class DataValidator:
    """Validate problem instances."""

    @staticmethod
    def validate_problem(problem: TSPInstance, minimum: int = 2) -> bool:
        """
        Reject instances too small for the GA.

        With fewer than two points every tour is identical, so selection and
        crossover have nothing to work with.

        Raises:
            DegenerateInstanceError: If the instance has fewer than `minimum` points
        """
        if problem.size() < minimum:
            raise DegenerateInstanceError(size=problem.size(), minimum=minimum)
        return True


class TourValidator:
    """Validate tours against the permutation invariant."""

    @staticmethod
    def validate_tour(tour: List[int], n: int) -> bool:
        """
        Validate that tour is a permutation of [0, n).

        Args:
            tour: Visiting order
            n: Number of points in the instance

        Returns:
            True if valid

        Raises:
            InvalidTourError: If tour has the wrong length, out-of-range
                indices or duplicates
        """
        if len(tour) != n:
            raise InvalidTourError(tour, f"expected {n} entries, got {len(tour)}")

        seen = set()
        for index in tour:
            if not 0 <= index < n:
                raise InvalidTourError(tour, f"index {index} out of range [0, {n})")
            if index in seen:
                raise InvalidTourError(tour, f"index {index} appears more than once")
            seen.add(index)

        return True
