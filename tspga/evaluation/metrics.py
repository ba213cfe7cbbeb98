"""
KPI metrics calculation for TSP-GA runs.
Summarizes solution quality and convergence behaviour.
"""

import logging
from typing import Dict, Optional

import numpy as np

from tspga.models.tsp_model import TSPInstance

logger = logging.getLogger(__name__)


class KPICalculator:
    """Calculates Key Performance Indicators for a finished GA run."""

    def __init__(self, problem: TSPInstance):
        """
        Initialize KPI calculator.

        Args:
            problem: TSP problem instance
        """
        self.problem = problem

    def calculate_kpis(self, ga, execution_time: Optional[float] = None) -> Dict:
        """
        Calculate KPIs for a GA run.

        Args:
            ga: GeneticAlgorithm after evolve()
            execution_time: Execution time in seconds (defaults to the GA's own)

        Returns:
            Dictionary with KPI values
        """
        if ga.best_solution is None:
            return self._get_empty_kpis()

        best_length = ga.best_solution.fitness
        initial_length = ga.initial_best_fitness
        convergence = ga.get_convergence_data()

        improvement = initial_length - best_length
        improvement_pct = (improvement / initial_length * 100.0) if initial_length > 0 else 0.0

        kpis = {
            'instance': self.problem.name,
            'num_points': self.problem.size(),
            'best_length': best_length,
            'initial_best_length': initial_length,
            'improvement': improvement,
            'improvement_pct': improvement_pct,
            'generations_run': ga.generations_run,
            'early_stopped': ga.early_stopped,
            'best_found_generation': self._best_found_generation(convergence['best_ever_fitness'],
                                                                initial_length),
            'final_avg_length': convergence['avg_fitness'][-1] if convergence['avg_fitness'] else None,
            'final_worst_length': convergence['worst_fitness'][-1] if convergence['worst_fitness'] else None,
            'final_length_std': float(np.std(ga.population.get_fitness_values())),
            'execution_time': execution_time if execution_time is not None else ga.execution_time,
            'reference_length': self.problem.optimal_length,
            'gap_pct': None,
        }

        if self.problem.optimal_length:
            kpis['gap_pct'] = (best_length - self.problem.optimal_length) / self.problem.optimal_length * 100.0

        logger.debug(f"KPIs for {self.problem.name}: best={best_length:.6f}, "
                     f"improvement={improvement_pct:.2f}%")

        return kpis

    @staticmethod
    def _best_found_generation(best_ever_history, initial_length: float) -> int:
        """First generation holding the final best-ever value (0 = initial population)."""
        if not best_ever_history or best_ever_history[-1] >= initial_length:
            return 0
        final = best_ever_history[-1]
        return best_ever_history.index(final) + 1

    def _get_empty_kpis(self) -> Dict:
        return {
            'instance': self.problem.name,
            'num_points': self.problem.size(),
            'best_length': None,
            'initial_best_length': None,
            'improvement': 0.0,
            'improvement_pct': 0.0,
            'generations_run': 0,
            'early_stopped': False,
            'best_found_generation': 0,
            'final_avg_length': None,
            'final_worst_length': None,
            'final_length_std': 0.0,
            'execution_time': 0.0,
            'reference_length': self.problem.optimal_length,
            'gap_pct': None,
        }
