"""
Result export module for TSP-GA.
Exports per-generation metrics, the best tour and a JSON run summary.
"""

import json
import logging
import os
from typing import Dict, Optional

import pandas as pd

from tspga.models.solution import Individual

logger = logging.getLogger(__name__)

CITIES_PER_LINE = 20


class ResultExporter:
    """Exports TSP-GA results in various formats."""

    def __init__(self, output_dir: str = "outputs"):
        """
        Initialize result exporter.

        Args:
            output_dir: Output directory for results (created if missing)
        """
        self.output_dir = output_dir
        os.makedirs(self.output_dir, exist_ok=True)

    def export_metrics_csv(self, convergence_data: Dict, mutation_rate: float,
                           seed: int, filename: str = "metrics.csv") -> str:
        """
        Export per-generation best/mean/worst lengths to CSV.

        Columns: epoch, best, mean, worst, mutation_rate, seed. Epochs are
        numbered from 0.

        Args:
            convergence_data: GeneticAlgorithm.get_convergence_data() output
            mutation_rate: Mutation rate of the run
            seed: Seed of the run
            filename: Output filename

        Returns:
            Path to exported file
        """
        filepath = os.path.join(self.output_dir, filename)

        best = convergence_data['best_fitness']
        df = pd.DataFrame({
            'epoch': range(len(best)),
            'best': best,
            'mean': convergence_data['avg_fitness'],
            'worst': convergence_data['worst_fitness'],
            'mutation_rate': [mutation_rate] * len(best),
            'seed': [seed] * len(best),
        })
        df.to_csv(filepath, index=False, float_format='%.6f')

        logger.info(f"Metrics exported to: {filepath}")
        return filepath

    def export_best_tour(self, individual: Individual,
                         filename: str = "best_tour.txt") -> str:
        """
        Export the best tour to a text file.

        Args:
            individual: Best individual of the run
            filename: Output filename

        Returns:
            Path to exported file
        """
        filepath = os.path.join(self.output_dir, filename)
        tour = individual.tour

        lines = [
            f"# Best Tour - Length: {individual.fitness:.6f}",
            "# Visit order (city indices):",
        ]
        for start in range(0, len(tour), CITIES_PER_LINE):
            chunk = " -> ".join(str(city) for city in tour[start:start + CITIES_PER_LINE])
            if start + CITIES_PER_LINE < len(tour):
                chunk += " ->"
            lines.append(chunk)
        if tour:
            lines.append(f"-> {tour[0]} (return to start)")

        with open(filepath, 'w', encoding='utf-8') as f:
            f.write("\n".join(lines) + "\n")

        logger.info(f"Best tour exported to: {filepath}")
        return filepath

    def export_solution_json(self, ga, kpis: Optional[Dict] = None,
                             filename: str = "solution.json") -> str:
        """
        Export best solution, statistics and KPIs to JSON.

        Args:
            ga: GeneticAlgorithm after evolve()
            kpis: Optional KPI dictionary
            filename: Output filename

        Returns:
            Path to exported file
        """
        filepath = os.path.join(self.output_dir, filename)

        data = {
            'problem': ga.problem.get_problem_info(),
            'config': ga.config,
            'best_solution': ga.best_solution.to_dict() if ga.best_solution else None,
            'statistics': ga.get_statistics(),
            'kpis': kpis or {},
            'convergence': ga.get_convergence_data(),
        }

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, default=float)

        logger.info(f"Solution exported to: {filepath}")
        return filepath
