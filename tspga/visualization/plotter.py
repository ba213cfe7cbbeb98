"""
Plotting utilities for TSP-GA analysis.
Creates convergence plots of the per-generation fitness statistics.
"""

from typing import Dict, Optional

import matplotlib.pyplot as plt
import seaborn as sns

from config import VIZ_CONFIG


class Plotter:
    """Creates convergence plots for GA runs."""

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize plotter.

        Args:
            config: Visualization configuration
        """
        self.config = config or VIZ_CONFIG.copy()

        sns.set_theme(style="whitegrid")
        sns.set_palette("husl")

        self.fig_size = self.config['figure_size']
        self.dpi = self.config['dpi']
        self.font_size = self.config['font_size']

    def plot_convergence(self, convergence_data: Dict,
                         title: str = "GA Convergence",
                         save_path: Optional[str] = None,
                         show_population: bool = True) -> plt.Figure:
        """
        Plot tour length over generations.

        Args:
            convergence_data: GeneticAlgorithm.get_convergence_data() output
            title: Plot title
            save_path: Optional path to save plot
            show_population: Also draw the population mean and worst

        Returns:
            Matplotlib figure
        """
        generations = convergence_data['generations']
        best_fitness = convergence_data['best_fitness']

        fig, ax = plt.subplots(figsize=(self.fig_size[0], self.fig_size[1] * 0.6), dpi=self.dpi)

        sns.lineplot(x=generations, y=best_fitness, ax=ax,
                     color=self.config['best_color'], linewidth=2.5, label='Best Fitness')

        if show_population:
            sns.lineplot(x=generations, y=convergence_data['avg_fitness'], ax=ax,
                         color=self.config['mean_color'], linewidth=1.5, label='Mean Fitness')
            sns.lineplot(x=generations, y=convergence_data['worst_fitness'], ax=ax,
                         color=self.config['worst_color'], linewidth=1.0,
                         linestyle='--', label='Worst Fitness')

        ax.set_xlabel('Epoch', fontsize=self.font_size)
        ax.set_ylabel('Tour Length', fontsize=self.font_size)
        ax.set_title(title, fontsize=self.font_size + 2, fontweight='bold')
        ax.legend(fontsize=self.font_size - 2)

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=self.dpi, bbox_inches='tight')

        return fig
